"""JSON log output for the finance calendar service"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from finance_calendar.config import settings

LOG_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Adds UTC timestamp, level name and service name to every record"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO", stream: Optional[Any] = None) -> None:
    """Send root logger output as JSON lines to stdout (or the given stream)"""
    root = logging.getLogger()
    root.setLevel(level.upper())
    root.handlers.clear()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(CustomJsonFormatter(LOG_FORMAT))
    root.addHandler(handler)


def log_composition(
    user_id: str,
    event_count: int,
    duration_ms: float,
    request_id: str = "unknown",
) -> None:
    """One line per highlight composition served over the API"""
    logging.info(
        "Highlights composed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "highlights_composed",
            "event_count": event_count,
            "duration_ms": round(duration_ms, 3),
        },
    )


def log_installments_posted(user_id: str, card_id: Optional[str], entry_count: int) -> None:
    logging.info(
        "Installments posted",
        extra={
            "user_id": user_id,
            "card_id": card_id,
            "step": "installments_posted",
            "entry_count": entry_count,
        },
    )
