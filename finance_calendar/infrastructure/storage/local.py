"""JSON-file key-value store used when no user session exists (guest mode)"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from finance_calendar.config import settings
from finance_calendar.domain.models import CalendarSettings, Transaction
from finance_calendar.infrastructure.database.documents import transaction_from_document

TRANSACTIONS_KEY = "transactions"
SETTINGS_KEY = "settings"

logger = logging.getLogger(__name__)


def safe_json_loads(raw: Optional[str], fallback: Any) -> Any:
    """Decoded JSON, or fallback when raw is empty or not valid JSON"""
    if not raw:
        return fallback
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return fallback


class LocalStore:
    """String key-value store persisted as a single JSON object on disk"""

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or settings.local_store_path)
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = safe_json_loads(self.path.read_text(encoding="utf-8"), {})
        if not isinstance(data, dict):
            logger.warning("Local store is not a JSON object; ignoring", extra={"path": str(self.path)})
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if data.pop(key, None) is not None:
                self._write(data)


def load_guest_transactions(store: LocalStore) -> List[Transaction]:
    """Transactions saved locally as a JSON array; anything unreadable yields []"""
    raw = safe_json_loads(store.get_item(TRANSACTIONS_KEY), [])
    if not isinstance(raw, list):
        return []
    return [transaction_from_document(item) for item in raw if isinstance(item, dict)]


def save_guest_transactions(store: LocalStore, transactions: List[Dict[str, Any]]) -> None:
    store.set_item(TRANSACTIONS_KEY, json.dumps(transactions, ensure_ascii=False))


def load_guest_calendar_settings(store: LocalStore) -> Optional[CalendarSettings]:
    """Calendar preferences from the local settings blob, None when absent"""
    raw = store.get_item(SETTINGS_KEY)
    if not raw:
        return None
    blob = safe_json_loads(raw, {})
    return CalendarSettings.from_blob(blob if isinstance(blob, dict) else {})
