"""GET /v1/users/{user_id}/calendar/highlights and /reminders"""

import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from finance_calendar.api.dependencies import get_repository, get_request_id
from finance_calendar.api.v1.records import SETTINGS_DOC_ID
from finance_calendar.api.v1.schemas import (
    HighlightSchema,
    HighlightsResponse,
    ReminderSchema,
    RemindersResponse,
)
from finance_calendar.config import settings
from finance_calendar.domain.highlights import compose_highlights
from finance_calendar.domain.models import CalendarSettings
from finance_calendar.domain.reminders import upcoming_reminders
from finance_calendar.infrastructure.database.documents import (
    card_from_document,
    notification_settings_from_document,
    payment_from_document,
    transaction_from_document,
)
from finance_calendar.infrastructure.database.repositories import (
    CARDS,
    META,
    PAYMENTS,
    TRANSACTIONS,
    DocumentRepository,
)
from finance_calendar.infrastructure.observability.logging import log_composition
from finance_calendar.infrastructure.observability.metrics import record_composition

router = APIRouter()


def _calendar_settings(stored: Optional[dict]) -> CalendarSettings:
    if stored is None:
        return CalendarSettings(
            past_months=settings.calendar_past_months,
            future_months=settings.calendar_future_months,
            include_cards=settings.calendar_include_cards,
        )
    return CalendarSettings.from_blob(stored)


def _compose_for_user(repo: DocumentRepository, user_id: str, calendar: CalendarSettings, today: date):
    return compose_highlights(
        [transaction_from_document(d) for d in repo.list(TRANSACTIONS, user_id)],
        [payment_from_document(d) for d in repo.list(PAYMENTS, user_id)],
        [card_from_document(d) for d in repo.list(CARDS, user_id)],
        calendar.past_months,
        calendar.future_months,
        calendar.include_cards,
        today=today,
    )


@router.get("/users/{user_id}/calendar/highlights", response_model=HighlightsResponse)
def get_highlights(
    request: Request,
    user_id: str,
    past_months: Optional[int] = Query(None, ge=0, le=24, description="Months before the current month"),
    future_months: Optional[int] = Query(None, ge=0, le=24, description="Months after the current month"),
    include_cards: Optional[bool] = Query(None, description="Include card statement/due markers"),
    today: Optional[date] = Query(None, description="Reference day for the month window"),
    repo: DocumentRepository = Depends(get_repository),
):
    """
    Calendar highlights for a user's transactions, pending payments and cards.

    Window and card flag come from the query when given, else from the
    user's stored settings, else from service defaults.
    """
    start_time = time.time()

    calendar = _calendar_settings(repo.get(META, user_id, SETTINGS_DOC_ID))
    if past_months is not None:
        calendar.past_months = past_months
    if future_months is not None:
        calendar.future_months = future_months
    if include_cards is not None:
        calendar.include_cards = include_cards

    events = _compose_for_user(repo, user_id, calendar, today or date.today())

    duration = time.time() - start_time
    record_composition("api", len(events), duration)
    log_composition(user_id, len(events), duration * 1000, request_id=get_request_id(request))

    return HighlightsResponse(
        user_id=user_id,
        past_months=calendar.past_months,
        future_months=calendar.future_months,
        include_cards=calendar.include_cards,
        highlights=[HighlightSchema(date=e.date, type=e.type, description=e.description) for e in events],
    )


@router.get("/users/{user_id}/reminders", response_model=RemindersResponse)
def get_reminders(
    user_id: str,
    today: Optional[date] = Query(None, description="Reference day for the reminder horizon"),
    repo: DocumentRepository = Depends(get_repository),
):
    """Upcoming payments and card due dates within the user's reminder horizon"""
    stored = repo.get(META, user_id, SETTINGS_DOC_ID)
    notification_settings = notification_settings_from_document(stored, settings.reminder_days_before)
    reference_day = today or date.today()
    # Window only needs to reach the end of the reminder horizon
    calendar = CalendarSettings(
        past_months=0,
        future_months=max(0, notification_settings.reminder_days_before) // 28 + 1,
        include_cards=True,
    )

    events = _compose_for_user(repo, user_id, calendar, reference_day)
    reminders = upcoming_reminders(events, reference_day, notification_settings)

    return RemindersResponse(
        user_id=user_id,
        reminders=[
            ReminderSchema(
                date=r.date,
                type=r.type,
                description=r.description,
                days_left=r.days_left,
                message=r.message,
            )
            for r in reminders
        ],
    )
