"""Upcoming payment reminders derived from calendar highlights"""

from datetime import date
from typing import List, Sequence

from finance_calendar.domain.models import (
    HighlightedDate,
    NotificationSettings,
    Reminder,
    PAYMENT,
    CARD_DUE,
)


def _message(highlight: HighlightedDate, days_left: int) -> str:
    when = "bugün" if days_left == 0 else f"{days_left} gün sonra"
    if highlight.type == CARD_DUE:
        return f"{highlight.description} {when} ({highlight.date:%d.%m.%Y})"
    return f"{highlight.description} ödemesi {when} ({highlight.date:%d.%m.%Y})"


def upcoming_reminders(
    highlights: Sequence[HighlightedDate],
    today: date,
    notification_settings: NotificationSettings,
) -> List[Reminder]:
    """
    Reminders for payments and card due dates within the reminder horizon.

    - payment events need payment_reminders
    - card-due events need bill_reminders
    - only events from today through today + reminder_days_before
    """
    if not notification_settings.enabled:
        return []

    wanted = set()
    if notification_settings.payment_reminders:
        wanted.add(PAYMENT)
    if notification_settings.bill_reminders:
        wanted.add(CARD_DUE)

    horizon = max(0, notification_settings.reminder_days_before)
    reminders = []
    for highlight in highlights:
        if highlight.type not in wanted:
            continue
        days_left = (highlight.date - today).days
        if 0 <= days_left <= horizon:
            reminders.append(
                Reminder(
                    date=highlight.date,
                    type=highlight.type,
                    description=highlight.description,
                    days_left=days_left,
                    message=_message(highlight, days_left),
                )
            )

    return sorted(reminders, key=lambda r: (r.date, r.type))
