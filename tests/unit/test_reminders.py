"""Unit tests for upcoming payment reminders"""

from datetime import date
from finance_calendar.domain.models import HighlightedDate, NotificationSettings
from finance_calendar.domain.reminders import upcoming_reminders


def _highlights():
    return [
        HighlightedDate(date(2024, 1, 20), "payment", "Vergi • ₺1.200"),
        HighlightedDate(date(2024, 1, 17), "card-due", "Axess Son Ödeme"),
        HighlightedDate(date(2024, 1, 15), "payment", "Kira • ₺15.000"),
        HighlightedDate(date(2024, 1, 16), "expense", "Market • ₺250"),
        HighlightedDate(date(2024, 1, 10), "payment", "Aidat • ₺500"),
        HighlightedDate(date(2024, 1, 16), "card-statement", "Axess Ekstre"),
    ]


def test_reminders_within_horizon(today):
    reminders = upcoming_reminders(_highlights(), today, NotificationSettings(reminder_days_before=3))

    assert [(r.date, r.type, r.days_left) for r in reminders] == [
        (date(2024, 1, 15), "payment", 0),
        (date(2024, 1, 17), "card-due", 2),
    ]
    assert reminders[0].message == "Kira • ₺15.000 ödemesi bugün (15.01.2024)"
    assert reminders[1].message == "Axess Son Ödeme 2 gün sonra (17.01.2024)"


def test_wider_horizon_includes_later_payment(today):
    reminders = upcoming_reminders(_highlights(), today, NotificationSettings(reminder_days_before=7))
    assert [r.days_left for r in reminders] == [0, 2, 5]


def test_disabled_notifications_yield_nothing(today):
    settings = NotificationSettings(enabled=False)
    assert upcoming_reminders(_highlights(), today, settings) == []


def test_reminder_kinds_toggle_independently(today):
    bills_only = upcoming_reminders(_highlights(), today, NotificationSettings(payment_reminders=False))
    payments_only = upcoming_reminders(_highlights(), today, NotificationSettings(bill_reminders=False))

    assert [r.type for r in bills_only] == ["card-due"]
    assert [r.type for r in payments_only] == ["payment"]


def test_negative_horizon_is_same_day_only(today):
    reminders = upcoming_reminders(_highlights(), today, NotificationSettings(reminder_days_before=-2))
    assert [r.days_left for r in reminders] == [0]
