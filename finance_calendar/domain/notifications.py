"""Notification feed messages for card payments and installment postings"""

import time
from typing import Optional, Sequence

from finance_calendar.domain.models import BankCard, CardEntry, Notification
from finance_calendar.utils.formatting import format_try


def now_ms() -> int:
    return int(time.time() * 1000)


def card_payment_notification(
    card: BankCard,
    amount: float,
    advanced_plans: int,
    timestamp: Optional[int] = None,
) -> Notification:
    """
    Feed entry for a payment toward a card statement.

    Example:
        "Axess kartına ₺1.000 ödeme yapıldı • 2 taksit 1 ay ilerletildi"
    """
    message = f"{card.label} kartına {format_try(amount)} ödeme yapıldı"
    if advanced_plans > 0:
        message += f" • {advanced_plans} taksit 1 ay ilerletildi"
    return Notification(message=message, type="payment", timestamp=timestamp or now_ms())


def installments_posted_notification(
    card: BankCard,
    entries: Sequence[CardEntry],
    timestamp: Optional[int] = None,
) -> Notification:
    total = sum(entry.amount for entry in entries)
    return Notification(
        message=f"{card.label} kartına {len(entries)} taksit işlendi • {format_try(total)}",
        type="info",
        timestamp=timestamp or now_ms(),
    )
