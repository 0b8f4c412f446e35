"""Calendar highlight composition - projects finance records onto calendar days"""

from datetime import date
from typing import List, Optional, Sequence, Tuple

from finance_calendar.domain.models import (
    BankCard,
    HighlightedDate,
    Payment,
    Transaction,
    PAYMENT,
    CARD_STATEMENT,
    CARD_DUE,
    INCOME,
    EXPENSE,
)
from finance_calendar.utils.date_utils import parse_date, clamp_day, month_window, extract_day
from finance_calendar.utils.formatting import format_try

_TRANSACTION_EVENT_TYPES = {"gider": EXPENSE, "gelir": INCOME}


def transaction_highlights(transactions: Sequence[Transaction]) -> List[HighlightedDate]:
    """One income/expense event per transaction with a readable date"""
    events = []
    for txn in transactions:
        event_type = _TRANSACTION_EVENT_TYPES.get(txn.type)
        day = parse_date(txn.date)
        if event_type is None or day is None:
            continue
        events.append(
            HighlightedDate(
                date=day,
                type=event_type,
                description=f"{txn.description} • {format_try(txn.amount)}",
            )
        )
    return events


def payment_highlights(
    payments: Sequence[Payment],
    window: Sequence[Tuple[int, int]],
) -> List[HighlightedDate]:
    """
    Payment events for pending obligations.

    - custom: one event on its exact date
    - fixed: one event per window month on payment_day, clamped to month end
    """
    events = []
    for payment in payments:
        if payment.status == "paid":
            continue

        description = f"{payment.name} • {format_try(payment.amount)}"

        if payment.payment_type == "custom" and payment.date:
            day = parse_date(payment.date)
            if day is not None:
                events.append(HighlightedDate(date=day, type=PAYMENT, description=description))

        if payment.payment_type == "fixed" and payment.payment_day is not None:
            for year, month in window:
                events.append(
                    HighlightedDate(
                        date=clamp_day(year, month, payment.payment_day),
                        type=PAYMENT,
                        description=description,
                    )
                )
    return events


def card_highlights(cards: Sequence[BankCard], window: Sequence[Tuple[int, int]]) -> List[HighlightedDate]:
    """Statement and due-date events per card, each field handled independently"""
    events = []
    for card in cards:
        statement_day = extract_day(card.statement_date)
        due_day = extract_day(card.payment_due_date)
        for year, month in window:
            if statement_day is not None:
                events.append(
                    HighlightedDate(
                        date=clamp_day(year, month, statement_day),
                        type=CARD_STATEMENT,
                        description=f"{card.label} Ekstre",
                    )
                )
            if due_day is not None:
                events.append(
                    HighlightedDate(
                        date=clamp_day(year, month, due_day),
                        type=CARD_DUE,
                        description=f"{card.label} Son Ödeme",
                    )
                )
    return events


def compose_highlights(
    transactions: Sequence[Transaction],
    payments: Sequence[Payment],
    cards: Sequence[BankCard],
    past_months: int = 3,
    future_months: int = 3,
    include_cards: bool = True,
    today: Optional[date] = None,
) -> List[HighlightedDate]:
    """
    Build the full list of calendar highlights from current record snapshots.

    The window covers past_months before through future_months after the
    month of `today` (default: the current date), inclusive. Records with
    unreadable dates or day fields contribute nothing; this never raises on
    bad record content.

    Returns:
        Unordered events, duplicates allowed (two cards due the same day
        give two entries)
    """
    if today is None:
        today = date.today()

    window = month_window(today, max(0, past_months), max(0, future_months))

    events = transaction_highlights(transactions)
    events.extend(payment_highlights(payments, window))
    if include_cards:
        events.extend(card_highlights(cards, window))

    return events
