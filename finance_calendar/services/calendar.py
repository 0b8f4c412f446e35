"""Highlight calendar - keeps record snapshots and recomputes highlights on change"""

import logging
import math
import threading
import time
from datetime import date
from typing import Callable, List, Optional, Sequence

from finance_calendar.config import settings as app_settings
from finance_calendar.domain.highlights import compose_highlights
from finance_calendar.domain.models import BankCard, CalendarSettings, HighlightedDate, Payment, Transaction
from finance_calendar.infrastructure.database.documents import (
    card_from_document,
    payment_from_document,
    transaction_from_document,
)
from finance_calendar.infrastructure.database.repositories import CARDS, PAYMENTS, TRANSACTIONS
from finance_calendar.infrastructure.observability.metrics import record_composition
from finance_calendar.infrastructure.storage.local import (
    LocalStore,
    load_guest_calendar_settings,
    load_guest_transactions,
)

HighlightListener = Callable[[List[HighlightedDate]], None]

logger = logging.getLogger(__name__)


class HighlightCalendar:
    """
    Calendar overlay state for one user.

    Every input change replaces a full snapshot. Snapshot updates from the
    store are coalesced by a debounce timer; window and card-marker changes
    recompute right away. Highlights are always rebuilt from the complete
    current snapshots, never patched.
    """

    def __init__(
        self,
        calendar_settings: Optional[CalendarSettings] = None,
        debounce_seconds: Optional[float] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.settings = calendar_settings or CalendarSettings(
            past_months=app_settings.calendar_past_months,
            future_months=app_settings.calendar_future_months,
            include_cards=app_settings.calendar_include_cards,
        )
        self.debounce_seconds = (
            app_settings.recompute_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self._today = today or date.today
        self._lock = threading.RLock()
        self._timer: Optional[threading.Timer] = None
        self._listeners: List[HighlightListener] = []

        self.transactions: List[Transaction] = []
        self.payments: List[Payment] = []
        self.cards: List[BankCard] = []
        self.highlighted_dates: List[HighlightedDate] = []
        self.is_open = False

    # Snapshot updates (debounced)

    def set_transactions(self, transactions: Sequence[Transaction]) -> None:
        with self._lock:
            self.transactions = list(transactions or [])
        self.schedule_recompute()

    def set_payments(self, payments: Sequence[Payment]) -> None:
        with self._lock:
            self.payments = list(payments or [])
        self.schedule_recompute()

    def set_cards(self, cards: Sequence[BankCard]) -> None:
        with self._lock:
            self.cards = list(cards or [])
        self.schedule_recompute()

    # Preferences (immediate)

    def set_fixed_payment_range(self, past_months: float, future_months: float) -> None:
        with self._lock:
            self.settings.past_months = max(0, math.floor(past_months))
            self.settings.future_months = max(0, math.floor(future_months))
        self.recompute()

    def set_include_card_markers(self, enabled: bool) -> None:
        with self._lock:
            self.settings.include_cards = bool(enabled)
        self.recompute()

    # Recompute

    def schedule_recompute(self) -> None:
        """Recompute after the debounce delay; a newer change restarts the wait"""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            if self.debounce_seconds <= 0:
                self._timer = None
            else:
                timer = threading.Timer(self.debounce_seconds, lambda: self._run_scheduled(timer))
                timer.daemon = True
                self._timer = timer
                timer.start()
                return
        self.recompute()

    def _run_scheduled(self, timer: threading.Timer) -> None:
        with self._lock:
            # Superseded or flushed while waiting
            if self._timer is not timer:
                return
            self._timer = None
        self.recompute()

    @property
    def has_pending_recompute(self) -> bool:
        with self._lock:
            return self._timer is not None

    def flush(self) -> List[HighlightedDate]:
        """Run a pending debounced recompute now, returning current highlights"""
        with self._lock:
            pending = self._timer
            self._timer = None
        if pending is not None:
            pending.cancel()
            return self.recompute()
        return self.highlighted_dates

    def recompute(self) -> List[HighlightedDate]:
        start_time = time.time()
        with self._lock:
            events = compose_highlights(
                self.transactions,
                self.payments,
                self.cards,
                self.settings.past_months,
                self.settings.future_months,
                self.settings.include_cards,
                today=self._today(),
            )
            self.highlighted_dates = events
            listeners = list(self._listeners)

        record_composition("calendar", len(events), time.time() - start_time)
        logger.debug("Calendar highlights recomputed", extra={"event_count": len(events)})

        for listener in listeners:
            try:
                listener(events)
            except Exception as e:
                logger.warning(f"Highlight listener failed: {e}", extra={"event_count": len(events)})
        return events

    def subscribe(self, listener: HighlightListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # Overlay

    def open_calendar(self, dates: Optional[Sequence[HighlightedDate]] = None) -> List[HighlightedDate]:
        """Open the overlay with the given highlights, or fresh ones when none are given"""
        if dates:
            with self._lock:
                self.highlighted_dates = list(dates)
        else:
            self.recompute()
        self.is_open = True
        return self.highlighted_dates

    def close_calendar(self) -> None:
        # Highlights stay cached so the next open shows markers immediately
        self.is_open = False

    # Sources

    def bind(self, store, user_id: str) -> Callable[[], None]:
        """
        Watch the user's transactions, payments and cards in a document store.

        Returns:
            Function that stops all three watches
        """
        unsubscribers = [
            store.watch(
                TRANSACTIONS,
                user_id,
                lambda docs: self.set_transactions([transaction_from_document(d) for d in docs]),
            ),
            store.watch(
                PAYMENTS,
                user_id,
                lambda docs: self.set_payments([payment_from_document(d) for d in docs]),
            ),
            store.watch(
                CARDS,
                user_id,
                lambda docs: self.set_cards([card_from_document(d) for d in docs]),
            ),
        ]

        def unbind() -> None:
            for unsubscribe in unsubscribers:
                unsubscribe()

        return unbind

    def load_guest(self, store: LocalStore) -> List[HighlightedDate]:
        """Guest mode: local transactions only, no payments or cards"""
        saved_settings = load_guest_calendar_settings(store)
        with self._lock:
            if saved_settings is not None:
                self.settings = saved_settings
            self.transactions = load_guest_transactions(store)
            self.payments = []
            self.cards = []
        return self.recompute()
