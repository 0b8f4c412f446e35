"""Domain models - pure Python dataclasses representing finance records"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Mapping, Optional


# Event types rendered on the calendar overlay
PAYMENT = "payment"
CARD_STATEMENT = "card-statement"
CARD_DUE = "card-due"
INCOME = "income"
EXPENSE = "expense"
NEWLY_ADDED = "newlyAdded"


@dataclass
class Transaction:
    """Posted income or expense on a calendar day"""

    date: str
    type: str  # "gelir" (income) or "gider" (expense)
    amount: float
    description: str
    category: Optional[str] = None
    id: Optional[str] = None


@dataclass
class Payment:
    """Fixed monthly or one-off custom payment obligation"""

    payment_type: str  # "fixed" or "custom"
    name: str
    amount: float
    status: str = "pending"  # "pending" or "paid"
    date: Optional[str] = None  # custom payments only
    payment_day: Optional[int] = None  # fixed payments only
    category: Optional[str] = None
    id: Optional[str] = None


@dataclass
class InstallmentPlan:
    """Card purchase split into monthly installments"""

    id: str
    description: str
    total: float
    monthly_amount: float
    remaining: int
    posted: int
    start_date: date
    next_date: Optional[date] = None


@dataclass
class BankCard:
    """Credit card with free-text statement and due days"""

    bank_name: str
    nickname: Optional[str] = None
    statement_date: Optional[str] = None
    payment_due_date: Optional[str] = None
    credit_limit: Optional[float] = None
    current_debt: Optional[float] = None
    minimum_payment: Optional[float] = None
    installment_plans: List[InstallmentPlan] = field(default_factory=list)
    id: Optional[str] = None

    @property
    def label(self) -> str:
        return self.nickname or self.bank_name


@dataclass
class CardEntry:
    """Charge posted to a card"""

    card_id: str
    amount: float
    description: str
    date: date
    type: str = "harcama"
    plan_id: Optional[str] = None


@dataclass
class HighlightedDate:
    """Single calendar highlight, recomputed on every input change"""

    date: date
    type: str
    description: str


@dataclass
class CalendarSettings:
    """Month window and card marker preference for the calendar overlay"""

    past_months: int = 3
    future_months: int = 3
    include_cards: bool = True

    @classmethod
    def from_blob(cls, blob: Optional[Mapping[str, Any]]) -> "CalendarSettings":
        """
        Read calendar preferences from a stored settings object.

        Missing keys fall back to the defaults; non-numeric month counts
        become 1; counts are floored and never negative.
        """
        blob = blob or {}
        return cls(
            past_months=_month_count(blob.get("calendarFixedPastMonths", 3)),
            future_months=_month_count(blob.get("calendarFixedFutureMonths", 3)),
            include_cards=bool(blob.get("calendarIncludeCards", True)),
        )

    def to_blob(self) -> dict:
        return {
            "calendarFixedPastMonths": self.past_months,
            "calendarFixedFutureMonths": self.future_months,
            "calendarIncludeCards": self.include_cards,
        }


@dataclass
class NotificationSettings:
    """Which upcoming events produce reminders, and how early"""

    enabled: bool = True
    bill_reminders: bool = True
    payment_reminders: bool = True
    reminder_days_before: int = 3


@dataclass
class Reminder:
    """Upcoming payment or card due date within the reminder horizon"""

    date: date
    type: str
    description: str
    days_left: int
    message: str


def _month_count(value: Any) -> int:
    if value is None:
        value = 3
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = 1.0
    if not math.isfinite(number):
        number = 1.0
    return max(0, math.floor(number))


@dataclass
class Notification:
    """Entry in a user's notification feed"""

    message: str
    type: str = "info"  # "payment", "reminder", "alert" or "info"
    read: bool = False
    timestamp: int = 0  # Unix time in milliseconds
    link: Optional[str] = None
    id: Optional[str] = None
