"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
import datetime
from typing import List, Literal, Optional


class DocumentSchema(BaseModel):
    """Stored records keep camelCase field names"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class TransactionSchema(DocumentSchema):
    """Body for transaction create/replace"""

    date: str = Field(..., min_length=1, description="DD-MM-YYYY or YYYY-MM-DD")
    type: Literal["gelir", "gider"]
    amount: float = Field(..., ge=0)
    description: str = ""
    category: Optional[str] = None


class PaymentSchema(DocumentSchema):
    """Body for payment create/replace"""

    name: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    status: Literal["pending", "paid"] = "pending"
    payment_type: Literal["fixed", "custom"] = Field(..., alias="paymentType")
    payment_day: Optional[int] = Field(None, ge=1, le=31, alias="paymentDay")
    date: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class CardSchema(DocumentSchema):
    """Body for card create/replace"""

    bank_name: str = Field(..., min_length=1, alias="bankName")
    nickname: Optional[str] = None
    statement_date: Optional[str] = Field(None, alias="statementDate")
    payment_due_date: Optional[str] = Field(None, alias="paymentDueDate")
    credit_limit: Optional[float] = Field(None, ge=0, alias="creditLimit")
    current_debt: Optional[float] = Field(None, alias="currentDebt")


class SubscriptionSchema(DocumentSchema):
    """Body for subscription create/replace"""

    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    next_billing_date: str = Field(..., min_length=1, alias="nextBillingDate")
    cancellation_reminder_date: Optional[str] = Field(None, alias="cancellationReminderDate")
    card_id: Optional[str] = Field(None, alias="cardId")
    category: Optional[str] = None


class NotificationCreateSchema(BaseModel):
    """Body for POST /v1/users/{user_id}/notifications"""

    message: str = Field(..., min_length=1)
    type: Literal["payment", "reminder", "alert", "info"] = "info"
    link: Optional[str] = None


class NotificationSchema(BaseModel):
    id: str
    message: str
    type: str
    read: bool
    timestamp: int
    link: Optional[str] = None


class NotificationsUpdatedResponse(BaseModel):
    """Response for bulk notification updates"""

    updated: int


class UserSettingsSchema(DocumentSchema):
    """Calendar and notification preferences"""

    calendar_fixed_past_months: Optional[int] = Field(None, ge=0, alias="calendarFixedPastMonths")
    calendar_fixed_future_months: Optional[int] = Field(None, ge=0, alias="calendarFixedFutureMonths")
    calendar_include_cards: Optional[bool] = Field(None, alias="calendarIncludeCards")
    notifications: Optional[bool] = None
    bill_reminders: Optional[bool] = Field(None, alias="billReminders")
    payment_reminders: Optional[bool] = Field(None, alias="paymentReminders")
    reminder_days_before: Optional[int] = Field(None, ge=0, alias="reminderDaysBefore")


class HighlightSchema(BaseModel):
    """Single calendar highlight"""

    date: datetime.date
    type: str
    description: str


class HighlightsResponse(BaseModel):
    """Response for GET /v1/users/{user_id}/calendar/highlights"""

    user_id: str
    past_months: int
    future_months: int
    include_cards: bool
    highlights: List[HighlightSchema]


class ReminderSchema(BaseModel):
    date: datetime.date
    type: str
    description: str
    days_left: int
    message: str


class RemindersResponse(BaseModel):
    """Response for GET /v1/users/{user_id}/reminders"""

    user_id: str
    reminders: List[ReminderSchema]


class MinimumPaymentResponse(BaseModel):
    """Response for GET /v1/users/{user_id}/cards/{card_id}/minimum-payment"""

    card_id: str
    bank_name: str
    credit_limit: Optional[float] = None
    current_debt: float
    minimum_payment: int


class InstallmentRequest(BaseModel):
    """Request body for POST /v1/users/{user_id}/cards/{card_id}/installments"""

    description: Optional[str] = None
    total: float = Field(..., gt=0, description="Purchase amount in TL")
    count: int = Field(..., gt=0, le=120, description="Number of monthly installments")
    start_date: datetime.date


class InstallmentPlanSchema(BaseModel):
    id: str
    description: str
    total: float
    monthly_amount: float
    remaining: int
    posted: int
    start_date: datetime.date
    next_date: Optional[datetime.date] = None


class ScheduledInstallmentSchema(BaseModel):
    due_date: datetime.date
    amount: float


class ScheduleResponse(BaseModel):
    """Response for GET .../installments/{plan_id}/schedule"""

    plan_id: str
    installments: List[ScheduledInstallmentSchema]


class CardPaymentRequest(BaseModel):
    """Request body for POST /v1/users/{user_id}/cards/{card_id}/payments"""

    amount: float = Field(..., gt=0)
    date: Optional[datetime.date] = None


class CardPaymentResponse(BaseModel):
    card_id: str
    transaction_id: str
    current_debt: float
    advanced_plans: int


class PostDueResponse(BaseModel):
    """Response for POST /v1/users/{user_id}/installments/post-due"""

    user_id: str
    posted_entries: int
    cards_updated: int
