"""Mapping between stored camelCase documents and domain models

Stored data comes from several client versions, so reads are tolerant:
missing optional fields become None and wrong-typed numbers are dropped.
"""

import math
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from finance_calendar.domain.models import (
    BankCard,
    CardEntry,
    InstallmentPlan,
    Notification,
    NotificationSettings,
    Payment,
    Transaction,
)
from finance_calendar.utils.date_utils import parse_date


def _number(value: Any) -> Optional[float]:
    """Numeric value or None; strings and booleans do not count"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def transaction_from_document(doc: Mapping[str, Any]) -> Transaction:
    return Transaction(
        date=_text(doc.get("date")) or "",
        type=_text(doc.get("type")) or "",
        amount=_number(doc.get("amount")) or 0,
        description=_text(doc.get("description")) or "",
        category=_text(doc.get("category")),
        id=_text(doc.get("id")),
    )


def transaction_to_document(txn: Transaction) -> Dict[str, Any]:
    doc = {
        "date": txn.date,
        "type": txn.type,
        "amount": txn.amount,
        "description": txn.description,
        "category": txn.category,
    }
    if txn.id:
        doc["id"] = txn.id
    return doc


def payment_from_document(doc: Mapping[str, Any]) -> Payment:
    payment_day = _number(doc.get("paymentDay"))
    return Payment(
        payment_type=_text(doc.get("paymentType")) or "",
        name=_text(doc.get("name")) or "",
        amount=_number(doc.get("amount")) or 0,
        status=_text(doc.get("status")) or "pending",
        date=_text(doc.get("date")),
        payment_day=int(payment_day) if payment_day is not None else None,
        category=_text(doc.get("category")),
        id=_text(doc.get("id")),
    )


def installment_plan_from_document(doc: Mapping[str, Any]) -> Optional[InstallmentPlan]:
    """Plan from a card document, or None when its start date is unreadable"""
    start_date = parse_date(doc.get("startDate"))
    if start_date is None:
        return None
    return InstallmentPlan(
        id=_text(doc.get("id")) or "",
        description=_text(doc.get("description")) or "",
        total=_number(doc.get("total")) or 0,
        monthly_amount=_number(doc.get("monthlyAmount")) or 0,
        remaining=int(_number(doc.get("remaining")) or 0),
        posted=int(_number(doc.get("posted")) or 0),
        start_date=start_date,
        next_date=parse_date(doc.get("nextDate")),
    )


def installment_plan_to_document(plan: InstallmentPlan) -> Dict[str, Any]:
    return {
        "id": plan.id,
        "description": plan.description,
        "total": plan.total,
        "monthlyAmount": plan.monthly_amount,
        "remaining": plan.remaining,
        "posted": plan.posted,
        "startDate": _iso(plan.start_date),
        "nextDate": _iso(plan.next_date),
    }


def card_from_document(doc: Mapping[str, Any]) -> BankCard:
    raw_plans = doc.get("installmentPlans")
    plans: List[InstallmentPlan] = []
    if isinstance(raw_plans, list):
        for raw in raw_plans:
            if isinstance(raw, Mapping):
                plan = installment_plan_from_document(raw)
                if plan is not None:
                    plans.append(plan)

    return BankCard(
        bank_name=_text(doc.get("bankName")) or "",
        nickname=_text(doc.get("nickname")),
        # Day fields may be stored as numbers; digit extraction happens later
        statement_date=doc.get("statementDate"),
        payment_due_date=doc.get("paymentDueDate"),
        credit_limit=_number(doc.get("creditLimit")),
        current_debt=_number(doc.get("currentDebt")),
        minimum_payment=_number(doc.get("minimumPayment")),
        installment_plans=plans,
        id=_text(doc.get("id")),
    )


def card_changes_to_document(card: BankCard) -> Dict[str, Any]:
    """Fields the installment and payment flows rewrite on a stored card"""
    return {
        "currentDebt": card.current_debt,
        "minimumPayment": card.minimum_payment,
        "installmentPlans": [installment_plan_to_document(p) for p in card.installment_plans],
    }


def card_entry_to_document(entry: CardEntry) -> Dict[str, Any]:
    return {
        "cardId": entry.card_id,
        "type": entry.type,
        "amount": entry.amount,
        "description": entry.description,
        "date": _iso(entry.date),
        "planId": entry.plan_id,
    }


def notification_settings_from_document(
    doc: Optional[Mapping[str, Any]],
    default_days_before: int = 3,
) -> NotificationSettings:
    doc = doc or {}
    days_before = _number(doc.get("reminderDaysBefore"))
    return NotificationSettings(
        enabled=bool(doc.get("notifications", True)),
        bill_reminders=bool(doc.get("billReminders", True)),
        payment_reminders=bool(doc.get("paymentReminders", True)),
        reminder_days_before=int(days_before) if days_before is not None else default_days_before,
    )


def notification_from_document(doc: Mapping[str, Any]) -> Notification:
    timestamp = _number(doc.get("timestamp"))
    return Notification(
        message=_text(doc.get("message")) or "",
        type=_text(doc.get("type")) or "info",
        read=doc.get("read") is True,
        timestamp=int(timestamp) if timestamp is not None else 0,
        link=_text(doc.get("link")),
        id=_text(doc.get("id")),
    )


def notification_to_document(notification: Notification) -> Dict[str, Any]:
    return {
        "message": notification.message,
        "type": notification.type,
        "read": notification.read,
        "timestamp": notification.timestamp,
        "link": notification.link,
    }
