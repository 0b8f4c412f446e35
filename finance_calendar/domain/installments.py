"""Card installment plans - creation, schedules and monthly posting"""

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Tuple

from finance_calendar.domain.banks import calculate_minimum_payment
from finance_calendar.domain.exceptions import InvalidInstallmentPlanError
from finance_calendar.domain.models import BankCard, CardEntry, InstallmentPlan, Transaction
from finance_calendar.utils.date_utils import add_months_clamped

DEFAULT_PLAN_DESCRIPTION = "Taksitli Harcama"
CARD_PAYMENT_CATEGORY = "Kredi Kartı Ödemesi"


def _round_money(amount: float) -> float:
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def create_installment_plan(
    description: Optional[str],
    total: float,
    count: int,
    start_date: date,
    plan_id: Optional[str] = None,
) -> InstallmentPlan:
    """
    Split a card purchase into monthly installments.

    Args:
        description: Purchase label (default "Taksitli Harcama")
        total: Purchase amount in TL, must be positive
        count: Number of monthly installments, must be positive
        start_date: Purchase date; first installment is due on this day

    Raises:
        InvalidInstallmentPlanError: On non-positive total or count
    """
    if total is None or total <= 0:
        raise InvalidInstallmentPlanError("Installment total must be positive")
    if count is None or count <= 0:
        raise InvalidInstallmentPlanError("Installment count must be positive")

    return InstallmentPlan(
        id=plan_id or str(uuid.uuid4()),
        description=description or DEFAULT_PLAN_DESCRIPTION,
        total=total,
        monthly_amount=_round_money(total / count),
        remaining=count,
        posted=0,
        start_date=start_date,
        next_date=start_date,
    )


def installment_schedule(plan: InstallmentPlan) -> List[Tuple[date, float]]:
    """
    Remaining (due_date, amount) pairs for a plan, one month apart.

    The last installment absorbs rounding drift so the schedule sums to the
    outstanding amount (total minus what has been posted).

    Example:
        100 TL / 3 → 33.33, 33.33, 33.34
    """
    if plan.remaining <= 0:
        return []

    first_due = plan.next_date or add_months_clamped(plan.start_date, plan.posted)
    outstanding = Decimal(str(plan.total)) - Decimal(str(plan.monthly_amount)) * plan.posted
    monthly = Decimal(str(plan.monthly_amount))

    schedule = []
    for i in range(plan.remaining):
        due_date = add_months_clamped(first_due, i)
        if i == plan.remaining - 1:
            amount = outstanding - monthly * (plan.remaining - 1)
        else:
            amount = monthly
        schedule.append((due_date, float(amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))))
    return schedule


def advance_plan(plan: InstallmentPlan) -> InstallmentPlan:
    """Move a plan one month forward after a card payment"""
    if plan.remaining <= 0:
        return plan

    posted = plan.posted + 1
    remaining = max(0, plan.remaining - 1)

    if remaining <= 0:
        next_date = None
    elif plan.next_date:
        next_date = add_months_clamped(plan.next_date, 1)
    else:
        # No recorded due date: derive it from the purchase date
        next_date = add_months_clamped(plan.start_date, posted)

    return replace(plan, posted=posted, remaining=remaining, next_date=next_date)


def post_due_installments(card: BankCard, today: date) -> Tuple[BankCard, List[CardEntry]]:
    """
    Post one installment for every plan due on or before today.

    Each posting adds a card entry, raises the card debt, recomputes the
    minimum payment and moves the plan's next due date one month forward.

    Returns:
        (updated card, posted entries); the card is unchanged when nothing is due
    """
    entries = []
    debt = card.current_debt or 0
    plans = []

    for plan in card.installment_plans:
        if plan.remaining <= 0 or plan.next_date is None or plan.next_date > today or not plan.monthly_amount:
            plans.append(plan)
            continue

        number = plan.posted + 1
        entries.append(
            CardEntry(
                card_id=card.id,
                amount=plan.monthly_amount,
                description=f"{plan.description or 'Taksit'} (Taksit {number}/{plan.posted + plan.remaining})",
                date=plan.next_date,
                plan_id=plan.id,
            )
        )
        debt = max(0, debt + plan.monthly_amount)

        remaining = max(0, plan.remaining - 1)
        next_date = add_months_clamped(plan.next_date, 1) if remaining > 0 else None
        plans.append(replace(plan, posted=number, remaining=remaining, next_date=next_date))

    if not entries:
        return card, []

    updated = replace(
        card,
        current_debt=_round_money(debt),
        minimum_payment=calculate_minimum_payment(card.bank_name, card.credit_limit, debt),
        installment_plans=plans,
    )
    return updated, entries


def apply_card_payment(card: BankCard, amount: float, on: date) -> Tuple[BankCard, Transaction]:
    """
    Record a payment toward a card statement.

    Produces the expense transaction for the payment, lowers the card debt
    and advances every open installment plan by one month.
    """
    transaction = Transaction(
        date=on.isoformat(),
        type="gider",
        amount=amount,
        description=f"{card.label} ödemesi",
        category=CARD_PAYMENT_CATEGORY,
    )
    updated = replace(
        card,
        current_debt=_round_money((card.current_debt or 0) - amount),
        installment_plans=[advance_plan(plan) for plan in card.installment_plans],
    )
    return updated, transaction
