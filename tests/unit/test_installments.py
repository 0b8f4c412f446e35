"""Unit tests for card installment plans"""

import pytest
from datetime import date
from finance_calendar.domain.exceptions import InvalidInstallmentPlanError
from finance_calendar.domain.installments import (
    advance_plan,
    apply_card_payment,
    create_installment_plan,
    installment_schedule,
    post_due_installments,
)
from finance_calendar.domain.models import BankCard


def test_create_installment_plan_equal_split():
    """Test plan with evenly divisible amount"""
    plan = create_installment_plan("Telefon", 12000, 6, date(2024, 1, 31))

    assert plan.monthly_amount == 2000
    assert plan.remaining == 6
    assert plan.posted == 0
    assert plan.next_date == date(2024, 1, 31)
    assert plan.id


def test_create_installment_plan_default_description():
    plan = create_installment_plan("", 100, 3, date(2024, 1, 1))
    assert plan.description == "Taksitli Harcama"
    assert plan.monthly_amount == 33.33


@pytest.mark.parametrize("total, count", [(0, 3), (-10, 3), (100, 0), (100, -1)])
def test_create_installment_plan_rejects_non_positive(total, count):
    with pytest.raises(InvalidInstallmentPlanError):
        create_installment_plan("x", total, count, date(2024, 1, 1))


def test_installment_schedule_rounding():
    """Test last installment absorbs rounding drift"""
    plan = create_installment_plan("Tablet", 100, 3, date(2024, 1, 31))

    schedule = installment_schedule(plan)

    assert [amount for _, amount in schedule] == [33.33, 33.33, 33.34]
    assert round(sum(amount for _, amount in schedule), 2) == 100


def test_installment_schedule_dates_clamp_to_month_end():
    """Monthly due dates keep the purchase day where the month allows"""
    plan = create_installment_plan("Tablet", 400, 4, date(2024, 1, 31))

    dates = [due for due, _ in installment_schedule(plan)]

    assert dates == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]


def test_installment_schedule_after_posting():
    plan = advance_plan(create_installment_plan("Tablet", 100, 3, date(2024, 1, 10)))

    schedule = installment_schedule(plan)

    assert schedule == [(date(2024, 2, 10), 33.33), (date(2024, 3, 10), 33.34)]


def test_advance_plan_until_finished():
    plan = create_installment_plan("Kulaklık", 300, 2, date(2024, 1, 10))

    plan = advance_plan(plan)
    assert (plan.posted, plan.remaining, plan.next_date) == (1, 1, date(2024, 2, 10))

    plan = advance_plan(plan)
    assert (plan.posted, plan.remaining, plan.next_date) == (2, 0, None)

    assert advance_plan(plan) is plan


def test_advance_plan_derives_date_from_start():
    plan = create_installment_plan("Kulaklık", 300, 3, date(2024, 1, 10))
    plan.next_date = None

    advanced = advance_plan(plan)

    assert advanced.next_date == date(2024, 2, 10)


def test_post_due_installments():
    plan = create_installment_plan("Laptop", 30000, 3, date(2024, 1, 5))
    card = BankCard(bank_name="Akbank", id="card-1", credit_limit=50_000, current_debt=1_000, installment_plans=[plan])

    updated, entries = post_due_installments(card, date(2024, 1, 5))

    assert len(entries) == 1
    assert entries[0].amount == 10000
    assert entries[0].description == "Laptop (Taksit 1/3)"
    assert entries[0].plan_id == plan.id
    assert entries[0].card_id == "card-1"
    assert updated.current_debt == 11_000
    assert updated.minimum_payment == 4_400  # 40% tier
    assert updated.installment_plans[0].next_date == date(2024, 2, 5)
    assert updated.installment_plans[0].remaining == 2


def test_post_due_installments_nothing_due():
    plan = create_installment_plan("Laptop", 30000, 3, date(2024, 2, 5))
    card = BankCard(bank_name="Akbank", id="card-1", current_debt=0, installment_plans=[plan])

    updated, entries = post_due_installments(card, date(2024, 1, 31))

    assert entries == []
    assert updated is card


def test_apply_card_payment_advances_open_plans():
    open_plan = create_installment_plan("Laptop", 300, 3, date(2024, 1, 5))
    finished = advance_plan(advance_plan(create_installment_plan("Eski", 100, 2, date(2023, 6, 1))))
    card = BankCard(bank_name="Akbank", nickname="Axess", current_debt=2_000, installment_plans=[open_plan, finished])

    updated, transaction = apply_card_payment(card, 500, date(2024, 1, 20))

    assert transaction.type == "gider"
    assert transaction.date == "2024-01-20"
    assert transaction.description == "Axess ödemesi"
    assert transaction.category == "Kredi Kartı Ödemesi"
    assert updated.current_debt == 1_500
    assert updated.installment_plans[0].posted == 1
    assert updated.installment_plans[1] is finished
