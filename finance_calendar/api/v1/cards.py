"""Card endpoints - minimum payment, installment plans, statement payments"""

import logging
from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from finance_calendar.api.dependencies import get_repository, get_request_id
from finance_calendar.api.v1.schemas import (
    CardPaymentRequest,
    CardPaymentResponse,
    InstallmentPlanSchema,
    InstallmentRequest,
    MinimumPaymentResponse,
    PostDueResponse,
    ScheduledInstallmentSchema,
    ScheduleResponse,
)
from finance_calendar.domain.banks import calculate_minimum_payment
from finance_calendar.domain.exceptions import InvalidInstallmentPlanError, RecordNotFoundError
from finance_calendar.domain.installments import (
    apply_card_payment,
    create_installment_plan,
    installment_schedule,
    post_due_installments,
)
from finance_calendar.domain.models import BankCard
from finance_calendar.domain.notifications import card_payment_notification, installments_posted_notification
from finance_calendar.infrastructure.database.documents import (
    card_changes_to_document,
    card_entry_to_document,
    card_from_document,
    notification_to_document,
    transaction_to_document,
)
from finance_calendar.infrastructure.database.repositories import (
    CARD_ENTRIES,
    CARDS,
    NOTIFICATIONS,
    TRANSACTIONS,
    DocumentRepository,
)
from finance_calendar.infrastructure.observability.logging import log_installments_posted
from finance_calendar.infrastructure.observability.metrics import installments_posted_counter

router = APIRouter()


def _load_card(repo: DocumentRepository, user_id: str, card_id: str) -> BankCard:
    doc = repo.get(CARDS, user_id, card_id)
    if doc is None:
        raise RecordNotFoundError(f"Card {card_id} not found")
    return card_from_document(doc)


def _save_card(repo: DocumentRepository, user_id: str, card: BankCard) -> None:
    repo.upsert(CARDS, user_id, card_changes_to_document(card), doc_id=card.id, merge=True)


@router.get("/users/{user_id}/cards/{card_id}/minimum-payment", response_model=MinimumPaymentResponse)
def get_minimum_payment(user_id: str, card_id: str, repo: DocumentRepository = Depends(get_repository)):
    """Minimum statement payment under the card's bank rules"""
    try:
        card = _load_card(repo, user_id, card_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MinimumPaymentResponse(
        card_id=card_id,
        bank_name=card.bank_name,
        credit_limit=card.credit_limit,
        current_debt=card.current_debt or 0,
        minimum_payment=calculate_minimum_payment(card.bank_name, card.credit_limit, card.current_debt),
    )


@router.post(
    "/users/{user_id}/cards/{card_id}/installments",
    response_model=InstallmentPlanSchema,
    status_code=201,
)
def create_installment(
    user_id: str,
    card_id: str,
    request_body: InstallmentRequest,
    repo: DocumentRepository = Depends(get_repository),
):
    """Add an installment plan to a card; the first installment is due on start_date"""
    try:
        card = _load_card(repo, user_id, card_id)
        plan = create_installment_plan(
            request_body.description,
            request_body.total,
            request_body.count,
            request_body.start_date,
        )
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidInstallmentPlanError as e:
        raise HTTPException(status_code=422, detail=str(e))

    card.installment_plans.append(plan)
    _save_card(repo, user_id, card)
    repo.commit()

    return InstallmentPlanSchema(**asdict(plan))


@router.get(
    "/users/{user_id}/cards/{card_id}/installments/{plan_id}/schedule",
    response_model=ScheduleResponse,
)
def get_installment_schedule(
    user_id: str,
    card_id: str,
    plan_id: str,
    repo: DocumentRepository = Depends(get_repository),
):
    """Remaining due dates and amounts of an installment plan"""
    try:
        card = _load_card(repo, user_id, card_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    plan = next((p for p in card.installment_plans if p.id == plan_id), None)
    if plan is None:
        raise HTTPException(status_code=404, detail="Installment plan not found")

    return ScheduleResponse(
        plan_id=plan_id,
        installments=[
            ScheduledInstallmentSchema(due_date=due_date, amount=amount)
            for due_date, amount in installment_schedule(plan)
        ],
    )


@router.post("/users/{user_id}/cards/{card_id}/payments", response_model=CardPaymentResponse)
def pay_card(
    user_id: str,
    card_id: str,
    request_body: CardPaymentRequest,
    request: Request,
    repo: DocumentRepository = Depends(get_repository),
):
    """
    Pay toward a card statement.

    Flow:
    1. Record the payment as an expense transaction
    2. Lower the card debt
    3. Advance every open installment plan by one month
    4. Add a payment entry to the notification feed
    """
    try:
        card = _load_card(repo, user_id, card_id)
        open_plans = sum(1 for p in card.installment_plans if p.remaining > 0)

        updated, transaction = apply_card_payment(card, request_body.amount, request_body.date or date.today())
        saved = repo.upsert(TRANSACTIONS, user_id, transaction_to_document(transaction))
        _save_card(repo, user_id, updated)
        repo.upsert(
            NOTIFICATIONS,
            user_id,
            notification_to_document(card_payment_notification(card, request_body.amount, open_plans)),
        )
        repo.commit()

    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    except Exception as e:
        repo.rollback()
        logging.error(f"Card payment failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    return CardPaymentResponse(
        card_id=card_id,
        transaction_id=saved["id"],
        current_debt=updated.current_debt or 0,
        advanced_plans=open_plans,
    )


@router.post("/users/{user_id}/installments/post-due", response_model=PostDueResponse)
def post_due(
    user_id: str,
    request: Request,
    today: Optional[date] = Query(None, description="Post installments due on or before this day"),
    repo: DocumentRepository = Depends(get_repository),
):
    """Post every installment due by today across the user's cards"""
    reference_day = today or date.today()
    posted_entries = 0
    cards_updated = 0

    try:
        for doc in repo.list(CARDS, user_id):
            card = card_from_document(doc)
            updated, entries = post_due_installments(card, reference_day)
            if not entries:
                continue

            for entry in entries:
                repo.upsert(CARD_ENTRIES, user_id, card_entry_to_document(entry))
            _save_card(repo, user_id, updated)
            notification = installments_posted_notification(updated, entries)
            repo.upsert(NOTIFICATIONS, user_id, notification_to_document(notification))

            posted_entries += len(entries)
            cards_updated += 1
            log_installments_posted(user_id, card.id, len(entries))

        repo.commit()

    except Exception as e:
        repo.rollback()
        logging.error(f"Installment posting failed: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=500, detail="Internal server error")

    installments_posted_counter.inc(posted_entries)
    return PostDueResponse(user_id=user_id, posted_entries=posted_entries, cards_updated=cards_updated)
