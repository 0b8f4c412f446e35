"""CRUD endpoints for transactions, payments, cards, subscriptions and user settings"""

from typing import Any, Dict, List, Type

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from finance_calendar.api.dependencies import get_repository
from finance_calendar.api.v1.schemas import (
    CardSchema,
    PaymentSchema,
    SubscriptionSchema,
    TransactionSchema,
    UserSettingsSchema,
)
from finance_calendar.infrastructure.database.repositories import (
    CARDS,
    META,
    PAYMENTS,
    SUBSCRIPTIONS,
    TRANSACTIONS,
    DocumentRepository,
)

SETTINGS_DOC_ID = "settings"

router = APIRouter()


def _register_collection(collection: str, schema: Type[BaseModel]) -> None:
    """Add list/get/create/replace/delete routes for one collection"""

    @router.get(f"/users/{{user_id}}/{collection}", name=f"list_{collection}")
    def list_documents(user_id: str, repo: DocumentRepository = Depends(get_repository)) -> List[Dict[str, Any]]:
        return repo.list(collection, user_id)

    @router.get(f"/users/{{user_id}}/{collection}/{{doc_id}}", name=f"get_{collection}")
    def get_document(
        user_id: str,
        doc_id: str,
        repo: DocumentRepository = Depends(get_repository),
    ) -> Dict[str, Any]:
        doc = repo.get(collection, user_id, doc_id)
        if doc is None:
            raise HTTPException(status_code=404, detail="Document not found")
        return doc

    @router.post(f"/users/{{user_id}}/{collection}", status_code=201, name=f"create_{collection}")
    def create_document(
        user_id: str,
        body: schema,
        repo: DocumentRepository = Depends(get_repository),
    ) -> Dict[str, Any]:
        doc = repo.upsert(collection, user_id, body.model_dump(by_alias=True, exclude_none=True))
        repo.commit()
        return doc

    @router.put(f"/users/{{user_id}}/{collection}/{{doc_id}}", name=f"replace_{collection}")
    def replace_document(
        user_id: str,
        doc_id: str,
        body: schema,
        repo: DocumentRepository = Depends(get_repository),
    ) -> Dict[str, Any]:
        doc = repo.upsert(collection, user_id, body.model_dump(by_alias=True, exclude_none=True), doc_id=doc_id)
        repo.commit()
        return doc

    @router.delete(f"/users/{{user_id}}/{collection}/{{doc_id}}", status_code=204, name=f"delete_{collection}")
    def delete_document(
        user_id: str,
        doc_id: str,
        repo: DocumentRepository = Depends(get_repository),
    ) -> Response:
        if not repo.remove(collection, user_id, doc_id):
            raise HTTPException(status_code=404, detail="Document not found")
        repo.commit()
        return Response(status_code=204)


_register_collection(TRANSACTIONS, TransactionSchema)
_register_collection(PAYMENTS, PaymentSchema)
_register_collection(CARDS, CardSchema)
_register_collection(SUBSCRIPTIONS, SubscriptionSchema)


@router.get("/users/{user_id}/settings")
def get_settings(user_id: str, repo: DocumentRepository = Depends(get_repository)) -> Dict[str, Any]:
    """Stored preferences, or an empty object when none were saved"""
    return repo.get(META, user_id, SETTINGS_DOC_ID) or {}


@router.put("/users/{user_id}/settings")
def update_settings(
    user_id: str,
    body: UserSettingsSchema,
    repo: DocumentRepository = Depends(get_repository),
) -> Dict[str, Any]:
    """Merge the given preferences into the stored settings"""
    doc = repo.upsert(
        META,
        user_id,
        body.model_dump(by_alias=True, exclude_none=True),
        doc_id=SETTINGS_DOC_ID,
        merge=True,
    )
    repo.commit()
    return doc
