"""Data access layer for per-user document collections"""

import uuid
from typing import Any, Callable, Dict, List, Optional, Set, Tuple
from sqlalchemy.orm import Session
from finance_calendar.domain.exceptions import InvalidCollectionError
from finance_calendar.infrastructure.database.change_feed import ChangeFeed, Listener, change_feed
from finance_calendar.infrastructure.database.models import UserDocument

TRANSACTIONS = "transactions"
PAYMENTS = "payments"
CARDS = "cards"
CARD_ENTRIES = "card_entries"
SUBSCRIPTIONS = "subscriptions"
NOTIFICATIONS = "notifications"
META = "meta"

COLLECTIONS = (TRANSACTIONS, PAYMENTS, CARDS, CARD_ENTRIES, SUBSCRIPTIONS, NOTIFICATIONS, META)


class DocumentRepository:
    """
    Repository for user documents, grouped into named collections.

    Writes are flushed, not committed; commit() publishes fresh snapshots of
    every touched collection to its watchers.
    """

    def __init__(self, db: Session, feed: Optional[ChangeFeed] = None):
        self.db = db
        self.feed = feed or change_feed
        self._touched: Set[Tuple[str, str]] = set()

    @staticmethod
    def _check_collection(collection: str) -> None:
        if collection not in COLLECTIONS:
            raise InvalidCollectionError(f"Unknown collection: {collection}")

    def _row(self, collection: str, user_id: str, doc_id: str) -> Optional[UserDocument]:
        return (
            self.db.query(UserDocument)
            .filter(
                UserDocument.user_id == user_id,
                UserDocument.collection == collection,
                UserDocument.doc_id == doc_id,
            )
            .first()
        )

    @staticmethod
    def _as_document(row: UserDocument) -> Dict[str, Any]:
        return {**row.data, "id": row.doc_id}

    def list(self, collection: str, user_id: str) -> List[Dict[str, Any]]:
        """All documents in a user's collection, oldest first"""
        self._check_collection(collection)
        rows = (
            self.db.query(UserDocument)
            .filter(UserDocument.user_id == user_id, UserDocument.collection == collection)
            .order_by(UserDocument.created_at, UserDocument.doc_id)
            .all()
        )
        return [self._as_document(row) for row in rows]

    def get(self, collection: str, user_id: str, doc_id: str) -> Optional[Dict[str, Any]]:
        self._check_collection(collection)
        row = self._row(collection, user_id, doc_id)
        return self._as_document(row) if row else None

    def upsert(
        self,
        collection: str,
        user_id: str,
        data: Dict[str, Any],
        doc_id: Optional[str] = None,
        merge: bool = False,
    ) -> Dict[str, Any]:
        """
        Create or replace a document; merge=True keeps fields not in data.

        None values are dropped, and the id lives in doc_id rather than in data.
        """
        self._check_collection(collection)
        doc_id = doc_id or data.get("id") or str(uuid.uuid4())
        payload = {k: v for k, v in data.items() if v is not None and k != "id"}

        row = self._row(collection, user_id, doc_id)
        if row is None:
            row = UserDocument(
                id=str(uuid.uuid4()),
                user_id=user_id,
                collection=collection,
                doc_id=doc_id,
                data=payload,
            )
            self.db.add(row)
        else:
            # Reassign so the JSON column is marked dirty
            row.data = {**row.data, **payload} if merge else payload

        self.db.flush()
        self._touched.add((collection, user_id))
        return self._as_document(row)

    def remove(self, collection: str, user_id: str, doc_id: str) -> bool:
        self._check_collection(collection)
        row = self._row(collection, user_id, doc_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.flush()
        self._touched.add((collection, user_id))
        return True

    def watch(self, collection: str, user_id: str, callback: Listener) -> Callable[[], None]:
        """
        Deliver the current snapshot now and after every committed change.

        Returns:
            Function that stops the subscription
        """
        self._check_collection(collection)
        unsubscribe = self.feed.subscribe(collection, user_id, callback)
        callback(self.list(collection, user_id))
        return unsubscribe

    def commit(self) -> None:
        self.db.commit()
        touched, self._touched = self._touched, set()
        for collection, user_id in sorted(touched):
            if self.feed.has_listeners(collection, user_id):
                self.feed.publish(collection, user_id, self.list(collection, user_id))

    def rollback(self) -> None:
        self._touched.clear()
        self.db.rollback()
