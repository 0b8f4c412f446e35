"""Per-user notification feed - list, add, mark read, clear"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from finance_calendar.api.dependencies import get_repository
from finance_calendar.api.v1.schemas import (
    NotificationCreateSchema,
    NotificationSchema,
    NotificationsUpdatedResponse,
)
from finance_calendar.domain.models import Notification
from finance_calendar.domain.notifications import now_ms
from finance_calendar.infrastructure.database.documents import (
    notification_from_document,
    notification_to_document,
)
from finance_calendar.infrastructure.database.repositories import NOTIFICATIONS, DocumentRepository

router = APIRouter()


def _as_schema(notification: Notification) -> NotificationSchema:
    return NotificationSchema(
        id=notification.id,
        message=notification.message,
        type=notification.type,
        read=notification.read,
        timestamp=notification.timestamp,
        link=notification.link,
    )


def _feed(repo: DocumentRepository, user_id: str) -> List[Notification]:
    """Notifications newest first"""
    notifications = [notification_from_document(d) for d in repo.list(NOTIFICATIONS, user_id)]
    return sorted(notifications, key=lambda n: n.timestamp, reverse=True)


@router.get("/users/{user_id}/notifications", response_model=List[NotificationSchema])
def list_notifications(
    user_id: str,
    unread_only: bool = Query(False, description="Only notifications not yet read"),
    repo: DocumentRepository = Depends(get_repository),
):
    return [_as_schema(n) for n in _feed(repo, user_id) if not (unread_only and n.read)]


@router.post("/users/{user_id}/notifications", response_model=NotificationSchema, status_code=201)
def add_notification(
    user_id: str,
    body: NotificationCreateSchema,
    repo: DocumentRepository = Depends(get_repository),
):
    notification = Notification(message=body.message, type=body.type, link=body.link, timestamp=now_ms())
    doc = repo.upsert(NOTIFICATIONS, user_id, notification_to_document(notification))
    repo.commit()
    return _as_schema(notification_from_document(doc))


@router.post("/users/{user_id}/notifications/read-all", response_model=NotificationsUpdatedResponse)
def mark_all_notifications_read(user_id: str, repo: DocumentRepository = Depends(get_repository)):
    """Mark every unread notification as read"""
    updated = 0
    for notification in _feed(repo, user_id):
        if notification.read:
            continue
        repo.upsert(NOTIFICATIONS, user_id, {"read": True}, doc_id=notification.id, merge=True)
        updated += 1
    repo.commit()
    return NotificationsUpdatedResponse(updated=updated)


@router.post("/users/{user_id}/notifications/{notification_id}/read", response_model=NotificationSchema)
def mark_notification_read(
    user_id: str,
    notification_id: str,
    read: bool = Query(True, description="False marks the notification unread again"),
    repo: DocumentRepository = Depends(get_repository),
):
    if repo.get(NOTIFICATIONS, user_id, notification_id) is None:
        raise HTTPException(status_code=404, detail="Notification not found")

    doc = repo.upsert(NOTIFICATIONS, user_id, {"read": read}, doc_id=notification_id, merge=True)
    repo.commit()
    return _as_schema(notification_from_document(doc))


@router.delete("/users/{user_id}/notifications", status_code=204)
def clear_notifications(user_id: str, repo: DocumentRepository = Depends(get_repository)) -> Response:
    for doc in repo.list(NOTIFICATIONS, user_id):
        repo.remove(NOTIFICATIONS, user_id, doc["id"])
    repo.commit()
    return Response(status_code=204)
