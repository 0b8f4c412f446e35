"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from finance_calendar.infrastructure.database.repositories import DocumentRepository
from finance_calendar.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_repository(db: Session = Depends(get_db)) -> DocumentRepository:
    """Provide document repository bound to the request session"""
    return DocumentRepository(db)
