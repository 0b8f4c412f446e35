"""SQLAlchemy ORM model for per-user document collections"""

from sqlalchemy import Column, String, DateTime, Text, JSON, UniqueConstraint, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class UserDocument(Base):
    """Single record in a user's collection (transactions, payments, cards, ...)"""

    __tablename__ = "user_document"
    __table_args__ = (
        UniqueConstraint("user_id", "collection", "doc_id", name="uq_user_document"),
        Index("ix_user_document_collection", "user_id", "collection"),
    )

    id = Column(String(36), primary_key=True)
    user_id = Column(Text, nullable=False)
    collection = Column(String(64), nullable=False)
    doc_id = Column(String(128), nullable=False)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
