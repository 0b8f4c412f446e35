"""Shared fixtures: in-memory database, API client and sample records"""

import pytest
from datetime import date
from typing import Iterator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from finance_calendar.api.main import create_app
from finance_calendar.domain.models import BankCard, Payment, Transaction
from finance_calendar.infrastructure.database.models import Base
from finance_calendar.infrastructure.database.session import get_db


# One connection shared across threads so the endpoint threadpool sees the same in-memory tables
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Iterator[Session]:
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """API client whose requests all use the test session"""
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    return TestClient(app)


@pytest.fixture
def today() -> date:
    """Fixed reference day so month windows are reproducible"""
    return date(2024, 1, 15)


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    return [
        Transaction(date="2024-01-05", type="gider", amount=250, description="Market"),
        Transaction(date="10.01.2024", type="gelir", amount=35000, description="Maaş"),
        Transaction(date="not a date", type="gider", amount=10, description="Bozuk"),
    ]


@pytest.fixture
def sample_payments() -> list[Payment]:
    # Kira and Vergi are pending; İnternet is already paid
    return [
        Payment(payment_type="fixed", name="Kira", amount=15000, payment_day=31),
        Payment(payment_type="custom", name="Vergi", amount=1200, date="20-02-2024"),
        Payment(payment_type="fixed", name="İnternet", amount=450, payment_day=10, status="paid"),
    ]


@pytest.fixture
def sample_cards() -> list[BankCard]:
    return [
        BankCard(bank_name="Akbank", nickname="Axess", statement_date="Ayın 20'si", payment_due_date="30"),
        BankCard(bank_name="Garanti BBVA", statement_date=None, payment_due_date="12"),
    ]
