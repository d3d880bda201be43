"""Pytest fixtures for testing"""

import pytest
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from finx_gateway.api.main import create_app
from finx_gateway.infrastructure.database.models import Base
from finx_gateway.infrastructure.database.session import get_db
from finx_gateway.domain.aggregates import derive
from finx_gateway.domain.models import FinancialSnapshot, Loan


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def healthy_snapshot() -> FinancialSnapshot:
    """
    No debt, 10% savings rate, about one month of cash cushion.

    Expenses total 170,000 against 400,000 income; scores 85.
    """
    return derive(
        FinancialSnapshot(
            monthly_income=400_000,
            rent=100_000,
            utilities=20_000,
            subscriptions=10_000,
            entertainment=20_000,
            groceries=20_000,
            monthly_deposit_contribution=40_000,
            cash_savings=200_000,
            deposit_savings=100_000,
        )
    )


@pytest.fixture
def indebted_snapshot() -> FinancialSnapshot:
    """One large loan paid at 250,000 a month"""
    return derive(
        FinancialSnapshot(
            monthly_income=600_000,
            rent=150_000,
            utilities=25_000,
            groceries=60_000,
            loans=[
                Loan(
                    id="car",
                    name="Car loan",
                    amount=1_000_000,
                    interest_rate=20,
                    duration=4,
                    monthly_payment=250_000,
                )
            ],
            cash_savings=50_000,
        )
    )
