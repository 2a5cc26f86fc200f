"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Any, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from credit_gateway.api.main import create_app
from credit_gateway.api.dependencies import get_audit_service, get_decision_webhook_client, get_evaluator
from credit_gateway.domain.evaluation import CreditEvaluator
from credit_gateway.domain.models import ApplicantProfile, DocumentType, LoanType, PaymentPeriod
from credit_gateway.infrastructure.audit import EvaluationAuditService
from credit_gateway.infrastructure.clients.decision_webhook import DecisionWebhookClient
from credit_gateway.infrastructure.database.models import Base
from credit_gateway.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 1, 1)


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
def session_factory():
    """Session factory bound to the test database, for writers that own their session"""
    return TestingSessionLocal


@pytest.fixture
def evaluator() -> CreditEvaluator:
    """Evaluator with the clock pinned to 2024-01-01"""
    return CreditEvaluator(clock=lambda: TODAY)


@pytest.fixture
def client(db: Session, evaluator: CreditEvaluator) -> TestClient:
    """Create FastAPI test client with test database and fixed clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_evaluator] = lambda: evaluator
    app.dependency_overrides[get_audit_service] = lambda: EvaluationAuditService(TestingSessionLocal)
    app.dependency_overrides[get_decision_webhook_client] = lambda: DecisionWebhookClient(webhook_url="")
    return TestClient(app)


@pytest.fixture
def profile_payload() -> Dict[str, Any]:
    """Strong applicant: every factor at its top tier"""
    return {
        "name": "Ana Ruiz",
        "documentType": "cedula",
        "documentNumber": "001",
        "birthDate": "1990-05-10",
        "loanType": "personal",
        "requestedAmount": 50000,
        "termMonths": 24,
        "paymentPeriod": "monthly",
        "monthlyIncome": 40000,
        "monthlyExpenses": 10000,
        "monthsEmployed": 60,
    }


@pytest.fixture
def strong_profile() -> ApplicantProfile:
    return ApplicantProfile(
        name="Ana Ruiz",
        document_type=DocumentType.CEDULA,
        document_number="001",
        birth_date=date(1990, 5, 10),
        loan_type=LoanType.PERSONAL,
        requested_amount=50000,
        term_months=24,
        payment_period=PaymentPeriod.MONTHLY,
        monthly_income=40000,
        monthly_expenses=10000,
        months_employed=60,
    )
