"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from amort_gen.models import LoanAmortizationRequest, Periodicity


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sample_loan_id() -> str:
    """Sample loan ID."""
    return "loan-test-001"


@pytest.fixture
def first_due_date() -> date:
    return date(2025, 1, 31)


@pytest.fixture
def sample_request(sample_loan_id: str, first_due_date: date) -> LoanAmortizationRequest:
    """1,000,000 over 12 monthly installments at 3% monthly."""
    return LoanAmortizationRequest(
        loan_id=sample_loan_id,
        principal=Decimal(1_000_000),
        installment_count=12,
        nominal_monthly_rate=Decimal("3.0"),
        periodicity=Periodicity.MONTHLY,
        first_due_date=first_due_date,
    )
