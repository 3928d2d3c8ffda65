"""Domain models for loan amortization."""

from amort_gen.models.enums import InstallmentStatus, Periodicity
from amort_gen.models.loan import (
    ActiveCreditState,
    Installment,
    LoanAmortizationRequest,
    ScheduleSummary,
    ValidationResult,
    to_decimal,
)

__all__ = [
    "ActiveCreditState",
    "Installment",
    "InstallmentStatus",
    "LoanAmortizationRequest",
    "Periodicity",
    "ScheduleSummary",
    "ValidationResult",
    "to_decimal",
]
