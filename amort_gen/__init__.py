"""amort-gen: deterministic French-system amortization schedules."""

from amort_gen.engine import generate_schedule, summarize_schedule, validate_schedule
from amort_gen.exceptions import (
    AmortGenError,
    ConfigurationError,
    InvalidRequestError,
    ScheduleIntegrityError,
)
from amort_gen.models import (
    ActiveCreditState,
    Installment,
    InstallmentStatus,
    LoanAmortizationRequest,
    Periodicity,
    ScheduleSummary,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    "ActiveCreditState",
    "AmortGenError",
    "ConfigurationError",
    "Installment",
    "InstallmentStatus",
    "InvalidRequestError",
    "LoanAmortizationRequest",
    "Periodicity",
    "ScheduleIntegrityError",
    "ScheduleSummary",
    "ValidationResult",
    "__version__",
    "generate_schedule",
    "summarize_schedule",
    "validate_schedule",
]
