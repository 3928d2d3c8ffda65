"""Loan request and installment models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from amort_gen.exceptions import InvalidRequestError
from amort_gen.models.enums import InstallmentStatus, Periodicity


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert an amount to Decimal without binary float drift."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return Decimal(str(value))


@dataclass(frozen=True)
class ActiveCreditState:
    """Payment history summary supplied by the credit-state provider."""

    remaining_installments: int
    current_balance: Decimal
    credit_id: str | None = None
    status: str | None = None  # Al_dia, Mora, ...

    def __post_init__(self) -> None:
        object.__setattr__(self, "current_balance", to_decimal(self.current_balance))


@dataclass(frozen=True)
class LoanAmortizationRequest:
    """Everything needed to build one loan's schedule.

    Amount fields accept ``int``, ``float``, ``str`` or ``Decimal`` and are
    stored as ``Decimal``. ``insurance_rate`` and ``vat_on_insurance_rate``
    left as ``None`` take the engine defaults (10% and 19%).

    A non-positive ``nominal_monthly_rate`` is accepted here; the engine
    rejects it softly by returning an empty schedule.
    """

    loan_id: str | int
    principal: Decimal
    installment_count: int
    nominal_monthly_rate: Decimal  # percentage, 3.0 means 3%
    first_due_date: date
    periodicity: Periodicity = Periodicity.MONTHLY
    fixed_installment_override: Decimal | None = None
    insurance_rate: Decimal | None = None
    vat_on_insurance_rate: Decimal | None = None
    extra_insurance_fixed: Decimal = Decimal(0)
    other_fixed_fee: Decimal = Decimal(0)
    active_credit_state: ActiveCreditState | None = None
    residual_override: Decimal | None = None

    def __post_init__(self) -> None:
        set_ = object.__setattr__
        set_(self, "principal", to_decimal(self.principal))
        set_(self, "nominal_monthly_rate", to_decimal(self.nominal_monthly_rate))
        set_(self, "periodicity", Periodicity.parse(self.periodicity))
        set_(self, "extra_insurance_fixed", to_decimal(self.extra_insurance_fixed))
        set_(self, "other_fixed_fee", to_decimal(self.other_fixed_fee))
        for name in (
            "fixed_installment_override",
            "insurance_rate",
            "vat_on_insurance_rate",
            "residual_override",
        ):
            value = getattr(self, name)
            if value is not None:
                set_(self, name, to_decimal(value))

        if self.installment_count < 1:
            raise InvalidRequestError(
                f"Loan {self.loan_id}: installment_count must be >= 1, got {self.installment_count}"
            )
        if self.principal <= 0:
            raise InvalidRequestError(
                f"Loan {self.loan_id}: principal must be positive, got {self.principal}"
            )
        if self.principal != self.principal.to_integral_value():
            raise InvalidRequestError(
                f"Loan {self.loan_id}: principal must be a whole amount, got {self.principal}"
            )
        for name in (
            "insurance_rate",
            "vat_on_insurance_rate",
            "extra_insurance_fixed",
            "other_fixed_fee",
        ):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidRequestError(
                    f"Loan {self.loan_id}: {name} cannot be negative, got {value}"
                )


@dataclass
class Installment:
    """One row of an amortization schedule (cuota)."""

    loan_id: str | int
    installment_number: int  # 1, 2, 3, ...
    capital: Decimal
    interest: Decimal
    insurance: Decimal  # aval
    insurance_vat: Decimal
    total: Decimal
    remaining_balance: Decimal
    due_date: date
    status: InstallmentStatus = InstallmentStatus.PENDING


@dataclass
class ScheduleSummary:
    """Aggregated totals of a schedule."""

    total_capital: Decimal = Decimal(0)
    total_interest: Decimal = Decimal(0)
    total_insurance: Decimal = Decimal(0)
    total_vat: Decimal = Decimal(0)
    total_amount: Decimal = Decimal(0)
    installment_count: int = 0


@dataclass
class ValidationResult:
    """Outcome of checking a schedule's capital against an expected balance."""

    is_valid: bool
    difference: Decimal
