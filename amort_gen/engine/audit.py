"""Checks and aggregates over a generated schedule."""

import logging
from decimal import Decimal
from typing import Sequence

from amort_gen.logging import loan_context
from amort_gen.models.loan import Installment, ScheduleSummary, ValidationResult, to_decimal

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 100


def validate_schedule(
    schedule: Sequence[Installment],
    expected_balance: Decimal | int,
    tolerance: Decimal | int = DEFAULT_TOLERANCE,
    log: logging.Logger | None = None,
) -> ValidationResult:
    """Check that a schedule amortizes ``expected_balance``.

    The schedule is valid when the sum of its capital is within
    ``tolerance`` currency units of ``expected_balance``. The returned
    difference is ``sum(capital) - expected_balance``; an empty schedule is
    never valid.
    """
    log = log or logger
    expected = to_decimal(expected_balance)

    if not schedule:
        return ValidationResult(is_valid=False, difference=expected)

    total_capital = sum((i.capital for i in schedule), Decimal(0))
    difference = total_capital - expected
    is_valid = abs(difference) <= to_decimal(tolerance)

    if not is_valid:
        log.warning(
            "Schedule validation failed for loan %s: expected %s, got %s, difference %s",
            schedule[0].loan_id,
            expected,
            total_capital,
            difference,
            extra=loan_context(schedule[0].loan_id),
        )

    return ValidationResult(is_valid=is_valid, difference=difference)


def summarize_schedule(schedule: Sequence[Installment]) -> ScheduleSummary:
    """Aggregate capital, interest, charges and totals of a schedule."""
    summary = ScheduleSummary(installment_count=len(schedule))
    for installment in schedule:
        summary.total_capital += installment.capital
        summary.total_interest += installment.interest
        summary.total_insurance += installment.insurance
        summary.total_vat += installment.insurance_vat
        summary.total_amount += installment.total
    return summary
