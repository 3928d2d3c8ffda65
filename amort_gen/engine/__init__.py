"""Amortization schedule engine."""

from amort_gen.engine.audit import summarize_schedule, validate_schedule
from amort_gen.engine.installment import (
    Charges,
    compute_charges,
    resolve_fixed_installment,
    round_to_unit,
    truncate,
)
from amort_gen.engine.periodicity import due_dates, next_due_date, periodic_rate
from amort_gen.engine.schedule import generate_schedule

__all__ = [
    "Charges",
    "compute_charges",
    "due_dates",
    "generate_schedule",
    "next_due_date",
    "periodic_rate",
    "resolve_fixed_installment",
    "round_to_unit",
    "summarize_schedule",
    "truncate",
    "validate_schedule",
]
