"""Rate and due-date adjustment by payment periodicity."""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from dateutil.relativedelta import relativedelta

from amort_gen.models.enums import Periodicity
from amort_gen.models.loan import to_decimal

logger = logging.getLogger(__name__)

WEEKS_PER_MONTH = Decimal("4.33")
BIWEEKLY_DAYS = 15


def periodic_rate(
    nominal_monthly_rate: Decimal | int | float | str,
    periodicity: Periodicity | str,
    log: logging.Logger | None = None,
    weeks_per_month: Decimal = WEEKS_PER_MONTH,
) -> Decimal:
    """Convert a monthly percentage into the per-period unit fraction.

    Parameters
    ----------
    nominal_monthly_rate : Decimal | int | float | str
        Monthly rate as a percentage (``3.0`` means 3%).
    periodicity : Periodicity | str
        Payment periodicity. Unrecognised values behave as monthly.
    log : logging.Logger | None
        Logger for the unrecognised-periodicity warning.
    weeks_per_month : Decimal
        Divisor for weekly schedules.

    Returns
    -------
    Decimal
        Rate per period as a fraction (``0.03`` for 3% monthly).
    """
    log = log or logger
    rate = to_decimal(nominal_monthly_rate)
    kind = Periodicity.parse(periodicity)

    if kind == Periodicity.WEEKLY:
        adjusted = rate / weeks_per_month
    elif kind == Periodicity.BIWEEKLY:
        adjusted = rate / 2
    elif kind == Periodicity.MONTHLY:
        adjusted = rate
    else:
        log.warning("Unknown periodicity %r, using the monthly rate unchanged", periodicity)
        adjusted = rate

    return adjusted / 100


def next_due_date(current: date, periodicity: Periodicity | str) -> date:
    """Due date of the installment following ``current``."""
    kind = Periodicity.parse(periodicity)
    if kind == Periodicity.WEEKLY:
        return current + timedelta(days=7)
    if kind == Periodicity.BIWEEKLY:
        return current + timedelta(days=BIWEEKLY_DAYS)
    # relativedelta clamps Jan 31 + 1 month to Feb 28/29
    return current + relativedelta(months=1)


def due_dates(first_due_date: date, count: int, periodicity: Periodicity | str) -> Iterator[date]:
    """Yield ``count`` consecutive due dates starting at ``first_due_date``."""
    current = first_due_date
    for _ in range(count):
        yield current
        current = next_due_date(current, periodicity)
