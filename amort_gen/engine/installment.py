"""Fixed installment and per-installment charge calculation.

Everything here works on exact ``Decimal`` values; the only places where
precision is deliberately dropped are :func:`truncate` (floor to a whole
unit) and :func:`round_to_unit` (round the installment total).
"""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal

from amort_gen.models.loan import to_decimal

ZERO_RATE_EPSILON = Decimal("0.000001")


@dataclass(frozen=True)
class Charges:
    """Exact, untruncated charges applied to every installment."""

    aval: Decimal
    vat: Decimal
    extra_insurance: Decimal
    other_fee: Decimal

    @property
    def exact_total(self) -> Decimal:
        return self.aval + self.vat + self.extra_insurance + self.other_fee


def truncate(amount: Decimal) -> Decimal:
    """Floor ``amount`` to a whole currency unit. Never rounds up."""
    return amount.to_integral_value(rounding=ROUND_FLOOR)


def round_to_unit(amount: Decimal, unit: int = 100) -> Decimal:
    """Round ``amount`` half-up to the nearest multiple of ``unit``."""
    step = Decimal(unit)
    return (amount / step).quantize(Decimal(1), rounding=ROUND_HALF_UP) * step


def resolve_fixed_installment(
    principal: Decimal,
    rate: Decimal,
    count: int,
    override: Decimal | None = None,
) -> Decimal:
    """Nominal fixed installment of a French (annuity) schedule.

    Parameters
    ----------
    principal : Decimal
        Amount borrowed.
    rate : Decimal
        Rate per period as a unit fraction.
    count : int
        Number of installments.
    override : Decimal | None
        Installment already agreed with the borrower. When positive it is
        returned unchanged.

    Returns
    -------
    Decimal
        ``principal * rate / (1 - (1 + rate) ** -count)``, or
        ``principal / count`` when the rate is effectively zero.
    """
    if override is not None and to_decimal(override) > 0:
        return to_decimal(override)

    principal = to_decimal(principal)
    if abs(rate) < ZERO_RATE_EPSILON:
        return principal / count
    return principal * rate / (1 - (1 + rate) ** -count)


def compute_charges(
    principal: Decimal,
    count: int,
    insurance_rate: Decimal,
    vat_rate: Decimal,
    extra_insurance: Decimal = Decimal(0),
    other_fee: Decimal = Decimal(0),
) -> Charges:
    """Split the loan insurance (aval) and its VAT evenly over ``count`` installments."""
    aval = to_decimal(principal) * to_decimal(insurance_rate) / count
    return Charges(
        aval=aval,
        vat=aval * to_decimal(vat_rate),
        extra_insurance=to_decimal(extra_insurance),
        other_fee=to_decimal(other_fee),
    )
