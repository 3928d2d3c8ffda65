"""Helpers that read a loan's documented payment history.

A loan with no :class:`ActiveCreditState` is brand new: every installment
is generated as pending and the balance starts at the principal. With a
state, the first ``N - remaining_installments`` installments are already
paid.
"""

from decimal import Decimal

from amort_gen.models.loan import ActiveCreditState, to_decimal


def already_paid_count(installment_count: int, state: ActiveCreditState | None) -> int:
    """Number of leading installments that are already paid."""
    if state is None or state.remaining_installments <= 0:
        return 0
    paid = installment_count - state.remaining_installments
    return min(max(paid, 0), installment_count)


def should_generate(state: ActiveCreditState | None) -> bool:
    """True for a new credit or one that still has pending installments."""
    if state is None:
        return True
    return state.remaining_installments > 0


def first_pending_installment(installment_count: int, state: ActiveCreditState | None) -> int:
    """Number of the next installment to collect.

    A fully paid credit (no remaining installments) points past the end,
    at ``installment_count + 1``.
    """
    if state is None:
        return 1
    paid = installment_count - state.remaining_installments
    return min(max(paid, 0), installment_count) + 1


def installments_to_generate(installment_count: int, state: ActiveCreditState | None) -> int:
    if state is None:
        return installment_count
    return state.remaining_installments


def starting_balance(principal: Decimal | int, state: ActiveCreditState | None) -> Decimal:
    """Balance the next pending installment amortizes from."""
    if state is None:
        return to_decimal(principal)
    return state.current_balance
