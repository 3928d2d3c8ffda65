"""French-system amortization schedule generation.

The schedule is built in one pass over the installments. Interest and the
insurance charges are truncated to whole units and capital absorbs every
truncation remainder, so regular installments always add up to the same
fixed total. The last installment is then reconciled against either the
ledger residual (when one is supplied) or the capital still owed.
"""

import logging
from decimal import Decimal, localcontext

from amort_gen.config import EngineConfig
from amort_gen.credit_state import already_paid_count
from amort_gen.engine.audit import summarize_schedule
from amort_gen.engine.installment import (
    compute_charges,
    resolve_fixed_installment,
    round_to_unit,
    truncate,
)
from amort_gen.engine.periodicity import next_due_date, periodic_rate
from amort_gen.exceptions import ScheduleIntegrityError
from amort_gen.logging import loan_context
from amort_gen.models.enums import InstallmentStatus
from amort_gen.models.loan import Installment, LoanAmortizationRequest

logger = logging.getLogger(__name__)

ZERO = Decimal(0)
DECIMAL_PRECISION = 34


def generate_schedule(
    request: LoanAmortizationRequest,
    log: logging.Logger | None = None,
    config: EngineConfig | None = None,
) -> list[Installment]:
    """Generate the complete installment schedule for a loan.

    Installments already covered by ``request.active_credit_state`` are
    returned as PAID, the rest as PENDING.

    Parameters
    ----------
    request : LoanAmortizationRequest
        Loan parameters and optional payment history.
    log : logging.Logger | None
        Logger receiving progress, warnings and errors. Defaults to this
        module's logger.
    config : EngineConfig | None
        Engine constants. Defaults to the production values.

    Returns
    -------
    list[Installment]
        One installment per period, or an empty list when the interest
        rate is not positive.

    Raises
    ------
    ScheduleIntegrityError
        When the parameters produce negative interest or capital, a balance
        below the tolerated drift, or an installment with a zero total.
    """
    log = log or logger
    config = config or EngineConfig()

    if request.nominal_monthly_rate <= 0:
        log.error(
            "Invalid interest rate (%s%%) for loan %s, no schedule generated",
            request.nominal_monthly_rate,
            request.loan_id,
            extra=loan_context(request.loan_id),
        )
        return []

    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        schedule = _build_installments(request, log, config)
        _verify_schedule(request, schedule, log)

    return schedule


def _build_installments(
    request: LoanAmortizationRequest,
    log: logging.Logger,
    config: EngineConfig,
) -> list[Installment]:
    loan_id = request.loan_id
    count = request.installment_count
    principal = request.principal

    rate = periodic_rate(
        request.nominal_monthly_rate,
        request.periodicity,
        log=log,
        weeks_per_month=config.weeks_per_month,
    )
    paid_count = already_paid_count(count, request.active_credit_state)

    insurance_rate = (
        request.insurance_rate
        if request.insurance_rate is not None
        else config.default_insurance_rate
    )
    vat_rate = (
        request.vat_on_insurance_rate
        if request.vat_on_insurance_rate is not None
        else config.default_vat_rate
    )
    charges = compute_charges(
        principal,
        count,
        insurance_rate,
        vat_rate,
        request.extra_insurance_fixed,
        request.other_fixed_fee,
    )
    fixed_charges = charges.extra_insurance + charges.other_fee

    nominal_installment = resolve_fixed_installment(
        principal, rate, count, request.fixed_installment_override
    )
    residual = request.residual_override
    if residual is not None and residual <= 0:
        residual = None

    log.info(
        "Loan %s: generating %d installments, period rate %.4f%%, aval %.1f%%, VAT %.1f%%, "
        "nominal installment %.2f%s",
        loan_id,
        count,
        rate * 100,
        insurance_rate * 100,
        vat_rate * 100,
        nominal_installment,
        " (agreed override)" if request.fixed_installment_override else "",
        extra=loan_context(loan_id),
    )
    log.debug(
        "Loan %s: exact charges per installment aval=%.2f vat=%.2f extra=%s other=%s",
        loan_id,
        charges.aval,
        charges.vat,
        charges.extra_insurance,
        charges.other_fee,
    )

    aval = truncate(charges.aval)
    vat = truncate(charges.vat)

    schedule: list[Installment] = []
    balance = principal
    capital_paid = ZERO
    fixed_total: Decimal | None = None
    due_date = request.first_due_date

    for number in range(1, count + 1):
        is_last = number == count

        if is_last and residual is not None:
            log.info(
                "Loan %s installment %d: balance %s replaced by ledger residual %s",
                loan_id,
                number,
                balance,
                residual,
                extra=loan_context(loan_id, number),
            )
            balance = residual

        theoretical_interest = balance * rate

        if fixed_total is None:
            approx_capital = balance if is_last else nominal_installment - theoretical_interest
            exact_total = approx_capital + theoretical_interest + charges.exact_total
            fixed_total = round_to_unit(exact_total, config.rounding_unit)
            log.info(
                "Loan %s: fixed installment total %s (exact %.2f)",
                loan_id,
                fixed_total,
                exact_total,
                extra=loan_context(loan_id),
            )

        interest = truncate(theoretical_interest)
        if interest < 0:
            _fail(
                log,
                f"negative interest: rate/parameters inconsistent for loan {loan_id} "
                f"(installment {number}, interest {interest}, balance {balance})",
                loan_id,
                number,
            )

        capital = fixed_total - interest - aval - vat - fixed_charges

        if capital > balance:
            log.warning(
                "Loan %s installment %d: capital %s exceeds balance %s, limiting to balance",
                loan_id,
                number,
                capital,
                balance,
                extra=loan_context(loan_id, number),
            )
            capital = max(ZERO, balance)

        if is_last:
            if residual is not None:
                capital = max(ZERO, balance)
            else:
                capital = principal - capital_paid
                if capital <= 0:
                    log.warning(
                        "Loan %s installment %d: residual capital %s, debt already amortized",
                        loan_id,
                        number,
                        capital,
                        extra=loan_context(loan_id, number),
                    )
                    capital = ZERO

        if capital < 0:
            _fail(
                log,
                f"negative capital: fixed installment too small for loan {loan_id} "
                f"(installment {number}, capital {capital}, fixed total {fixed_total})",
                loan_id,
                number,
            )

        # The last installment settles its capital in full, fractions included
        paid_capital = max(ZERO, capital) if is_last else truncate(max(ZERO, capital))
        capital_paid += paid_capital
        balance -= paid_capital

        if balance < -config.negative_balance_tolerance:
            _fail(
                log,
                f"capital exceeds remaining balance for loan {loan_id} "
                f"(installment {number}, balance {balance})",
                loan_id,
                number,
            )
        balance = max(ZERO, balance)

        if is_last:
            total = paid_capital + interest + aval + vat + fixed_charges
        else:
            total = fixed_total

        schedule.append(
            Installment(
                loan_id=loan_id,
                installment_number=number,
                capital=paid_capital,
                interest=interest,
                insurance=aval,
                insurance_vat=vat,
                total=total,
                remaining_balance=balance,
                due_date=due_date,
                status=(
                    InstallmentStatus.PAID if number <= paid_count else InstallmentStatus.PENDING
                ),
            )
        )
        due_date = next_due_date(due_date, request.periodicity)

    return schedule


def _verify_schedule(
    request: LoanAmortizationRequest,
    schedule: list[Installment],
    log: logging.Logger,
) -> None:
    """Re-check the finished schedule before it leaves the engine."""
    loan_id = request.loan_id
    last_number = len(schedule)

    for installment in schedule:
        number = installment.installment_number
        if installment.interest < 0:
            _fail(log, f"installment {number} of loan {loan_id} has negative interest", loan_id, number)
        if installment.capital < 0:
            _fail(log, f"installment {number} of loan {loan_id} has negative capital", loan_id, number)
        if installment.total == 0:
            if number == last_number:
                message = (
                    f"last installment {number} of loan {loan_id} has a zero total; "
                    "the debt was fully paid by earlier installments"
                )
            else:
                message = f"installment {number} of loan {loan_id} has a zero total"
            _fail(log, message, loan_id, number)

    summary = summarize_schedule(schedule)

    if summary.total_interest < 0:
        _fail(log, f"total interest of loan {loan_id} is negative ({summary.total_interest})", loan_id)

    difference = request.principal - summary.total_capital
    if difference != 0:
        log.warning(
            "Loan %s capital mismatch: expected %s, got %s, difference %s",
            loan_id,
            request.principal,
            summary.total_capital,
            difference,
            extra=loan_context(loan_id),
        )

    log.info(
        "Loan %s schedule complete: %d installments, capital %s, interest %s, aval %s, VAT %s, total %s",
        loan_id,
        summary.installment_count,
        summary.total_capital,
        summary.total_interest,
        summary.total_insurance,
        summary.total_vat,
        summary.total_amount,
        extra=loan_context(loan_id),
    )


def _fail(
    log: logging.Logger,
    message: str,
    loan_id: object,
    installment_number: int | None = None,
) -> None:
    log.error(
        "Schedule generation aborted: %s",
        message,
        extra=loan_context(loan_id, installment_number),
    )
    raise ScheduleIntegrityError(message, loan_id=loan_id, installment_number=installment_number)
