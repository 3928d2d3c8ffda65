#!/usr/bin/env python3
"""Generate amortization schedules from the command line.

Either describe one loan with --principal/--installments/--rate, or pass
--random N to build N loans with the request generator. Schedules and their
summaries are printed to the console, or written as JSON files when
--output-dir is given.
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from amort_gen.config import AmortGenConfig
from amort_gen.credit_state import should_generate
from amort_gen.engine import generate_schedule, summarize_schedule, validate_schedule
from amort_gen.exceptions import ScheduleIntegrityError
from amort_gen.generators import LoanRequestGenerator
from amort_gen.logging import setup_logging
from amort_gen.models import ActiveCreditState, LoanAmortizationRequest, Periodicity
from amort_gen.sinks import ConsoleSink, JsonFileSink

logger = logging.getLogger("amort_gen.scripts.generate_schedule")

EXIT_OK = 0
EXIT_INTEGRITY = 1
EXIT_REJECTED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate French-system amortization schedules")
    parser.add_argument("--principal", type=Decimal, help="Amount borrowed")
    parser.add_argument("--installments", type=int, help="Number of installments")
    parser.add_argument("--rate", type=Decimal, help="Monthly interest rate in percent (3.0 = 3%%)")
    parser.add_argument(
        "--periodicity",
        default="MONTHLY",
        help="WEEKLY, BIWEEKLY or MONTHLY (Spanish labels accepted)",
    )
    parser.add_argument(
        "--first-due-date",
        type=date.fromisoformat,
        default=None,
        help="Due date of installment #1 (YYYY-MM-DD, default today)",
    )
    parser.add_argument("--fixed-installment", type=Decimal, default=None)
    parser.add_argument("--residual", type=Decimal, default=None, help="Ledger residual for the last installment")
    parser.add_argument("--remaining", type=int, default=None, help="Installments still unpaid")
    parser.add_argument(
        "--balance",
        type=Decimal,
        default=None,
        help="Outstanding balance of an active credit (default: principal)",
    )
    parser.add_argument("--loan-id", default="cli-loan")
    parser.add_argument("--random", type=int, default=None, metavar="N", help="Generate N random loans")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--pretty", action="store_true")
    parser.add_argument("--log-level", default=None)
    return parser


def request_from_args(args: argparse.Namespace) -> LoanAmortizationRequest:
    """Build a single request from command-line arguments."""
    if args.principal is None or args.installments is None or args.rate is None:
        raise SystemExit("--principal, --installments and --rate are required without --random")

    state = None
    if args.remaining is not None:
        state = ActiveCreditState(
            remaining_installments=args.remaining,
            current_balance=args.balance if args.balance is not None else args.principal,
        )

    return LoanAmortizationRequest(
        loan_id=args.loan_id,
        principal=args.principal,
        installment_count=args.installments,
        nominal_monthly_rate=args.rate,
        periodicity=Periodicity.parse(args.periodicity),
        first_due_date=args.first_due_date or date.today(),
        fixed_installment_override=args.fixed_installment,
        active_credit_state=state,
        residual_override=args.residual,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = AmortGenConfig.from_env()
    setup_logging(level=args.log_level or config.log_level, format_type=config.log_format)

    seed = args.seed if args.seed is not None else config.seed
    if args.random:
        requests = list(LoanRequestGenerator(seed=seed).generate_batch(args.random, history_rate=0.3))
    else:
        requests = [request_from_args(args)]

    pretty = args.pretty or config.output.pretty_json
    if args.output_dir is not None:
        sink = JsonFileSink(args.output_dir, pretty=pretty)
    else:
        sink = ConsoleSink(pretty=pretty)

    exit_code = EXIT_OK
    summaries = []
    for request in requests:
        if not should_generate(request.active_credit_state):
            logger.info("Loan %s has no pending installments, skipping", request.loan_id)
            continue

        try:
            schedule = generate_schedule(request, config=config.engine)
        except ScheduleIntegrityError as exc:
            logger.error(
                "Loan %s failed at installment %s: %s",
                exc.loan_id,
                exc.installment_number,
                exc,
            )
            exit_code = EXIT_INTEGRITY
            continue

        if not schedule:
            if exit_code == EXIT_OK:
                exit_code = EXIT_REJECTED
            continue

        validation = validate_schedule(
            schedule,
            request.principal,
            tolerance=config.engine.validation_tolerance,
        )
        summary = summarize_schedule(schedule)
        summaries.append(
            {
                "loan_id": request.loan_id,
                "is_valid": validation.is_valid,
                "difference": validation.difference,
                **vars(summary),
            }
        )
        sink.write_batch(f"schedule_{request.loan_id}", schedule)

    if summaries:
        sink.write_batch("summaries", summaries)
    sink.close()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
