"""Random loan request generator."""

import random
from datetime import date, timedelta
from decimal import Decimal
from typing import Iterator

from amort_gen.generators.base import BaseGenerator
from amort_gen.models.enums import Periodicity
from amort_gen.models.loan import ActiveCreditState, LoanAmortizationRequest


class LoanRequestGenerator(BaseGenerator):
    """Generate realistic amortization requests.

    Principals are whole thousands, rates are monthly percentages and the
    installment count depends on the payment periodicity.
    """

    # (min, max) principal in thousands
    PRINCIPAL_RANGE = (500, 20_000)

    # Monthly rate range (%)
    RATE_RANGE = (1.2, 3.5)

    INSTALLMENT_COUNTS = {
        Periodicity.WEEKLY: [12, 24, 36, 48, 52],
        Periodicity.BIWEEKLY: [6, 12, 24, 36, 48],
        Periodicity.MONTHLY: [3, 6, 12, 18, 24, 36],
    }

    def generate(
        self,
        periodicity: Periodicity | None = None,
        first_due_date: date | None = None,
    ) -> LoanAmortizationRequest:
        """Generate a brand-new loan request.

        Parameters
        ----------
        periodicity : Periodicity | None
            Fixed periodicity, or None to pick one at random.
        first_due_date : date | None
            Due date of installment #1, or None for a date around today.

        Returns
        -------
        LoanAmortizationRequest
            Generated request.
        """
        periodicity = periodicity or random.choice(list(self.INSTALLMENT_COUNTS))
        principal = Decimal(random.randint(*self.PRINCIPAL_RANGE) * 1000)
        rate = Decimal(str(round(random.uniform(*self.RATE_RANGE), 2)))

        if first_due_date is None:
            first_due_date = date.today() + timedelta(days=random.randint(-365, 30))

        return LoanAmortizationRequest(
            loan_id=self.fake.uuid4(),
            principal=principal,
            installment_count=random.choice(self.INSTALLMENT_COUNTS[periodicity]),
            nominal_monthly_rate=rate,
            periodicity=periodicity,
            first_due_date=first_due_date,
        )

    def generate_with_history(
        self,
        periodicity: Periodicity | None = None,
    ) -> LoanAmortizationRequest:
        """Generate a request for a loan that already has paid installments."""
        base = self.generate(periodicity=periodicity)
        count = base.installment_count
        remaining = random.randint(1, max(1, count - 1))

        state = ActiveCreditState(
            remaining_installments=remaining,
            current_balance=(base.principal * remaining / count).quantize(Decimal(1)),
            credit_id=str(self.fake.random_number(digits=6, fix_len=True)),
            status=random.choice(["Al_dia", "Mora"]),
        )

        return LoanAmortizationRequest(
            loan_id=base.loan_id,
            principal=base.principal,
            installment_count=count,
            nominal_monthly_rate=base.nominal_monthly_rate,
            periodicity=base.periodicity,
            first_due_date=base.first_due_date,
            active_credit_state=state,
        )

    def generate_batch(self, count: int, history_rate: float = 0.0) -> Iterator[LoanAmortizationRequest]:
        """Yield ``count`` requests, a ``history_rate`` share of them with history."""
        for _ in range(count):
            if random.random() < history_rate:
                yield self.generate_with_history()
            else:
                yield self.generate()
