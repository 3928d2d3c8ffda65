"""Loan request generators."""

from amort_gen.generators.base import BaseGenerator
from amort_gen.generators.loan_request import LoanRequestGenerator

__all__ = ["BaseGenerator", "LoanRequestGenerator"]
