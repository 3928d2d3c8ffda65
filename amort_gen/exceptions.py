"""Custom exception hierarchy for amort-gen."""


class AmortGenError(Exception):
    """Base exception for all amort-gen errors."""


class InvalidRequestError(AmortGenError):
    """Raised when a loan request is structurally impossible."""


class ScheduleIntegrityError(AmortGenError):
    """Raised when a generated schedule violates a financial invariant.

    Parameters
    ----------
    message : str
        Human readable description of the violation.
    loan_id : object
        Identifier of the loan whose schedule failed.
    installment_number : int | None
        Offending installment, or None for aggregate checks.
    """

    def __init__(
        self,
        message: str,
        loan_id: object = None,
        installment_number: int | None = None,
    ) -> None:
        super().__init__(message)
        self.loan_id = loan_id
        self.installment_number = installment_number


class ConfigurationError(AmortGenError):
    """Raised when configuration is invalid or missing."""
