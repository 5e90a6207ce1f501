"""Exceptions raised by the loan calculator."""


class LoanCalculatorError(Exception):
    """Base class for loan calculator errors."""


class InvalidLoanInputError(LoanCalculatorError, ValueError):
    """Raised for inputs that only a caller bypassing validation can produce.

    Incomplete input (missing fields, non-positive principal or term) is not
    an error: the engine returns an empty result for it instead.
    """


class TermLimitExceededError(LoanCalculatorError):
    """Raised when a requested term is longer than the configured maximum."""

    def __init__(self, total_months: float, max_term_months: int) -> None:
        super().__init__(
            f"Term of {total_months} months exceeds the maximum of {max_term_months}"
        )
        self.total_months = total_months
        self.max_term_months = max_term_months
