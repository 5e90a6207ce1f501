"""Data models and calculation engines for tiered-rate loans."""

from .loan import (
    AmortizationResult,
    AmortizationSummary,
    FallbackRate,
    LoanInput,
    LoanRequest,
    PaymentRecord,
    RatePeriod,
    reference_rate_type,
    term_to_months,
)
from .rate_resolver import RateResolver
from .amortization import BALANCE_TOLERANCE, AmortizationEngine

__all__ = [
    "AmortizationResult",
    "AmortizationSummary",
    "FallbackRate",
    "LoanInput",
    "LoanRequest",
    "PaymentRecord",
    "RatePeriod",
    "reference_rate_type",
    "term_to_months",
    "RateResolver",
    "BALANCE_TOLERANCE",
    "AmortizationEngine",
]
