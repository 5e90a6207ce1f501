"""
Amortization service used by the HTTP API.

Turns request payloads into engine inputs, runs the amortization engine and
serializes the result into JSON-ready dictionaries.
"""

import logging
import math
from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from loan_calculator.exceptions import TermLimitExceededError
from loan_calculator.models import (
    AmortizationEngine,
    FallbackRate,
    LoanRequest,
    RatePeriod,
    RateResolver,
)
from loan_calculator.models.loan import LenientFloat


class RateQuery(BaseModel):
    """Request for the rates applied to specific months."""

    months: List[int] = Field(..., min_length=1, description="Months to resolve")
    tiers: List[RatePeriod] = Field(default_factory=list)
    margin_percent: LenientFloat = None
    index_percent: LenientFloat = None

    @field_validator("months")
    @classmethod
    def validate_months(cls, v: List[int]) -> List[int]:
        for month in v:
            if month < 1:
                raise ValueError(f"Month numbers start at 1, got {month}")
        return v

    @property
    def fallback(self) -> FallbackRate:
        return FallbackRate(
            margin_percent=self.margin_percent, index_percent=self.index_percent
        )


class AmortizationService:
    """Service for running amortization requests."""

    def __init__(self, max_term_months: int = 600, default_currency: str = "EUR") -> None:
        """Initialize the amortization service.

        Args:
            max_term_months: Longest term accepted, in months
            default_currency: Currency assumed when a request names none
        """
        self.max_term_months = max_term_months
        self.default_currency = default_currency
        self.logger = logging.getLogger(__name__)

    def calculate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run the amortization engine for a request payload.

        Args:
            payload: ``LoanRequest`` fields

        Returns:
            Dictionary with schedule, summary and display metadata

        Raises:
            pydantic.ValidationError: If the payload has the wrong shape
            TermLimitExceededError: If the term is longer than allowed
        """
        loan_request = LoanRequest.model_validate(payload)

        term_value = loan_request.term_value
        if term_value is not None and math.isinf(term_value) and term_value > 0:
            raise TermLimitExceededError(term_value, self.max_term_months)

        total_months = loan_request.total_months
        if total_months is not None and total_months > self.max_term_months:
            raise TermLimitExceededError(total_months, self.max_term_months)

        loan_input = loan_request.to_loan_input(default_currency=self.default_currency)

        try:
            result = AmortizationEngine.run(loan_input)
        except Exception as e:
            self.logger.error(f"Amortization failed: {str(e)}")
            raise

        if result.is_empty:
            self.logger.debug("Incomplete loan input, returning empty schedule")
        else:
            self.logger.info(
                f"Computed {result.summary.months_scheduled} payments "
                f"for principal {loan_input.principal} over {total_months} months"
            )

        return {
            "currency": loan_request.currency or self.default_currency,
            "rate_type": loan_input.fallback.rate_type,
            "variable_rate_percent": loan_input.fallback.annual_rate_percent,
            "total_months": total_months,
            "schedule": [record.model_dump() for record in result.schedule],
            "summary": result.summary.model_dump(),
        }

    def resolve_rates(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Resolve the rate applied to each requested month.

        Args:
            payload: ``RateQuery`` fields

        Returns:
            Dictionary with one entry per requested month

        Raises:
            pydantic.ValidationError: If the payload has the wrong shape
            InvalidLoanInputError: If the fallback rate is incomplete
        """
        query = RateQuery.model_validate(payload)
        fallback = query.fallback

        rates = []
        for month in query.months:
            monthly_rate = RateResolver.rate_for(month, query.tiers, fallback)
            rates.append(
                {
                    "month": month,
                    "monthly_rate": monthly_rate,
                    "annual_rate_percent": RateResolver.annual_percent(monthly_rate),
                }
            )

        return {"rates": rates}
