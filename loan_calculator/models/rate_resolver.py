"""
Interest-rate selection for tiered loans.

A loan starts with zero or more fixed-rate promotional tiers and falls back to
a variable rate (margin + reference index) once every enabled tier has been
used up.
"""

import math
from typing import Sequence

from ..exceptions import InvalidLoanInputError
from .loan import FallbackRate, RatePeriod


class RateResolver:
    """Resolves the monthly interest rate that applies to a given month."""

    @staticmethod
    def monthly_rate(annual_rate_percent: float) -> float:
        """Convert an annual percentage (e.g. 2.5) into a monthly fraction."""
        return annual_rate_percent / 100 / 12

    @staticmethod
    def annual_percent(monthly_rate: float) -> float:
        """Convert a monthly fraction back into an annual percentage."""
        return monthly_rate * 12 * 100

    @staticmethod
    def fallback_monthly_rate(fallback: FallbackRate) -> float:
        """
        Monthly rate of the variable fallback.

        The rate is always margin + index. ``fallback.rate_type`` is only a
        label and is not consulted.

        Raises:
            InvalidLoanInputError: If margin or index is missing
        """
        annual = fallback.annual_rate_percent
        if annual is None:
            raise InvalidLoanInputError("Fallback rate needs both margin and index")
        return RateResolver.monthly_rate(annual)

    @staticmethod
    def rate_for(
        month: int, tiers: Sequence[RatePeriod], fallback: FallbackRate
    ) -> float:
        """
        Return the monthly rate applicable to ``month``.

        Args:
            month: Month number (1-based)
            tiers: Promotional tiers in configured order
            fallback: Variable rate used after the tiers

        Returns:
            Monthly rate as a fraction (0.00208 for 2.5% a year)
        """
        cumulative_months = 0.0

        for tier in tiers:
            if not tier.enabled:
                continue
            # Incomplete rows do not take up any months
            if not tier.is_complete:
                continue

            cumulative_months += tier.duration_months
            if month <= cumulative_months:
                rate = RateResolver.monthly_rate(tier.annual_rate_percent)
                break
        else:
            rate = RateResolver.fallback_monthly_rate(fallback)

        if not math.isfinite(rate):
            raise InvalidLoanInputError(f"Rate for month {month} is not finite")
        return rate
