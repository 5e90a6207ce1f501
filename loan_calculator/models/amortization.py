"""
Amortization schedules for loans with changing interest rates.

The payment is re-amortized every month: it is recomputed from the current
balance, the current rate and the number of months left. A payment fixed at
origination would not reach zero by the end of the term once a promotional
tier ends and the rate changes.
"""

import math
from typing import List, Sequence

from ..exceptions import InvalidLoanInputError
from .loan import AmortizationResult, AmortizationSummary, LoanInput, PaymentRecord
from .rate_resolver import RateResolver

# Residual balance treated as paid off (floating-point drift)
BALANCE_TOLERANCE = 0.01


class AmortizationEngine:
    """Builds month-by-month payment schedules for tiered-rate loans."""

    @staticmethod
    def calculate_annuity_payment(
        balance: float, monthly_rate: float, remaining_months: int
    ) -> float:
        """
        Calculate the level payment that clears ``balance`` in the remaining months.

        Args:
            balance: Outstanding balance
            monthly_rate: Monthly interest rate (as a fraction)
            remaining_months: Number of payments left, including this one

        Returns:
            Payment amount, unrounded
        """
        if remaining_months <= 0:
            raise ValueError("Remaining months must be positive")
        if monthly_rate == 0:
            return balance / remaining_months

        # P * r / (1 - (1 + r)^-n); the discount factor underflows to 0 for
        # very high rates, leaving an interest-only payment
        discount = (1 + monthly_rate) ** -remaining_months
        return balance * monthly_rate / (1 - discount)

    @staticmethod
    def summarize(schedule: Sequence[PaymentRecord]) -> AmortizationSummary:
        """Aggregate totals over every record of ``schedule``."""
        if not schedule:
            return AmortizationSummary()

        total_payment = sum(record.payment for record in schedule)
        total_interest = sum(record.interest for record in schedule)

        return AmortizationSummary(
            total_payment=total_payment,
            total_interest=total_interest,
            average_monthly_payment=total_payment / len(schedule),
            months_scheduled=len(schedule),
        )

    @staticmethod
    def run(loan_input: LoanInput) -> AmortizationResult:
        """
        Generate the amortization schedule and summary for a loan.

        Incomplete input (missing fields, principal or term not positive)
        yields an empty schedule and a zero summary rather than an error.

        Args:
            loan_input: Loan parameters

        Returns:
            Schedule and summary

        Raises:
            InvalidLoanInputError: If ``loan_input`` is not a ``LoanInput`` or
                holds non-finite amounts or rates
        """
        if not isinstance(loan_input, LoanInput):
            raise InvalidLoanInputError(
                f"Expected LoanInput, got {type(loan_input).__name__}"
            )
        if not loan_input.is_computable:
            return AmortizationResult()
        if not math.isfinite(loan_input.principal):
            raise InvalidLoanInputError("Principal must be finite")

        total_months = loan_input.total_months
        schedule: List[PaymentRecord] = []
        balance = loan_input.principal
        month = 1

        while balance > BALANCE_TOLERANCE and month <= total_months:
            rate = RateResolver.rate_for(month, loan_input.tiers, loan_input.fallback)
            remaining_months = total_months - month + 1

            payment = AmortizationEngine.calculate_annuity_payment(
                balance, rate, remaining_months
            )
            interest = balance * rate
            principal_payment = payment - interest
            balance = max(0.0, balance - principal_payment)

            schedule.append(
                PaymentRecord(
                    month=month,
                    payment=payment,
                    principal=principal_payment,
                    interest=interest,
                    balance_after=balance,
                    annual_rate_percent=RateResolver.annual_percent(rate),
                )
            )
            month += 1

        return AmortizationResult(
            schedule=schedule, summary=AmortizationEngine.summarize(schedule)
        )
