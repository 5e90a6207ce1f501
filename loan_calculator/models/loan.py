"""
Loan input and schedule models.

Inputs are deliberately lenient: blank or non-numeric values coming from a
partially filled form are coerced to ``None`` instead of failing validation,
so that the engine can treat them as "nothing to compute yet".
"""

import math
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

RateType = Literal["euribor", "treasury"]
TermUnit = Literal["years", "months"]
Currency = Literal["EUR", "ALL"]


def coerce_optional_number(value: Any) -> Any:
    """Turn blank, non-numeric and NaN values into ``None``.

    Numeric strings (thousands separators allowed) are converted to floats.
    Anything else is passed through for pydantic to validate.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if not cleaned:
            return None
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


LenientFloat = Annotated[Optional[float], BeforeValidator(coerce_optional_number)]
LenientInt = Annotated[Optional[int], BeforeValidator(coerce_optional_number)]


def term_to_months(value: Optional[float], unit: TermUnit = "years") -> Optional[int]:
    """Convert a term expressed in years or months into whole months.

    Returns ``None`` when the value is missing or not positive, and for an
    infinite term, which callers must reject before converting.
    """
    if value is None or value <= 0 or not math.isfinite(value):
        return None
    months = value * 12 if unit == "years" else value
    return int(round(months))


def reference_rate_type(currency: Optional[str]) -> RateType:
    """Return the reference-rate label shown next to the variable rate.

    Lek loans are quoted against treasury bills, everything else against
    Euribor. The label never changes how the variable rate is computed.
    """
    return "treasury" if currency == "ALL" else "euribor"


class RatePeriod(BaseModel):
    """A fixed-rate promotional tier at the start of the loan."""

    duration_months: LenientFloat = Field(
        default=None, ge=0, description="Length of the tier in months"
    )
    annual_rate_percent: LenientFloat = Field(
        default=None, description="Nominal annual rate in percent (1.0 = 1%)"
    )
    enabled: bool = Field(default=True, description="Whether the tier applies")

    model_config = ConfigDict(frozen=True)

    @property
    def is_complete(self) -> bool:
        """True when both duration and rate are filled in."""
        return self.duration_months is not None and self.annual_rate_percent is not None


class FallbackRate(BaseModel):
    """Variable rate used once every enabled tier has run out."""

    margin_percent: LenientFloat = Field(
        default=None, description="Bank margin in percent"
    )
    index_percent: LenientFloat = Field(
        default=None, description="Reference index (Euribor or treasury) in percent"
    )
    rate_type: RateType = Field(
        default="euribor", description="Reference-rate label, display only"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def annual_rate_percent(self) -> Optional[float]:
        """Margin plus index, or ``None`` while either is missing."""
        if self.margin_percent is None or self.index_percent is None:
            return None
        return self.margin_percent + self.index_percent


class LoanInput(BaseModel):
    """Numeric inputs for one amortization run."""

    principal: LenientFloat = Field(default=None, description="Loan amount")
    total_months: LenientInt = Field(default=None, description="Term in months")
    tiers: List[RatePeriod] = Field(
        default_factory=list, description="Promotional tiers, in order"
    )
    fallback: FallbackRate = Field(
        default_factory=FallbackRate, description="Variable rate after the tiers"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def is_computable(self) -> bool:
        """True when there is enough input to build a schedule."""
        return (
            self.principal is not None
            and self.principal > 0
            and self.total_months is not None
            and self.total_months > 0
            and self.fallback.annual_rate_percent is not None
        )


class LoanRequest(BaseModel):
    """Loan details as entered by a user, before term conversion."""

    loan_amount: LenientFloat = Field(default=None, description="Loan amount")
    term_value: LenientFloat = Field(
        default=None, description="Term expressed in ``term_unit``"
    )
    term_unit: TermUnit = Field(default="years", description="Unit of ``term_value``")
    currency: Optional[Currency] = Field(
        default=None, description="Display currency; selects the rate label"
    )
    margin_percent: LenientFloat = Field(default=None, description="Bank margin")
    index_percent: LenientFloat = Field(
        default=None, description="Reference index value"
    )
    tiers: List[RatePeriod] = Field(default_factory=list)

    @property
    def total_months(self) -> Optional[int]:
        """Term converted to whole months, ``None`` while not usable."""
        return term_to_months(self.term_value, self.term_unit)

    def to_loan_input(self, default_currency: Currency = "EUR") -> LoanInput:
        """Build the engine input, converting the term to months."""
        currency = self.currency or default_currency
        return LoanInput(
            principal=self.loan_amount,
            total_months=self.total_months,
            tiers=list(self.tiers),
            fallback=FallbackRate(
                margin_percent=self.margin_percent,
                index_percent=self.index_percent,
                rate_type=reference_rate_type(currency),
            ),
        )


class PaymentRecord(BaseModel):
    """One month of the amortization schedule."""

    month: int = Field(..., ge=1, description="Month number (1-based)")
    payment: float = Field(..., description="Total paid this month")
    principal: float = Field(..., description="Portion reducing the balance")
    interest: float = Field(..., description="Interest on the opening balance")
    balance_after: float = Field(..., ge=0, description="Balance after payment")
    annual_rate_percent: float = Field(
        ..., description="Annualized rate applied this month"
    )

    model_config = ConfigDict(frozen=True)


class AmortizationSummary(BaseModel):
    """Totals over the whole schedule."""

    total_payment: float = 0.0
    total_interest: float = 0.0
    average_monthly_payment: float = 0.0
    months_scheduled: int = 0

    model_config = ConfigDict(frozen=True)


class AmortizationResult(BaseModel):
    """Schedule and summary produced by one engine run."""

    schedule: List[PaymentRecord] = Field(default_factory=list)
    summary: AmortizationSummary = Field(default_factory=AmortizationSummary)

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        """True when no month was scheduled."""
        return not self.schedule
