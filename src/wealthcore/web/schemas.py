"""Pydantic request/response schemas for the wealthcore API."""

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from wealthcore.analysis.amortization import LoanScheme

T = TypeVar("T")


# --- Base schemas ---


class Meta(BaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    cached: bool = False


class ApiResponse(BaseModel, Generic[T]):
    data: T
    meta: Meta = Field(default_factory=Meta)


class HealthResponse(BaseModel):
    status: str
    version: str
    cache_type: str


# --- Loans ---


class LoanRequest(BaseModel):
    principal: float = Field(ge=0, description="Borrowed amount")
    annual_rate_percent: float = Field(ge=0, description="Nominal annual rate in percent")
    duration_months: int = Field(ge=0, description="Loan duration in months")
    scheme: LoanScheme = Field(LoanScheme.PROGRESSIVE, description="Amortization scheme")


class LoanPayment(BaseModel):
    monthly_payment: float
    monthly_payment_rounded: float = Field(description="Payment rounded to the cent")
    scheme: LoanScheme


class ScheduledPaymentItem(BaseModel):
    payment_number: int
    principal: float
    interest: float
    total: float
    remaining_balance: float


class LoanSchedule(BaseModel):
    scheme: LoanScheme
    payments: list[ScheduledPaymentItem]
    total_interest: float
    total_paid: float


# --- Performance ---


class PeriodPerformanceRequest(BaseModel):
    current_value: float
    previous_value: float
    days_difference: float = Field(ge=0)


class PeriodPerformance(BaseModel):
    performance: float
    normalized: bool = Field(description="Whether the 30-day normalisation applied")


class VolatilityRequest(BaseModel):
    returns: list[float] | None = Field(None, description="Period returns (0.05 = +5%)")
    values: list[float] | None = Field(None, description="Value series, converted to returns")


class VolatilityResult(BaseModel):
    volatility: float
    observations: int


class ConfidenceIntervalRequest(BaseModel):
    value: float = Field(ge=0)
    volatility: float = Field(ge=0)
    time_in_years: float = Field(ge=0)


class ConfidenceIntervalResult(BaseModel):
    lower: float
    upper: float
    level: float = 0.95


class DiversificationRequest(BaseModel):
    amounts: dict[str, float] = Field(description="Category -> amount")


class DiversificationResult(BaseModel):
    index: int = Field(description="0 (concentrated) to 100 (evenly spread)")
    categories: int


# --- Tax ---


class IFIRequest(BaseModel):
    taxable_value: float = Field(description="Net taxable real-estate value")


class TaxResult(BaseModel):
    tax: float
    taxable_base: float


class BracketInput(BaseModel):
    thresholds: list[float] = Field(description="Strictly increasing bracket thresholds")
    rates: list[float] = Field(description="Marginal rates, one more than thresholds")


class ProgressiveTaxRequest(BaseModel):
    taxable_base: float
    schedule: BracketInput


class IncomeTaxRequest(BaseModel):
    income: float = Field(ge=0)
    household_parts: float = Field(1.0, gt=0)


class IncomeTaxResult(BaseModel):
    tax: float
    marginal_rate: float
    household_parts: float


class PERRequest(BaseModel):
    income: float = Field(ge=0)
    marginal_rate: float | None = Field(None, ge=0, le=1, description="TMI; derived from income when omitted")
    household_parts: float = Field(1.0, gt=0)


class PERResult(BaseModel):
    max_per: float
    optimal_amount: float
    estimated_savings: float
    marginal_rate: float


# --- Predictions ---


class MonteCarloRequest(BaseModel):
    current_value: float
    time_horizon_years: float | None = None
    scenarios: int | None = None
    base_volatility: float | None = None
    base_trend: float | None = None
    seed: int | None = Field(None, description="Seed for reproducible runs")
    asset_id: str | None = Field(None, description="Stable seed source when no seed is given")
    max_paths: int = Field(50, ge=0, le=10000, description="Scenario paths returned")


class MonteCarloResponse(BaseModel):
    result: dict[str, Any]
    analysis: dict[str, dict[str, float]]
    metadata: dict[str, Any]


class ForecastRequest(BaseModel):
    current_value: float = Field(ge=0)
    horizons: list[str] = Field(default_factory=lambda: ["1M", "6M", "1Y", "5Y"])
    volatility: float | None = Field(None, ge=0)


class BaselineRequest(BaseModel):
    total_value: float = Field(ge=0)
    total_debt: float = Field(0.0, ge=0)
    horizon: str = Field("1Y", description="1M, 6M, 1Y, 5Y or 10Y")


class ProjectionPointItem(BaseModel):
    month: int
    total_value: float
    debt: float
    net_value: float
    liquid_value: float


class BaselineProjection(BaseModel):
    horizon: str
    points: list[ProjectionPointItem]
    metrics: dict[str, float]
