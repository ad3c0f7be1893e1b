"""Performance and volatility API endpoints."""

from fastapi import APIRouter, HTTPException

from wealthcore.analysis.performance import (
    NORMALIZATION_THRESHOLD_DAYS,
    confidence_interval,
    diversification_index,
    period_performance,
    returns_from_values,
    volatility,
)
from wealthcore.web.schemas import (
    ApiResponse,
    ConfidenceIntervalRequest,
    ConfidenceIntervalResult,
    DiversificationRequest,
    DiversificationResult,
    PeriodPerformance,
    PeriodPerformanceRequest,
    VolatilityRequest,
    VolatilityResult,
)

router = APIRouter(prefix="/performance", tags=["performance"])


@router.post("/period", response_model=ApiResponse[PeriodPerformance])
async def compute_period_performance(body: PeriodPerformanceRequest):
    """Performance between two valuations."""
    perf = period_performance(body.current_value, body.previous_value, body.days_difference)
    return ApiResponse(
        data=PeriodPerformance(
            performance=perf,
            normalized=bool(body.previous_value) and body.days_difference > NORMALIZATION_THRESHOLD_DAYS,
        )
    )


@router.post("/volatility", response_model=ApiResponse[VolatilityResult])
async def compute_volatility(body: VolatilityRequest):
    """Sample volatility of a return series or of a value series."""
    if body.returns is None and body.values is None:
        raise HTTPException(status_code=400, detail="Provide either returns or values")

    returns = body.returns if body.returns is not None else returns_from_values(body.values)
    return ApiResponse(data=VolatilityResult(volatility=volatility(returns), observations=len(returns)))


@router.post("/confidence-interval", response_model=ApiResponse[ConfidenceIntervalResult])
async def compute_confidence_interval(body: ConfidenceIntervalRequest):
    """95% confidence interval around a value."""
    interval = confidence_interval(body.value, body.volatility, body.time_in_years)
    return ApiResponse(data=ConfidenceIntervalResult(lower=interval.lower, upper=interval.upper))


@router.post("/diversification", response_model=ApiResponse[DiversificationResult])
async def compute_diversification(body: DiversificationRequest):
    """Diversification index of an allocation by category."""
    amounts = list(body.amounts.values())
    return ApiResponse(
        data=DiversificationResult(index=diversification_index(amounts), categories=len(amounts))
    )
