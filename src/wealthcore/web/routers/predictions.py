"""Prediction API endpoints: Monte Carlo, horizon forecasts, baseline projection."""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from wealthcore.analysis.projection import (
    HORIZON_MONTHS,
    forecast_horizons,
    project_baseline,
    projection_metrics,
)
from wealthcore.analysis.simulation import (
    SimulationInputError,
    analyze_monte_carlo,
    run_monte_carlo,
    stable_seed,
    validate_simulation_inputs,
)
from wealthcore.config import Settings
from wealthcore.web.cache import CacheService, make_key
from wealthcore.web.dependencies import get_cache, get_settings
from wealthcore.web.schemas import (
    ApiResponse,
    BaselineProjection,
    BaselineRequest,
    ForecastRequest,
    Meta,
    MonteCarloRequest,
    MonteCarloResponse,
    ProjectionPointItem,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/predictions", tags=["predictions"])

MODEL_VERSION = "1.0.0"


@router.post("/monte-carlo", response_model=ApiResponse[MonteCarloResponse])
async def monte_carlo(
    body: MonteCarloRequest,
    settings: Settings = Depends(get_settings),
    cache: CacheService = Depends(get_cache),
):
    """Run a Monte Carlo simulation of a value over a horizon.

    Seeded requests (explicit seed or asset id) are deterministic and cached.
    """
    horizon = (
        body.time_horizon_years
        if body.time_horizon_years is not None
        else settings.simulation_default_horizon_years
    )
    scenarios = body.scenarios if body.scenarios is not None else settings.simulation_default_scenarios
    volatility = (
        body.base_volatility if body.base_volatility is not None else settings.simulation_default_volatility
    )
    trend = body.base_trend if body.base_trend is not None else settings.simulation_default_trend

    try:
        validate_simulation_inputs(
            body.current_value, horizon, scenarios, volatility, trend,
            min_scenarios=settings.simulation_min_scenarios,
            max_scenarios=settings.simulation_max_scenarios,
            min_horizon_years=settings.simulation_min_horizon_years,
            max_horizon_years=settings.simulation_max_horizon_years,
        )
    except SimulationInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    seed = body.seed
    if seed is None and body.asset_id:
        seed = stable_seed(body.asset_id)

    cache_key = None
    if seed is not None:
        cache_key = make_key(
            "monte_carlo",
            {
                "value": body.current_value, "horizon": horizon, "scenarios": scenarios,
                "volatility": volatility, "trend": trend, "seed": seed,
                "max_paths": body.max_paths,
            },
        )
        cached = await cache.get(cache_key)
        if cached:
            return ApiResponse(data=cached, meta=Meta(cached=True))

    logger.info("Running Monte Carlo: %d scenarios over %.2f years", scenarios, horizon)
    start = time.perf_counter()
    result = await run_in_threadpool(
        run_monte_carlo, body.current_value, horizon, scenarios, volatility, trend, None, seed
    )
    analysis = analyze_monte_carlo(result)
    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

    response = MonteCarloResponse(
        result=result.to_dict(max_paths=body.max_paths),
        analysis=analysis,
        metadata={
            "processing_time_ms": elapsed_ms,
            "model_version": MODEL_VERSION,
            "scenarios_generated": scenarios,
            "time_horizon_years": horizon,
            "seed": seed,
        },
    )

    if cache_key:
        await cache.set(cache_key, response.model_dump())
    return ApiResponse(data=response)


@router.post("/forecast", response_model=ApiResponse[dict])
async def forecast(body: ForecastRequest, settings: Settings = Depends(get_settings)):
    """Projected value per horizon with a 95% confidence band."""
    volatility = body.volatility if body.volatility is not None else settings.forecast_volatility
    return ApiResponse(data=forecast_horizons(body.current_value, body.horizons, volatility))


@router.post("/baseline", response_model=ApiResponse[BaselineProjection])
async def baseline(body: BaselineRequest, settings: Settings = Depends(get_settings)):
    """Monthly baseline projection with no scenario actions."""
    months = HORIZON_MONTHS.get(body.horizon)
    if months is None:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown horizon {body.horizon!r}, expected one of {', '.join(HORIZON_MONTHS)}",
        )

    points = project_baseline(
        body.total_value, body.total_debt, months,
        growth_rate=settings.baseline_growth_rate,
        inflation=settings.baseline_inflation,
    )
    return ApiResponse(
        data=BaselineProjection(
            horizon=body.horizon,
            points=[
                ProjectionPointItem(
                    month=p.month,
                    total_value=p.total_value,
                    debt=p.debt,
                    net_value=p.net_value,
                    liquid_value=p.liquid_value,
                )
                for p in points
            ],
            metrics=projection_metrics(points),
        )
    )
