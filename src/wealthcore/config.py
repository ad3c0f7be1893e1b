from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WC_",
    )

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]

    # Cache (empty redis_url -> in-memory TTLCache)
    redis_url: str = ""
    cache_ttl: int = 300  # seconds

    # Monte Carlo simulation
    simulation_default_scenarios: int = 1000
    simulation_default_horizon_years: float = 5.0
    simulation_default_volatility: float = 0.15
    simulation_default_trend: float = 0.07
    simulation_min_scenarios: int = 100
    simulation_max_scenarios: int = 10000
    simulation_min_horizon_years: float = 0.1
    simulation_max_horizon_years: float = 20.0

    # Forecasts
    forecast_volatility: float = 0.15
    baseline_growth_rate: float = 0.05
    baseline_inflation: float = 0.02

    # Logging
    log_dir: str = "logs"
