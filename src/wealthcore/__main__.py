import json
import logging

import click

from wealthcore.config import Settings
from wealthcore.logging_config import setup_logging

logger = logging.getLogger(__name__)

SCHEMES = ("PROGRESSIVE", "LINEAR", "IN_FINE", "BULLET")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool):
    """wealthcore - wealth analytics toolkit"""
    setup_logging(Settings().log_dir)
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@cli.command()
@click.option("--principal", "-p", type=float, required=True, help="Borrowed amount")
@click.option("--rate", "-r", type=float, required=True, help="Annual rate in percent")
@click.option("--months", "-m", type=int, required=True, help="Duration in months")
@click.option("--scheme", "-s", type=click.Choice(SCHEMES), default="PROGRESSIVE",
              help="Amortization scheme")
def payment(principal: float, rate: float, months: int, scheme: str):
    """Monthly payment of a loan."""
    from wealthcore.analysis.amortization import monthly_payment

    value = monthly_payment(principal, rate, months, scheme)
    click.echo(f"{scheme}: {value:.2f} / month")


@cli.command()
@click.option("--principal", "-p", type=float, required=True, help="Borrowed amount")
@click.option("--rate", "-r", type=float, required=True, help="Annual rate in percent")
@click.option("--months", "-m", type=int, required=True, help="Duration in months")
@click.option("--scheme", "-s", type=click.Choice(SCHEMES), default="PROGRESSIVE",
              help="Amortization scheme")
def schedule(principal: float, rate: float, months: int, scheme: str):
    """Print the repayment schedule of a loan."""
    from wealthcore.analysis.amortization import payment_schedule, total_interest

    payments = payment_schedule(principal, rate, months, scheme)
    if not payments:
        click.echo("No payments (degenerate loan).")
        return

    click.echo(f"{'#':>4} {'capital':>12} {'interest':>10} {'total':>12} {'remaining':>14}")
    for p in payments:
        click.echo(
            f"{p.payment_number:>4} {p.principal:>12.2f} {p.interest:>10.2f} "
            f"{p.total:>12.2f} {p.remaining_balance:>14.2f}"
        )
    click.echo(f"Total interest: {total_interest(payments):.2f}")


@cli.command()
@click.argument("taxable_value", type=float)
def ifi(taxable_value: float):
    """IFI owed on a net taxable real-estate value."""
    from wealthcore.analysis.tax import compute_ifi

    click.echo(f"IFI: {compute_ifi(taxable_value):.2f}")


@cli.command()
@click.argument("returns", type=float, nargs=-1, required=True)
def volatility(returns: tuple[float, ...]):
    """Sample volatility of a series of period returns."""
    from wealthcore.analysis.performance import volatility as sample_volatility

    click.echo(f"Volatility: {sample_volatility(list(returns)):.6f}")


@cli.command()
@click.option("--value", "current_value", type=float, required=True, help="Starting value")
@click.option("--years", type=float, default=None, help="Horizon in years")
@click.option("--scenarios", "-n", type=int, default=None, help="Number of scenarios")
@click.option("--volatility", "base_volatility", type=float, default=None, help="Annual volatility")
@click.option("--trend", "base_trend", type=float, default=None, help="Annual trend")
@click.option("--seed", type=int, default=None, help="Seed for a reproducible run")
@click.option("--json", "as_json", is_flag=True, help="Print statistics and analysis as JSON")
def simulate(current_value: float, years: float | None, scenarios: int | None,
             base_volatility: float | None, base_trend: float | None, seed: int | None,
             as_json: bool):
    """Run a Monte Carlo simulation."""
    from wealthcore.analysis.simulation import (
        SimulationInputError,
        analyze_monte_carlo,
        run_monte_carlo,
        validate_simulation_inputs,
    )

    settings = Settings()
    years = years if years is not None else settings.simulation_default_horizon_years
    scenarios = scenarios if scenarios is not None else settings.simulation_default_scenarios
    if base_volatility is None:
        base_volatility = settings.simulation_default_volatility
    if base_trend is None:
        base_trend = settings.simulation_default_trend

    try:
        validate_simulation_inputs(
            current_value, years, scenarios, base_volatility, base_trend,
            min_scenarios=settings.simulation_min_scenarios,
            max_scenarios=settings.simulation_max_scenarios,
            min_horizon_years=settings.simulation_min_horizon_years,
            max_horizon_years=settings.simulation_max_horizon_years,
        )
    except SimulationInputError as e:
        raise click.BadParameter(str(e))

    result = run_monte_carlo(current_value, years, scenarios, base_volatility, base_trend, seed=seed)
    analysis = analyze_monte_carlo(result)

    if as_json:
        click.echo(json.dumps({"statistics": result.statistics, "analysis": analysis}, indent=2))
        return

    stats = result.statistics
    pct = stats["percentiles"]
    click.echo(f"Scenarios: {scenarios}, horizon: {years} years")
    click.echo(f"  mean   {stats['mean']:>16.2f}")
    click.echo(f"  median {stats['median']:>16.2f}")
    click.echo(f"  p5     {pct['p5']:>16.2f}")
    click.echo(f"  p95    {pct['p95']:>16.2f}")
    click.echo(f"  P(gain)     {result.probability_analysis.probability_of_gain:.2%}")
    click.echo(f"  P(doubling) {result.probability_analysis.probability_of_doubling:.2%}")
    click.echo(f"  Sharpe      {analysis['risk_metrics']['sharpe_ratio']:.3f}")


@cli.command()
@click.option("--host", default=None, help="Bind address (default: settings)")
@click.option("--port", type=int, default=None, help="Port (default: settings)")
def serve(host: str | None, port: int | None):
    """Start the HTTP API."""
    import uvicorn

    from wealthcore.web.app import create_app

    settings = Settings()
    uvicorn.run(
        create_app(settings),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    cli()
