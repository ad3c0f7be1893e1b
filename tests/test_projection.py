"""Unit tests for wealthcore.analysis.projection module."""

import pytest

from wealthcore.analysis.performance import confidence_interval
from wealthcore.analysis.projection import (
    forecast_horizons,
    project_baseline,
    projection_metrics,
)


class TestForecastHorizons:
    def test_default_horizons(self):
        result = forecast_horizons(100000)
        assert list(result) == ["1M", "6M", "1Y", "5Y"]

    def test_one_year_projection(self):
        result = forecast_horizons(100000, ["1Y"])
        assert result["1Y"]["value"] == pytest.approx(107000)

    def test_confidence_band(self):
        result = forecast_horizons(100000, ["5Y"], volatility=0.15)
        projected = result["5Y"]["value"]
        lower, upper = confidence_interval(projected, 0.15, 5)
        assert result["5Y"]["confidence"]["lower"] == pytest.approx(lower)
        assert result["5Y"]["confidence"]["upper"] == pytest.approx(upper)
        assert result["5Y"]["confidence"]["level"] == 0.95

    def test_unknown_horizon_defaults(self):
        result = forecast_horizons(100000, ["2Y"])
        assert result["2Y"]["time_in_years"] == 1.0
        assert result["2Y"]["value"] == pytest.approx(105000)


class TestBaseline:
    def test_point_count(self):
        points = project_baseline(500000, 200000, 12)
        assert len(points) == 13
        assert points[0].total_value == 500000
        assert points[0].debt == 200000

    def test_one_year_growth(self):
        points = project_baseline(500000, 200000, 12, growth_rate=0.05, inflation=0.02)
        assert points[-1].total_value == pytest.approx(525000)
        assert points[-1].debt == pytest.approx(204000)
        assert points[-1].net_value == pytest.approx(321000)
        assert points[-1].liquid_value == pytest.approx(105000)

    def test_negative_months(self):
        assert len(project_baseline(100, 0, -3)) == 1

    def test_metrics(self):
        points = project_baseline(500000, 200000, 12, growth_rate=0.05, inflation=0.02)
        metrics = projection_metrics(points)
        assert metrics["start_net_value"] == pytest.approx(300000)
        assert metrics["change"] == pytest.approx(21000)
        assert metrics["change_pct"] == pytest.approx(7.0)

    def test_metrics_empty(self):
        assert projection_metrics([])["change"] == 0
