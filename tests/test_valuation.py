"""Tests for the Gordon Growth DDM valuation and its sensitivity grid."""

import pytest

from analytics.errors import InvalidAssumptionError, NoHistoryError, ReitNotFoundError
from analytics.valuation import (
    build_sensitivity_grid,
    ddm_fair_value,
    margin_of_safety_pct,
    sensitivity_rates,
    value_reit,
    value_reit_sensitivity,
)
from repository import InMemoryReitHistoryRepository, InMemoryReitSnapshotRepository


@pytest.fixture
def repos(sample_snapshot):
    """O yielding 5% with a latest price of 52 (stored newest first)."""
    snapshots = InMemoryReitSnapshotRepository([sample_snapshot(dividendYield=5.0)])
    history = InMemoryReitHistoryRepository({
        "O": [
            {"date": "2024-02-01", "price": 52.0},
            {"date": "2024-01-01", "price": 50.0},
        ],
    })
    return snapshots, history


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------

class TestFormulas:
    def test_ddm_fair_value(self):
        assert ddm_fair_value(2.6, 0.08, 0.02) == pytest.approx(2.6 * 1.02 / 0.06)

    def test_ddm_undefined_when_r_not_above_g(self):
        assert ddm_fair_value(2.6, 0.03, 0.03) is None
        assert ddm_fair_value(2.6, 0.02, 0.03) is None

    def test_ddm_negative_growth(self):
        assert ddm_fair_value(1.0, 0.05, -0.01) == pytest.approx(0.99 / 0.06)

    def test_margin_of_safety(self):
        assert margin_of_safety_pct(60.0, 50.0) == pytest.approx(20.0)
        assert margin_of_safety_pct(40.0, 50.0) == pytest.approx(-20.0)

    def test_margin_of_safety_zero_price(self):
        assert margin_of_safety_pct(44.2, 0) == 0.0


# ---------------------------------------------------------------------------
# value_reit
# ---------------------------------------------------------------------------

class TestValueReit:
    def test_ddm_values(self, repos):
        result = value_reit(*repos, "O", 0.08, 0.02)
        assert result.ticker == "O"
        assert result.model == "DDM"
        assert result.current_price == 52.0
        assert result.dividend_per_share == pytest.approx(2.6)
        assert result.fair_value == pytest.approx(44.2)
        assert result.margin_of_safety_pct == pytest.approx(-15.0, abs=0.02)
        assert result.discount_rate == 0.08
        assert result.growth_rate == 0.02

    def test_uses_latest_date_not_last_stored(self, repos):
        # 2024-02-01 is stored first but is the latest observation
        assert value_reit(*repos, "O", 0.08, 0.02).current_price == 52.0

    def test_ticker_case_insensitive(self, repos):
        assert value_reit(*repos, "o", 0.08, 0.02).ticker == "O"

    def test_positive_margin_when_undervalued(self, repos):
        result = value_reit(*repos, "O", 0.06, 0.03)
        assert result.fair_value > result.current_price
        assert result.margin_of_safety_pct > 0

    def test_r_below_g_invalid(self, repos):
        with pytest.raises(InvalidAssumptionError, match="Invalid discount or growth rate"):
            value_reit(*repos, "O", 0.02, 0.03)

    def test_r_equal_g_invalid(self, repos):
        with pytest.raises(InvalidAssumptionError):
            value_reit(*repos, "O", 0.03, 0.03)

    def test_non_positive_r_invalid(self, repos):
        with pytest.raises(InvalidAssumptionError):
            value_reit(*repos, "O", 0.0, -0.05)

    @pytest.mark.parametrize("r, g", [
        (float("nan"), 0.02),
        (0.08, float("nan")),
        (float("inf"), 0.02),
        (0.08, float("-inf")),
    ])
    def test_non_finite_rates_invalid(self, repos, r, g):
        with pytest.raises(InvalidAssumptionError, match="Invalid discount or growth rate"):
            value_reit(*repos, "O", r, g)

    def test_assumptions_checked_before_lookup(self, repos):
        with pytest.raises(InvalidAssumptionError):
            value_reit(*repos, "XYZ", 0.02, 0.03)

    def test_unknown_ticker(self, repos):
        with pytest.raises(ReitNotFoundError, match="REIT not found"):
            value_reit(*repos, "XYZ", 0.08, 0.02)

    def test_missing_history(self, repos):
        snapshots, _ = repos
        with pytest.raises(NoHistoryError, match="No price history available"):
            value_reit(snapshots, InMemoryReitHistoryRepository({}), "O", 0.08, 0.02)

    def test_empty_history(self, repos):
        snapshots, _ = repos
        with pytest.raises(NoHistoryError):
            value_reit(snapshots, InMemoryReitHistoryRepository({"O": []}), "O", 0.08, 0.02)


# ---------------------------------------------------------------------------
# Sensitivity grid
# ---------------------------------------------------------------------------

class TestSensitivityRates:
    def test_default_band(self):
        discount, growth = sensitivity_rates(0.08, 0.02)
        assert discount == pytest.approx([0.06, 0.07, 0.08, 0.09, 0.10])
        assert growth == pytest.approx([0.01, 0.02, 0.03, 0.04, 0.05])

    def test_discount_floor(self):
        discount, _ = sensitivity_rates(0.02, 0.0)
        assert discount[0] == 0.01
        assert discount[:2] == pytest.approx([0.01, 0.01])


class TestBuildSensitivityGrid:
    def test_shape(self, repos):
        grid = build_sensitivity_grid(value_reit(*repos, "O", 0.08, 0.02))
        assert len(grid.rows) == 5
        assert all(len(row.cells) == 5 for row in grid.rows)
        assert grid.ticker == "O"
        assert grid.current_price == 52.0

    def test_centre_cell_matches_single_point(self, repos):
        valuation = value_reit(*repos, "O", 0.08, 0.02)
        grid = build_sensitivity_grid(valuation)
        centre = grid.rows[2].cells[1]
        assert centre.discount_rate == 0.08
        assert centre.growth_rate == 0.02
        assert centre.fair_value == valuation.fair_value
        assert centre.margin_of_safety_pct == valuation.margin_of_safety_pct

    def test_cells_reuse_base_dividend(self, repos):
        grid = build_sensitivity_grid(value_reit(*repos, "O", 0.08, 0.02))
        cell = grid.rows[4].cells[4]
        expected = 2.6 * (1 + cell.growth_rate) / (cell.discount_rate - cell.growth_rate)
        assert cell.fair_value == pytest.approx(expected)

    def test_undefined_cells_are_null(self, repos):
        grid = build_sensitivity_grid(value_reit(*repos, "O", 0.03, 0.02))
        first = grid.rows[0].cells[0]
        assert first.discount_rate == 0.01
        assert first.fair_value is None
        assert first.margin_of_safety_pct is None

    def test_value_reit_sensitivity_applies_base_checks(self, repos):
        with pytest.raises(InvalidAssumptionError):
            value_reit_sensitivity(*repos, "O", 0.02, 0.03)
        with pytest.raises(ReitNotFoundError):
            value_reit_sensitivity(*repos, "XYZ", 0.08, 0.02)

    def test_non_positive_step_invalid(self, repos):
        with pytest.raises(InvalidAssumptionError):
            value_reit_sensitivity(*repos, "O", 0.08, 0.02, step=0)

    @pytest.mark.parametrize("step", [float("nan"), float("inf")])
    def test_non_finite_step_invalid(self, repos, step):
        with pytest.raises(InvalidAssumptionError):
            value_reit_sensitivity(*repos, "O", 0.08, 0.02, step=step)

    def test_custom_step(self, repos):
        grid = value_reit_sensitivity(*repos, "O", 0.10, 0.02, step=0.02)
        assert grid.discount_rates == pytest.approx([0.06, 0.08, 0.10, 0.12, 0.14])
        assert grid.growth_rates == pytest.approx([0.0, 0.02, 0.04, 0.06, 0.08])
