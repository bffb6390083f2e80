"""Tests for Pydantic data models (ReitSnapshot, ReitHistorySnapshot, ValuationResult, ReitSummary)."""

import pytest
from pydantic import ValidationError

from models import ReitHistorySnapshot, ReitSnapshot, ReitSummary, ValuationResult


# ---------------------------------------------------------------------------
# ReitSnapshot
# ---------------------------------------------------------------------------

class TestReitSnapshot:
    def test_camel_case_input(self, sample_snapshot):
        s = ReitSnapshot.model_validate(sample_snapshot())
        assert s.ticker == "O"
        assert s.dividend_yield == 5.0
        assert s.total_return_1y == 3.2

    def test_snake_case_input(self):
        s = ReitSnapshot(ticker="O", name="Realty Income", sector="Retail",
                         dividend_yield=5.0, total_return_1y=3.2)
        assert s.dividend_yield == 5.0

    def test_dumps_camel_case(self, sample_snapshot):
        s = ReitSnapshot.model_validate(sample_snapshot())
        assert s.model_dump(by_alias=True) == sample_snapshot()

    def test_frozen(self, sample_snapshot):
        s = ReitSnapshot.model_validate(sample_snapshot())
        with pytest.raises(ValidationError):
            s.ticker = "X"

    def test_missing_sector_raises(self, sample_snapshot):
        raw = sample_snapshot()
        del raw["sector"]
        with pytest.raises(ValidationError):
            ReitSnapshot.model_validate(raw)

    def test_non_numeric_yield_raises(self, sample_snapshot):
        with pytest.raises(ValidationError):
            ReitSnapshot.model_validate(sample_snapshot(dividendYield="high"))


# ---------------------------------------------------------------------------
# ReitHistorySnapshot
# ---------------------------------------------------------------------------

class TestReitHistorySnapshot:
    def test_required_fields(self):
        p = ReitHistorySnapshot(date="2024-01-01", price=55.12)
        assert p.date == "2024-01-01"
        assert p.price == 55.12

    def test_zero_price_raises(self):
        with pytest.raises(ValidationError):
            ReitHistorySnapshot(date="2024-01-01", price=0)

    def test_negative_price_raises(self):
        with pytest.raises(ValidationError):
            ReitHistorySnapshot(date="2024-01-01", price=-1.5)

    def test_non_iso_date_raises(self):
        with pytest.raises(ValidationError):
            ReitHistorySnapshot(date="01/01/2024", price=10.0)


# ---------------------------------------------------------------------------
# Derived results
# ---------------------------------------------------------------------------

class TestValuationResult:
    def test_model_defaults_to_ddm(self):
        v = ValuationResult(ticker="O", current_price=52, dividend_per_share=2.6,
                            discount_rate=0.08, growth_rate=0.02,
                            fair_value=44.2, margin_of_safety_pct=-15.0)
        assert v.model == "DDM"

    def test_dumps_camel_case(self):
        v = ValuationResult(ticker="O", current_price=52, dividend_per_share=2.6,
                            discount_rate=0.08, growth_rate=0.02,
                            fair_value=44.2, margin_of_safety_pct=-15.0)
        dumped = v.model_dump(by_alias=True)
        assert set(dumped) == {
            "ticker", "model", "currentPrice", "dividendPerShare",
            "discountRate", "growthRate", "fairValue", "marginOfSafetyPct",
        }


class TestReitSummary:
    def test_best_by_return_optional(self):
        s = ReitSummary(total_reits=0, avg_dividend_yield=0.0)
        assert s.best_by_return is None
        assert s.model_dump(by_alias=True) == {
            "totalReits": 0, "avgDividendYield": 0.0, "bestByReturn": None,
        }
