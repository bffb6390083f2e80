"""
Gordon Growth dividend discount model (DDM) valuation.

    D1        = DPS * (1 + g)
    FairValue = D1 / (r - g)

where DPS = current price * dividend yield, and r (discount rate) and
g (dividend growth rate) are decimals (0.08 = 8%). The margin of safety is
the percentage gap between fair value and the current market price.

The single-point valuation and the sensitivity grid share the same two
formula functions below.
"""

import math
from typing import List, Optional, Tuple

from models import SensitivityCell, SensitivityGrid, SensitivityRow, ValuationResult
from repository import ReitHistoryRepository, ReitSnapshotRepository
from .errors import InvalidAssumptionError, NoHistoryError, ReitNotFoundError


DEFAULT_SENSITIVITY_STEP = 0.01
MIN_GRID_DISCOUNT_RATE = 0.01


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------

def ddm_fair_value(dividend_per_share: float, discount_rate: float, growth_rate: float) -> Optional[float]:
    """
    Fair value per share, or None when r <= g (the model is undefined).
    """
    if discount_rate <= growth_rate:
        return None
    dividend_next = dividend_per_share * (1 + growth_rate)
    return dividend_next / (discount_rate - growth_rate)


def margin_of_safety_pct(fair_value: float, current_price: float) -> float:
    """Percent by which fair value exceeds (positive) or trails the price."""
    if current_price == 0:
        return 0.0
    return ((fair_value - current_price) / current_price) * 100


def validate_assumptions(discount_rate: float, growth_rate: float) -> None:
    if not (math.isfinite(discount_rate) and math.isfinite(growth_rate)):
        raise InvalidAssumptionError()
    if discount_rate <= 0 or discount_rate <= growth_rate:
        raise InvalidAssumptionError()


# ---------------------------------------------------------------------------
# Single-point valuation
# ---------------------------------------------------------------------------

def value_reit(
    snapshot_repo: ReitSnapshotRepository,
    history_repo: ReitHistoryRepository,
    ticker: str,
    discount_rate: float,
    growth_rate: float,
) -> ValuationResult:
    """
    Value a REIT with the Gordon Growth DDM at its latest price.

    Checks run in order: assumptions, then snapshot, then history.

    Raises:
        InvalidAssumptionError: r or g not finite, r <= 0, or r <= g
        ReitNotFoundError: ticker has no snapshot
        NoHistoryError: ticker has no price series, or an empty one
    """
    validate_assumptions(discount_rate, growth_rate)

    snapshot = snapshot_repo.find_by_ticker(ticker)
    if snapshot is None:
        raise ReitNotFoundError()

    history = history_repo.find_by_ticker(ticker)
    if not history:
        raise NoHistoryError("No price history available")

    current_price = history[-1].price
    dividend_per_share = current_price * (snapshot.dividend_yield / 100)
    fair_value = ddm_fair_value(dividend_per_share, discount_rate, growth_rate)

    return ValuationResult(
        ticker=snapshot.ticker,
        current_price=current_price,
        dividend_per_share=dividend_per_share,
        discount_rate=discount_rate,
        growth_rate=growth_rate,
        fair_value=fair_value,
        margin_of_safety_pct=margin_of_safety_pct(fair_value, current_price),
    )


# ---------------------------------------------------------------------------
# Sensitivity grid
# ---------------------------------------------------------------------------

def sensitivity_rates(
    discount_rate: float,
    growth_rate: float,
    step: float = DEFAULT_SENSITIVITY_STEP,
) -> Tuple[List[float], List[float]]:
    """
    Discount rates from r-2s to r+2s (floored at 1%) and growth rates
    from g-s to g+3s.
    """
    discount_rates = [
        max(MIN_GRID_DISCOUNT_RATE, discount_rate - 2 * step),
        max(MIN_GRID_DISCOUNT_RATE, discount_rate - step),
        discount_rate,
        discount_rate + step,
        discount_rate + 2 * step,
    ]
    growth_rates = [
        growth_rate - step,
        growth_rate,
        growth_rate + step,
        growth_rate + 2 * step,
        growth_rate + 3 * step,
    ]
    return discount_rates, growth_rates


def build_sensitivity_grid(valuation: ValuationResult, step: float = DEFAULT_SENSITIVITY_STEP) -> SensitivityGrid:
    """
    Re-run the DDM around a base valuation, holding its dividend and price fixed.
    Cells where r <= g carry no fair value.
    """
    discount_rates, growth_rates = sensitivity_rates(valuation.discount_rate, valuation.growth_rate, step)

    rows = []
    for r in discount_rates:
        cells = []
        for g in growth_rates:
            fv = ddm_fair_value(valuation.dividend_per_share, r, g)
            mos = None if fv is None else margin_of_safety_pct(fv, valuation.current_price)
            cells.append(SensitivityCell(discount_rate=r, growth_rate=g, fair_value=fv, margin_of_safety_pct=mos))
        rows.append(SensitivityRow(discount_rate=r, cells=cells))

    return SensitivityGrid(
        ticker=valuation.ticker,
        current_price=valuation.current_price,
        dividend_per_share=valuation.dividend_per_share,
        discount_rates=discount_rates,
        growth_rates=growth_rates,
        rows=rows,
    )


def value_reit_sensitivity(
    snapshot_repo: ReitSnapshotRepository,
    history_repo: ReitHistoryRepository,
    ticker: str,
    discount_rate: float,
    growth_rate: float,
    step: float = DEFAULT_SENSITIVITY_STEP,
) -> SensitivityGrid:
    """Base valuation followed by its sensitivity grid; same errors as value_reit."""
    if not math.isfinite(step) or step <= 0:
        raise InvalidAssumptionError("Sensitivity step must be positive")
    valuation = value_reit(snapshot_repo, history_repo, ticker, discount_rate, growth_rate)
    return build_sensitivity_grid(valuation, step)
