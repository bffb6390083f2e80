"""
Pydantic data models for the REIT analytics system.

These models enforce type safety and validation for every entity flowing
between the stores, the analytics engines and the API. Attributes are
snake_case in Python and camelCase on the wire (e.g. ``dividendYield``);
both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SortKey(str, Enum):
    TICKER = "ticker"
    DIVIDEND_YIELD = "dividendYield"
    TOTAL_RETURN_1Y = "totalReturn1Y"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ---------------------------------------------------------------------------
# Core Entities
# ---------------------------------------------------------------------------

class ReitSnapshot(BaseModel):
    """
    Read-only summary metrics for a single REIT.
    Drives overview lists and simple comparisons; carries no time series.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    ticker: str
    name: str
    sector: str
    dividend_yield: float = Field(alias="dividendYield")       # percent
    total_return_1y: float = Field(alias="totalReturn1Y")      # percent


class ReitHistorySnapshot(BaseModel):
    """One closing price observation for a REIT."""
    model_config = ConfigDict(frozen=True)

    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    price: float = Field(gt=0)


# ---------------------------------------------------------------------------
# Derived Results
# ---------------------------------------------------------------------------

class ValuationResult(BaseModel):
    """Gordon Growth DDM valuation, recomputed on every request."""
    model_config = ConfigDict(populate_by_name=True)

    ticker: str
    model: str = "DDM"
    current_price: float = Field(alias="currentPrice")
    dividend_per_share: float = Field(alias="dividendPerShare")
    discount_rate: float = Field(alias="discountRate")
    growth_rate: float = Field(alias="growthRate")
    fair_value: float = Field(alias="fairValue")
    margin_of_safety_pct: float = Field(alias="marginOfSafetyPct")


class SensitivityCell(BaseModel):
    """Fair value at one (discount, growth) pair; null where r <= g."""
    model_config = ConfigDict(populate_by_name=True)

    discount_rate: float = Field(alias="discountRate")
    growth_rate: float = Field(alias="growthRate")
    fair_value: Optional[float] = Field(default=None, alias="fairValue")
    margin_of_safety_pct: Optional[float] = Field(default=None, alias="marginOfSafetyPct")


class SensitivityRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    discount_rate: float = Field(alias="discountRate")
    cells: List[SensitivityCell]


class SensitivityGrid(BaseModel):
    """Fair value across a band of discount and growth assumptions."""
    model_config = ConfigDict(populate_by_name=True)

    ticker: str
    current_price: float = Field(alias="currentPrice")
    dividend_per_share: float = Field(alias="dividendPerShare")
    discount_rates: List[float] = Field(alias="discountRates")
    growth_rates: List[float] = Field(alias="growthRates")
    rows: List[SensitivityRow]


class ReitSummary(BaseModel):
    """Headline aggregates over a list of REITs."""
    model_config = ConfigDict(populate_by_name=True)

    total_reits: int = Field(alias="totalReits")
    avg_dividend_yield: float = Field(alias="avgDividendYield")
    best_by_return: Optional[ReitSnapshot] = Field(default=None, alias="bestByReturn")
