"""
Data access layer for the REIT Analytics API.
Wires the snapshot and history stores to the analytics engines behind one
read-only query interface.
"""

from typing import List, Optional

from analytics import queries, valuation
from models import (
    ReitHistorySnapshot,
    ReitSnapshot,
    ReitSummary,
    SensitivityGrid,
    ValuationResult,
)
from repository import (
    FileReitHistoryRepository,
    FileReitSnapshotRepository,
    ReitHistoryRepository,
    ReitSnapshotRepository,
)
from .config import settings


class ReitDataProvider:
    """
    Provides REIT data from the snapshot and history stores.
    Every method is a pure read, so one instance can serve all requests.
    """

    def __init__(
        self,
        snapshot_repo: Optional[ReitSnapshotRepository] = None,
        history_repo: Optional[ReitHistoryRepository] = None,
    ):
        """
        Initialize the provider.

        Args:
            snapshot_repo: Snapshot store (defaults to the configured JSON file)
            history_repo: History store (defaults to the configured JSON file)
        """
        self.snapshot_repo = snapshot_repo or FileReitSnapshotRepository(settings.SNAPSHOT_FILE)
        self.history_repo = history_repo or FileReitHistoryRepository(settings.HISTORY_FILE)

    # ----------------------------------------------------------------
    # Snapshots
    # ----------------------------------------------------------------

    def list_reits(
        self,
        sector: Optional[str] = None,
        min_dividend_yield: Optional[float] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> List[ReitSnapshot]:
        """Filtered, sorted REIT snapshots."""
        return queries.list_reits(
            self.snapshot_repo.find_all(),
            sector=sector,
            min_dividend_yield=min_dividend_yield,
            sort_by=sort_by,
            order=order,
        )

    def get_summary(
        self,
        sector: Optional[str] = None,
        min_dividend_yield: Optional[float] = None,
    ) -> ReitSummary:
        """Dashboard aggregates over the filtered list."""
        return queries.summarize_reits(
            self.list_reits(sector=sector, min_dividend_yield=min_dividend_yield)
        )

    def get_all_sectors(self) -> List[str]:
        return queries.list_sectors(self.snapshot_repo.find_all())

    def get_reit(self, ticker: str) -> ReitSnapshot:
        return queries.get_reit(self.snapshot_repo, ticker)

    # ----------------------------------------------------------------
    # History
    # ----------------------------------------------------------------

    def get_history(self, ticker: str) -> List[ReitHistorySnapshot]:
        return queries.get_history(self.snapshot_repo, self.history_repo, ticker)

    # ----------------------------------------------------------------
    # Valuation
    # ----------------------------------------------------------------

    def get_valuation(self, ticker: str, discount_rate: float, growth_rate: float) -> ValuationResult:
        return valuation.value_reit(
            self.snapshot_repo, self.history_repo, ticker, discount_rate, growth_rate
        )

    def get_sensitivity(
        self,
        ticker: str,
        discount_rate: float,
        growth_rate: float,
        step: float = valuation.DEFAULT_SENSITIVITY_STEP,
    ) -> SensitivityGrid:
        return valuation.value_reit_sensitivity(
            self.snapshot_repo, self.history_repo, ticker, discount_rate, growth_rate, step
        )

    # ----------------------------------------------------------------
    # Stats
    # ----------------------------------------------------------------

    def get_stats(self) -> dict:
        """Counts of REITs, sectors and tickers with price history."""
        snapshots = self.snapshot_repo.find_all()
        with_history = sum(
            1 for s in snapshots if self.history_repo.find_by_ticker(s.ticker)
        )
        return {
            "total_reits": len(snapshots),
            "total_sectors": len(queries.list_sectors(snapshots)),
            "reits_with_history": with_history,
        }
