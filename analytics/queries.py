"""
List, lookup and aggregate queries over REIT snapshots and price history.
"""

from typing import Iterable, List, Optional, Union

from models import ReitHistorySnapshot, ReitSnapshot, ReitSummary, SortKey, SortOrder
from repository import ReitHistoryRepository, ReitSnapshotRepository
from .errors import NoHistoryError, ReitNotFoundError


SORT_ATTRIBUTES = {
    SortKey.TICKER: "ticker",
    SortKey.DIVIDEND_YIELD: "dividend_yield",
    SortKey.TOTAL_RETURN_1Y: "total_return_1y",
}


def list_reits(
    snapshots: Iterable[ReitSnapshot],
    sector: Optional[str] = None,
    min_dividend_yield: Optional[float] = None,
    sort_by: Optional[Union[SortKey, str]] = None,
    order: Optional[Union[SortOrder, str]] = None,
) -> List[ReitSnapshot]:
    """
    Filter and sort snapshots for the overview screen.

    Args:
        snapshots: Full snapshot collection (left untouched)
        sector: Exact sector name to keep; empty means no filter
        min_dividend_yield: Inclusive lower bound on dividend yield (percent)
        sort_by: 'ticker', 'dividendYield' or 'totalReturn1Y'
        order: 'asc' (default) or 'desc'

    Returns:
        New list of matching snapshots. Without sort_by the result is
        ticker ascending.
    """
    result = list(snapshots)

    if sector:
        result = [s for s in result if s.sector == sector]

    if min_dividend_yield is not None:
        result = [s for s in result if s.dividend_yield >= min_dividend_yield]

    if sort_by is None:
        return sorted(result, key=lambda s: s.ticker)

    attr = SORT_ATTRIBUTES[SortKey(sort_by)]
    descending = order is not None and SortOrder(order) == SortOrder.DESC
    return sorted(result, key=lambda s: getattr(s, attr), reverse=descending)


def get_reit(snapshot_repo: ReitSnapshotRepository, ticker: str) -> ReitSnapshot:
    """Look up one REIT by ticker, raising ReitNotFoundError when absent."""
    snapshot = snapshot_repo.find_by_ticker(ticker)
    if snapshot is None:
        raise ReitNotFoundError()
    return snapshot


def get_history(
    snapshot_repo: ReitSnapshotRepository,
    history_repo: ReitHistoryRepository,
    ticker: str,
) -> List[ReitHistorySnapshot]:
    """
    Price series for a REIT, ascending by date.

    Raises:
        ReitNotFoundError: ticker has no snapshot
        NoHistoryError: ticker has a snapshot but no series
    """
    get_reit(snapshot_repo, ticker)

    history = history_repo.find_by_ticker(ticker)
    if history is None:
        raise NoHistoryError()
    return history


def summarize_reits(snapshots: Iterable[ReitSnapshot]) -> ReitSummary:
    """Headline count, average yield and best 1Y performer."""
    snapshots = list(snapshots)
    total = len(snapshots)

    avg_yield = sum(s.dividend_yield for s in snapshots) / total if total else 0.0

    best = None
    for s in snapshots:
        if best is None or s.total_return_1y > best.total_return_1y:
            best = s

    return ReitSummary(total_reits=total, avg_dividend_yield=avg_yield, best_by_return=best)


def list_sectors(snapshots: Iterable[ReitSnapshot]) -> List[str]:
    return sorted({s.sector for s in snapshots})
