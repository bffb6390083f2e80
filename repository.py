"""
Snapshot and history stores for REIT data.

Both stores are read-only. The in-memory variants are seeded at construction
time (tests, local scenarios); the file variants load a JSON file once and
then serve from memory.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from models import ReitHistorySnapshot, ReitSnapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class ReitSnapshotRepository(ABC):
    """Abstraction over how REIT snapshots are stored and retrieved."""

    @abstractmethod
    def find_all(self) -> List[ReitSnapshot]:
        """Return every snapshot in the store."""
        pass

    @abstractmethod
    def find_by_ticker(self, ticker: str) -> Optional[ReitSnapshot]:
        """
        Find a single snapshot by ticker (case-insensitive).

        Returns:
            The snapshot, or None when no REIT matches
        """
        pass


class ReitHistoryRepository(ABC):
    """Abstraction over per-ticker price history."""

    @abstractmethod
    def find_by_ticker(self, ticker: str) -> Optional[List[ReitHistorySnapshot]]:
        """
        Fetch the price series for a ticker.

        Returns:
            Series sorted ascending by date, or None if the ticker has no history
        """
        pass


# ---------------------------------------------------------------------------
# Snapshot stores
# ---------------------------------------------------------------------------

class InMemoryReitSnapshotRepository(ReitSnapshotRepository):
    """Snapshot store seeded with a list of records."""

    def __init__(self, snapshots: Iterable):
        self._snapshots = [
            s if isinstance(s, ReitSnapshot) else ReitSnapshot.model_validate(s)
            for s in snapshots
        ]

    def find_all(self) -> List[ReitSnapshot]:
        return list(self._snapshots)

    def find_by_ticker(self, ticker: str) -> Optional[ReitSnapshot]:
        wanted = ticker.upper()
        for snapshot in self._snapshots:
            if snapshot.ticker.upper() == wanted:
                return snapshot
        return None


class FileReitSnapshotRepository(InMemoryReitSnapshotRepository):
    """Loads a JSON array of snapshots from disk."""

    def __init__(self, file_path: str):
        self.file_path = str(Path(file_path).resolve())
        if not Path(self.file_path).exists():
            raise FileNotFoundError(f"Snapshot file not found: {self.file_path}")

        with open(self.file_path, 'r') as f:
            raw = json.load(f)

        super().__init__(raw)
        logger.info(f"Loaded {len(self._snapshots)} REIT snapshots from {self.file_path}")


# ---------------------------------------------------------------------------
# History stores
# ---------------------------------------------------------------------------

class InMemoryReitHistoryRepository(ReitHistoryRepository):
    """History store keyed by ticker; keys match case-insensitively."""

    def __init__(self, history: Dict[str, Iterable]):
        self._history: Dict[str, List[ReitHistorySnapshot]] = {}
        for ticker, series in history.items():
            self._history[ticker.upper()] = [
                p if isinstance(p, ReitHistorySnapshot) else ReitHistorySnapshot.model_validate(p)
                for p in series
            ]

    def find_by_ticker(self, ticker: str) -> Optional[List[ReitHistorySnapshot]]:
        series = self._history.get(ticker.upper())
        if series is None:
            return None
        # ISO dates sort chronologically as strings
        return sorted(series, key=lambda p: p.date)

    def tickers(self) -> List[str]:
        return sorted(self._history)


class FileReitHistoryRepository(InMemoryReitHistoryRepository):
    """Loads a JSON object of ``{ticker: [{date, price}, ...]}`` from disk."""

    def __init__(self, file_path: str):
        self.file_path = str(Path(file_path).resolve())
        if not Path(self.file_path).exists():
            raise FileNotFoundError(f"History file not found: {self.file_path}")

        with open(self.file_path, 'r') as f:
            raw = json.load(f)

        super().__init__(raw)
        logger.info(f"Loaded price history for {len(self._history)} tickers from {self.file_path}")
