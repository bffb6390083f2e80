"""Shared fixtures for the test suite."""

import pytest
from fastapi.testclient import TestClient

from api.data_access import ReitDataProvider
from api.main import create_app
from repository import InMemoryReitHistoryRepository, InMemoryReitSnapshotRepository


@pytest.fixture
def sample_snapshot():
    """Factory fixture: call with overrides to get a snapshot dict."""
    def _make(**overrides):
        snapshot = {
            "ticker": "O",
            "name": "Realty Income",
            "sector": "Retail",
            "dividendYield": 5.0,
            "totalReturn1Y": 3.2,
        }
        snapshot.update(overrides)
        return snapshot
    return _make


@pytest.fixture
def sample_snapshots():
    """Three REITs across three sectors, stored out of ticker order."""
    return [
        {"ticker": "PLD", "name": "Prologis", "sector": "Industrial", "dividendYield": 2.5, "totalReturn1Y": 8.1},
        {"ticker": "O", "name": "Realty Income", "sector": "Retail", "dividendYield": 5.0, "totalReturn1Y": 3.2},
        {"ticker": "AMT", "name": "American Tower", "sector": "Infrastructure", "dividendYield": 2.0, "totalReturn1Y": 6.4},
    ]


@pytest.fixture
def sample_history():
    """Price series keyed by ticker; O is stored out of date order, AMT is empty."""
    return {
        "O": [
            {"date": "2024-03-01", "price": 54.88},
            {"date": "2024-01-01", "price": 55.12},
            {"date": "2024-02-01", "price": 56.44},
        ],
        "PLD": [
            {"date": "2024-01-01", "price": 50.0},
            {"date": "2024-02-01", "price": 52.0},
        ],
        "AMT": [],
    }


@pytest.fixture
def snapshot_repo(sample_snapshots):
    return InMemoryReitSnapshotRepository(sample_snapshots)


@pytest.fixture
def history_repo(sample_history):
    return InMemoryReitHistoryRepository(sample_history)


@pytest.fixture
def provider(snapshot_repo, history_repo):
    return ReitDataProvider(snapshot_repo=snapshot_repo, history_repo=history_repo)


@pytest.fixture
def client(provider):
    """FastAPI TestClient over the in-memory sample data."""
    return TestClient(create_app(provider))
