"""Pytest configuration and fixtures."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from stableswap.api.endpoints import get_quoter
from stableswap.api.main import app
from stableswap.models.pool import PoolSnapshot
from stableswap.quoter import Quoter
from tests.helpers import NOW, make_pool


@pytest.fixture
def balanced_pool() -> PoolSnapshot:
    """A balanced 1M/1M pool at A=1000 with a 0.30% fee."""
    return make_pool()


@pytest.fixture
def quoter() -> Quoter:
    """A quoter whose clock is pinned to NOW."""
    return Quoter(clock=lambda: NOW)


@pytest.fixture
def client(quoter: Quoter) -> Iterator[TestClient]:
    """Test client for the API with the pinned-clock quoter injected."""
    app.dependency_overrides[get_quoter] = lambda: quoter
    yield TestClient(app)
    app.dependency_overrides.clear()
