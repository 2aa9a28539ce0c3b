"""Tests for solver configuration."""

import dataclasses

import pytest

from stableswap.config import DEFAULT_SOLVER_CONFIG, SolverConfig
from stableswap.constants import NEWTON_ITERATIONS


class TestSolverConfig:
    """Tests for SolverConfig."""

    def test_defaults(self):
        assert DEFAULT_SOLVER_CONFIG.max_iterations == NEWTON_ITERATIONS == 255
        assert DEFAULT_SOLVER_CONFIG.tolerance == 1

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_SOLVER_CONFIG.max_iterations = 10  # type: ignore[misc]

    @pytest.mark.parametrize("kwargs", [{"max_iterations": 0}, {"tolerance": -1}])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            SolverConfig(**kwargs)
