"""Pytest configuration and fixtures."""
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from hypothesis import HealthCheck, settings

from pair_rotation.models.distribution import Distribution
from pair_rotation.solver.history import HistoryLedger

# The autouse logging fixture is function-scoped; it holds no per-example state.
settings.register_profile(
    "pair_rotation",
    suppress_health_check=[HealthCheck.function_scoped_fixture, HealthCheck.too_slow],
)
settings.load_profile("pair_rotation")


@pytest.fixture(autouse=True)
def reset_app_logging():
    """Drop handlers installed by setup_logging so they never outlive a test's captured streams."""
    yield
    logging.getLogger("pair_rotation").handlers.clear()


@pytest.fixture
def roster4():
    return {"A", "B", "C", "D"}


@pytest.fixture
def roster3():
    return {"A", "B", "C"}


@pytest.fixture
def team():
    """Six-person team with real names."""
    return ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank"]


@pytest.fixture
def exhausted_history():
    """Every perfect matching of {A, B, C, D}, oldest first."""
    return HistoryLedger([
        Distribution.from_pairs([("A", "B"), ("C", "D")]),
        Distribution.from_pairs([("A", "C"), ("B", "D")]),
        Distribution.from_pairs([("A", "D"), ("B", "C")]),
    ])
