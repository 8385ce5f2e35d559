"""Pytest fixtures for staggered-grid tests."""
import pytest
import jax
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

jax.config.update("jax_enable_x64", True)

from jax_mimetic import Geometry
from tests.invariants import Invariant, InvariantResult


@pytest.fixture
def key():
    """Fixed PRNG key so random fields are reproducible."""
    return jax.random.PRNGKey(2024)


@pytest.fixture
def geometry():
    """The 50 x 25 grid used throughout the operator tests."""
    return Geometry(nx=50, ny=25)


@pytest.fixture
def invariant_checker():
    """Returns a function that checks all invariants and collects failures."""
    def check_all(
        invariants: list[Invariant],
        field_in,
        field_out,
        label: str
    ) -> tuple[list[InvariantResult], list[tuple[str, InvariantResult]]]:
        results = [inv.check(field_in, field_out) for inv in invariants]
        failures = [(label, r) for r in results if not r.passed]
        return results, failures
    return check_all
