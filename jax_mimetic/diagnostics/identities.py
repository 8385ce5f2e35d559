"""Residual checks of the discrete vector-calculus identities.

Each check draws random fields on a geometry, evaluates one identity and
reports the residual relative to the magnitude of the fields involved.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import logging
from typing import List, Optional
import jax
import jax.numpy as jnp

from jax_mimetic.core.geometry import Geometry
from jax_mimetic.core.grid_data import CellData, EdgeData, NodeData
from jax_mimetic.inner_products import dot, norm
from jax_mimetic.operators import (
    curl,
    divergence,
    gradient,
    laplacian,
    rot,
    translate,
)

log = logging.getLogger(__name__)

_TINY = 1e-300


@dataclass
class IdentityResult:
    """Outcome of one identity check.

    Attributes:
        name: Identifier of the identity.
        value: Relative residual.
        tolerance: Largest residual accepted.
        passed: Whether value <= tolerance.
        message: Human-readable summary.
    """
    name: str
    value: float
    tolerance: float
    passed: bool
    message: str = ""

    def to_dict(self) -> dict:
        """Serialize to dict for YAML/JSON output."""
        d = {
            'value': self.value,
            'tolerance': self.tolerance,
            'pass': self.passed,
        }
        if self.message:
            d['message'] = self.message
        return d


def random_cell_data(key: jax.Array, geometry: Geometry) -> CellData:
    return CellData(jax.random.normal(key, geometry.cell_shape))


def random_edge_data(key: jax.Array, geometry: Geometry) -> EdgeData:
    kx, ky = jax.random.split(key)
    return EdgeData(
        jax.random.normal(kx, geometry.edge_x_shape),
        jax.random.normal(ky, geometry.edge_y_shape),
    )


def random_node_data(key: jax.Array, geometry: Geometry) -> NodeData:
    return NodeData(jax.random.normal(key, geometry.node_shape))


class IdentityCheck(ABC):
    """Base class for identity checks."""

    def __init__(self, tolerance: float = 1e-13):
        self.tolerance = tolerance

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the identity."""
        pass

    @abstractmethod
    def residual(self, geometry: Geometry, key: jax.Array) -> float:
        """Relative residual of the identity for random fields."""
        pass

    def check(self, geometry: Geometry, key: jax.Array) -> IdentityResult:
        value = self.residual(geometry, key)
        passed = value <= self.tolerance
        result = IdentityResult(
            name=self.name,
            value=value,
            tolerance=self.tolerance,
            passed=passed,
            message=f"{self.name}: residual {value:.2e} on {geometry.nx} x {geometry.ny} grid",
        )
        if passed:
            log.debug(result.message)
        else:
            log.warning(f"{result.message} exceeds tolerance {self.tolerance:.2e}")
        return result


class DivergenceOfCurl(IdentityCheck):
    """divergence(curl(s)) vanishes for any node data s."""

    @property
    def name(self) -> str:
        return "divergence_of_curl"

    def residual(self, geometry, key):
        s = random_node_data(key, geometry)
        return float(norm(divergence(curl(s))) / jnp.maximum(norm(s), _TINY))


class RotOfGradient(IdentityCheck):
    """rot(gradient(p)) vanishes at every node, ghosts of p included."""

    @property
    def name(self) -> str:
        return "rot_of_gradient"

    def residual(self, geometry, key):
        p = random_cell_data(key, geometry)
        return float(norm(rot(gradient(p))) / jnp.maximum(norm(p), _TINY))


class LaplacianConsistency(IdentityCheck):
    """The fused Laplacian equals divergence(gradient(p))."""

    @property
    def name(self) -> str:
        return "laplacian_consistency"

    def residual(self, geometry, key):
        p = random_cell_data(key, geometry)
        composed = divergence(gradient(p))
        return float(norm(laplacian(p) - composed) / jnp.maximum(norm(composed), _TINY))


class GradientAdjoint(IdentityCheck):
    """dot(divergence(q), p) == -dot(q, gradient(p)) for p odd across the walls."""

    @property
    def name(self) -> str:
        return "gradient_adjoint"

    def residual(self, geometry, key):
        kq, kp = jax.random.split(key)
        q = random_edge_data(kq, geometry)
        p = random_cell_data(kp, geometry)
        data = p.data
        data = data.at[0, :].set(-data[1, :]).at[-1, :].set(-data[-2, :])
        data = data.at[:, 0].set(-data[:, 1]).at[:, -1].set(-data[:, -2])
        p = p.replace(data=data)
        grad_p = gradient(p)
        lhs = dot(divergence(q), p)
        rhs = -dot(q, grad_p)
        scale = jnp.maximum(norm(q) * norm(grad_p), _TINY)
        return float(jnp.abs(lhs - rhs) / scale)


class CurlAdjoint(IdentityCheck):
    """dot(rot(q), s) == dot(q, curl(s)) for s vanishing on boundary nodes."""

    @property
    def name(self) -> str:
        return "curl_adjoint"

    def residual(self, geometry, key):
        kq, ks = jax.random.split(key)
        q = random_edge_data(kq, geometry)
        s = random_node_data(ks, geometry)
        interior = jnp.zeros(geometry.node_shape).at[1:-1, 1:-1].set(1.0)
        s = s.replace(data=s.data * interior)
        curl_s = curl(s)
        lhs = dot(rot(q), s)
        rhs = dot(q, curl_s)
        scale = jnp.maximum(norm(q) * norm(curl_s), _TINY)
        return float(jnp.abs(lhs - rhs) / scale)


class TranslationMagnitude(IdentityCheck):
    """Translating a uniform unit x-field gives a field of unit norm."""

    @property
    def name(self) -> str:
        return "translation_magnitude"

    def residual(self, geometry, key):
        src = EdgeData.full(geometry.nx, geometry.ny, qx=1.0)
        dest = translate(EdgeData.like(src), src)
        return float(jnp.abs(dot(dest, dest) - 1.0))


def default_checks(tolerance: float = 1e-13) -> List[IdentityCheck]:
    """One instance of every identity check."""
    return [
        DivergenceOfCurl(tolerance),
        RotOfGradient(tolerance),
        LaplacianConsistency(tolerance),
        GradientAdjoint(tolerance),
        CurlAdjoint(tolerance),
        TranslationMagnitude(tolerance),
    ]


def check_identities(
    geometry: Geometry,
    key: Optional[jax.Array] = None,
    tolerance: float = 1e-13,
) -> List[IdentityResult]:
    """Run every identity check on ``geometry``.

    Args:
        geometry: Grid to test on
        key: PRNG key for the random fields (defaults to PRNGKey(0))
        tolerance: Largest relative residual accepted

    Returns:
        One IdentityResult per check
    """
    if key is None:
        key = jax.random.PRNGKey(0)
    checks = default_checks(tolerance)
    keys = jax.random.split(key, len(checks))
    results = [check.check(geometry, k) for check, k in zip(checks, keys)]
    n_failed = sum(not r.passed for r in results)
    log.info(
        f"Checked {len(results)} identities on {geometry.nx} x {geometry.ny} grid: "
        f"{n_failed} failed"
    )
    return results
