"""Discrete L2 inner products, norms and quadrature on staggered grids.

All products are normalized by ``nx * ny`` so that a uniform field of ones
integrates to one over the unit square. Ghost values never contribute.
Edges on the domain boundary carry weight 1/2, boundary nodes 1/2 and
corner nodes 1/4 (trapezoidal rule).
"""

import jax
import jax.numpy as jnp
from jax import Array, jit

from jax_mimetic.core.geometry import trapezoid_weights
from jax_mimetic.core.grid_data import CellData, EdgeData, GridData, NodeData
from jax_mimetic.input_validation import validate_kind, validate_same_grid


@jit
def _cell_dot(p1: CellData, p2: CellData) -> Array:
    total = jnp.sum(p1.interior * p2.interior)
    return total / (p1.nx * p1.ny)


@jit
def _edge_dot(q1: EdgeData, q2: EdgeData) -> Array:
    nx, ny = q1.nx, q1.ny
    # Drop ghost columns of qx and ghost rows of qy, then half-weight the walls
    wx = trapezoid_weights(nx)[:, None]
    wy = trapezoid_weights(ny)[None, :]
    total = jnp.sum(wx * q1.qx[:, 1:-1] * q2.qx[:, 1:-1])
    total = total + jnp.sum(wy * q1.qy[1:-1, :] * q2.qy[1:-1, :])
    return total / (nx * ny)


@jit
def _node_dot(s1: NodeData, s2: NodeData) -> Array:
    nx, ny = s1.nx, s1.ny
    w = trapezoid_weights(nx)[:, None] * trapezoid_weights(ny)[None, :]
    return jnp.sum(w * s1.data * s2.data) / (nx * ny)


_DOT_KERNELS = {
    CellData: _cell_dot,
    EdgeData: _edge_dot,
    NodeData: _node_dot,
}


def dot(a: GridData, b: GridData) -> Array:
    """Inner product of two containers of the same kind on the same grid.

    Args:
        a, b: CellData, EdgeData or NodeData with equal (nx, ny)

    Returns:
        0-d array holding the weighted sum divided by nx*ny

    Raises:
        TypeMismatchError: If kinds or grids differ
    """
    validate_kind(a, GridData, "dot")
    validate_same_grid(a, b, "dot")
    return _DOT_KERNELS[type(a)](a, b)


def norm(a: GridData) -> Array:
    """L2 norm, ``sqrt(dot(a, a))``."""
    return jnp.sqrt(dot(a, a))


def integrate(a: GridData) -> Array:
    """Quadrature of ``a`` over the unit domain.

    Computed as the inner product with a container of the same kind filled
    with ones. For EdgeData this is the sum of the integrals of both
    components.
    """
    validate_kind(a, GridData, "integrate")
    ones = jax.tree_util.tree_map(jnp.ones_like, a)
    return dot(a, ones)
