"""Mimetic differencing operators on 2-D staggered grids.

All operators act in index space: no grid spacing enters the stencils. The
pairs are built so that the discrete identities

    divergence(curl(s)) == 0        rot(gradient(p)) == 0
    dot(divergence(q), p) == -dot(q, gradient(p))   (p odd across the walls)
    dot(rot(q), s) == dot(q, curl(s))               (s zero on the boundary)

hold to roundoff. Boundary conditions are never imposed here: callers write
ghost and boundary slots before invoking an operator.

The module has two layers. The ``*_stencil`` functions are JIT-compiled and
act on raw padded arrays. The typed operators check the container kind and
wrap the result in the right container.
"""

import logging
from typing import Tuple
import jax.numpy as jnp
from jax import Array, jit

from jax_mimetic.core.grid_data import CellData, EdgeData, NodeData
from jax_mimetic.input_validation import (
    TypeMismatchError,
    validate_kind,
    validate_same_grid,
)

log = logging.getLogger(__name__)


# ============================================================================
# Array-level stencils
# ============================================================================

@jit
def divergence_stencil(qx: Array, qy: Array) -> Array:
    """Net outflow of edge fluxes from each interior cell.

    Args:
        qx: x-edge values, shape (nx+1, ny+2)
        qy: y-edge values, shape (nx+2, ny+1)

    Returns:
        Cell array of shape (nx+2, ny+2) with zero ghosts
    """
    div = jnp.diff(qx[:, 1:-1], axis=0) + jnp.diff(qy[1:-1, :], axis=1)
    p = jnp.zeros((qy.shape[0], qx.shape[1]), dtype=div.dtype)
    return p.at[1:-1, 1:-1].set(div)


@jit
def gradient_stencil(p: Array) -> Tuple[Array, Array]:
    """Differences of cell values across every stored edge.

    qx[i, j] = p[i+1, j] - p[i, j] and qy[i, j] = p[i, j+1] - p[i, j]. Ghost
    edges are filled from ghost cells too, which keeps rot(gradient(p)) zero
    on boundary nodes.
    """
    return jnp.diff(p, axis=0), jnp.diff(p, axis=1)


@jit
def rot_stencil(qx: Array, qy: Array) -> Array:
    """Circulation of edge data around every node, boundary nodes included.

    w[i, j] = qx[i, j] - qx[i, j+1] + qy[i+1, j] - qy[i, j]
    """
    return jnp.diff(qy, axis=0) - jnp.diff(qx, axis=1)


@jit
def curl_stencil(s: Array) -> Tuple[Array, Array]:
    """Perpendicular gradient of node data, the adjoint of ``rot_stencil``.

    qx[i, j] = s[i, j] - s[i, j-1] on columns 1..ny and
    qy[i, j] = s[i-1, j] - s[i, j] on rows 1..nx; ghost edges are zero.
    """
    nx, ny = s.shape[0] - 1, s.shape[1] - 1
    qx = jnp.zeros((nx + 1, ny + 2), dtype=s.dtype)
    qy = jnp.zeros((nx + 2, ny + 1), dtype=s.dtype)
    qx = qx.at[:, 1:-1].set(jnp.diff(s, axis=1))
    qy = qy.at[1:-1, :].set(-jnp.diff(s, axis=0))
    return qx, qy


@jit
def laplacian_stencil(p: Array) -> Array:
    """Five-point Laplacian on interior cells; ghosts of the result are zero.

    Equal to divergence_stencil(*gradient_stencil(p)) up to roundoff.
    """
    center = p[1:-1, 1:-1]
    d2x = (p[2:, 1:-1] - center) - (center - p[:-2, 1:-1])
    d2y = (p[1:-1, 2:] - center) - (center - p[1:-1, :-2])
    return jnp.zeros_like(p).at[1:-1, 1:-1].set(d2x + d2y)


@jit
def translate_stencil(qx: Array, qy: Array) -> Tuple[Array, Array]:
    """Interpolate each component onto the other component's edges.

    The new qy on rows 1..nx is the average of the four x-edges around each
    y-edge; the new qx on columns 1..ny is the average of the four y-edges
    around each x-edge. Ghost edges of the result are zero.
    """
    def four_point(a):
        return 0.25 * (a[:-1, :-1] + a[1:, :-1] + a[:-1, 1:] + a[1:, 1:])

    new_qx = jnp.zeros_like(qx).at[:, 1:-1].set(four_point(qy))
    new_qy = jnp.zeros_like(qy).at[1:-1, :].set(four_point(qx))
    return new_qx, new_qy


# ============================================================================
# Typed operators
# ============================================================================

def divergence(q: EdgeData) -> CellData:
    """Discrete divergence of edge data, returned as cell data.

    Only interior cells are computed; the result's ghosts are zero.

    Raises:
        TypeMismatchError: If q is not EdgeData
    """
    validate_kind(q, EdgeData, "divergence")
    log.debug("divergence of %r", q)
    return CellData(divergence_stencil(q.qx, q.qy))


def gradient(p: CellData) -> EdgeData:
    """Discrete gradient of cell data, returned as edge data.

    Boundary edges use p's ghost cells, so Dirichlet or Neumann data must be
    written into the ghosts beforehand.

    Raises:
        TypeMismatchError: If p is not CellData
    """
    validate_kind(p, CellData, "gradient")
    log.debug("gradient of %r", p)
    return EdgeData(*gradient_stencil(p.data))


def rot(q: EdgeData) -> NodeData:
    """Scalar curl (vorticity) of edge data at every node.

    Raises:
        TypeMismatchError: If q is not EdgeData
    """
    validate_kind(q, EdgeData, "rot")
    log.debug("rot of %r", q)
    return NodeData(rot_stencil(q.qx, q.qy))


def curl(field):
    """Curl of node or edge data.

    For NodeData ``s`` this is the perpendicular gradient, an EdgeData field
    with ``divergence(curl(s)) == 0``. For EdgeData it is the same as ``rot``.

    Raises:
        TypeMismatchError: For any other kind
    """
    if isinstance(field, NodeData):
        log.debug("curl of %r", field)
        return EdgeData(*curl_stencil(field.data))
    if isinstance(field, EdgeData):
        return rot(field)
    raise TypeMismatchError(
        f"curl expects NodeData or EdgeData, got {type(field).__name__}"
    )


def laplacian(p: CellData) -> CellData:
    """Discrete Laplacian, divergence(gradient(p)) as one fused stencil.

    Interior cells next to the wall read p's ghosts.

    Raises:
        TypeMismatchError: If p is not CellData
    """
    validate_kind(p, CellData, "laplacian")
    log.debug("laplacian of %r", p)
    return CellData(laplacian_stencil(p.data))


def translate(dest: EdgeData, src: EdgeData) -> EdgeData:
    """Overwrite ``dest`` with ``src`` interpolated across the stagger.

    x-components of src become y-components of dest and vice versa, each
    value the average of the four nearest edges of the other orientation. A
    uniform src therefore gives a uniform dest of the same magnitude, with
    the components swapped. ``dest`` may be ``src``.

    This mutates ``dest`` and returns it.

    Raises:
        TypeMismatchError: If either argument is not EdgeData, or grids differ
    """
    validate_kind(dest, EdgeData, "translate")
    validate_same_grid(dest, src, "translate")
    log.debug("translate %r into %r", src, dest)
    dest.qx, dest.qy = translate_stencil(src.qx, src.qy)
    return dest
