"""Grid dimension tag, padded shapes and quadrature weights.

Index conventions (0-based, NX x NY interior cells):

    CellData   (NX+2, NY+2)  interior [1:NX+1, 1:NY+1], one ghost layer
    EdgeData.qx (NX+1, NY+2)  boundary rows 0, NX; ghost columns 0, NY+1
    EdgeData.qy (NX+2, NY+1)  boundary columns 0, NY; ghost rows 0, NX+1
    NodeData   (NX+1, NY+1)  no ghosts

A node with index i_n sits at cell index i_c = i_n + 1/2.
"""

from dataclasses import dataclass
from typing import Tuple
import jax.numpy as jnp
from jax import Array

from jax_mimetic.input_validation import (
    ValidationError,
    validate_grid_dimensions,
)


def trapezoid_weights(n: int) -> Array:
    """1-D trapezoid weights over the n+1 node positions of an axis."""
    return jnp.ones(n + 1).at[0].set(0.5).at[-1].set(0.5)


@dataclass(frozen=True)
class Geometry:
    """Uniform 2-D staggered grid with ``nx`` x ``ny`` interior cells.

    Operators work in index space; ``lx`` and ``ly`` only feed the physical
    coordinate helpers.
    """

    nx: int
    ny: int
    lx: float = 1.0
    ly: float = 1.0

    def __post_init__(self):
        validate_grid_dimensions(self.nx, self.ny)
        if self.lx <= 0 or self.ly <= 0:
            raise ValidationError(
                f"Domain lengths must be positive, got lx={self.lx}, ly={self.ly}"
            )

    @property
    def shape_tag(self) -> Tuple[int, int]:
        return (self.nx, self.ny)

    @property
    def dx(self) -> float:
        """Cell width in x."""
        return self.lx / self.nx

    @property
    def dy(self) -> float:
        """Cell width in y."""
        return self.ly / self.ny

    # Padded storage shapes

    @property
    def cell_shape(self) -> Tuple[int, int]:
        return (self.nx + 2, self.ny + 2)

    @property
    def edge_x_shape(self) -> Tuple[int, int]:
        return (self.nx + 1, self.ny + 2)

    @property
    def edge_y_shape(self) -> Tuple[int, int]:
        return (self.nx + 2, self.ny + 1)

    @property
    def node_shape(self) -> Tuple[int, int]:
        return (self.nx + 1, self.ny + 1)

    # Quadrature weights (before the 1/(nx*ny) normalization)

    @property
    def trapezoid_x(self) -> Array:
        """Weights of the nx+1 node positions along x: 1/2 at the walls."""
        return trapezoid_weights(self.nx)

    @property
    def trapezoid_y(self) -> Array:
        return trapezoid_weights(self.ny)

    @property
    def node_weights(self) -> Array:
        """Interior nodes 1, boundary nodes 1/2, corners 1/4."""
        return self.trapezoid_x[:, None] * self.trapezoid_y[None, :]

    # Physical coordinates, including ghost locations

    @property
    def x_cell(self) -> Array:
        """x of cell centres, ghosts included (first ghost at -dx/2)."""
        return (jnp.arange(self.nx + 2) - 0.5) * self.dx

    @property
    def y_cell(self) -> Array:
        return (jnp.arange(self.ny + 2) - 0.5) * self.dy

    @property
    def x_node(self) -> Array:
        """x of nodes, from 0 to lx."""
        return jnp.arange(self.nx + 1) * self.dx

    @property
    def y_node(self) -> Array:
        return jnp.arange(self.ny + 1) * self.dy

    def cell_grid(self) -> Tuple[Array, Array]:
        """2-D (x, y) coordinates of cell centres, shape ``cell_shape``."""
        return jnp.meshgrid(self.x_cell, self.y_cell, indexing="ij")

    def edge_x_grid(self) -> Tuple[Array, Array]:
        """2-D (x, y) coordinates of x-edges, shape ``edge_x_shape``."""
        return jnp.meshgrid(self.x_node, self.y_cell, indexing="ij")

    def edge_y_grid(self) -> Tuple[Array, Array]:
        """2-D (x, y) coordinates of y-edges, shape ``edge_y_shape``."""
        return jnp.meshgrid(self.x_cell, self.y_node, indexing="ij")

    def node_grid(self) -> Tuple[Array, Array]:
        """2-D (x, y) coordinates of nodes, shape ``node_shape``."""
        return jnp.meshgrid(self.x_node, self.y_node, indexing="ij")

    @classmethod
    def from_config(cls, config: dict) -> "Geometry":
        """Create Geometry from configuration dictionary."""
        return cls(
            nx=int(config["nx"]),
            ny=int(config["ny"]),
            lx=float(config.get("lx", 1.0)),
            ly=float(config.get("ly", 1.0)),
        )
