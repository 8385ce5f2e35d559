"""Field containers for cell-, edge- and node-centred grid data.

Every container carries the dimension tag ``(nx, ny)``, the number of
interior cells of the underlying grid, derived from the stored array shapes.
Binary operations require the same kind and the same tag.

Arithmetic is value-returning. The only in-place operations are
``negate_inplace`` and ``jax_mimetic.operators.translate``; since JAX arrays
are immutable, they rebind the container's array attributes.
"""

from dataclasses import dataclass, field
import logging
import numbers
from typing import Tuple
import jax
import jax.numpy as jnp
from jax import Array

from jax_mimetic.core.geometry import Geometry
from jax_mimetic.input_validation import (
    ShapeMismatchError,
    validate_grid_dimensions,
    validate_kind,
    validate_ndim,
    validate_same_grid,
    validate_shape,
)

log = logging.getLogger(__name__)


def _as_field_array(array, name: str) -> Array:
    array = jnp.asarray(array, dtype=jnp.float64)
    validate_ndim(array, name)
    return array


def _dims_from_shape(shape: Tuple[int, int], pad_x: int, pad_y: int, name: str) -> Tuple[int, int]:
    """Interior cell counts implied by a padded shape."""
    nx, ny = shape[0] - pad_x, shape[1] - pad_y
    if nx < 1 or ny < 1:
        raise ShapeMismatchError(
            f"{name} shape {tuple(shape)} implies a grid of {nx} x {ny} cells"
        )
    return nx, ny


def _is_scalar(value) -> bool:
    if isinstance(value, GridData):
        return False
    if isinstance(value, numbers.Number):
        return not isinstance(value, complex)
    return getattr(value, "shape", None) == ()


class GridData:
    """Base class of all data living on an ``nx`` x ``ny`` staggered grid."""

    # Defer numpy scalar arithmetic to the container's reflected operators
    __array_ufunc__ = None

    nx: int
    ny: int

    @property
    def shape_tag(self) -> Tuple[int, int]:
        """The dimension tag ``(nx, ny)``."""
        return (self.nx, self.ny)

    @property
    def geometry(self) -> Geometry:
        """Unit-domain geometry matching this container's tag."""
        return Geometry(self.nx, self.ny)

    # -- constructors --------------------------------------------------------

    @classmethod
    def zeros(cls, nx: int, ny: int) -> "GridData":
        raise NotImplementedError

    @classmethod
    def full(cls, nx: int, ny: int, value: float) -> "GridData":
        raise NotImplementedError

    @classmethod
    def like(cls, other: "GridData") -> "GridData":
        """Zero container of this kind sized to match ``other`` (any kind)."""
        validate_kind(other, GridData, "like()")
        return cls.zeros(other.nx, other.ny)

    @classmethod
    def from_geometry(cls, geometry: Geometry) -> "GridData":
        """Zero container of this kind on ``geometry``."""
        return cls.zeros(geometry.nx, geometry.ny)

    def copy(self) -> "GridData":
        return jax.tree_util.tree_map(lambda a: a, self)

    def replace(self, **arrays) -> "GridData":
        """Return a new container with the named arrays replaced.

        Raises:
            ShapeMismatchError: If the replacement changes the grid
        """
        children, _ = jax.tree_util.tree_flatten(self)
        current = dict(zip(self._array_names, children))
        unknown = set(arrays) - set(current)
        if unknown:
            raise TypeError(
                f"{type(self).__name__} has no arrays named {sorted(unknown)}"
            )
        current.update(arrays)
        new = type(self)(**current)
        if new.shape_tag != self.shape_tag:
            raise ShapeMismatchError(
                f"replace() changed the grid from {self.shape_tag} to {new.shape_tag}"
            )
        return new

    # -- arithmetic ----------------------------------------------------------

    def __neg__(self) -> "GridData":
        return jax.tree_util.tree_map(jnp.negative, self)

    def negate_inplace(self) -> "GridData":
        """Negate every stored value, ghosts included, on this container.

        Returns the same object; the previous values are lost.
        """
        negated = -self
        for name in self._array_names:
            setattr(self, name, getattr(negated, name))
        return self

    def __add__(self, other):
        if not isinstance(other, GridData):
            return NotImplemented
        validate_same_grid(self, other, "addition")
        return jax.tree_util.tree_map(jnp.add, self, other)

    def __sub__(self, other):
        if not isinstance(other, GridData):
            return NotImplemented
        validate_same_grid(self, other, "subtraction")
        return jax.tree_util.tree_map(jnp.subtract, self, other)

    def __mul__(self, c):
        if not _is_scalar(c):
            return NotImplemented
        return jax.tree_util.tree_map(lambda a: c * a, self)

    __rmul__ = __mul__

    def __truediv__(self, c):
        if not _is_scalar(c):
            return NotImplemented
        return jax.tree_util.tree_map(lambda a: a / c, self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nx={self.nx}, ny={self.ny})"


@dataclass(eq=False, repr=False)
class CellData(GridData):
    """Data at cell centres, padded with one ghost layer on every side.

    ``data`` has shape (nx+2, ny+2); interior cells are ``data[1:-1, 1:-1]``.
    """

    data: Array
    nx: int = field(init=False)
    ny: int = field(init=False)

    _array_names = ("data",)

    def __post_init__(self):
        self.data = _as_field_array(self.data, "CellData")
        self.nx, self.ny = _dims_from_shape(self.data.shape, 2, 2, "CellData")

    @classmethod
    def zeros(cls, nx: int, ny: int) -> "CellData":
        validate_grid_dimensions(nx, ny)
        log.debug("Allocating CellData on %d x %d grid", nx, ny)
        return cls(jnp.zeros((nx + 2, ny + 2)))

    @classmethod
    def full(cls, nx: int, ny: int, value: float) -> "CellData":
        validate_grid_dimensions(nx, ny)
        return cls(jnp.full((nx + 2, ny + 2), value, dtype=jnp.float64))

    def size(self) -> Tuple[int, int]:
        """Stored shape, ghosts included."""
        return tuple(self.data.shape)

    @property
    def interior(self) -> Array:
        return self.data[1:-1, 1:-1]


@dataclass(eq=False, repr=False)
class EdgeData(GridData):
    """Vector data on cell edges.

    ``qx`` (nx+1, ny+2) lives on x-faces: rows 0 and nx are the domain
    boundary, columns 0 and ny+1 are ghosts. ``qy`` (nx+2, ny+1) lives on
    y-faces: columns 0 and ny are the boundary, rows 0 and nx+1 are ghosts.
    """

    qx: Array
    qy: Array
    nx: int = field(init=False)
    ny: int = field(init=False)

    _array_names = ("qx", "qy")

    def __post_init__(self):
        self.qx = _as_field_array(self.qx, "EdgeData.qx")
        self.qy = _as_field_array(self.qy, "EdgeData.qy")
        nx, ny = _dims_from_shape(self.qx.shape, 1, 2, "EdgeData.qx")
        # qy must describe the same grid as qx
        validate_shape(self.qy, (nx + 2, ny + 1), f"EdgeData.qy for a {nx} x {ny} grid")
        self.nx, self.ny = nx, ny

    @classmethod
    def zeros(cls, nx: int, ny: int) -> "EdgeData":
        validate_grid_dimensions(nx, ny)
        log.debug("Allocating EdgeData on %d x %d grid", nx, ny)
        return cls(jnp.zeros((nx + 1, ny + 2)), jnp.zeros((nx + 2, ny + 1)))

    @classmethod
    def full(cls, nx: int, ny: int, qx: float = 0.0, qy: float = 0.0) -> "EdgeData":
        """Edge data with every stored x-edge equal to ``qx`` and y-edge to ``qy``."""
        validate_grid_dimensions(nx, ny)
        return cls(
            jnp.full((nx + 1, ny + 2), qx, dtype=jnp.float64),
            jnp.full((nx + 2, ny + 1), qy, dtype=jnp.float64),
        )

    def size(self) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Stored shapes of (qx, qy), ghosts and boundaries included."""
        return tuple(self.qx.shape), tuple(self.qy.shape)

    @property
    def interior(self) -> Tuple[Array, Array]:
        return self.qx[1:-1, 1:-1], self.qy[1:-1, 1:-1]


@dataclass(eq=False, repr=False)
class NodeData(GridData):
    """Data at cell corners. No ghosts: boundary nodes and corners are stored.

    ``data`` has shape (nx+1, ny+1); interior nodes are ``data[1:-1, 1:-1]``.
    """

    data: Array
    nx: int = field(init=False)
    ny: int = field(init=False)

    _array_names = ("data",)

    def __post_init__(self):
        self.data = _as_field_array(self.data, "NodeData")
        self.nx, self.ny = _dims_from_shape(self.data.shape, 1, 1, "NodeData")

    @classmethod
    def zeros(cls, nx: int, ny: int) -> "NodeData":
        validate_grid_dimensions(nx, ny)
        log.debug("Allocating NodeData on %d x %d grid", nx, ny)
        return cls(jnp.zeros((nx + 1, ny + 1)))

    @classmethod
    def full(cls, nx: int, ny: int, value: float) -> "NodeData":
        validate_grid_dimensions(nx, ny)
        return cls(jnp.full((nx + 1, ny + 1), value, dtype=jnp.float64))

    def size(self) -> Tuple[int, int]:
        """Stored shape (every node is stored)."""
        return tuple(self.data.shape)

    @property
    def interior(self) -> Array:
        return self.data[1:-1, 1:-1]


# Register containers as JAX pytrees. The tag travels as aux data so that
# unflattening never has to inspect (possibly abstract) leaves.
def _make_pytree(cls):
    names = cls._array_names

    def flatten(obj):
        return tuple(getattr(obj, name) for name in names), (obj.nx, obj.ny)

    def unflatten(aux_data, children):
        obj = object.__new__(cls)
        for name, child in zip(names, children):
            setattr(obj, name, child)
        obj.nx, obj.ny = aux_data
        return obj

    jax.tree_util.register_pytree_node(cls, flatten, unflatten)


for _cls in (CellData, EdgeData, NodeData):
    _make_pytree(_cls)
