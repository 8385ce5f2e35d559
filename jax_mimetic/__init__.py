"""jax-mimetic: mimetic finite-difference operators on 2D staggered grids."""

import jax

# Identities are checked to ~1e-13, which needs double precision
jax.config.update("jax_enable_x64", True)

__version__ = "0.1.0"

# Core classes
from jax_mimetic.core.geometry import Geometry
from jax_mimetic.core.grid_data import GridData, CellData, EdgeData, NodeData

# Errors
from jax_mimetic.input_validation import (
    ValidationError,
    ShapeMismatchError,
    TypeMismatchError,
)

# Inner products
from jax_mimetic.inner_products import dot, norm, integrate

# Differencing operators
from jax_mimetic.operators import (
    divergence,
    gradient,
    rot,
    curl,
    laplacian,
    translate,
)

# Submodules for qualified imports
from jax_mimetic import operators
from jax_mimetic import inner_products
from jax_mimetic import diagnostics
from jax_mimetic import config

__all__ = [
    # Core classes
    "Geometry",
    "GridData",
    "CellData",
    "EdgeData",
    "NodeData",
    # Errors
    "ValidationError",
    "ShapeMismatchError",
    "TypeMismatchError",
    # Inner products
    "dot",
    "norm",
    "integrate",
    # Operators
    "divergence",
    "gradient",
    "rot",
    "curl",
    "laplacian",
    "translate",
    # Submodules
    "operators",
    "inner_products",
    "diagnostics",
    "config",
]
