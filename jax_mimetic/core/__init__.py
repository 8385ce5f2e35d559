"""Core grid model for jax-mimetic."""

from jax_mimetic.core.geometry import Geometry
from jax_mimetic.core.grid_data import GridData, CellData, EdgeData, NodeData

__all__ = ["Geometry", "GridData", "CellData", "EdgeData", "NodeData"]
