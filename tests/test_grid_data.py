"""Tests for cell, edge and node data containers."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from jax_mimetic import (
    CellData,
    EdgeData,
    Geometry,
    GridData,
    NodeData,
    ShapeMismatchError,
    TypeMismatchError,
    ValidationError,
)


class TestCellData:
    """Cell-centred data with one ghost layer."""

    def test_size_from_array(self, key):
        """Wrapping a (nx+2, ny+2) array gives an nx x ny grid."""
        nx, ny = 50, 25
        p = CellData(jax.random.uniform(key, (nx + 2, ny + 2)))
        assert p.size() == (nx + 2, ny + 2)
        assert p.shape_tag == (nx, ny)
        assert isinstance(p, GridData)

    def test_zeros(self):
        p = CellData.zeros(50, 25)
        assert p.size() == (52, 27)
        assert p.data.dtype == jnp.float64
        assert jnp.all(p.data == 0.0)

    def test_full(self):
        p = CellData.full(4, 3, 2.5)
        assert jnp.all(p.data == 2.5)

    def test_interior_excludes_ghosts(self):
        p = CellData.zeros(6, 4)
        assert p.interior.shape == (6, 4)

    def test_like_sizes_from_any_kind(self):
        """CellData.like works from edge and node data of the same grid."""
        q = EdgeData.zeros(7, 3)
        s = NodeData.zeros(7, 3)
        assert CellData.like(q).size() == (9, 5)
        assert CellData.like(s).shape_tag == (7, 3)

    def test_like_rejects_raw_arrays(self):
        with pytest.raises(TypeMismatchError):
            CellData.like(jnp.zeros((4, 4)))

    def test_from_geometry(self):
        p = CellData.from_geometry(Geometry(5, 6))
        assert p.shape_tag == (5, 6)

    def test_accepts_numpy_arrays(self):
        p = CellData(np.ones((4, 5), dtype=np.float32))
        assert p.data.dtype == jnp.float64
        assert p.shape_tag == (2, 3)

    def test_rejects_too_small_array(self):
        """A (2, 5) array would leave no interior cells in x."""
        with pytest.raises(ShapeMismatchError):
            CellData(jnp.zeros((2, 5)))

    def test_rejects_non_2d_array(self):
        with pytest.raises(ShapeMismatchError):
            CellData(jnp.zeros((4, 4, 4)))

    def test_zeros_rejects_empty_grid(self):
        with pytest.raises(ValidationError):
            CellData.zeros(0, 3)

    def test_repr_shows_tag(self):
        assert repr(CellData.zeros(3, 2)) == "CellData(nx=3, ny=2)"


class TestEdgeData:
    """Edge data: x- and y-components on staggered faces."""

    def test_like_cell_data(self, key):
        """Edge data sized from cell data has padded component shapes."""
        nx, ny = 50, 25
        p = CellData(jax.random.uniform(key, (nx + 2, ny + 2)))
        q = EdgeData.like(p)
        assert q.qx.shape == (nx + 1, ny + 2)
        assert q.qy.shape == (nx + 2, ny + 1)
        assert q.shape_tag == (nx, ny)
        assert isinstance(q, GridData)

    def test_size_returns_both_shapes(self):
        q = EdgeData.zeros(4, 3)
        assert q.size() == ((5, 5), (6, 4))

    def test_from_arrays(self):
        q = EdgeData(jnp.ones((5, 5)), jnp.zeros((6, 4)))
        assert q.shape_tag == (4, 3)

    def test_inconsistent_components(self):
        """qx and qy implying different grids are rejected."""
        with pytest.raises(ShapeMismatchError):
            EdgeData(jnp.zeros((5, 5)), jnp.zeros((6, 5)))
        with pytest.raises(ShapeMismatchError):
            EdgeData(jnp.zeros((5, 5)), jnp.zeros((5, 4)))

    def test_full(self):
        q = EdgeData.full(3, 4, qx=1.0)
        assert jnp.all(q.qx == 1.0)
        assert jnp.all(q.qy == 0.0)

    def test_interior_shapes(self):
        qx, qy = EdgeData.zeros(5, 4).interior
        assert qx.shape == (4, 4)
        assert qy.shape == (5, 3)


class TestNodeData:
    """Node data without ghosts."""

    def test_zeros(self):
        nx, ny = 50, 25
        s = NodeData.zeros(nx, ny)
        assert s.size() == (nx + 1, ny + 1)
        assert s.shape_tag == (nx, ny)
        assert isinstance(s, GridData)

    def test_from_array(self):
        s = NodeData(jnp.ones((6, 9)))
        assert s.shape_tag == (5, 8)

    def test_like_cell_data(self):
        s = NodeData.like(CellData.zeros(5, 4))
        assert s.size() == (6, 5)

    def test_rejects_single_row(self):
        with pytest.raises(ShapeMismatchError):
            NodeData(jnp.ones((1, 4)))


class TestReplaceAndCopy:
    """Immutable-by-replacement updates."""

    def test_replace_returns_new_container(self):
        p = CellData.zeros(4, 4)
        p2 = p.replace(data=p.data.at[2, 2].set(1.0))
        assert float(p2.data[2, 2]) == 1.0
        assert float(p.data[2, 2]) == 0.0

    def test_replace_edge_component(self):
        q = EdgeData.zeros(3, 3)
        q2 = q.replace(qy=jnp.ones_like(q.qy))
        assert jnp.all(q2.qy == 1.0)
        assert jnp.all(q2.qx == q.qx)

    def test_replace_rejects_grid_change(self):
        p = CellData.zeros(4, 4)
        with pytest.raises(ShapeMismatchError):
            p.replace(data=jnp.zeros((7, 6)))

    def test_replace_rejects_unknown_array(self):
        with pytest.raises(TypeError):
            CellData.zeros(4, 4).replace(qx=jnp.zeros((5, 6)))

    def test_copy_is_independent(self):
        p = CellData.full(3, 3, 1.0)
        p2 = p.copy()
        p2.negate_inplace()
        assert jnp.all(p.data == 1.0)
        assert jnp.all(p2.data == -1.0)


class TestPytree:
    """Containers flatten to their arrays and keep their tag."""

    def test_leaves(self):
        assert len(jax.tree_util.tree_leaves(CellData.zeros(3, 3))) == 1
        assert len(jax.tree_util.tree_leaves(EdgeData.zeros(3, 3))) == 2
        assert len(jax.tree_util.tree_leaves(NodeData.zeros(3, 3))) == 1

    def test_tree_map_preserves_kind_and_tag(self):
        q = jax.tree_util.tree_map(jnp.ones_like, EdgeData.zeros(6, 2))
        assert isinstance(q, EdgeData)
        assert q.shape_tag == (6, 2)
        assert jnp.all(q.qx == 1.0)

    def test_passes_through_jit(self):
        s = NodeData.full(4, 5, 3.0)
        out = jax.jit(lambda x: x * 2.0)(s)
        assert isinstance(out, NodeData)
        assert out.shape_tag == (4, 5)
        assert jnp.all(out.data == 6.0)
