"""Tests for YAML configuration loading."""

import pytest

from jax_mimetic import Geometry, ValidationError
from jax_mimetic.config import load_config, save_config, geometry_from_config


def test_round_trip(tmp_path):
    config = {"grid": {"nx": 50, "ny": 25}, "diagnostics": {"seed": 3}}
    path = tmp_path / "sub" / "grid.yaml"
    save_config(config, path)
    assert load_config(path) == config


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == {}


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(ValidationError):
        load_config(path)


def test_geometry_from_full_config():
    geom = geometry_from_config({"grid": {"nx": 5, "ny": 7, "ly": 2.0}})
    assert geom == Geometry(5, 7, 1.0, 2.0)


def test_geometry_from_grid_section():
    assert geometry_from_config({"nx": 3, "ny": 4}).shape_tag == (3, 4)


def test_geometry_missing_key():
    with pytest.raises(ValidationError, match="ny"):
        geometry_from_config({"grid": {"nx": 3}})
