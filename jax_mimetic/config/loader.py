"""Configuration loading and validation."""

from pathlib import Path
from typing import Union
import yaml

from jax_mimetic.core.geometry import Geometry
from jax_mimetic.input_validation import ValidationError


def load_config(path: Union[str, Path]) -> dict:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValidationError(f"Config file {path} must contain a mapping")
    return config


def save_config(config: dict, path: Union[str, Path]) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def geometry_from_config(config: dict) -> Geometry:
    """Build a Geometry from a full config or from its ``grid`` section.

    Raises:
        ValidationError: If ``nx`` or ``ny`` is missing
    """
    grid = config.get("grid", config)
    missing = [key for key in ("nx", "ny") if key not in grid]
    if missing:
        raise ValidationError(f"Grid config is missing {', '.join(missing)}")
    return Geometry.from_config(grid)
