"""Configuration loading and management for jax-mimetic."""

from jax_mimetic.config.loader import load_config, save_config, geometry_from_config

__all__ = ["load_config", "save_config", "geometry_from_config"]
