"""Input validation utilities for staggered-grid data.

These functions provide runtime validation of container shapes and kinds
so that mismatched grids are rejected before any stencil runs.
"""

from typing import Tuple, Type
import jax.numpy as jnp

Array = jnp.ndarray


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


class ShapeMismatchError(ValidationError):
    """Raised when array shapes disagree with the padding conventions."""
    pass


class TypeMismatchError(TypeError):
    """Raised when an operation receives the wrong container kind or grid."""
    pass


def validate_grid_dimensions(nx: int, ny: int) -> None:
    """Validate interior cell counts.

    Args:
        nx, ny: Number of interior cells

    Raises:
        ValidationError: If either count is below 1
    """
    if nx < 1:
        raise ValidationError(f"nx must be at least 1, got {nx}")
    if ny < 1:
        raise ValidationError(f"ny must be at least 1, got {ny}")


def validate_ndim(array: Array, name: str) -> None:
    """Validate that an array is two-dimensional.

    Raises:
        ShapeMismatchError: If array is not 2-D
    """
    if array.ndim != 2:
        raise ShapeMismatchError(
            f"{name} must be a 2-D array, got shape {array.shape}"
        )


def validate_shape(array: Array, expected_shape: Tuple[int, ...], name: str) -> None:
    """Validate that an array has the expected shape.

    Args:
        array: The array to check
        expected_shape: Expected shape tuple
        name: Array name for error messages

    Raises:
        ShapeMismatchError: If shape doesn't match
    """
    if tuple(array.shape) != tuple(expected_shape):
        raise ShapeMismatchError(
            f"{name} has wrong shape: expected {tuple(expected_shape)}, "
            f"got {tuple(array.shape)}"
        )


def validate_kind(value, kind: Type, operation: str) -> None:
    """Validate that ``value`` is an instance of ``kind``.

    Raises:
        TypeMismatchError: If value has another type
    """
    if not isinstance(value, kind):
        raise TypeMismatchError(
            f"{operation} expects {kind.__name__}, got {type(value).__name__}"
        )


def validate_same_grid(a, b, operation: str) -> None:
    """Validate that two containers share kind and dimension tag.

    Raises:
        TypeMismatchError: If kinds or (nx, ny) differ
    """
    if type(a) is not type(b):
        raise TypeMismatchError(
            f"{operation} requires matching kinds, got "
            f"{type(a).__name__} and {type(b).__name__}"
        )
    if a.shape_tag != b.shape_tag:
        raise TypeMismatchError(
            f"{operation} requires the same grid, got {a.shape_tag} and {b.shape_tag}"
        )

