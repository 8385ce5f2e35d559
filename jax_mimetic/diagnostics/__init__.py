"""Diagnostics for the discrete vector-calculus identities."""

from jax_mimetic.diagnostics.identities import (
    IdentityResult,
    IdentityCheck,
    DivergenceOfCurl,
    RotOfGradient,
    LaplacianConsistency,
    GradientAdjoint,
    CurlAdjoint,
    TranslationMagnitude,
    default_checks,
    check_identities,
)

__all__ = [
    "IdentityResult",
    "IdentityCheck",
    "DivergenceOfCurl",
    "RotOfGradient",
    "LaplacianConsistency",
    "GradientAdjoint",
    "CurlAdjoint",
    "TranslationMagnitude",
    "default_checks",
    "check_identities",
]
