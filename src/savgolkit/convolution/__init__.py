"""Sequence convolution and boundary handling."""

from savgolkit.convolution.boundary import (
    BoundaryPolicy,
    available_boundary_policies,
    resolve_boundary,
)
from savgolkit.convolution.convolver import apply, apply_channels

__all__ = [
    "BoundaryPolicy",
    "apply",
    "apply_channels",
    "available_boundary_policies",
    "resolve_boundary",
]
