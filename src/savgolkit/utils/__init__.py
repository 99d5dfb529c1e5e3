"""Utility functions for SavGolKit package."""

from .linalg import solve_spd
from .validate import validate_samples, validate_signal_array

__all__ = [
    "solve_spd",
    "validate_samples",
    "validate_signal_array",
]
