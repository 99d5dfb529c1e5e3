"""Validation utilities for SavGolKit."""

from __future__ import annotations

import math
import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from savgolkit.errors import InputTooShort, InvalidConfiguration, InvalidInput

__all__ = [
    "require_integer",
    "require_positive_finite",
    "validate_samples",
    "validate_signal_array",
    "normalize_axis",
]


def require_integer(name: str, value: Any) -> int:
    """Returns ``value`` as an ``int`` if it is an integer.

    Booleans are rejected even though they subclass ``int``; NumPy
    integer scalars are accepted.

    Raises:
        InvalidConfiguration: If ``value`` is not an integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfiguration(
            f"{name} must be an integer; got {value!r} ({type(value).__name__})."
        )
    return int(value)


def require_positive_finite(name: str, value: Any) -> float:
    """Returns ``value`` as a ``float`` if it is finite and strictly positive.

    Raises:
        InvalidConfiguration: If ``value`` is not a real number, is not
            finite, or is not strictly positive.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidConfiguration(
            f"{name} must be a real number; got {value!r} ({type(value).__name__})."
        )
    out = float(value)
    if not math.isfinite(out) or out <= 0.0:
        raise InvalidConfiguration(f"{name} must be positive and finite; got {out}.")
    return out


def validate_samples(samples: ArrayLike) -> NDArray[np.float64]:
    """Validates and converts a sample sequence into a 1D float array.

    Requirements:
      - ``samples`` converts to a 1D float array.
      - ``samples`` holds at least one value.
      - every value is finite.

    Args:
        samples: 1D array-like of equally spaced samples.

    Returns:
        The samples as a 1D ``float64`` array. The array may share memory
        with the input; callers must not write to it.

    Raises:
        InvalidInput: If the samples are not 1D, are not numeric or
            contain NaN or inf.
        InputTooShort: If the sequence is empty.
    """
    try:
        arr = np.asarray(samples, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput("samples must be a sequence of real numbers.") from e

    if arr.ndim != 1:
        raise InvalidInput(f"samples must be 1D; got ndim={arr.ndim}.")
    if arr.size == 0:
        raise InputTooShort("samples must contain at least one value.")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput("samples contain non-finite values.")
    return arr


def validate_signal_array(data: ArrayLike) -> NDArray[np.float64]:
    """Validates a multi-channel signal array.

    Args:
        data: Array-like of at least one dimension holding finite values.

    Returns:
        The data as a ``float64`` array.

    Raises:
        InvalidInput: If ``data`` is 0D, not numeric, or contains NaN or inf.
    """
    try:
        arr = np.asarray(data, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInput("data must be an array of real numbers.") from e

    if arr.ndim < 1:
        raise InvalidInput("data must be at least 1D.")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput("data contains non-finite values.")
    return arr


def normalize_axis(axis: Any, ndim: int) -> int:
    """Maps a possibly negative axis index onto ``range(ndim)``.

    Raises:
        InvalidConfiguration: If ``axis`` is not an integer or is out of range.
    """
    ax = require_integer("axis", axis)
    if not -ndim <= ax < ndim:
        raise InvalidConfiguration(f"axis {ax} is out of bounds for an array of ndim={ndim}.")
    return ax % ndim
