"""Configuration of a Savitzky-Golay filter window.

A :class:`WindowConfig` fixes everything the convolution weights depend
on: the window half-width, the degree of the local polynomial, the
derivative that is read off the fit and the spacing of the samples.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from savgolkit.errors import InvalidConfiguration
from savgolkit.utils.validate import require_integer, require_positive_finite

__all__ = ["WindowConfig"]


@dataclass(frozen=True)
class WindowConfig:
    """Immutable window configuration.

    Attributes:
        half_width: Number of samples ``m`` on each side of the window
            centre. The window holds ``2m + 1`` samples. Must be at least 1.
        degree: Degree ``d`` of the least-squares polynomial. Must satisfy
            ``0 <= d <= 2m``.
        derivative_order: Derivative ``k`` of the fitted polynomial that
            is returned. ``0`` smooths. Must satisfy ``0 <= k <= d``.
        spacing: Distance ``h`` between consecutive samples. Must be
            positive and finite.
    """

    half_width: int
    degree: int
    derivative_order: int = 0
    spacing: float = 1.0

    def __post_init__(self) -> None:
        """Validates the invariants and normalizes the field types.

        Raises:
            InvalidConfiguration: If any invariant is violated.
        """
        m = require_integer("half_width", self.half_width)
        d = require_integer("degree", self.degree)
        k = require_integer("derivative_order", self.derivative_order)
        h = require_positive_finite("spacing", self.spacing)

        if m < 1:
            raise InvalidConfiguration(f"half_width must be at least 1 but is {m}.")
        if d < 0:
            raise InvalidConfiguration(f"degree must be non-negative but is {d}.")
        if d > 2 * m:
            raise InvalidConfiguration(
                f"degree must be at most 2 * half_width = {2 * m} but is {d}."
            )
        if k < 0:
            raise InvalidConfiguration(f"derivative_order must be non-negative but is {k}.")
        if k > d:
            raise InvalidConfiguration(
                f"derivative_order must not exceed degree={d} but is {k}."
            )

        # Frozen dataclass: bypass __setattr__ to store the normalized values.
        object.__setattr__(self, "half_width", m)
        object.__setattr__(self, "degree", d)
        object.__setattr__(self, "derivative_order", k)
        object.__setattr__(self, "spacing", h)

    @property
    def window_length(self) -> int:
        """Number of samples in a full window, ``2m + 1``."""
        return 2 * self.half_width + 1

    @property
    def offsets(self) -> np.ndarray:
        """Integer window offsets ``-m .. m`` as a float array."""
        m = self.half_width
        return np.arange(-m, m + 1, dtype=float)

    def with_half_width(self, half_width: int) -> WindowConfig:
        """Returns a copy with a different half-width.

        The degree is capped at ``2 * half_width`` so the copy stays valid
        whenever the derivative order allows it.

        Raises:
            InvalidConfiguration: If the new configuration is invalid.
        """
        m = require_integer("half_width", half_width)
        return WindowConfig(
            half_width=m,
            degree=min(self.degree, 2 * m),
            derivative_order=self.derivative_order,
            spacing=self.spacing,
        )
