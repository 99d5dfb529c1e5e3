"""Provides the immutable :class:`Kernel` value."""

from __future__ import annotations

import numpy as np

from savgolkit.kernel.weights import fit_weights
from savgolkit.kernel.window_config import WindowConfig
from savgolkit.logger import savgolkit_logger
from savgolkit.utils.thread_safety import compute_once

__all__ = ["Kernel"]


def _readonly(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, dtype=float)
    out.setflags(write=False)
    return out


class Kernel:
    """Savitzky-Golay convolution kernel.

    A kernel holds ``2m + 1`` coefficients derived from a
    :class:`WindowConfig`; index ``0`` weights the sample at offset ``-m``
    and index ``2m`` the sample at offset ``+m``. The coefficients are a
    read-only array, so a kernel can be shared between threads and reused
    for any number of sequences.

    The weights used by the edge-refit boundary policy are computed on
    first request and cached on the kernel. Filling the cache is guarded
    by a lock; afterwards it is only read.
    """

    def __init__(self, config: WindowConfig, coefficients: np.ndarray) -> None:
        """Initialises the kernel.

        Args:
            config: The window configuration the coefficients belong to.
            coefficients: The ``2m + 1`` centred weights. They are copied.

        Raises:
            ValueError: If the number of coefficients does not match the
                window length of ``config``.
        """
        coeffs = _readonly(coefficients)
        if coeffs.shape != (config.window_length,):
            raise ValueError(
                f"expected {config.window_length} coefficients; got shape {coeffs.shape}."
            )
        self._config = config
        self._coefficients = coeffs
        self._edge_weights = compute_once(self._compute_edge_weights)

    @property
    def config(self) -> WindowConfig:
        """The window configuration of this kernel."""
        return self._config

    @property
    def coefficients(self) -> np.ndarray:
        """The read-only centred coefficients."""
        return self._coefficients

    @property
    def half_width(self) -> int:
        return self._config.half_width

    @property
    def window_length(self) -> int:
        return self._config.window_length

    def __len__(self) -> int:
        return self.window_length

    def __repr__(self) -> str:
        c = self._config
        return (
            f"Kernel(half_width={c.half_width}, degree={c.degree}, "
            f"derivative_order={c.derivative_order}, spacing={c.spacing})"
        )

    def edge_weights(self) -> tuple[np.ndarray, np.ndarray]:
        """Returns the edge-refit weights for both ends of a sequence.

        Both arrays have shape ``(m, 2m + 1)`` and are read-only.

        - ``leading[p]`` produces output position ``p`` (``p < m``) from the
          first ``2m + 1`` samples.
        - ``trailing[j]`` produces output position ``n - m + j`` from the
          last ``2m + 1`` samples.

        Returns:
            The pair ``(leading, trailing)``.
        """
        return self._edge_weights()

    def edge_weights_at(self, distance: int, side: str = "leading") -> np.ndarray:
        """Returns the edge-refit weights for one position near a boundary.

        Args:
            distance: Distance of the output position from the boundary
                sample, in ``[0, m)``. ``0`` is the first (``"leading"``) or
                last (``"trailing"``) sample.
            side: ``"leading"`` or ``"trailing"``.

        Returns:
            A read-only array of shape ``(2m + 1,)``.

        Raises:
            ValueError: If ``distance`` or ``side`` is invalid.
        """
        m = self.half_width
        if not 0 <= distance < m:
            raise ValueError(f"distance must lie in [0, {m}) but is {distance}.")
        leading, trailing = self.edge_weights()
        if side == "leading":
            return leading[distance]
        if side == "trailing":
            return trailing[m - 1 - distance]
        raise ValueError(f"side must be 'leading' or 'trailing'; got {side!r}.")

    def _compute_edge_weights(self) -> tuple[np.ndarray, np.ndarray]:
        m = self.half_width
        k = self._config.derivative_order
        savgolkit_logger.debug("Computing %d edge-refit rows for %r.", m, self)

        leading = np.vstack([fit_weights(self._config, p - m) for p in range(m)])
        # Fitting at +t is the mirror image of fitting at -t; odd derivatives flip sign.
        trailing = (-1.0) ** k * leading[::-1, ::-1]

        return _readonly(leading), _readonly(trailing)
