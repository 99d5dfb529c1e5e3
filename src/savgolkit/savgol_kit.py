"""Provides the SavGolKit API.

This class is a lightweight front end over the kernel generator and the
sequence convolver. You provide the window parameters and a boundary
policy once; the kernel is generated at construction and reused for
every sequence you filter.

Examples:
    Smoothing:

        >>> import numpy as np
        >>> from savgolkit.savgol_kit import SavGolKit
        >>> sg = SavGolKit(half_width=2, degree=2)
        >>> sg.filter([1.0, 4.0, 9.0, 16.0, 25.0, 36.0, 49.0]).tolist()  # doctest: +SKIP
        [1.0, 4.0, 9.0, 16.0, 25.0, 36.0, 49.0]

    First derivative of samples spaced by 0.1:

        >>> x = np.arange(0.0, 2.0, 0.1)
        >>> sg = SavGolKit(half_width=3, degree=3, derivative_order=1, spacing=0.1)
        >>> bool(np.allclose(sg.filter(x**2), 2 * x))
        True

Notes:
    - Boundary policy names are case/spacing/punctuation insensitive;
      see :func:`savgolkit.convolution.boundary.available_boundary_policies`.
    - Every parameter is validated in the constructor, so an invalid
      configuration never reaches a filter call.
"""

from __future__ import annotations

import threading

import numpy as np

from savgolkit.convolution.boundary import BoundaryPolicy, resolve_boundary
from savgolkit.convolution.convolver import apply, apply_channels, check_method
from savgolkit.errors import InputTooShort
from savgolkit.kernel.generator import generate_kernel
from savgolkit.kernel.kernel import Kernel
from savgolkit.kernel.window_config import WindowConfig
from savgolkit.logger import savgolkit_logger
from savgolkit.utils.types import ArrayLike1D, ArrayLikeND, FloatArray
from savgolkit.utils.validate import validate_samples

__all__ = ["SavGolKit", "savgol_filter"]


class SavGolKit:
    """Configured Savitzky-Golay filter.

    Attributes:
        config: The validated :class:`WindowConfig`.
        boundary: The resolved :class:`BoundaryPolicy`.
        method: The convolution method passed to :func:`apply`.
    """

    def __init__(
        self,
        half_width: int,
        degree: int,
        derivative_order: int = 0,
        spacing: float = 1.0,
        boundary: BoundaryPolicy | str | None = BoundaryPolicy.REFIT_EDGE,
        method: str = "auto",
    ) -> None:
        """Initialises the filter and generates its kernel.

        Args:
            half_width: Window half-width ``m``; the window holds ``2m + 1``
                samples.
            degree: Degree of the local polynomial, ``0 <= degree <= 2m``.
            derivative_order: Derivative of the fit to return; ``0`` smooths.
            spacing: Distance between consecutive samples.
            boundary: Boundary policy or policy name.
            method: ``"auto"``, ``"direct"`` or ``"fft"``.

        Raises:
            InvalidConfiguration: If any parameter is invalid.
        """
        self.config = WindowConfig(half_width, degree, derivative_order, spacing)
        self.boundary = resolve_boundary(boundary)
        self.method = check_method(method)
        self._kernel = generate_kernel(self.config)
        self._shrunk: dict[int, Kernel] = {}
        self._shrunk_lock = threading.Lock()

    @property
    def kernel(self) -> Kernel:
        """The kernel shared by every call on this instance."""
        return self._kernel

    def __repr__(self) -> str:
        c = self.config
        return (
            f"SavGolKit(half_width={c.half_width}, degree={c.degree}, "
            f"derivative_order={c.derivative_order}, spacing={c.spacing}, "
            f"boundary={self.boundary.value!r}, method={self.method!r})"
        )

    def filter(self, samples: ArrayLike1D, *, shrink_window: bool = False) -> FloatArray:
        """Filters one sequence.

        Args:
            samples: 1D sequence of equally spaced, finite samples.
            shrink_window: If ``True`` and the sequence is shorter than the
                window, filter with the largest window that fits,
                ``m' = (n - 1) // 2``, and the degree capped at ``2m'``.
                A sequence too short for any window is returned unchanged
                when smoothing.

        Returns:
            A new array with the same length as ``samples``.

        Raises:
            InvalidInput: If ``samples`` is not 1D or contains NaN or inf.
            InputTooShort: If the sequence cannot support the window, or
                the shrunk window cannot support the derivative order.
        """
        if not shrink_window:
            return apply(self._kernel, samples, self.boundary, method=self.method)

        x = validate_samples(samples)
        kernel = self._kernel_for_length(x.size)
        if kernel is None:
            return np.array(x, dtype=float, copy=True)
        return apply(kernel, x, self.boundary, method=self.method)

    def filter_channels(
        self,
        data: ArrayLikeND,
        *,
        axis: int = -1,
        n_workers: int | None = 1,
    ) -> FloatArray:
        """Filters every 1D lane of ``data`` along ``axis``.

        See :func:`savgolkit.convolution.convolver.apply_channels`.
        """
        return apply_channels(
            self._kernel,
            data,
            self.boundary,
            axis=axis,
            method=self.method,
            n_workers=n_workers,
        )

    def _kernel_for_length(self, n: int) -> Kernel | None:
        """Returns the kernel to use for ``n`` samples when shrinking is allowed.

        ``None`` means the samples are passed through unchanged.
        """
        config = self.config
        if n >= config.window_length:
            return self._kernel

        m = (n - 1) // 2
        if m < 1:
            if config.derivative_order == 0:
                savgolkit_logger.warning(
                    "%d samples cannot hold any window; returning them unchanged.", n
                )
                return None
            raise InputTooShort(
                f"{n} samples cannot support derivative_order={config.derivative_order}."
            )
        if config.derivative_order > 2 * m:
            raise InputTooShort(
                f"{n} samples cannot support derivative_order={config.derivative_order}; "
                f"the largest window that fits allows degree {2 * m}."
            )

        with self._shrunk_lock:
            kernel = self._shrunk.get(m)
            if kernel is None:
                reduced = config.with_half_width(m)
                savgolkit_logger.warning(
                    "Shrinking window from half_width=%d to %d (degree %d) for %d samples.",
                    config.half_width,
                    reduced.half_width,
                    reduced.degree,
                    n,
                )
                kernel = generate_kernel(reduced)
                self._shrunk[m] = kernel
        return kernel


def savgol_filter(
    samples: ArrayLike1D,
    half_width: int,
    degree: int,
    derivative_order: int = 0,
    spacing: float = 1.0,
    boundary: BoundaryPolicy | str | None = BoundaryPolicy.REFIT_EDGE,
    method: str = "auto",
) -> FloatArray:
    """Filters one sequence with a freshly generated kernel.

    Convenient for one-off calls; when the same configuration is applied
    to several sequences, build a :class:`SavGolKit` once instead.

    Args:
        samples: 1D sequence of equally spaced, finite samples.
        half_width: Window half-width ``m``.
        degree: Degree of the local polynomial.
        derivative_order: Derivative of the fit to return.
        spacing: Distance between consecutive samples.
        boundary: Boundary policy or policy name.
        method: ``"auto"``, ``"direct"`` or ``"fft"``.

    Returns:
        A new array with the same length as ``samples``.
    """
    kit = SavGolKit(half_width, degree, derivative_order, spacing, boundary, method)
    return kit.filter(samples)
