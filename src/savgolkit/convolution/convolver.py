"""Applies Savitzky-Golay kernels to sample sequences.

Examples:
=========

Smoothing samples of ``x**2`` with a quadratic fit reproduces them,
edges included::
>>> import numpy as np
>>> from savgolkit.kernel.generator import generate_kernel
>>> from savgolkit.convolution.convolver import apply
>>> y = np.arange(1.0, 8.0) ** 2
>>> bool(np.allclose(apply(generate_kernel(2, 2), y), y))
True

Filtering every row of a 2D array::
>>> from savgolkit.convolution.convolver import apply_channels
>>> data = np.vstack([y, 2 * y])
>>> apply_channels(generate_kernel(2, 2), data, axis=1).shape
(2, 7)
"""

from __future__ import annotations

from functools import partial

import numpy as np
from scipy import signal

from savgolkit.convolution.boundary import (
    BoundaryPolicy,
    extend_samples,
    resolve_boundary,
)
from savgolkit.errors import InputTooShort, InvalidConfiguration
from savgolkit.kernel.kernel import Kernel
from savgolkit.utils.concurrency import parallel_execute, resolve_workers
from savgolkit.utils.types import ArrayLike1D, ArrayLikeND, FloatArray
from savgolkit.utils.validate import (
    normalize_axis,
    validate_samples,
    validate_signal_array,
)

__all__ = ["CONVOLUTION_METHODS", "apply", "apply_channels", "check_method"]

CONVOLUTION_METHODS = ("auto", "direct", "fft")


def check_method(method: str) -> str:
    """Returns ``method`` if it names a supported convolution method."""
    if method not in CONVOLUTION_METHODS:
        opts = ", ".join(CONVOLUTION_METHODS)
        raise InvalidConfiguration(f"Unknown convolution method '{method}'. Choose one of {{{opts}}}.")
    return method


def _correlate_valid(samples: np.ndarray, coeffs: np.ndarray, method: str) -> np.ndarray:
    """Slides ``coeffs`` over ``samples`` where the window fits entirely.

    Entry ``j`` of the result is ``sum_i coeffs[i] * samples[j + i]``. This
    is a correlation, i.e. a convolution with the reversed kernel.
    """
    if samples.size < coeffs.size:
        return np.empty(0, dtype=float)
    reversed_coeffs = coeffs[::-1]
    if method == "auto":
        method = signal.choose_conv_method(samples, reversed_coeffs, mode="valid")
    if method == "fft":
        return signal.fftconvolve(samples, reversed_coeffs, mode="valid")
    return np.correlate(samples, coeffs, mode="valid")


def _refit_edges(kernel: Kernel, samples: np.ndarray, out: np.ndarray) -> None:
    m = kernel.half_width
    width = kernel.window_length
    leading, trailing = kernel.edge_weights()
    out[:m] = leading @ samples[:width]
    out[-m:] = trailing @ samples[-width:]


def apply(
    kernel: Kernel,
    samples: ArrayLike1D,
    boundary: BoundaryPolicy | str | None = BoundaryPolicy.REFIT_EDGE,
    *,
    method: str = "auto",
) -> FloatArray:
    """Filters a sequence with a Savitzky-Golay kernel.

    Interior positions ``p`` in ``[m, n - 1 - m]`` receive
    ``sum_{i=-m}^{m} kernel[i + m] * samples[p + i]``. The first and last
    ``m`` positions are handled by ``boundary``.

    Args:
        kernel: The kernel to apply. It is only read, so one kernel can
            serve concurrent calls.
        samples: 1D sequence of equally spaced, finite samples.
        boundary: Boundary policy or policy name. Defaults to
            ``REFIT_EDGE``.
        method: ``"direct"`` sliding dot products, ``"fft"`` convolution, or
            ``"auto"`` to let SciPy pick the faster one. All agree to
            floating-point tolerance.

    Returns:
        A new ``float64`` array with the same length as ``samples``.

    Raises:
        InvalidConfiguration: If ``boundary`` or ``method`` is unknown.
        InvalidInput: If ``samples`` is not 1D or contains NaN or inf.
        InputTooShort: If ``samples`` is empty, or shorter than
            ``2m + 1`` under ``REFIT_EDGE``.
    """
    policy = resolve_boundary(boundary)
    method = check_method(method)
    x = validate_samples(samples)

    n = x.size
    m = kernel.half_width
    width = kernel.window_length
    coeffs = kernel.coefficients

    if policy.requires_full_window and n < width:
        raise InputTooShort(
            f"{policy.name} needs at least {width} samples for half_width={m}; got {n}."
        )

    if policy in (BoundaryPolicy.MIRROR_EXTEND, BoundaryPolicy.NEAREST_EXTEND):
        padded = extend_samples(x, m, policy)
        return np.ascontiguousarray(_correlate_valid(padded, coeffs, method), dtype=float)

    out = np.array(x, dtype=float, copy=True)
    if n >= width:
        out[m:n - m] = _correlate_valid(x, coeffs, method)
        if policy is BoundaryPolicy.REFIT_EDGE:
            _refit_edges(kernel, x, out)
    return out


def apply_channels(
    kernel: Kernel,
    data: ArrayLikeND,
    boundary: BoundaryPolicy | str | None = BoundaryPolicy.REFIT_EDGE,
    *,
    axis: int = -1,
    method: str = "auto",
    n_workers: int | None = 1,
) -> FloatArray:
    """Filters every 1D lane of an array along ``axis``.

    Lanes are independent, so they are distributed over a thread pool when
    more than one worker is requested. All lanes share ``kernel``.

    Args:
        kernel: The kernel to apply.
        data: Array of at least one dimension.
        boundary: Boundary policy or policy name.
        axis: Axis along which the samples of each lane run.
        method: Convolution method, see :func:`apply`.
        n_workers: Number of threads; ``None`` uses the number of hardware
            threads.

    Returns:
        A new ``float64`` array with the shape of ``data``.

    Raises:
        InvalidConfiguration: If ``boundary``, ``method`` or ``axis`` is invalid.
        InvalidInput: If ``data`` is 0D or contains NaN or inf.
        InputTooShort: If the lanes are too short for ``boundary``.
    """
    policy = resolve_boundary(boundary)
    method = check_method(method)
    arr = validate_signal_array(data)
    ax = normalize_axis(axis, arr.ndim)

    lanes = np.moveaxis(arr, ax, -1)
    if lanes.shape[-1] == 0:
        raise InputTooShort("data must contain at least one sample along axis.")
    flat = lanes.reshape(-1, lanes.shape[-1])

    workers = resolve_workers(n_workers, flat.shape[0])
    rows = parallel_execute(
        partial(apply, method=method),
        [(kernel, row, policy) for row in flat],
        n_workers=workers,
    )

    out = np.empty(flat.shape, dtype=float)
    for i, row in enumerate(rows):
        out[i] = row
    return np.moveaxis(out.reshape(lanes.shape), -1, ax)
