"""Generates Savitzky-Golay convolution kernels.

Examples:
=========

Five-point quadratic smoothing kernel::
>>> import numpy as np
>>> from savgolkit.kernel.generator import generate_kernel
>>> kernel = generate_kernel(2, 2)
>>> bool(np.allclose(kernel.coefficients * 35, [-3, 12, 17, 12, -3]))
True

First derivative of a quadratic fit for samples spaced by 0.5::
>>> kernel = generate_kernel(2, 2, derivative_order=1, spacing=0.5)
>>> bool(np.allclose(kernel.coefficients, [-0.4, -0.2, 0.0, 0.2, 0.4]))
True
"""

from __future__ import annotations

from savgolkit.errors import InvalidConfiguration
from savgolkit.kernel.kernel import Kernel
from savgolkit.kernel.weights import fit_weights
from savgolkit.kernel.window_config import WindowConfig
from savgolkit.logger import savgolkit_logger

__all__ = ["generate_kernel"]


def generate_kernel(
    half_width: int | WindowConfig,
    degree: int | None = None,
    derivative_order: int = 0,
    spacing: float = 1.0,
) -> Kernel:
    """Generates the centred convolution kernel of a window configuration.

    The kernel can be requested either from the four parameters or from a
    ready :class:`WindowConfig`.

    The exact symmetry of the window is imposed on the result: the kernel
    is symmetric for even derivative orders and antisymmetric for odd
    ones, so rounding in the solve never breaks that invariant.

    Args:
        half_width: The window half-width ``m``, or a :class:`WindowConfig`.
        degree: The polynomial degree ``d``. Required unless a config is
            given.
        derivative_order: The derivative order ``k``.
        spacing: The sample spacing ``h``.

    Returns:
        The :class:`Kernel` for the configuration.

    Raises:
        InvalidConfiguration: If the parameters violate the window
            invariants, or a config is combined with further parameters.
        InternalError: If the normal equations cannot be solved.
    """
    if isinstance(half_width, WindowConfig):
        if degree is not None or derivative_order != 0 or spacing != 1.0:
            raise InvalidConfiguration(
                "pass either a WindowConfig or the individual parameters, not both."
            )
        config = half_width
    else:
        if degree is None:
            raise InvalidConfiguration("degree is required.")
        config = WindowConfig(half_width, degree, derivative_order, spacing)

    weights = fit_weights(config, 0)
    sign = (-1.0) ** config.derivative_order
    weights = 0.5 * (weights + sign * weights[::-1])

    savgolkit_logger.debug(
        "Generated kernel m=%d d=%d k=%d h=%g.",
        config.half_width,
        config.degree,
        config.derivative_order,
        config.spacing,
    )
    return Kernel(config, weights)
