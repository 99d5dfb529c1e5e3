"""Closed-form Savitzky-Golay weights from Gram polynomials.

Gram polynomials are orthogonal over ``2m + 1`` equally spaced points, so
the least-squares fit decomposes into independent projections and the
convolution weights can be written down without solving a linear system.
The construction follows:

A. Gorry, *General least-squares smoothing and differentiation by the
convolution (Savitzky-Golay) method*, Analytical Chemistry, vol. 62,
No. 6, pp. 570-573, 1990.

It serves as a cross-check of
:func:`savgolkit.kernel.weights.fit_weights`, which builds the same
basis numerically and normalises it over the window instead of using
the closed-form norms below.

Examples:
=========

Weights of the first sample of a five-point quadratic window::
>>> import numpy as np
>>> from savgolkit.kernel.gram import gram_weight
>>> bool(np.isclose(gram_weight(-2, 2, 2, -2, 0), 31 / 35))
True
"""

from __future__ import annotations

import math

import numpy as np

from savgolkit.errors import InvalidConfiguration
from savgolkit.kernel.window_config import WindowConfig
from savgolkit.utils.validate import require_integer

__all__ = ["gram_polynomial", "gram_weight", "gram_kernel"]


def _ln_generalized_factorial(a: int, b: int) -> float:
    """Returns ``log(a (a - 1) ... (a - b + 1))``."""
    return math.lgamma(a + 1) - math.lgamma(a - b + 1)


def gram_polynomial(
    i: int,
    m: int,
    k: int,
    s: int,
    memo: dict[tuple[int, int, int], float] | None = None,
) -> float:
    """Evaluates the Gram polynomial of order ``k`` over ``2m + 1`` points.

    Args:
        i: Point at which the polynomial is evaluated.
        m: Window half-width.
        k: Order of the polynomial.
        s: Derivative order; ``0`` evaluates the polynomial itself.
        memo: Table of already evaluated ``(i, k, s)`` triples for this
            ``m``. The recursion revisits the same triples many times, so
            callers evaluating several points of one window share a table.

    Returns:
        The ``s``-th derivative of the order-``k`` Gram polynomial at ``i``.
    """
    if k == 0 and s == 0:
        return 1.0
    if k <= 0 or s < 0:
        return 0.0
    if memo is None:
        memo = {}
    key = (i, k, s)
    cached = memo.get(key)
    if cached is not None:
        return cached

    denom = k * (2 * m - k + 1)
    part1 = (4 * k - 2) / denom * (
        gram_polynomial(i, m, k - 1, s, memo) * i
        + gram_polynomial(i, m, k - 1, s - 1, memo) * s
    )
    part2 = ((k - 1) * (2 * m + k)) / denom * gram_polynomial(i, m, k - 2, s, memo)
    value = part1 - part2
    memo[key] = value
    return value


def gram_weight(
    i: int,
    m: int,
    degree: int,
    t: int,
    s: int,
    memo: dict[tuple[int, int, int], float] | None = None,
) -> float:
    """Weight of sample ``i`` for the least-squares point ``t``.

    Args:
        i: Window offset of the weighted sample, in ``[-m, m]``.
        m: Window half-width.
        degree: Polynomial degree.
        t: Window offset at which the fit is evaluated.
        s: Derivative order, in unit-spacing units.
        memo: Optional table shared with :func:`gram_polynomial`.

    Returns:
        The convolution weight.
    """
    if memo is None:
        memo = {}
    total = 0.0
    for k in range(degree + 1):
        norm = math.exp(
            _ln_generalized_factorial(2 * m, k) - _ln_generalized_factorial(2 * m + k + 1, k + 1)
        )
        total += (
            (2 * k + 1)
            * norm
            * gram_polynomial(i, m, k, 0, memo)
            * gram_polynomial(t, m, k, s, memo)
        )
    return total


def gram_kernel(config: WindowConfig, position: int = 0) -> np.ndarray:
    """Assembles a full weight row from Gram polynomials.

    Args:
        config: The window configuration.
        position: Integer window offset in ``[-m, m]`` at which the fit is
            evaluated.

    Returns:
        An array of shape ``(2m + 1,)`` in sample order, scaled by
        ``1 / h^k``.

    Raises:
        InvalidConfiguration: If ``position`` is not an integer inside the
            window.
    """
    position = require_integer("position", position)
    m = config.half_width
    if not -m <= position <= m:
        raise InvalidConfiguration(f"position must lie in [-{m}, {m}] but is {position}.")
    k = config.derivative_order
    memo: dict[tuple[int, int, int], float] = {}
    row = [gram_weight(i, m, config.degree, position, k, memo) for i in range(-m, m + 1)]
    return np.asarray(row, dtype=float) / config.spacing**k
