"""Least-squares convolution weights for a single evaluation point."""

from __future__ import annotations

import numpy as np

from savgolkit.errors import InternalError, InvalidConfiguration
from savgolkit.kernel.design import derivative_row, design_matrix, orthonormal_basis
from savgolkit.kernel.window_config import WindowConfig
from savgolkit.utils.linalg import solve_spd
from savgolkit.utils.validate import require_integer

__all__ = ["fit_weights"]


def fit_weights(config: WindowConfig, position: int = 0) -> np.ndarray:
    """Computes the weights of a local polynomial fit evaluated at ``position``.

    The polynomial of degree ``d`` is fitted by least squares to the
    ``2m + 1`` samples of a full window. Its ``k``-th derivative at window
    offset ``position`` is a fixed linear combination of the samples; this
    function returns the coefficients of that combination, in sample
    order. ``position=0`` gives the usual centred kernel, while
    ``position=-m`` evaluates the fit at the first sample of the window,
    which is what the edge-refit boundary policy needs.

    The fit is set up in a basis of polynomials orthonormal over the
    window (see :func:`~savgolkit.kernel.design.orthonormal_basis`). With
    design matrix ``Q``, normal matrix ``N = Q^T Q`` (the identity up to
    rounding) and ``v`` the ``k``-th derivative of the basis at
    ``position``, the weights are ``Q @ x / h^k`` where ``N x = v``.
    The result is verified by checking that it differentiates every
    monomial up to degree ``d`` exactly.

    Args:
        config: The window configuration.
        position: Integer window offset in ``[-m, m]`` at which the fit is
            evaluated.

    Returns:
        An array of shape ``(2m + 1,)``; entry ``j`` weights the sample at
        window offset ``j - m``.

    Raises:
        InvalidConfiguration: If ``position`` is not an integer inside the
            window.
        InternalError: If the weights cannot be computed to floating-point
            accuracy.
    """
    position = require_integer("position", position)
    m = config.half_width
    if not -m <= position <= m:
        raise InvalidConfiguration(f"position must lie in [-{m}, {m}] but is {position}.")

    d = config.degree
    k = config.derivative_order
    context = f"Savitzky-Golay fit (m={m}, d={d}, k={k}, position={position})"

    basis, rhs = orthonormal_basis(config.offsets, d, position, k)
    normal = basis.T @ basis
    x = solve_spd(normal, rhs, warn_context=context)
    weights = basis @ x

    _check_reproduction(config, position, weights, context)
    return weights / config.spacing**k


def _check_reproduction(
    config: WindowConfig,
    position: int,
    weights: np.ndarray,
    context: str,
    rtol: float = 1e-8,
) -> None:
    """Raises unless ``weights`` reproduce the derivatives of all monomials.

    Applied to samples of ``(z / m)**j`` the weights must return the
    ``k``-th derivative of that monomial at ``position`` for every
    ``j <= d``. The monomials are bounded by 1 on the window, so each
    deviation is bounded relative to the 1-norm of the weights.
    """
    m = config.half_width
    k = config.derivative_order
    if not np.all(np.isfinite(weights)):
        raise InternalError(f"In {context}, the weights are not finite.")

    mat = design_matrix(config.offsets, config.degree, m)
    target = derivative_row(position / m, config.degree, k)
    got = (mat.T @ weights) * float(m) ** k
    bound = float(np.sum(np.abs(weights))) * float(m) ** k + np.abs(target)
    if np.any(np.abs(got - target) > rtol * bound):
        worst = float(np.max(np.abs(got - target)))
        raise InternalError(
            f"In {context}, the weights do not reproduce polynomials of degree "
            f"{config.degree} (max deviation {worst:.2e})."
        )
