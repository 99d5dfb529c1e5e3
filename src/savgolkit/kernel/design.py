"""Design matrices for the local least-squares fit."""

from __future__ import annotations

import numpy as np

__all__ = ["derivative_row", "design_matrix", "orthonormal_basis"]


def design_matrix(z: np.ndarray, degree: int, scale: float = 1.0) -> np.ndarray:
    """Builds a Vandermonde design matrix.

    Row ``r`` holds the powers ``(z[r] / scale) ** col`` for
    ``col = 0 .. degree``.

    Args:
        z:
            Sample offsets (shape (n_samples,)).
        degree:
            The degree of the polynomial to fit.
        scale:
            Positive factor the offsets are divided by.

    Returns:
        A Vandermonde matrix (shape (n_samples, degree + 1)).
    """
    return np.vander(np.asarray(z, dtype=float) / scale, N=degree + 1, increasing=True)


def derivative_row(u: float, degree: int, order: int) -> np.ndarray:
    """Returns the ``order``-th derivative of the monomials ``u**j`` at ``u``.

    Entry ``j`` is ``j! / (j - order)! * u ** (j - order)`` for
    ``j >= order`` and zero below. Contracting it with polynomial
    coefficients evaluates the derivative of the polynomial at ``u``; at
    ``u = 0`` it reduces to ``order! * e_order``.

    Args:
        u: Evaluation point in scaled coordinates.
        degree: The degree of the polynomial.
        order: The derivative order.

    Returns:
        An array of shape ``(degree + 1,)``.
    """
    row = np.zeros(degree + 1, dtype=float)
    for j in range(order, degree + 1):
        falling = 1.0
        for i in range(order):
            falling *= j - i
        row[j] = falling * u ** (j - order)
    return row


def orthonormal_basis(
    offsets: np.ndarray,
    degree: int,
    position: int,
    order: int,
) -> tuple[np.ndarray, np.ndarray]:
    """Polynomials orthonormal over the integer offsets of a full window.

    The monomials ``z**j`` become nearly linearly dependent on wide
    windows, so the least-squares fit is set up in the basis of discrete
    orthogonal (Gram) polynomials instead. They are generated by the
    three-term recurrence

    ``P_j(z) = a_j z P_{j-1}(z) - c_j P_{j-2}(z)``

    with ``a_j = (4j - 2) / (j (2m - j + 1))`` and
    ``c_j = (j - 1)(2m + j) / (j (2m - j + 1))``, normalised to
    ``P_j(m) = 1``. Their norms grow quickly with ``j``, so each polynomial
    is divided by its norm over the window. Derivatives at ``position``
    follow from differentiating the recurrence.

    Args:
        offsets: The ``2m + 1`` integer offsets ``-m .. m``.
        degree: Highest polynomial degree, at most ``2m``.
        position: Window offset at which the derivatives are evaluated.
        order: Derivative order.

    Returns:
        ``(basis, row)``: ``basis`` has shape ``(2m + 1, degree + 1)``
        with ``basis[r, j] = q_j(offsets[r])``, and ``row[j]`` is the
        ``order``-th derivative of ``q_j`` at ``position`` (per unit
        offset).
    """
    z = np.asarray(offsets, dtype=float)
    m = (z.size - 1) // 2
    t = float(position)

    values = np.zeros((degree + 1, z.size), dtype=float)
    at_t = np.zeros((degree + 1, order + 1), dtype=float)
    values[0] = 1.0
    at_t[0, 0] = 1.0

    for j in range(1, degree + 1):
        denom = j * (2 * m - j + 1)
        a = (4 * j - 2) / denom
        c = (j - 1) * (2 * m + j) / denom
        values[j] = a * z * values[j - 1]
        if j >= 2:
            values[j] -= c * values[j - 2]
        for s in range(order + 1):
            lower = s * at_t[j - 1, s - 1] if s > 0 else 0.0
            at_t[j, s] = a * (t * at_t[j - 1, s] + lower)
            if j >= 2:
                at_t[j, s] -= c * at_t[j - 2, s]

    norms = np.sqrt(np.einsum("jr,jr->j", values, values))
    return (values / norms[:, None]).T, at_t[:, order] / norms
