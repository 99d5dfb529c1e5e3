"""Linear algebra helper functions with diagnostics."""

from __future__ import annotations

import warnings

import numpy as np

from savgolkit.errors import InternalError

__all__ = ["solve_spd"]


def solve_spd(
    matrix: np.ndarray,
    vector: np.ndarray,
    *,
    rcond: float = 1e-12,
    residual_tol: float = 1e-8,
    warn_context: str = "linear solve",
) -> np.ndarray:
    """Solve ``matrix @ x = vector`` for a symmetric positive definite matrix.

    A Cholesky-based solve is attempted first. If the factorisation fails
    or its solution does not satisfy the system to floating-point accuracy,
    the system is solved by LU with partial pivoting. Unlike a
    least-squares fallback, a matrix that is singular for both
    factorisations raises instead of returning a pseudoinverse solution.

    Args:
      matrix: Coefficient matrix of shape ``(n, n)``.
      vector: Right-hand side vector or matrix of shape ``(n,)`` or ``(n, k)``.
      rcond: Reciprocal condition number below which a ``RuntimeWarning``
          is emitted.
      residual_tol: Relative backward-error bound; a solution with
          ``‖matrix @ x - vector‖ > residual_tol * (‖matrix‖ ‖x‖ + ‖vector‖)``
          is rejected.
      warn_context: Short label included in warning and error messages.

    Returns:
      Solution array ``x`` with shape matching ``vector`` (``(n,)`` or ``(n, k)``).

    Raises:
      ValueError: If shapes of ``matrix`` and ``vector`` are incompatible.
      InternalError: If the system cannot be solved to floating-point
          accuracy.
    """
    matrix = np.asarray(matrix, dtype=float)
    vector = np.asarray(vector, dtype=float)

    # Shape checks
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"matrix must be square 2D; got shape {matrix.shape}.")
    n = matrix.shape[0]
    if vector.ndim not in (1, 2) or vector.shape[0] != n:
        raise ValueError(f"vector must have shape (n,) or (n,k) with n={n}; got {vector.shape}.")

    if not np.all(np.isfinite(matrix)):
        raise InternalError(f"In {warn_context}, the matrix contains non-finite values.")

    try:
        cond_val = np.linalg.cond(matrix)
    except np.linalg.LinAlgError:
        cond_val = np.inf
    if (not np.isfinite(cond_val)) or (cond_val > 1.0 / rcond):
        warnings.warn(
            f"In {warn_context}, the matrix is ill-conditioned (cond≈{cond_val:.2e}); "
            "results may be inaccurate.",
            RuntimeWarning,
        )

    def _accurate(solution: np.ndarray) -> bool:
        if not np.all(np.isfinite(solution)):
            return False
        residual = np.linalg.norm(matrix @ solution - vector)
        scale = np.linalg.norm(matrix) * np.linalg.norm(solution) + np.linalg.norm(vector)
        return bool(residual <= residual_tol * scale)

    # Fast path: Cholesky. numpy only reads the lower triangle, so the
    # result is checked against the full matrix before it is trusted.
    try:
        l_factor = np.linalg.cholesky(matrix)
        y = np.linalg.solve(l_factor, vector)
        solution = np.linalg.solve(l_factor.T, y)
        if _accurate(solution):
            return solution
    except np.linalg.LinAlgError:
        pass

    try:
        solution = np.linalg.solve(matrix, vector)
    except np.linalg.LinAlgError as e:
        raise InternalError(
            f"In {warn_context}, the matrix is singular (cond≈{cond_val:.2e})."
        ) from e
    if not _accurate(solution):
        raise InternalError(
            f"In {warn_context}, the solve did not reach floating-point accuracy "
            f"(cond≈{cond_val:.2e})."
        )
    return solution
