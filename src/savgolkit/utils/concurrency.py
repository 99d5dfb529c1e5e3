"""Concurrency management for multi-channel filtering."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence, Tuple

__all__ = [
    "parallel_execute",
    "normalize_workers",
    "resolve_workers",
]


def _int_env(name: str) -> int | None:
    """Reads a positive integer from an environment variable, or None if unset/invalid.

    Args:
        name: Environment variable name.

    Returns:
        Positive integer value, or None.
    """
    v = os.getenv(name)
    if not v:
        return None
    try:
        i = int(v)
        return i if i > 0 else None
    except ValueError:
        return None


def _detect_hw_threads() -> int:
    """Detects the number of hardware threads, capped by relevant environment variables.

    Returns:
        Number of hardware threads (at least 1).
    """
    hints = [
        _int_env("OMP_NUM_THREADS"),
        _int_env("MKL_NUM_THREADS"),
        _int_env("OPENBLAS_NUM_THREADS"),
        _int_env("VECLIB_MAXIMUM_THREADS"),
        _int_env("NUMEXPR_NUM_THREADS"),
    ]
    env_cap = min([h for h in hints if h is not None], default=None)
    hw = os.cpu_count() or 1
    return max(1, min(hw, env_cap) if env_cap else hw)


def normalize_workers(
    n_workers: Any
) -> int:
    """Ensures n_workers is a positive integer, defaulting to 1.

    Args:
        n_workers: Input number of workers (can be None, float, negative, etc.)

    Returns:
        int: A positive integer number of workers (at least 1).
    """
    try:
        n = int(n_workers)
    except (TypeError, ValueError):
        n = 1
    return 1 if n < 1 else n


def resolve_workers(n_workers: Any, n_tasks: int) -> int:
    """Decides how many threads to use for ``n_tasks`` independent tasks.

    ``None`` selects the number of hardware threads (see
    :func:`_detect_hw_threads`); any other value is normalized with
    :func:`normalize_workers`. The result never exceeds the number of
    tasks.

    Args:
        n_workers: Requested number of workers, or ``None`` for automatic.
        n_tasks: Number of independent tasks to run.

    Returns:
        Number of worker threads, at least 1.
    """
    if n_workers is None:
        workers = _detect_hw_threads()
    else:
        workers = normalize_workers(n_workers)
    return max(1, min(workers, n_tasks))


def parallel_execute(
    worker: Callable[..., Any],
    arg_tuples: Sequence[Tuple[Any, ...]],
    *,
    n_workers: int = 1,
) -> list[Any]:
    """Runs ``worker(*args)`` for each tuple in ``arg_tuples``.

    Results are returned in the order of ``arg_tuples``. Exceptions
    raised by a worker propagate to the caller.
    """
    if n_workers > 1:
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            futures = [ex.submit(worker, *args) for args in arg_tuples]
            return [f.result() for f in futures]
    return [worker(*args) for args in arg_tuples]
