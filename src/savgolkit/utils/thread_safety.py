"""Thread safety utilities."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

__all__ = ["compute_once"]

_UNSET: Any = object()


def compute_once(fn: Callable[[], T], lock: Any = None) -> Callable[[], T]:
    """Wraps a zero-argument function so that it runs at most once.

    The first call evaluates ``fn`` while holding ``lock`` and stores the
    result; later calls return the stored result without locking. Threads
    that arrive while the value is being computed wait for it and receive
    the same object. If ``fn`` raises, nothing is stored and the next call
    tries again.

    Args:
        fn: The function computing the value.
        lock: Lock to hold during the computation. Defaults to a new
            ``threading.Lock``.

    Returns:
        A function returning the cached value.
    """
    lk = lock if lock is not None else threading.Lock()
    result: Any = _UNSET

    def get() -> T:
        nonlocal result
        value = result
        if value is _UNSET:
            with lk:
                if result is _UNSET:
                    result = fn()
                value = result
        return value

    return get
