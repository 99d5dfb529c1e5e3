"""Exceptions raised by SavGolKit.

Every error is a deterministic function of the inputs: the same
configuration and samples always fail in the same way, so none of them
is worth retrying.
"""

from __future__ import annotations

__all__ = [
    "SavGolError",
    "InvalidConfiguration",
    "InputTooShort",
    "InvalidInput",
    "InternalError",
]


class SavGolError(Exception):
    """Base class for all SavGolKit errors."""


class InvalidConfiguration(SavGolError, ValueError):
    """Raised when filter parameters violate their invariants.

    This covers the window half-width, polynomial degree, derivative
    order and sample spacing, as well as unknown boundary policies or
    convolution methods. It is raised when the configuration is built,
    never when it is used.
    """


class InputTooShort(SavGolError, ValueError):
    """Raised when a sequence cannot support the requested window."""


class InvalidInput(SavGolError, ValueError):
    """Raised when samples are not a finite sequence of the expected shape."""


class InternalError(SavGolError, RuntimeError):
    """Raised when the normal-equations solve fails for a valid configuration.

    Valid configurations always give a positive-definite normal matrix,
    so this signals a defect rather than bad user input.
    """
