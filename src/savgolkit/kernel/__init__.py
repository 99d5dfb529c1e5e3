"""Kernel generation for Savitzky-Golay filters."""

from savgolkit.kernel.generator import generate_kernel
from savgolkit.kernel.gram import gram_kernel
from savgolkit.kernel.kernel import Kernel
from savgolkit.kernel.weights import fit_weights
from savgolkit.kernel.window_config import WindowConfig

__all__ = [
    "Kernel",
    "WindowConfig",
    "fit_weights",
    "generate_kernel",
    "gram_kernel",
]
