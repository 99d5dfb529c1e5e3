"""Provides all savgolkit methods."""

from importlib.metadata import PackageNotFoundError, version

from savgolkit.convolution.boundary import BoundaryPolicy, available_boundary_policies
from savgolkit.convolution.convolver import apply, apply_channels
from savgolkit.errors import (
    InputTooShort,
    InternalError,
    InvalidConfiguration,
    InvalidInput,
    SavGolError,
)
from savgolkit.kernel.generator import generate_kernel
from savgolkit.kernel.gram import gram_kernel
from savgolkit.kernel.kernel import Kernel
from savgolkit.kernel.weights import fit_weights
from savgolkit.kernel.window_config import WindowConfig
from savgolkit.savgol_kit import SavGolKit, savgol_filter

try:
    __version__ = version("savgolkit")
except PackageNotFoundError:
    pass

__all__ = [
    "BoundaryPolicy",
    "InputTooShort",
    "InternalError",
    "InvalidConfiguration",
    "InvalidInput",
    "Kernel",
    "SavGolError",
    "SavGolKit",
    "WindowConfig",
    "apply",
    "apply_channels",
    "available_boundary_policies",
    "fit_weights",
    "generate_kernel",
    "gram_kernel",
    "savgol_filter",
]
