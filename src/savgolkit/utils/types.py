"""Shared typing aliases for SavGolKit."""

from __future__ import annotations

from typing import Sequence, TypeAlias

import numpy as np
from numpy.typing import NDArray

FloatArray: TypeAlias = NDArray[np.float64]

ArrayLike1D: TypeAlias = Sequence[float] | NDArray[np.floating]
ArrayLikeND: TypeAlias = Sequence[float] | Sequence[Sequence[float]] | NDArray[np.floating]
