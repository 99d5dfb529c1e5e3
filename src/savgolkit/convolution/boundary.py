"""Boundary policies for the first and last ``m`` output positions.

A centred window does not fit at the first and last ``m`` positions of a
sequence. The policy decides what the filter produces there:

* ``TRUNCATE``: the input sample is copied unchanged.
* ``MIRROR_EXTEND``: the input is reflected about its boundary sample.
* ``NEAREST_EXTEND``: the boundary sample is repeated.
* ``REFIT_EDGE``: the polynomial fitted to the first (last) full window is
  evaluated at the edge positions.

Notes:
    - Policy names are case/spacing/punctuation insensitive and a few
      aliases are accepted, e.g. ``"reflect"`` for ``MIRROR_EXTEND`` or
      ``"interp"`` for ``REFIT_EDGE``.
    - For the accepted names at runtime, call
      ``available_boundary_policies()``.
"""

from __future__ import annotations

import re
from enum import Enum
from functools import lru_cache
from typing import Mapping

import numpy as np

from savgolkit.errors import InvalidConfiguration

__all__ = [
    "BoundaryPolicy",
    "DEFAULT_BOUNDARY",
    "available_boundary_policies",
    "extend_samples",
    "resolve_boundary",
]


class BoundaryPolicy(Enum):
    TRUNCATE = "truncate"
    MIRROR_EXTEND = "mirror_extend"
    NEAREST_EXTEND = "nearest_extend"
    REFIT_EDGE = "refit_edge"

    @property
    def requires_full_window(self) -> bool:
        """Whether the policy needs at least ``2m + 1`` samples."""
        return self is BoundaryPolicy.REFIT_EDGE


DEFAULT_BOUNDARY = BoundaryPolicy.REFIT_EDGE

_ALIASES: list[tuple[BoundaryPolicy, list[str]]] = [
    (BoundaryPolicy.TRUNCATE, ["none", "copy"]),
    (BoundaryPolicy.MIRROR_EXTEND, ["mirror", "reflect"]),
    (BoundaryPolicy.NEAREST_EXTEND, ["nearest", "edge", "repeat"]),
    (BoundaryPolicy.REFIT_EDGE, ["refit", "interp", "fit"]),
]

# np.pad modes used by the extension policies.
_PAD_MODES = {
    BoundaryPolicy.MIRROR_EXTEND: "reflect",
    BoundaryPolicy.NEAREST_EXTEND: "edge",
}


def _norm(s: str) -> str:
    """Normalize a policy string for robust matching (case/spacing/punct insensitive).

    Args:
        s: Input string.

    Returns:
        Normalized string.
    """
    return re.sub(r"[^a-z0-9]+", "", s.lower())


@lru_cache(maxsize=1)
def _policy_map() -> Mapping[str, BoundaryPolicy]:
    """Builds the lookup table from normalized names and aliases to policies."""
    policy_map: dict[str, BoundaryPolicy] = {}
    for policy, aliases in _ALIASES:
        policy_map[_norm(policy.name)] = policy
        policy_map[_norm(policy.value)] = policy
        for a in aliases:
            policy_map[_norm(a)] = policy
    return policy_map


def available_boundary_policies() -> list[str]:
    """Returns the canonical boundary policy names."""
    return sorted(p.value for p in BoundaryPolicy)


def resolve_boundary(policy: BoundaryPolicy | str | None) -> BoundaryPolicy:
    """Maps a policy or policy name onto a :class:`BoundaryPolicy`.

    Args:
        policy: A :class:`BoundaryPolicy`, a name or alias, or ``None`` for
            the default (``REFIT_EDGE``).

    Returns:
        The resolved policy.

    Raises:
        InvalidConfiguration: If the name is unknown.
    """
    if policy is None:
        return DEFAULT_BOUNDARY
    if isinstance(policy, BoundaryPolicy):
        return policy
    if not isinstance(policy, str):
        raise InvalidConfiguration(
            f"boundary must be a BoundaryPolicy or a string; got {type(policy).__name__}."
        )
    try:
        return _policy_map()[_norm(policy)]
    except KeyError:
        opts = ", ".join(available_boundary_policies())
        raise InvalidConfiguration(
            f"Unknown boundary policy '{policy}'. Choose one of {{{opts}}}."
        ) from None


def extend_samples(samples: np.ndarray, half_width: int, policy: BoundaryPolicy) -> np.ndarray:
    """Pads ``samples`` by ``half_width`` on both sides.

    ``MIRROR_EXTEND`` reflects about the boundary sample without repeating
    it (``x[-i] = x[i]``), reflecting again when the padding is longer
    than the sequence; a single sample is repeated. ``NEAREST_EXTEND``
    repeats the boundary sample.

    Args:
        samples: 1D array of samples.
        half_width: Number of samples added on each side.
        policy: ``MIRROR_EXTEND`` or ``NEAREST_EXTEND``.

    Returns:
        A new array of length ``len(samples) + 2 * half_width``.

    Raises:
        ValueError: If ``policy`` does not extend the input.
    """
    try:
        mode = _PAD_MODES[policy]
    except KeyError:
        raise ValueError(f"{policy} does not extend the input.") from None
    return np.pad(samples, half_width, mode=mode)
