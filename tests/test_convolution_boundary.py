"""Tests for boundary policy resolution and sample extension."""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from savgolkit.convolution.boundary import (
    DEFAULT_BOUNDARY,
    BoundaryPolicy,
    available_boundary_policies,
    extend_samples,
    resolve_boundary,
)
from savgolkit.errors import InvalidConfiguration


@pytest.mark.parametrize(
    "name, expected",
    [
        ("truncate", BoundaryPolicy.TRUNCATE),
        ("TRUNCATE", BoundaryPolicy.TRUNCATE),
        ("copy", BoundaryPolicy.TRUNCATE),
        ("mirror_extend", BoundaryPolicy.MIRROR_EXTEND),
        ("Mirror-Extend", BoundaryPolicy.MIRROR_EXTEND),
        ("reflect", BoundaryPolicy.MIRROR_EXTEND),
        ("nearest extend", BoundaryPolicy.NEAREST_EXTEND),
        ("edge", BoundaryPolicy.NEAREST_EXTEND),
        ("refit_edge", BoundaryPolicy.REFIT_EDGE),
        ("interp", BoundaryPolicy.REFIT_EDGE),
    ],
)
def test_resolve_boundary_names_and_aliases(name, expected):
    """Tests that names resolve regardless of case, spacing and punctuation."""
    assert resolve_boundary(name) is expected


def test_resolve_boundary_passes_enum_through():
    """Tests that policy members resolve to themselves."""
    for policy in BoundaryPolicy:
        assert resolve_boundary(policy) is policy


def test_resolve_boundary_none_is_default():
    """Tests that None selects the edge refit."""
    assert resolve_boundary(None) is DEFAULT_BOUNDARY
    assert DEFAULT_BOUNDARY is BoundaryPolicy.REFIT_EDGE


@pytest.mark.parametrize("bad", ["zero_pad", "", 3, 1.5])
def test_resolve_boundary_rejects_unknown(bad):
    """Tests that unknown names and non-strings raise InvalidConfiguration."""
    with pytest.raises(InvalidConfiguration):
        resolve_boundary(bad)


def test_available_boundary_policies():
    """Tests the list of canonical names."""
    assert available_boundary_policies() == [
        "mirror_extend",
        "nearest_extend",
        "refit_edge",
        "truncate",
    ]


def test_only_refit_requires_full_window():
    """Tests which policies need a full window of samples."""
    assert BoundaryPolicy.REFIT_EDGE.requires_full_window
    assert not BoundaryPolicy.TRUNCATE.requires_full_window
    assert not BoundaryPolicy.MIRROR_EXTEND.requires_full_window
    assert not BoundaryPolicy.NEAREST_EXTEND.requires_full_window


def test_extend_samples_mirror_skips_boundary_sample():
    """Tests that mirroring reflects about the boundary sample."""
    x = np.array([1.0, 2.0, 3.0, 4.0])
    out = extend_samples(x, 2, BoundaryPolicy.MIRROR_EXTEND)
    assert_array_equal(out, [3.0, 2.0, 1.0, 2.0, 3.0, 4.0, 3.0, 2.0])


def test_extend_samples_mirror_longer_than_input():
    """Tests that padding longer than the input keeps reflecting."""
    x = np.array([1.0, 2.0])
    out = extend_samples(x, 3, BoundaryPolicy.MIRROR_EXTEND)
    assert out.shape == (8,)
    assert_array_equal(out[3:5], x)
    assert set(out.tolist()) <= {1.0, 2.0}


def test_extend_samples_mirror_single_sample_repeats():
    """Tests that a single sample is repeated when mirrored."""
    out = extend_samples(np.array([5.0]), 2, BoundaryPolicy.MIRROR_EXTEND)
    assert_array_equal(out, [5.0] * 5)


def test_extend_samples_nearest():
    """Tests that the boundary sample is repeated."""
    x = np.array([1.0, 2.0, 3.0])
    out = extend_samples(x, 2, BoundaryPolicy.NEAREST_EXTEND)
    assert_array_equal(out, [1.0, 1.0, 1.0, 2.0, 3.0, 3.0, 3.0])


@pytest.mark.parametrize("policy", [BoundaryPolicy.TRUNCATE, BoundaryPolicy.REFIT_EDGE])
def test_extend_samples_rejects_non_extending_policy(policy):
    """Tests that only the extension policies pad."""
    with pytest.raises(ValueError):
        extend_samples(np.ones(4), 1, policy)
