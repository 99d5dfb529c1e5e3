"""Tests for savgolkit.kernel.generator."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from savgolkit.convolution.convolver import apply
from savgolkit.errors import InvalidConfiguration
from savgolkit.kernel.generator import generate_kernel
from savgolkit.kernel.kernel import Kernel
from savgolkit.kernel.window_config import WindowConfig

CONFIGS = [
    (m, d, k, h)
    for m in (1, 2, 3, 5, 8)
    for d in range(0, min(2 * m, 6) + 1)
    for k in range(0, d + 1)
    for h in (1.0, 0.5)
]


def test_returns_kernel_with_config():
    """Tests that generate_kernel returns a Kernel carrying its configuration."""
    kernel = generate_kernel(2, 2, 1, 0.5)

    assert isinstance(kernel, Kernel)
    assert kernel.config == WindowConfig(2, 2, 1, 0.5)
    assert kernel.coefficients.shape == (5,)


def test_accepts_window_config():
    """Tests that a ready WindowConfig can be passed instead of parameters."""
    cfg = WindowConfig(3, 2)
    assert_allclose(generate_kernel(cfg).coefficients, generate_kernel(3, 2).coefficients)


def test_rejects_config_combined_with_parameters():
    """Tests that mixing a config with explicit parameters is an error."""
    with pytest.raises(InvalidConfiguration):
        generate_kernel(WindowConfig(3, 2), 2)
    with pytest.raises(InvalidConfiguration):
        generate_kernel(WindowConfig(3, 2), spacing=0.5)


def test_requires_degree():
    """Tests that the degree must be given with a bare half-width."""
    with pytest.raises(InvalidConfiguration):
        generate_kernel(2)


def test_degree_too_high_is_rejected():
    """Tests the documented error scenario m=2, d=5."""
    with pytest.raises(InvalidConfiguration):
        generate_kernel(2, 5, 0, 1.0)


@pytest.mark.parametrize(
    "args",
    [(0, 0), (2, -1), (2, 2, 3), (2, 2, -1), (2, 2, 0, 0.0), (2, 2, 0, -1.0)],
)
def test_invalid_parameters_are_rejected(args):
    """Tests that invalid parameters raise InvalidConfiguration."""
    with pytest.raises(InvalidConfiguration):
        generate_kernel(*args)


@pytest.mark.parametrize(
    "m, d, k, expected",
    [
        (1, 0, 0, np.array([1, 1, 1]) / 3.0),
        (2, 2, 0, np.array([-3, 12, 17, 12, -3]) / 35.0),
        (3, 2, 0, np.array([-2, 3, 6, 7, 6, 3, -2]) / 21.0),
        (3, 4, 0, np.array([5, -30, 75, 131, 75, -30, 5]) / 231.0),
        (2, 2, 1, np.array([-2, -1, 0, 1, 2]) / 10.0),
        (3, 2, 2, np.array([5, 0, -3, -4, -3, 0, 5]) / 42.0),
        (2, 4, 0, np.array([0, 0, 1, 0, 0], dtype=float)),
    ],
)
def test_tabulated_coefficients(m, d, k, expected):
    """Tests kernels against classical tabulated Savitzky-Golay coefficients."""
    assert_allclose(generate_kernel(m, d, k).coefficients, expected, rtol=0, atol=1e-13)


@pytest.mark.parametrize("m, d, k, h", CONFIGS)
def test_symmetry(m, d, k, h):
    """Tests that kernels are symmetric for even k and antisymmetric for odd k."""
    c = generate_kernel(m, d, k, h).coefficients
    sign = 1.0 if k % 2 == 0 else -1.0
    assert_array_equal(c, sign * c[::-1])


@pytest.mark.parametrize("m, d, h", [(m, d, h) for (m, d, k, h) in CONFIGS if k == 0])
def test_smoothing_kernel_sums_to_one(m, d, h):
    """Tests that smoothing kernels leave constant sequences unchanged."""
    assert math.isclose(float(np.sum(generate_kernel(m, d, 0, h).coefficients)), 1.0, rel_tol=1e-10)


@pytest.mark.parametrize("m, d, k, h", [c for c in CONFIGS if c[2] > 0])
def test_derivative_kernel_sums_to_zero(m, d, k, h):
    """Tests that derivative kernels annihilate constants."""
    c = generate_kernel(m, d, k, h).coefficients
    assert abs(float(np.sum(c))) <= 1e-10 * float(np.sum(np.abs(c)))


@pytest.mark.parametrize("m, d, k, h", CONFIGS)
def test_derivative_of_monomials(m, d, k, h):
    """Tests that the kernel returns the exact k-th derivative of x^p for p <= d."""
    c = generate_kernel(m, d, k, h).coefficients
    x0 = 0.3
    x = x0 + h * np.arange(-m, m + 1)
    for p in range(d + 1):
        got = float(c @ x**p)
        if p < k:
            expected = 0.0
        else:
            expected = math.factorial(p) / math.factorial(p - k) * x0 ** (p - k)
        scale = max(1.0, float(np.sum(np.abs(c * x**p))))
        assert abs(got - expected) <= 1e-10 * scale, (p, got, expected)


def test_wide_window_stays_accurate():
    """Tests a wide, high-degree window for exact polynomial reproduction."""
    m, d = 50, 8
    c = generate_kernel(m, d).coefficients
    z = np.arange(-m, m + 1, dtype=float) / m
    y = 1.0 + z - 3 * z**4 + 2 * z**8

    assert math.isclose(float(c @ y), 1.0, rel_tol=1e-9)
    assert np.all(np.isfinite(c))


def test_kernel_coefficients_are_independent_of_later_calls():
    """Tests that generating another kernel does not alter an earlier one."""
    first = generate_kernel(2, 2)
    before = first.coefficients.copy()
    generate_kernel(2, 2, 1)
    assert_array_equal(first.coefficients, before)


@pytest.mark.parametrize("m", range(1, 16))
def test_interpolating_kernel_is_unit_impulse(m):
    """Tests that degree 2m interpolates the window, so smoothing is the identity."""
    c = generate_kernel(m, 2 * m).coefficients

    expected = np.zeros(2 * m + 1)
    expected[m] = 1.0
    assert_allclose(c, expected, rtol=0, atol=1e-9)


@pytest.mark.parametrize("m, d", [(8, 16), (12, 20), (15, 22), (15, 30)])
def test_high_degree_kernel_reproduces_polynomials(m, d, rng):
    """Tests exact smoothing of random degree-d polynomials on wide windows."""
    z = np.arange(-m, m + 1, dtype=float) / m
    coeffs = rng.standard_normal(d + 1)
    y = np.polynomial.polynomial.polyval(z, coeffs)

    got = float(generate_kernel(m, d).coefficients @ y)

    assert math.isclose(got, coeffs[0], rel_tol=0, abs_tol=1e-8 * np.sum(np.abs(coeffs)))


def test_interpolating_kernel_leaves_samples_unchanged(rng):
    """Tests that filtering with an interpolating kernel returns the input."""
    x = rng.standard_normal(60)

    out = apply(generate_kernel(10, 20), x, "truncate")

    assert_allclose(out, x, rtol=0, atol=1e-9)
