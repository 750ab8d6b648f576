"""Tests for element-wise ensemble arithmetic."""

from __future__ import annotations

import math

import numpy as np
import pytest

from ensem_core import (
    ElementKind,
    ElementKindError,
    Ensemble,
    ShapeError,
    arctan2,
    cmplx,
    conjugate,
    from_scalar,
    imag_part,
    norm2,
    power,
    real_part,
    sqrt,
    times_i,
)


# ── Linear operations ───────────────────────────────────────────────────


class TestAddSubtract:
    """Addition never rescales, so algebraic identities hold bin by bin."""

    @pytest.fixture
    def integral(self, rng):
        return [
            Ensemble.from_bins(rng.integers(-50, 50, size=(6, 3)).astype(float))
            for _ in range(3)
        ]

    def test_commutative(self, integral):
        a, b, _ = integral
        np.testing.assert_array_equal((a + b).data, (b + a).data)

    def test_associative(self, integral):
        a, b, c = integral
        np.testing.assert_array_equal(((a + b) + c).data, (a + (b + c)).data)

    def test_commutative_random(self, real_ens, complex_ens):
        np.testing.assert_array_equal(
            (real_ens + complex_ens).data, (complex_ens + real_ens).data
        )

    def test_bin_count_mismatch_raises(self):
        """3 bins against 4 bins fails with no result."""
        a = from_scalar(1.0, 3, 1)
        b = from_scalar(1.0, 4, 1)
        with pytest.raises(ShapeError, match="bin counts differ"):
            a + b

    def test_subtract_self_is_zero(self, complex_ens):
        np.testing.assert_array_equal((complex_ens - complex_ens).data, 0.0)

    def test_promotion(self, real_ens, complex_ens):
        assert (real_ens + real_ens).kind is ElementKind.real
        assert (real_ens - complex_ens).kind is ElementKind.complex

    def test_broadcast_scalar_ensemble(self, real_ens, scalar_ens):
        out = real_ens + scalar_ens
        np.testing.assert_allclose(out.data, real_ens.data + scalar_ens.data)
        out = scalar_ens - real_ens
        np.testing.assert_allclose(out.data, scalar_ens.data - real_ens.data)


class TestScalarOps:
    def test_add_real_scalar(self, real_ens):
        np.testing.assert_allclose((real_ens + 2.5).data, real_ens.data + 2.5)
        np.testing.assert_allclose((2.5 + real_ens).data, real_ens.data + 2.5)

    def test_add_complex_scalar_promotes(self, real_ens):
        out = real_ens + 1j
        assert out.is_complex
        np.testing.assert_allclose(out.data.imag, 1.0)

    def test_subtract_scalar_both_sides(self, real_ens):
        np.testing.assert_allclose((real_ens - 1.0).data, real_ens.data - 1.0)
        np.testing.assert_allclose((1.0 - real_ens).data, 1.0 - real_ens.data)

    def test_multiply_scalar_is_direct(self, complex_ens):
        out = 3.0 * complex_ens
        np.testing.assert_allclose(out.data, 3.0 * complex_ens.data)

    def test_multiply_complex_scalar(self, real_ens):
        out = real_ens * 2j
        assert out.is_complex
        np.testing.assert_allclose(out.data.imag, 2.0 * real_ens.data.real)

    def test_scalar_multiply_matches_constant_ensemble(self, real_ens):
        """Direct scaling and the bracketed constant-ensemble path agree."""
        direct = real_ens * 3.0
        via_ensemble = real_ens * from_scalar(3.0, real_ens.nbin, 1)
        np.testing.assert_allclose(direct.data, via_ensemble.data, rtol=1e-12)

    def test_divide_by_scalar(self, complex_ens):
        np.testing.assert_allclose((complex_ens / 4.0).data, complex_ens.data / 4.0)

    def test_scalar_over_ensemble(self, real_ens):
        """``scalar / ensemble`` takes the bracketed constant-ensemble path."""
        out = 1.0 / real_ens
        expected = from_scalar(1.0, real_ens.nbin, 1) / real_ens
        assert out.shape == real_ens.shape
        np.testing.assert_array_equal(out.data, expected.data)


# ── Multiplicative operations ───────────────────────────────────────────


class TestMultiplyDivide:
    def test_multiplicative_identity(self, complex_ens):
        one = from_scalar(1.0, complex_ens.nbin, 1)
        np.testing.assert_allclose((complex_ens * one).data, complex_ens.data, rtol=1e-12)

    def test_complex_times_real_constants(self):
        src2 = from_scalar(17.0, 3, 4)
        src3 = from_scalar(5.0 + 7.3j, 3, 4)
        out = src3 * src2
        assert out.is_complex
        np.testing.assert_allclose(out.data, np.full((3, 4), 85.0 + 124.1j))

    def test_complex_divide_formula(self):
        a = from_scalar(1.0 + 2.0j, 4, 2)
        b = from_scalar(3.0 + 4.0j, 4, 2)
        np.testing.assert_allclose((a / b).data, np.full((4, 2), 0.44 + 0.08j))

    def test_divide_by_real_divides_components(self):
        a = from_scalar(6.0 - 3.0j, 4, 2)
        b = from_scalar(3.0, 4, 1)
        np.testing.assert_allclose((a / b).data, np.full((4, 2), 2.0 - 1.0j))

    def test_divide_by_zero_scalar_gives_inf(self, real_ens):
        out = real_ens / 0.0
        assert np.all(np.isinf(out.data.real))
        np.testing.assert_array_equal(out.data.imag, 0.0)

    def test_divide_by_zero_ensemble_does_not_raise(self, real_ens):
        out = real_ens / from_scalar(0.0, real_ens.nbin, 1)
        assert not np.any(np.isfinite(out.data.real))
        assert out.is_real

    def test_divide_self_is_one(self, real_ens):
        np.testing.assert_allclose((real_ens / real_ens).data, 1.0, rtol=1e-12)

    def test_shape_error_propagates(self):
        with pytest.raises(ShapeError):
            from_scalar(1.0, 3, 2) * from_scalar(1.0, 4, 2)


# ── Unary operations ────────────────────────────────────────────────────


class TestUnary:
    def test_negate(self, complex_ens):
        np.testing.assert_array_equal((-complex_ens).data, -complex_ens.data)

    def test_conjugate_real_is_identity(self, real_ens):
        out = conjugate(real_ens)
        assert out.is_real
        np.testing.assert_array_equal(out.data, real_ens.data)

    def test_conjugate_complex(self, complex_ens):
        out = conjugate(complex_ens)
        np.testing.assert_array_equal(out.data.imag, -complex_ens.data.imag)

    def test_real_and_imag_parts_are_real(self, complex_ens):
        re, im = real_part(complex_ens), imag_part(complex_ens)
        assert re.is_real and im.is_real
        np.testing.assert_array_equal(re.data.real, complex_ens.data.real)
        np.testing.assert_array_equal(im.data.real, complex_ens.data.imag)

    def test_norm2_constant(self):
        out = norm2(from_scalar(3.0 + 4.0j, 3, 2))
        assert out.is_real
        np.testing.assert_allclose(out.data.real, 25.0)

    def test_times_i_real(self):
        out = times_i(from_scalar(2.0, 2, 2))
        assert out.is_complex
        np.testing.assert_array_equal(out.data, np.full((2, 2), 2.0j))

    def test_times_i_complex(self):
        out = times_i(from_scalar(1.0 + 2.0j, 2, 2))
        np.testing.assert_array_equal(out.data, np.full((2, 2), -2.0 + 1.0j))

    def test_cmplx(self, real_ens, scalar_ens):
        out = cmplx(real_ens, scalar_ens)
        assert out.is_complex
        np.testing.assert_array_equal(out.data.real, real_ens.data.real)
        np.testing.assert_array_equal(
            out.data.imag, np.broadcast_to(scalar_ens.data.real, real_ens.shape)
        )

    def test_cmplx_requires_real(self, complex_ens, real_ens):
        with pytest.raises(ElementKindError, match="cmplx requires real"):
            cmplx(complex_ens, real_ens)


class TestNonlinearFunctions:
    def test_arctan2_constants(self):
        out = arctan2(from_scalar(1.0, 3, 2), from_scalar(1.0, 3, 2))
        np.testing.assert_allclose(out.data.real, math.pi / 4)

    def test_arctan2_requires_real(self, complex_ens, real_ens):
        with pytest.raises(ElementKindError):
            arctan2(complex_ens, real_ens)

    def test_power(self):
        out = from_scalar(3.0, 4, 2) ** 2
        np.testing.assert_allclose(out.data.real, 9.0)

    def test_power_requires_real(self, complex_ens):
        with pytest.raises(ElementKindError):
            power(complex_ens, 2.0)
        with pytest.raises(ElementKindError, match="real exponent"):
            power(from_scalar(1.0, 2, 1), 2j)

    def test_sqrt_squares_back(self, real_ens):
        np.testing.assert_allclose((sqrt(real_ens) ** 2).data, real_ens.data, rtol=1e-10)
