# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Tests for the product engine: geometric, graded and sign-graded products."""

import math

import pytest

from geoalg import algebra
from geoalg.basis import basis, pseudoscalar
from geoalg.errors import SignatureMismatchError
from geoalg.multivector import BasisBlade, MixedMultivector, Multivector
from geoalg.signature import Signature


# ── Euclidean 3D scenarios ────────────────────────────────────────────

class TestEuclidean3Scenarios:
    def test_vector_squares_to_one(self, blades3):
        v1 = blades3['v1']
        assert v1 * v1 == 1

    def test_anticommuting_vectors(self, blades3):
        v1, v2 = blades3['v1'], blades3['v2']
        assert v1 * v2 == -(v2 * v1)
        assert (v1 * v2).bits == 0b011

    def test_pseudoscalar_squares_to_minus_one(self, blades3):
        v1, v2, v3 = blades3['v1'], blades3['v2'], blades3['v3']
        I = v1 * v2 * v3
        assert I * I == -1

    def test_hodgedual_of_v1(self, blades3):
        assert algebra.hodgedual(blades3['v1']) == blades3['v2'] * blades3['v3']

    def test_bivector_exp(self, blades3):
        v12 = blades3['v12']
        theta = 0.3
        expected = math.cos(theta) + math.sin(theta) * v12
        assert algebra.exp(theta * v12).isapprox(expected)
        assert algebra.exp((math.pi / 2) * v12).isapprox(v12)

    def test_self_wedge_is_zero_bivector(self, blades3):
        w = blades3['v1'] ^ blades3['v1']
        assert isinstance(w, Multivector)
        assert w.grade == 2
        assert w == 0


# ── Geometric product ─────────────────────────────────────────────────

class TestGeometricProduct:
    @pytest.mark.parametrize("squares", [(1, 1, 1), (1, 1, -1), (-1, 1, 1, 1), (1, 1, 0)])
    def test_basis_vectors(self, squares):
        sig = Signature(squares)
        vs = basis(sig)
        for i, ei in enumerate(vs):
            assert ei * ei == sig[i]
            for j, ej in enumerate(vs):
                if i != j:
                    assert ei * ej == -(ej * ei)

    def test_blade_times_blade_stays_blade(self, blades3):
        assert isinstance(blades3['v12'] * blades3['v23'], BasisBlade)

    def test_mixed_product(self, blades3):
        v1, v2 = blades3['v1'], blades3['v2']
        a = 1 + v1
        b = 1 + v2
        prod = a * b
        assert isinstance(prod, MixedMultivector)
        assert prod == 1 + v1 + v2 + v1 * v2

    def test_scalar_operands(self, blades3):
        v1 = blades3['v1']
        assert algebra.geometric_prod(2, v1) == 2 * v1
        assert algebra.geometric_prod(v1, 2) == v1 * 2
        assert algebra.geometric_prod(2, 3) == 6

    def test_signature_mismatch(self, blades3):
        other = basis(Signature.cl(2, 1))[0]
        with pytest.raises(SignatureMismatchError):
            blades3['v1'] * other

    def test_degenerate_square(self):
        e = basis(Signature.cl(2, 0, 1))
        assert (e[2] * e[2]).iszero()

    def test_associativity_and_distributivity(self, cl3, random_mixed):
        a, b, c = (random_mixed(cl3) for _ in range(3))
        assert ((a * b) * c).isapprox(a * (b * c))
        assert (a * (b + c)).isapprox(a * b + a * c)

    def test_exact_rational_coefficients(self, cl3):
        from fractions import Fraction
        a = Multivector(cl3, 1, [Fraction(1, 2), Fraction(1, 3), 0])
        sq = a * a
        assert sq == Fraction(13, 36)


# ── Graded products ───────────────────────────────────────────────────

class TestGradedProducts:
    def test_wedge_antisymmetry(self, cl3, rng):
        u = Multivector.vector(cl3, rng.standard_normal(3).tolist())
        v = Multivector.vector(cl3, rng.standard_normal(3).tolist())
        w = u ^ v
        assert w.isapprox(-(v ^ u))
        assert w.grade == 2

    def test_vector_split(self, cl3, rng):
        u = Multivector.vector(cl3, rng.standard_normal(3).tolist())
        v = Multivector.vector(cl3, rng.standard_normal(3).tolist())
        assert (u * v).isapprox((u | v) + (u ^ v))

    def test_inner_of_vectors(self, cl3):
        u = Multivector.vector(cl3, [1, 2, 3])
        v = Multivector.vector(cl3, [4, 5, 6])
        assert (u | v) == 32
        assert algebra.scalar_prod(u, v) == 32

    def test_contractions(self, blades3):
        v1, v2, v12 = blades3['v1'], blades3['v2'], blades3['v12']
        assert (v1 << v12) == v2
        assert (v12 >> v2) == v1
        assert (v12 << v1).iszero()

    def test_out_of_range_selector_gives_zero(self, blades3):
        out = algebra.graded_prod(blades3['v1'], blades3['v2'], lambda p, q: p + q + 5)
        assert out.iszero()
        out = algebra.graded_prod(blades3['v1'], blades3['v12'], lambda p, q: p - q)
        assert out.iszero()

    def test_mixed_graded_product(self, blades3):
        v1, v2, v3 = blades3['v1'], blades3['v2'], blades3['v3']
        a = v1 + v1 * v2
        w = a ^ v3
        assert w == (v1 ^ v3) + (v1 * v2 * v3)

    def test_scalar_prod_different_grades(self, blades3):
        assert algebra.scalar_prod(blades3['v1'], blades3['v12']) == 0

    def test_scalar_prod_uses_metric(self):
        e = basis(Signature.cl(1, 1))
        assert algebra.scalar_prod(e[1], e[1]) == -1


# ── Sign-graded operators ─────────────────────────────────────────────

class TestInvolutions:
    def test_reversion_signs(self, cl3):
        a = MixedMultivector(cl3, [1] * 8)
        r = ~a
        assert r.components == (1, 1, 1, -1, 1, -1, -1, -1)

    def test_involution_and_conjugate(self, cl3):
        a = MixedMultivector(cl3, [1] * 8)
        assert algebra.involution(a).components == (1, -1, -1, 1, -1, 1, 1, -1)
        assert algebra.clifford_conj(a).components == (1, -1, -1, -1, -1, -1, -1, 1)

    def test_reversion_anti_automorphism(self, cl3, random_mixed):
        a, b = random_mixed(cl3), random_mixed(cl3)
        assert (~(a * b)).isapprox((~b) * (~a))

    def test_reversion_keeps_shape(self, blades3):
        r = ~blades3['v12']
        assert isinstance(r, BasisBlade)
        assert r.coeff == -1


class TestReflectedOperators:
    def test_scalar_left_operand_contractions(self, blades3):
        v1 = blades3['v1']
        assert (2 << v1) == algebra.lcontract(2, v1)
        assert (2 << v1) == 2 * v1
        assert (2 >> v1) == algebra.rcontract(2, v1)

    def test_scalar_left_operand_antiwedge(self, cl3, blades3):
        assert (2 & blades3['v1']).iszero()
        assert (2 & pseudoscalar(cl3)) == 2
