# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Tests for the three multivector shapes, conversions and validation."""

from fractions import Fraction

import pytest

from geoalg.errors import ComponentCountError, SignatureMismatchError
from geoalg.multivector import (
    BasisBlade,
    MixedMultivector,
    Multivector,
    grade_projection,
    grades,
    promote_pair,
    scalar_part,
    to_blade,
    to_mixed,
    to_multivector,
)
from geoalg.signature import Signature


# ── Construction ──────────────────────────────────────────────────────

class TestConstruction:
    def test_homogeneous_component_count(self, cl3):
        with pytest.raises(ComponentCountError):
            Multivector(cl3, 1, [1, 2])
        with pytest.raises(ComponentCountError):
            Multivector(cl3, 2, [1, 2, 3, 4])

    def test_mixed_component_count(self, cl3):
        with pytest.raises(ComponentCountError):
            MixedMultivector(cl3, [0] * 7)

    def test_grade_out_of_range(self, cl3):
        with pytest.raises(ComponentCountError):
            Multivector(cl3, 4, [1])

    def test_blade_bits_out_of_range(self, cl3):
        with pytest.raises(ComponentCountError):
            BasisBlade(cl3, 0b1000)

    def test_from_blades_accumulates(self, cl3):
        mv = MixedMultivector.from_blades(
            cl3, [BasisBlade(cl3, 1, 2), BasisBlade(cl3, 1, 3), BasisBlade(cl3, 6, -1)]
        )
        assert mv.component(1) == 5
        assert mv.component(6) == -1

    def test_from_blades_signature_mismatch(self, cl3):
        with pytest.raises(SignatureMismatchError):
            MixedMultivector.from_blades(cl3, [BasisBlade(Signature.cl(2), 1)])


# ── Accessors ─────────────────────────────────────────────────────────

class TestAccessors:
    def test_multivector_bits_ascending(self, cl3):
        mv = Multivector(cl3, 2, [1, 2, 3])
        assert mv.bits == (0b011, 0b101, 0b110)
        assert mv.component(0b101) == 2

    def test_nonzero_components_skip_zeros(self, cl3):
        mv = MixedMultivector(cl3, [0, 1, 0, 0, 0, 0, 0, 4])
        assert list(mv.nonzero_components()) == [(1, 1), (7, 4)]
        assert grades(mv) == frozenset({1, 3})

    def test_grade_part(self, cl3):
        mv = MixedMultivector(cl3, range(8))
        assert grade_projection(mv, 2).components == (3, 5, 6)
        assert grade_projection(mv, 0).components == (0,)

    def test_scalar_part(self, cl3):
        assert scalar_part(MixedMultivector(cl3, range(1, 9))) == 1
        assert scalar_part(BasisBlade(cl3, 1, 5)) == 0
        assert scalar_part(7) == 7

    def test_ncomponents_helper(self, cl3):
        from geoalg.multivector import ncomponents
        assert ncomponents(cl3) == 8
        assert ncomponents(cl3, 2) == 3
        assert ncomponents(Multivector.zero(cl3, 1)) == 3
        assert ncomponents(BasisBlade(cl3, 5)) == 1

    def test_blades_and_is_scalar(self, cl3):
        from geoalg.multivector import is_scalar
        mv = MixedMultivector(cl3, [2, 0, 0, 3, 0, 0, 0, 0])
        assert [(b.bits, b.coeff) for b in mv.blades()] == [(0, 2), (3, 3)]
        assert not is_scalar(mv)
        assert is_scalar(MixedMultivector(cl3, [2] + [0] * 7))

    def test_iszero(self, cl3):
        assert Multivector.zero(cl3, 2).iszero()
        assert BasisBlade(cl3, 3, 0).iszero()
        assert not BasisBlade(cl3, 3, 1).iszero()


# ── Conversions ───────────────────────────────────────────────────────

class TestConversions:
    def test_blade_roundtrip(self, cl3):
        blade = BasisBlade(cl3, 0b101, Fraction(3, 4))
        mv = to_multivector(blade)
        mixed = to_mixed(mv)
        back = to_blade(to_multivector(mixed, 2))
        assert back.bits == blade.bits
        assert back.coeff == blade.coeff
        assert mv.grade == 2
        assert mixed.component(0b101) == Fraction(3, 4)

    def test_to_blade_rejects_sums(self, cl3):
        with pytest.raises(ValueError):
            to_blade(Multivector(cl3, 1, [1, 1, 0]))

    def test_promote_pair(self, cl3):
        a, b = promote_pair(BasisBlade(cl3, 1), BasisBlade(cl3, 2))
        assert isinstance(a, Multivector) and isinstance(b, Multivector)
        a, b = promote_pair(BasisBlade(cl3, 1), BasisBlade(cl3, 3))
        assert isinstance(a, MixedMultivector) and isinstance(b, MixedMultivector)
        a, b = promote_pair(BasisBlade(cl3, 1, 2), BasisBlade(cl3, 1, 3))
        assert isinstance(a, BasisBlade)


# ── Equality and arithmetic ───────────────────────────────────────────

class TestEquality:
    def test_equal_across_shapes(self, cl3):
        blade = BasisBlade(cl3, 0b11, 2)
        assert blade == Multivector(cl3, 2, [2, 0, 0])
        assert blade == MixedMultivector(cl3, [0, 0, 0, 2, 0, 0, 0, 0])

    def test_scalar_comparison(self, cl3):
        assert BasisBlade.scalar(cl3, 3) == 3
        assert MixedMultivector(cl3, [3] + [0] * 7) == 3
        assert BasisBlade(cl3, 1, 3) != 3

    def test_different_signatures_never_equal(self, cl3):
        assert BasisBlade(cl3, 1) != BasisBlade(Signature.cl(2, 1), 1)

    def test_isapprox(self, cl3):
        a = Multivector(cl3, 1, [1.0, 2.0, 3.0])
        b = Multivector(cl3, 1, [1.0, 2.0, 3.0 + 1e-12])
        assert a.isapprox(b)
        assert not a.isapprox(Multivector(cl3, 1, [1.0, 2.0, 3.1]))

    def test_unhashable(self, cl3):
        with pytest.raises(TypeError):
            hash(BasisBlade(cl3, 1))


class TestArithmetic:
    def test_add_promotes(self, blades3):
        v1, v2, v12 = blades3['v1'], blades3['v2'], blades3['v12']
        s = v1 + v2
        assert isinstance(s, Multivector)
        assert s.components == (1, 1, 0)
        t = v1 + v12
        assert isinstance(t, MixedMultivector)
        assert t.component(1) == 1 and t.component(3) == 1

    def test_scalar_add_sub(self, blades3):
        v1 = blades3['v1']
        m = 2 + v1
        assert scalar_part(m) == 2
        assert (v1 - 2) == -(2 - v1)

    def test_scalar_multiply(self, blades3):
        v1 = blades3['v1']
        assert (3 * v1).coeff == 3
        assert (v1 * 3).coeff == 3

    def test_add_signature_mismatch(self, blades3):
        other = BasisBlade(Signature.cl(3, 1), 1)
        with pytest.raises(SignatureMismatchError):
            blades3['v1'] + other
