# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Multivector Container Classes.

Three immutable entity shapes share one capability set:

- :class:`BasisBlade`: one coefficient times one basis blade (bitmask).
- :class:`Multivector`: homogeneous, one coefficient per grade-``k`` blade
  in ascending-bitmask order (``C(n, k)`` components).
- :class:`MixedMultivector`: one coefficient per blade of every grade, the
  storage index being the bitmask itself (``2^n`` components).

Conversion only widens (blade -> homogeneous -> mixed) and is lossless.
Narrowing is a projection. Operators forward to :mod:`geoalg.algebra`:

=========  ==========================================
``a * b``  geometric product (scalar product if ``b`` is a number)
``a ^ b``  wedge
``a | b``  inner product
``a << b`` left contraction
``a >> b`` right contraction
``a & b``  antiwedge (regressive product)
``a ** p`` integer power
``~a``     reversion
``a / b``  right division, ``a // b`` exact rational division
=========  ==========================================
"""

from typing import Iterator, Tuple

import numpy as np

from geoalg.bits import bits_of_grade, canonical_index, grade as bits_grade, ncomponents as _count
from geoalg.errors import SignatureMismatchError
from geoalg.signature import Signature
from geoalg.validation import (
    check_bits,
    check_components,
    check_grade,
    check_same_signature,
    iszero,
)

_NOT_SCALARS = (str, bytes, list, tuple, dict, set)


class AbstractMultivector:
    """Capabilities shared by the three entity shapes.

    Concrete shapes are exactly :class:`BasisBlade`, :class:`Multivector`
    and :class:`MixedMultivector`; ``_level`` orders them for promotion.
    """

    __slots__ = ()
    _level = None

    @property
    def dimension(self) -> int:
        return self.signature.dimension

    def nonzero_components(self) -> Iterator[Tuple[int, object]]:
        """Yields ``(bits, coeff)`` for every exactly-nonzero component."""
        raise NotImplementedError

    def blades(self) -> Iterator["BasisBlade"]:
        """Nonzero components as :class:`BasisBlade` values."""
        for bits, coeff in self.nonzero_components():
            yield BasisBlade(self.signature, bits, coeff)

    def iszero(self) -> bool:
        for _ in self.nonzero_components():
            return False
        return True

    def isapprox(self, other, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
        return isapprox(self, other, rtol=rtol, atol=atol)

    # Equality

    def __eq__(self, other):
        if isinstance(other, AbstractMultivector) or is_scalar_value(other):
            return equals(self, other)
        return NotImplemented

    __hash__ = None

    # Additive structure

    def __add__(self, other):
        if isinstance(other, AbstractMultivector):
            return add(self, other)
        if is_scalar_value(other):
            return add_scalar(self, other)
        return NotImplemented

    def __radd__(self, other):
        if is_scalar_value(other):
            return add_scalar(self, other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, AbstractMultivector):
            return add(self, -other)
        if is_scalar_value(other):
            return add_scalar(self, -other)
        return NotImplemented

    def __rsub__(self, other):
        if is_scalar_value(other):
            return add_scalar(-self, other)
        return NotImplemented

    def __neg__(self):
        return map_coefficients(self, lambda c: -c)

    def __pos__(self):
        return self

    # Products

    def __mul__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector):
            return algebra.geometric_prod(self, other)
        if is_scalar_value(other):
            return scalar_multiply(self, other)
        return NotImplemented

    def __rmul__(self, other):
        if is_scalar_value(other):
            return scalar_lmultiply(other, self)
        return NotImplemented

    def __xor__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector) or is_scalar_value(other):
            return algebra.wedge(self, other)
        return NotImplemented

    def __rxor__(self, other):
        from geoalg import algebra
        if is_scalar_value(other):
            return algebra.wedge(other, self)
        return NotImplemented

    def __or__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector) or is_scalar_value(other):
            return algebra.inner(self, other)
        return NotImplemented

    def __ror__(self, other):
        from geoalg import algebra
        if is_scalar_value(other):
            return algebra.inner(other, self)
        return NotImplemented

    def __lshift__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector):
            return algebra.lcontract(self, other)
        return NotImplemented

    def __rlshift__(self, other):
        from geoalg import algebra
        if is_scalar_value(other):
            return algebra.lcontract(other, self)
        return NotImplemented

    def __rshift__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector):
            return algebra.rcontract(self, other)
        return NotImplemented

    def __rrshift__(self, other):
        from geoalg import algebra
        if is_scalar_value(other):
            return algebra.rcontract(other, self)
        return NotImplemented

    def __and__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector):
            return algebra.antiwedge(self, other)
        return NotImplemented

    def __rand__(self, other):
        from geoalg import algebra
        if is_scalar_value(other):
            return algebra.antiwedge(other, self)
        return NotImplemented

    def __truediv__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector) or is_scalar_value(other):
            return algebra.divide(self, other)
        return NotImplemented

    def __rtruediv__(self, other):
        from geoalg import algebra
        if is_scalar_value(other):
            return algebra.divide(other, self)
        return NotImplemented

    def __floordiv__(self, other):
        from geoalg import algebra
        if isinstance(other, AbstractMultivector) or is_scalar_value(other):
            return algebra.rational_divide(self, other)
        return NotImplemented

    def __pow__(self, p):
        from geoalg import algebra
        return algebra.power(self, p)

    def __invert__(self):
        from geoalg import algebra
        return algebra.reversion(self)

    def __repr__(self):
        from geoalg.show import show
        return show(self)


class BasisBlade(AbstractMultivector):
    """A single term ``coeff * e_A``.

    Attributes:
        signature (Signature): The algebra.
        bits (int): Blade bitmask ``A``.
        coeff: Scalar coefficient.
        grade (int): ``popcount(bits)``.
    """

    __slots__ = ('_signature', '_bits', '_coeff')
    _level = 0

    def __init__(self, signature: Signature, bits: int, coeff=1):
        check_bits(bits, signature.dimension)
        self._signature = signature
        self._bits = bits
        self._coeff = coeff

    @classmethod
    def scalar(cls, signature: Signature, value=1) -> "BasisBlade":
        return cls(signature, 0, value)

    @property
    def signature(self) -> Signature:
        return self._signature

    @property
    def bits(self) -> int:
        return self._bits

    @property
    def coeff(self):
        return self._coeff

    @property
    def grade(self) -> int:
        return bits_grade(self._bits)

    @property
    def is_homogeneous(self) -> bool:
        return True

    @property
    def ncomponents(self) -> int:
        return 1

    def nonzero_components(self):
        if not iszero(self._coeff):
            yield self._bits, self._coeff


class Multivector(AbstractMultivector):
    """Homogeneous multivector of a fixed grade.

    Attributes:
        signature (Signature): The algebra.
        grade (int): Grade ``k`` of every component.
        components (tuple): ``C(n, k)`` coefficients, ascending bitmask order.
    """

    __slots__ = ('_signature', '_grade', '_components')
    _level = 1

    def __init__(self, signature: Signature, grade: int, components):
        """Initializes a homogeneous multivector.

        Args:
            signature (Signature): The algebra.
            grade (int): Grade in ``0..n``.
            components: Exactly ``C(n, grade)`` coefficients.

        Raises:
            ComponentCountError: On a bad grade or component count.
        """
        n = signature.dimension
        check_grade(grade, n)
        components = tuple(components)
        check_components(components, _count(n, grade), f"grade-{grade} multivector")
        self._signature = signature
        self._grade = grade
        self._components = components

    @classmethod
    def zero(cls, signature: Signature, grade: int) -> "Multivector":
        return cls(signature, grade, (0,) * _count(signature.dimension, grade))

    @classmethod
    def vector(cls, signature: Signature, coeffs) -> "Multivector":
        """Grade-1 multivector ``sum_i coeffs[i] e_i``."""
        return cls(signature, 1, coeffs)

    @classmethod
    def from_blade(cls, blade: BasisBlade) -> "Multivector":
        """Places the coefficient at the blade's slot in a zero array."""
        k = blade.grade
        comps = [0] * _count(blade.dimension, k)
        comps[canonical_index(blade.bits, k)] = blade.coeff
        return cls(blade.signature, k, comps)

    @property
    def signature(self) -> Signature:
        return self._signature

    @property
    def grade(self) -> int:
        return self._grade

    @property
    def components(self) -> tuple:
        return self._components

    @property
    def bits(self) -> Tuple[int, ...]:
        """Bitmask of each component slot."""
        return bits_of_grade(self._grade, self.dimension)

    @property
    def is_homogeneous(self) -> bool:
        return True

    @property
    def ncomponents(self) -> int:
        return len(self._components)

    def component(self, bits: int):
        """Coefficient of blade ``bits`` (zero if of another grade)."""
        check_bits(bits, self.dimension)
        if bits_grade(bits) != self._grade:
            return 0
        return self._components[canonical_index(bits, self._grade)]

    def nonzero_components(self):
        for bits, coeff in zip(self.bits, self._components):
            if not iszero(coeff):
                yield bits, coeff


class MixedMultivector(AbstractMultivector):
    """General (possibly inhomogeneous) multivector.

    Attributes:
        signature (Signature): The algebra.
        components (tuple): ``2^n`` coefficients; index ``i`` holds blade ``i``.
    """

    __slots__ = ('_signature', '_components')
    _level = 2

    def __init__(self, signature: Signature, components):
        components = tuple(components)
        check_components(components, _count(signature.dimension), "mixed multivector")
        self._signature = signature
        self._components = components

    @classmethod
    def zero(cls, signature: Signature) -> "MixedMultivector":
        return cls(signature, (0,) * _count(signature.dimension))

    @classmethod
    def from_blade(cls, blade: BasisBlade) -> "MixedMultivector":
        comps = [0] * _count(blade.dimension)
        comps[blade.bits] = blade.coeff
        return cls(blade.signature, comps)

    @classmethod
    def from_multivector(cls, mv: Multivector) -> "MixedMultivector":
        """Copies the homogeneous slice into its grade's slots.

        Grade ``k`` slots are not contiguous under ascending-bitmask order, so
        the per-grade bitmask table serves as the offset table.
        """
        comps = [0] * _count(mv.dimension)
        for bits, coeff in zip(mv.bits, mv.components):
            comps[bits] = coeff
        return cls(mv.signature, comps)

    @classmethod
    def from_blades(cls, signature: Signature, blades) -> "MixedMultivector":
        """Sum of blades, accumulated into one mixed array."""
        comps = [0] * _count(signature.dimension)
        for b in blades:
            if b.signature != signature:
                raise SignatureMismatchError(
                    f"from_blades: blade of {b.signature!r} in {signature!r}"
                )
            comps[b.bits] = comps[b.bits] + b.coeff
        return cls(signature, comps)

    @property
    def signature(self) -> Signature:
        return self._signature

    @property
    def components(self) -> tuple:
        return self._components

    @property
    def is_homogeneous(self) -> bool:
        return False

    @property
    def ncomponents(self) -> int:
        return len(self._components)

    def component(self, bits: int):
        check_bits(bits, self.dimension)
        return self._components[bits]

    def grade_part(self, k: int) -> Multivector:
        """Projection onto grade ``k``."""
        check_grade(k, self.dimension)
        bits = bits_of_grade(k, self.dimension)
        return Multivector(self._signature, k, (self._components[b] for b in bits))

    def nonzero_components(self):
        for bits, coeff in enumerate(self._components):
            if not iszero(coeff):
                yield bits, coeff


# Helpers


def is_scalar_value(x) -> bool:
    """Whether ``x`` acts as a coefficient (not a multivector or container)."""
    return not isinstance(x, (AbstractMultivector,) + _NOT_SCALARS)


def nonzero_components(a: AbstractMultivector):
    """The iteration contract used by the product engine."""
    return a.nonzero_components()


def ncomponents(a, k: int = None) -> int:
    """Storage length of an entity, or of grade ``k`` (mixed when ``None``) of a :class:`Signature`."""
    if isinstance(a, Signature):
        return _count(a.dimension, k)
    return a.ncomponents


def grades(a: AbstractMultivector) -> frozenset:
    """Grades carrying at least one nonzero component."""
    return frozenset(bits_grade(bits) for bits, _ in a.nonzero_components())


def _components(a: AbstractMultivector) -> tuple:
    if isinstance(a, BasisBlade):
        return (a.coeff,)
    return a.components


def to_multivector(a: AbstractMultivector, k: int = None) -> Multivector:
    """Widens a blade, or projects a mixed multivector onto grade ``k``."""
    if isinstance(a, Multivector):
        return a
    if isinstance(a, BasisBlade):
        return Multivector.from_blade(a)
    if k is None:
        raise ValueError("projecting a mixed multivector needs a target grade")
    return a.grade_part(k)


def to_mixed(a: AbstractMultivector) -> MixedMultivector:
    if isinstance(a, MixedMultivector):
        return a
    if isinstance(a, BasisBlade):
        return MixedMultivector.from_blade(a)
    return MixedMultivector.from_multivector(a)


def to_blade(a: AbstractMultivector) -> BasisBlade:
    """Narrows a homogeneous multivector holding at most one nonzero term.

    Raises:
        ValueError: If more than one component is nonzero, or ``a`` is mixed
            with more than one nonzero grade.
    """
    if isinstance(a, BasisBlade):
        return a
    terms = list(a.nonzero_components())
    if len(terms) > 1:
        raise ValueError(f"{len(terms)} nonzero components do not form a single blade")
    if terms:
        bits, coeff = terms[0]
        return BasisBlade(a.signature, bits, coeff)
    first = a.bits[0] if isinstance(a, Multivector) and a.bits else 0
    return BasisBlade(a.signature, first, 0)


def promote_pair(a: AbstractMultivector, b: AbstractMultivector):
    """Widens both operands to their least common shape."""
    if isinstance(a, BasisBlade) and isinstance(b, BasisBlade) and a.bits == b.bits:
        return a, b
    if a.is_homogeneous and b.is_homogeneous and a.grade == b.grade:
        return to_multivector(a), to_multivector(b)
    return to_mixed(a), to_mixed(b)


def zero(a: AbstractMultivector) -> AbstractMultivector:
    """Zero of the same shape as ``a``."""
    if isinstance(a, BasisBlade):
        return BasisBlade(a.signature, a.bits, 0)
    if isinstance(a, Multivector):
        return Multivector.zero(a.signature, a.grade)
    return MixedMultivector.zero(a.signature)


def one(a: AbstractMultivector) -> AbstractMultivector:
    """Multiplicative identity in the closest shape to ``a``."""
    if isinstance(a, BasisBlade):
        return BasisBlade.scalar(a.signature, 1)
    if isinstance(a, Multivector):
        return Multivector(a.signature, 0, (1,))
    return MixedMultivector.from_blade(BasisBlade.scalar(a.signature, 1))


def scalar_part(a):
    """Grade-0 coefficient."""
    if not isinstance(a, AbstractMultivector):
        return a
    if isinstance(a, BasisBlade):
        return a.coeff if a.bits == 0 else 0
    if isinstance(a, Multivector):
        return a.components[0] if a.grade == 0 else 0
    return a.components[0]


def is_scalar(a) -> bool:
    """True when every non-scalar component is exactly zero."""
    if not isinstance(a, AbstractMultivector):
        return True
    return all(bits == 0 for bits, _ in a.nonzero_components())


def grade_projection(a: AbstractMultivector, k: int) -> Multivector:
    """Grade-``k`` part of ``a`` as a homogeneous multivector."""
    check_grade(k, a.dimension)
    if isinstance(a, MixedMultivector):
        return a.grade_part(k)
    if a.grade == k:
        return to_multivector(a)
    return Multivector.zero(a.signature, k)


def map_coefficients(a: AbstractMultivector, fn) -> AbstractMultivector:
    """Applies ``fn`` to every coefficient, keeping the shape."""
    if isinstance(a, BasisBlade):
        return BasisBlade(a.signature, a.bits, fn(a.coeff))
    if isinstance(a, Multivector):
        return Multivector(a.signature, a.grade, (fn(c) for c in a.components))
    return MixedMultivector(a.signature, (fn(c) for c in a.components))


def scalar_multiply(a: AbstractMultivector, x) -> AbstractMultivector:
    """``a * x`` for a scalar ``x`` (coefficient on the right)."""
    return map_coefficients(a, lambda c: c * x)


def scalar_lmultiply(x, a: AbstractMultivector) -> AbstractMultivector:
    """``x * a`` for a scalar ``x`` (coefficient on the left)."""
    return map_coefficients(a, lambda c: x * c)


def add(a: AbstractMultivector, b: AbstractMultivector) -> AbstractMultivector:
    """Sum in the least common shape of the operands."""
    check_same_signature(a, b, "add")
    a, b = promote_pair(a, b)
    if isinstance(a, BasisBlade):
        return BasisBlade(a.signature, a.bits, a.coeff + b.coeff)
    comps = (x + y for x, y in zip(a.components, b.components))
    if isinstance(a, Multivector):
        return Multivector(a.signature, a.grade, comps)
    return MixedMultivector(a.signature, comps)


def add_scalar(a: AbstractMultivector, x) -> AbstractMultivector:
    """Adds ``x`` to the grade-0 part."""
    return add(a, BasisBlade.scalar(a.signature, x))


def equals(a, b) -> bool:
    """Exact equality after promotion to the least common shape.

    Entities of different signatures are never equal. A multivector equals
    a plain scalar iff it is scalar with that scalar part.
    """
    if not isinstance(a, AbstractMultivector):
        a, b = b, a
    if not isinstance(b, AbstractMultivector):
        return is_scalar(a) and bool(scalar_part(a) == b)
    if a.signature != b.signature:
        return False
    a, b = promote_pair(a, b)
    if isinstance(a, BasisBlade):
        return bool(a.coeff == b.coeff)
    return all(bool(x == y) for x, y in zip(a.components, b.components))


def isapprox(a, b, rtol: float = 1e-5, atol: float = 1e-8) -> bool:
    """Elementwise ``|x - y| <= atol + rtol * |y|`` after promotion.

    Coefficients must be convertible to ``complex``.
    """
    if not isinstance(a, AbstractMultivector):
        a, b = b, a
    if not isinstance(b, AbstractMultivector):
        b = BasisBlade.scalar(a.signature, b)
    if a.signature != b.signature:
        return False
    a, b = promote_pair(a, b)
    x = np.array([complex(c) for c in _components(a)], dtype=complex)
    y = np.array([complex(c) for c in _components(b)], dtype=complex)
    return bool(np.allclose(x, y, rtol=rtol, atol=atol))
