# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Product engine: geometric product and everything built from it.

Every product is a bilinear expansion over the operands'
:meth:`~geoalg.multivector.AbstractMultivector.nonzero_components`, using
the basis-blade product

    e_A e_B = swap_sign(A, B) * square_factor(sig, A & B) * e_{A xor B}

so storage layout never leaks into the engine. All functions are pure: the
only mutable state is the result accumulator owned by the call.

Plain Python numbers (and other non-multivector values) are treated as
scalars wherever an operand is accepted.
"""

import cmath
import math
from fractions import Fraction
from numbers import Integral

import numpy as np

from log import get_logger
from geoalg.bits import (
    blade_square,
    canonical_index,
    conjugation_sign,
    full_mask,
    geometric_prod_bits,
    grade as bits_grade,
    involution_sign,
    ncomponents,
    reversion_sign,
    square_factor,
    swap_sign,
)
from geoalg.errors import NotInvertibleError
from geoalg.multivector import (
    AbstractMultivector,
    BasisBlade,
    MixedMultivector,
    Multivector,
    add,
    add_scalar,
    is_scalar,
    map_coefficients,
    one,
    promote_pair,
    scalar_lmultiply,
    scalar_multiply,
    scalar_part,
    to_mixed,
)
from geoalg.validation import check_same_signature, iszero

logger = get_logger(__name__)


def _is_entity(x) -> bool:
    return isinstance(x, AbstractMultivector)


def _scalar_case(a, b):
    """Product where at least one side is a plain scalar."""
    if not _is_entity(a) and not _is_entity(b):
        return a * b
    if not _is_entity(a):
        return scalar_lmultiply(a, b)
    return scalar_multiply(a, b)


# =============================================================================
# Geometric and graded products
# =============================================================================

def geometric_prod(a, b):
    """Computes the geometric product ``a * b``.

    Blade times blade stays a :class:`BasisBlade`; every other combination
    accumulates into a :class:`MixedMultivector`. Cost is
    ``O(nnz(a) * nnz(b))``.

    Args:
        a: Left operand (multivector or scalar).
        b: Right operand (multivector or scalar).

    Returns:
        The product.

    Raises:
        SignatureMismatchError: If the operands live in different algebras.
    """
    if not (_is_entity(a) and _is_entity(b)):
        return _scalar_case(a, b)
    check_same_signature(a, b, "geometric_prod")
    sig = a.signature

    if isinstance(a, BasisBlade) and isinstance(b, BasisBlade):
        factor, bits = geometric_prod_bits(sig, a.bits, b.bits)
        return BasisBlade(sig, bits, factor * (a.coeff * b.coeff))

    acc = [0] * ncomponents(sig.dimension)
    b_terms = list(b.nonzero_components())
    for abits, ac in a.nonzero_components():
        for bbits, bc in b_terms:
            factor, bits = geometric_prod_bits(sig, abits, bbits)
            if iszero(factor):
                continue
            acc[bits] = acc[bits] + factor * (ac * bc)
    return MixedMultivector(sig, acc)


def graded_prod(a, b, grade_selector):
    """Geometric product keeping only terms of a selected grade.

    For each pair of basis blades ``e_A`` (grade ``p``) and ``e_B`` (grade
    ``q``), the term ``e_A e_B`` is kept iff its grade equals
    ``grade_selector(p, q)``. A selector value outside ``0..n`` simply
    drops the term.

    Precondition (not checked): ``grade_selector(p, 0) == p`` and
    ``grade_selector(0, q) == q``, so that scalar operands reduce to scalar
    multiplication, which is how plain-number operands are handled.

    When both operands are homogeneous every term pair shares the same
    ``(p, q)``, so the result is a :class:`Multivector` of grade
    ``grade_selector(p, q)`` (or the mixed zero if that grade is out of
    range). Otherwise the result is mixed.

    Args:
        a: Left operand.
        b: Right operand.
        grade_selector: ``(p, q) -> int``.

    Returns:
        The graded product.
    """
    if not (_is_entity(a) and _is_entity(b)):
        return _scalar_case(a, b)
    check_same_signature(a, b, "graded_prod")
    sig = a.signature
    n = sig.dimension
    b_terms = list(b.nonzero_components())

    if a.is_homogeneous and b.is_homogeneous:
        k = grade_selector(a.grade, b.grade)
        if not 0 <= k <= n:
            return MixedMultivector.zero(sig)
        acc = [0] * ncomponents(n, k)
        for abits, ac in a.nonzero_components():
            for bbits, bc in b_terms:
                factor, bits = geometric_prod_bits(sig, abits, bbits)
                if bits_grade(bits) != k or iszero(factor):
                    continue
                i = canonical_index(bits, k)
                acc[i] = acc[i] + factor * (ac * bc)
        return Multivector(sig, k, acc)

    acc = [0] * ncomponents(n)
    for abits, ac in a.nonzero_components():
        p = bits_grade(abits)
        for bbits, bc in b_terms:
            factor, bits = geometric_prod_bits(sig, abits, bbits)
            if bits_grade(bits) != grade_selector(p, bits_grade(bbits)) or iszero(factor):
                continue
            acc[bits] = acc[bits] + factor * (ac * bc)
    return MixedMultivector(sig, acc)


def wedge_grade(p: int, q: int) -> int:
    return p + q


def inner_grade(p: int, q: int) -> int:
    return abs(p - q)


def lcontract_grade(p: int, q: int) -> int:
    return q - p


def rcontract_grade(p: int, q: int) -> int:
    return p - q


def wedge(a, b):
    """Outer product ``a ^ b`` (grade-raising)."""
    return graded_prod(a, b, wedge_grade)


def inner(a, b):
    """Symmetric inner product ``a | b``, keeping grade ``|p - q|``."""
    return graded_prod(a, b, inner_grade)


def lcontract(a, b):
    """Left contraction ``a << b``, keeping grade ``q - p``."""
    return graded_prod(a, b, lcontract_grade)


def rcontract(a, b):
    """Right contraction ``a >> b``, keeping grade ``p - q``."""
    return graded_prod(a, b, rcontract_grade)


def scalar_prod(a, b):
    """Scalar part of the geometric product, returned as a plain coefficient.

    Only equal blades contribute, each as ``(e_A e_A) * a_A * b_A``.
    """
    if not (_is_entity(a) and _is_entity(b)):
        if _is_entity(a):
            return scalar_part(a) * b
        if _is_entity(b):
            return a * scalar_part(b)
        return a * b
    check_same_signature(a, b, "scalar_prod")
    sig = a.signature
    if a.is_homogeneous and b.is_homogeneous and a.grade != b.grade:
        return 0
    a, b = promote_pair(a, b)
    if isinstance(a, BasisBlade):
        return blade_square(sig, a.bits) * (a.coeff * b.coeff)
    if isinstance(a, Multivector):
        slots = a.bits
    else:
        slots = range(ncomponents(sig.dimension))
    total = 0
    for bits, x, y in zip(slots, a.components, b.components):
        if iszero(x) or iszero(y):
            continue
        total = total + blade_square(sig, bits) * (x * y)
    return total


# =============================================================================
# Sign-graded operators
# =============================================================================

def graded_multiply(f, a):
    """Multiplies every grade-``k`` part of ``a`` by ``f(k)``."""
    if not _is_entity(a):
        return f(0) * a
    if a.is_homogeneous:
        return scalar_lmultiply(f(a.grade), a)
    signs = [f(k) for k in range(a.dimension + 1)]
    comps = (signs[bits_grade(bits)] * c for bits, c in enumerate(a.components))
    return MixedMultivector(a.signature, comps)


def reversion(a):
    """Reverses the order of basis vectors: grade ``k`` gets ``(-1)^(k(k-1)/2)``."""
    return graded_multiply(reversion_sign, a)


def involution(a):
    """Grade involution: grade ``k`` gets ``(-1)^k``."""
    return graded_multiply(involution_sign, a)


def clifford_conj(a):
    """Clifford conjugate: involution composed with reversion."""
    return graded_multiply(conjugation_sign, a)


# =============================================================================
# Dualities
# =============================================================================

def _complement(a, sign_of):
    """Maps each ``e_A`` to ``sign_of(A) * e_{I xor A}``; grade ``k`` -> ``n - k``."""
    if not _is_entity(a):
        raise TypeError(f"dual of a plain scalar needs a signature, got {type(a).__name__}")
    sig = a.signature
    n = sig.dimension
    full = full_mask(n)

    if isinstance(a, BasisBlade):
        return BasisBlade(sig, full ^ a.bits, sign_of(a.bits) * a.coeff)

    if isinstance(a, Multivector):
        k = n - a.grade
        acc = [0] * ncomponents(n, k)
        for bits, c in zip(a.bits, a.components):
            acc[canonical_index(full ^ bits, k)] = sign_of(bits) * c
        return Multivector(sig, k, acc)

    acc = [0] * ncomponents(n)
    for bits, c in enumerate(a.components):
        acc[full ^ bits] = sign_of(bits) * c
    return MixedMultivector(sig, acc)


def flipdual(a):
    """Complement with sign ``+1``. Metric-independent and self-inverse."""
    return _complement(a, lambda bits: 1)


def rdual(a):
    """Right complement: ``e_A ^ rdual(e_A) = I``. Inverse of :func:`ldual`."""
    full = full_mask(a.dimension) if _is_entity(a) else 0
    return _complement(a, lambda bits: swap_sign(bits, full ^ bits))


def ldual(a):
    """Left complement: ``ldual(e_A) ^ e_A = I``. Inverse of :func:`rdual`.

    In odd dimensions ``ldual == rdual`` and both are self-inverse.
    """
    full = full_mask(a.dimension) if _is_entity(a) else 0
    return _complement(a, lambda bits: swap_sign(full ^ bits, bits))


def hodgedual(a):
    """Hodge dual ``~a * I``.

    For ``a`` and ``b`` of equal grade, ``a ^ hodgedual(b) == scalar_prod(~a, b) * I``.

    Metric-dependent: ``hodgedual(v1) == v2 v3`` in ``Cl(3)``.
    """
    if not _is_entity(a):
        return _complement(a, None)
    sig = a.signature
    full = full_mask(sig.dimension)

    def sign_of(bits):
        return reversion_sign(bits_grade(bits)) * swap_sign(bits, full) * square_factor(sig, bits)

    return _complement(a, sign_of)


def invhodgedual(a):
    """Inverse of :func:`hodgedual`: ``~(a * I) / (I * I)``.

    Raises:
        NotInvertibleError: In a degenerate metric, where ``I * I == 0``.
    """
    if not _is_entity(a):
        return _complement(a, None)
    sig = a.signature
    n = sig.dimension
    full = full_mask(n)
    s = blade_square(sig, full)
    if iszero(s):
        raise NotInvertibleError(
            f"Hodge dual is not invertible in {sig!r}: pseudoscalar squares to zero"
        )
    scale = _scalar_inverse(s)

    def sign_of(bits):
        return (reversion_sign(n - bits_grade(bits)) * swap_sign(bits, full)
                * square_factor(sig, bits) * scale)

    return _complement(a, sign_of)


def antiwedge(a, b):
    """Regressive product ``rdual(ldual(a) ^ ldual(b))``.

    Metric-independent, orientation-dependent.
    """
    if not _is_entity(a) and not _is_entity(b):
        raise TypeError("antiwedge needs at least one multivector operand")
    if not _is_entity(a):
        a = BasisBlade.scalar(b.signature, a)
    if not _is_entity(b):
        b = BasisBlade.scalar(a.signature, b)
    check_same_signature(a, b, "antiwedge")
    return rdual(wedge(ldual(a), ldual(b)))


# =============================================================================
# Inversion and division
# =============================================================================

def _scalar_inverse(x):
    if iszero(x):
        raise NotInvertibleError(f"scalar {x!r} is not invertible")
    if x == 1 or x == -1:
        return x
    return 1 / x


def inverse(a):
    """Multiplicative inverse.

    Tries, in order: the blade closed form ``a / (a a)``; ``c / (a c)`` for
    ``c`` in ``a``, ``~a`` and the Clifford conjugate whenever ``a c`` is a
    nonzero scalar; finally solving the left-multiplication matrix.

    Raises:
        NotInvertibleError: If ``a`` has no inverse.
    """
    if not _is_entity(a):
        return _scalar_inverse(a)
    sig = a.signature

    if isinstance(a, BasisBlade):
        s = blade_square(sig, a.bits) * (a.coeff * a.coeff)
        return BasisBlade(sig, a.bits, a.coeff * _scalar_inverse(s))

    for candidate in (a, reversion(a), clifford_conj(a)):
        norm = geometric_prod(a, candidate)
        if is_scalar(norm):
            s = scalar_part(norm)
            if not iszero(s):
                return scalar_multiply(candidate, _scalar_inverse(s))
    return _inverse_by_matrix(a)


def _inverse_by_matrix(a):
    """Solves ``L_a x = 1`` where ``L_a`` is left multiplication by ``a``."""
    sig = a.signature
    dim = ncomponents(sig.dimension)
    terms = list(a.nonzero_components())
    dtype = complex if any(isinstance(c, complex) for _, c in terms) else float
    M = np.zeros((dim, dim), dtype=dtype)
    for abits, c in terms:
        for j in range(dim):
            factor, bits = geometric_prod_bits(sig, abits, j)
            M[bits, j] += dtype(factor * c)

    if np.linalg.matrix_rank(M) < dim:
        raise NotInvertibleError("multivector is not invertible (singular multiplication matrix)")
    rhs = np.zeros(dim, dtype=dtype)
    rhs[0] = 1
    x = np.linalg.solve(M, rhs)
    logger.debug("Inverted %d-component multivector via %dx%d solve", len(terms), dim, dim)
    return MixedMultivector(sig, x.tolist())


def divide(a, b):
    """Right division ``a / b = a * inverse(b)``."""
    if not _is_entity(b):
        if iszero(b):
            raise NotInvertibleError("division by zero")
        if not _is_entity(a):
            return a / b
        return map_coefficients(a, lambda c: c / b)
    return geometric_prod(a, inverse(b))


def ldiv(a, b):
    """Left division ``a \\ b = inverse(a) * b``."""
    return geometric_prod(inverse(a), b)


def rational_divide(a, b):
    """``a // b``: exact division by an integer or rational scalar.

    Multiplies by ``Fraction(1, b)`` so integer coefficients stay exact.
    Multivector divisors fall back to ``a * inverse(b)``.
    """
    if not _is_entity(b):
        if iszero(b):
            raise NotInvertibleError("division by zero")
        r = Fraction(1, b) if isinstance(b, Integral) else 1 / b
        if not _is_entity(a):
            return a * r
        return scalar_multiply(a, r)
    return geometric_prod(a, inverse(b))


# =============================================================================
# Powers and exponential
# =============================================================================

def _scalar_power(s, m: int):
    if m < 0:
        return _scalar_inverse(s) ** (-m)
    return s ** m


def _power_with_scalar_square(a, s, p: int):
    """``a^(2m) = s^m``, ``a^(2m+1) = s^m a`` when ``a * a == s`` is scalar."""
    sm = _scalar_power(s, p // 2)
    if p % 2 == 0:
        return scalar_lmultiply(sm, one(a))
    return scalar_lmultiply(sm, a)


def _power_by_squaring(a, p: int):
    if p < 0:
        a = inverse(a)
        p = -p
    result = one(to_mixed(a))
    base = a
    while p > 0:
        if p & 1:
            result = geometric_prod(result, base)
        p >>= 1
        if p:
            base = geometric_prod(base, base)
    return result


def power(a, p: int):
    """Integer power ``a ** p``.

    Raises:
        TypeError: If ``p`` is not an integer.
        NotInvertibleError: For negative ``p`` when ``a`` is not invertible.
    """
    if not isinstance(p, Integral) or isinstance(p, bool):
        raise TypeError(f"exponent must be an integer, got {type(p).__name__}")
    p = int(p)
    if not _is_entity(a):
        return _scalar_power(a, p)

    if isinstance(a, BasisBlade):
        s = blade_square(a.signature, a.bits) * (a.coeff * a.coeff)
        return _power_with_scalar_square(a, s, p)

    if p == 0:
        return one(a)
    if p == 1:
        return a
    a2 = geometric_prod(a, a)
    if p == 2:
        return a2
    if is_scalar(a2):
        return _power_with_scalar_square(a, scalar_part(a2), p)
    return _power_by_squaring(a, p)


def _exp_scalar_square(a, s):
    """Closed form when ``a * a == s`` is scalar.

    - ``s < 0`` (elliptic): ``cos(t) + sin(t)/t a``, ``t = sqrt(-s)``
    - ``s > 0`` (hyperbolic): ``cosh(t) + sinh(t)/t a``, ``t = sqrt(s)``
    - ``s == 0`` (parabolic): ``1 + a``
    """
    if isinstance(s, complex):
        if s == 0:
            c, k = 1, 1
        else:
            t = cmath.sqrt(s)
            c, k = cmath.cosh(t), cmath.sinh(t) / t
    elif s < 0:
        t = math.sqrt(-s)
        c, k = math.cos(t), math.sin(t) / t
    elif s > 0:
        t = math.sqrt(s)
        c, k = math.cosh(t), math.sinh(t) / t
    else:
        c, k = 1, 1
    return add_scalar(scalar_lmultiply(k, a), c)


def _exp_taylor(a, order: int):
    """Taylor series with scaling-and-squaring."""
    norm = math.sqrt(sum(abs(c) ** 2 for _, c in a.nonzero_components()))
    k = math.ceil(math.log2(norm)) if norm > 1 else 0
    scaled = scalar_multiply(a, 1.0 / (2 ** k))

    result = one(to_mixed(a))
    term = result
    for i in range(1, order + 1):
        term = scalar_multiply(geometric_prod(term, scaled), 1.0 / i)
        result = add(result, term)

    for _ in range(k):
        result = geometric_prod(result, result)
    return result


def exp(a, order: int = 24):
    """Exponential ``sum a^k / k!``.

    Closed form whenever ``a * a`` is scalar (every blade, every bivector
    for ``n <= 3``); Taylor series of ``order`` terms otherwise.

    Args:
        a: Multivector or scalar with real or complex coefficients.
        order (int, optional): Taylor order for the general case.

    Returns:
        exp(a).
    """
    if not _is_entity(a):
        return cmath.exp(a) if isinstance(a, complex) else math.exp(a)
    a2 = geometric_prod(a, a)
    if is_scalar(a2):
        return _exp_scalar_square(a, scalar_part(a2))
    return _exp_taylor(a, order)
