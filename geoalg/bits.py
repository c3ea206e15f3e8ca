# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Bitmask encoding of basis blades.

A basis blade ``e_{i_1} ^ e_{i_2} ^ ... ^ e_{i_k}`` with ``i_1 < ... < i_k``
is stored as the unsigned integer with bits ``i_1, ..., i_k`` set. Bit ``i``
is basis vector ``v{i+1}``. The grade is the popcount.

Two enumeration orders are used for dense storage:

- Homogeneous (grade ``k``): all masks of popcount ``k`` in ascending
  numeric order. :func:`canonical_index` with ``k`` gives the rank.
- Mixed: every mask ``0 .. 2^n - 1`` in ascending numeric order, so the
  storage index of a blade *is* its bitmask.
"""

from functools import lru_cache
from math import comb
from typing import Iterable, Tuple


def grade(bits: int) -> int:
    """Number of basis vectors in the blade (popcount)."""
    return bin(bits).count('1')


def full_mask(n: int) -> int:
    """Bitmask of the unit pseudoscalar in ``n`` dimensions."""
    return (1 << n) - 1


def bits_to_indices(bits: int) -> Tuple[int, ...]:
    """Zero-based indices of the basis vectors present in ``bits``, ascending.

    Example:
        >>> bits_to_indices(0b101)
        (0, 2)
    """
    indices = []
    i = 0
    while bits:
        if bits & 1:
            indices.append(i)
        bits >>= 1
        i += 1
    return tuple(indices)


def indices_to_bits(indices: Iterable[int]) -> int:
    """Inverse of :func:`bits_to_indices`.

    Raises:
        ValueError: If an index is negative or repeated.
    """
    bits = 0
    for i in indices:
        if i < 0:
            raise ValueError(f"basis vector index must be non-negative, got {i}")
        if bits & (1 << i):
            raise ValueError(f"repeated basis vector index {i}")
        bits |= 1 << i
    return bits


def ncomponents(n: int, k: int = None) -> int:
    """Storage length: ``C(n, k)`` for grade ``k``, ``2^n`` for mixed (``k=None``)."""
    if k is None:
        return 1 << n
    if k < 0 or k > n:
        return 0
    return comb(n, k)


@lru_cache(maxsize=None)
def bits_of_grade(k: int, n: int) -> Tuple[int, ...]:
    """All grade-``k`` bitmasks of an ``n``-dimensional algebra, ascending.

    Enumerated with Gosper's hack, which visits masks of fixed popcount in
    increasing numeric order.
    """
    if k < 0 or k > n:
        return ()
    if k == 0:
        return (0,)
    limit = 1 << n
    out = []
    bits = (1 << k) - 1
    while bits < limit:
        out.append(bits)
        low = bits & -bits
        ripple = bits + low
        bits = (((ripple ^ bits) >> 2) // low) | ripple
    return tuple(out)


def canonical_index(bits: int, k: int = None) -> int:
    """Storage index of a blade.

    With ``k`` given, the rank of ``bits`` among grade-``k`` masks in
    ascending order (combinatorial number system: ``sum C(c_i, i)`` over the
    set bit positions ``c_1 < c_2 < ...``). Without ``k``, the mixed index,
    which is the mask itself.

    Args:
        bits: Blade bitmask.
        k: Grade of the homogeneous storage, or ``None`` for mixed storage.

    Returns:
        Zero-based index into the component array.
    """
    if k is None:
        return bits
    if grade(bits) != k:
        raise ValueError(f"bitmask {bits:#b} has grade {grade(bits)}, not {k}")
    rank = 0
    for i, c in enumerate(bits_to_indices(bits), start=1):
        rank += comb(c, i)
    return rank


def swap_sign(a: int, b: int) -> int:
    """Sign of reordering ``e_A e_B`` into ascending index order.

    Counts pairs ``(i, j)`` with ``i`` in ``a``, ``j`` in ``b`` and ``i > j``;
    each such pair is one transposition of distinct basis vectors. Shared
    indices contribute no swap (they are handled by :func:`square_factor`).

    Returns:
        ``+1`` or ``-1``.
    """
    a >>= 1
    swaps = 0
    while a:
        swaps += grade(a & b)
        a >>= 1
    return -1 if swaps & 1 else 1


def square_factor(signature, shared: int):
    """Product of the squares of the basis vectors in ``shared``.

    Args:
        signature: Anything indexable by basis vector index.
        shared: Bitmask, usually ``a & b`` of two operand blades.
    """
    factor = 1
    for i in bits_to_indices(shared):
        factor = factor * signature[i]
    return factor


def geometric_prod_bits(signature, a: int, b: int):
    """Geometric product of two unit basis blades.

    Returns:
        ``(factor, bits)`` with ``e_A e_B = factor * e_{A xor B}``.
    """
    return swap_sign(a, b) * square_factor(signature, a & b), a ^ b


def reversion_sign(k: int) -> int:
    """``(-1)^(k(k-1)/2)``: sign of reversing a grade-``k`` blade."""
    return -1 if (k * (k - 1) // 2) & 1 else 1


def involution_sign(k: int) -> int:
    """``(-1)^k``: sign of the grade involution."""
    return -1 if k & 1 else 1


def conjugation_sign(k: int) -> int:
    """Clifford conjugation: involution times reversion."""
    return involution_sign(k) * reversion_sign(k)


def blade_square(signature, bits: int):
    """Scalar value of ``e_A e_A`` for the unit blade ``e_A``."""
    return reversion_sign(grade(bits)) * square_factor(signature, bits)
