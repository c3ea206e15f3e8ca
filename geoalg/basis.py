# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Basis blade factories.

Named basis vectors are returned as plain collections for the caller to
bind, e.g. ``v1, v2, v3 = basis(Signature.euclidean(3))``.
"""

from typing import Dict, Iterable, List, Optional

from geoalg.bits import bits_of_grade, bits_to_indices, full_mask
from geoalg.multivector import BasisBlade
from geoalg.signature import Signature
from geoalg.validation import check_grade


def blade_name(signature: Signature, bits: int) -> str:
    """Display name of a unit basis blade.

    Default names collapse to ``v12``-style when ``n < 10``; single-letter
    custom names concatenate (``xy``); anything else is joined by ``^``.
    """
    if bits == 0:
        return "1"
    names = [signature.names[i] for i in bits_to_indices(bits)]
    default = all(name == f"v{i + 1}" for i, name in enumerate(signature.names))
    if default and signature.dimension < 10:
        return "v" + "".join(str(i + 1) for i in bits_to_indices(bits))
    if all(len(name) == 1 for name in names):
        return "".join(names)
    return "^".join(names)


def basis(signature: Signature, grade: int = 1) -> List[BasisBlade]:
    """Unit blades of one grade, ascending bitmask order."""
    check_grade(grade, signature.dimension)
    return [BasisBlade(signature, bits, 1) for bits in bits_of_grade(grade, signature.dimension)]


def basis_blades(signature: Signature, grades: Optional[Iterable[int]] = None) -> Dict[str, BasisBlade]:
    """Mapping ``name -> unit blade`` for the requested grades.

    Args:
        signature (Signature): The algebra.
        grades (iterable of int, optional): Defaults to ``1..n``.
    """
    n = signature.dimension
    if grades is None:
        grades = range(1, n + 1)
    out = {}
    for k in grades:
        for blade in basis(signature, k):
            out[blade_name(signature, blade.bits)] = blade
    return out


def pseudoscalar(signature: Signature) -> BasisBlade:
    """Unit pseudoscalar ``I``, the blade with every bit set."""
    return BasisBlade(signature, full_mask(signature.dimension), 1)


def cayley_table(signature: Signature) -> List[List[BasisBlade]]:
    """``table[i][j] == e_i * e_j`` for all blades, ascending bitmask order."""
    from geoalg.algebra import geometric_prod

    units = [BasisBlade(signature, bits, 1) for bits in range(1 << signature.dimension)]
    return [[geometric_prod(a, b) for b in units] for a in units]
