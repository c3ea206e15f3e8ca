# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Construction-time checks for algebra entities.

Unlike shape asserts, these always run: malformed storage and mixed
signatures are contract violations that must never be silently truncated,
padded or computed with.
"""

from geoalg.errors import ComponentCountError, SignatureMismatchError


def iszero(x) -> bool:
    """Exact zero test that also accepts array-valued placeholder coefficients."""
    z = x == 0
    if isinstance(z, bool):
        return z
    if hasattr(z, 'all'):
        return bool(z.all())
    return bool(z)


def check_components(components, expected: int, name: str = "components") -> None:
    """Raise unless *components* has exactly *expected* entries."""
    if len(components) != expected:
        raise ComponentCountError(
            f"{name}: expected {expected} components, got {len(components)}"
        )


def check_grade(k: int, n: int, name: str = "grade") -> None:
    """Raise unless ``0 <= k <= n``."""
    if not isinstance(k, int) or isinstance(k, bool):
        raise TypeError(f"{name}: grade must be an int, got {type(k).__name__}")
    if k < 0 or k > n:
        raise ComponentCountError(f"{name}: grade {k} outside 0..{n}")


def check_bits(bits: int, n: int, name: str = "bits") -> None:
    """Raise unless *bits* names a blade of an ``n``-dimensional algebra."""
    if not isinstance(bits, int) or isinstance(bits, bool):
        raise TypeError(f"{name}: bitmask must be an int, got {type(bits).__name__}")
    if bits < 0 or bits >> n:
        raise ComponentCountError(
            f"{name}: bitmask {bits:#b} outside a {n}-dimensional algebra"
        )


def check_same_signature(a, b, name: str = "operands") -> None:
    """Raise unless *a* and *b* live in the same algebra."""
    if a.signature != b.signature:
        raise SignatureMismatchError(
            f"{name}: signatures differ ({a.signature!r} vs {b.signature!r})"
        )
