# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Metric signatures.

A signature is the ordered tuple of squares ``e_i * e_i`` of the basis
vectors. Squares are ring elements: usually ``+1``, ``-1`` or ``0``, but any
value supporting ``+ - *`` and ``==`` is accepted (including symbolic
placeholders).
"""

from numbers import Number
from typing import Iterable, Optional, Sequence, Tuple

from geoalg.validation import iszero


class Signature:
    """Immutable diagonal metric signature.

    Two signatures describe the same algebra iff their squares are
    structurally identical: same length, equal values of the same types.
    ``Signature((1, 1))`` and ``Signature((1.0, 1.0))`` are different
    algebras. Basis vector names are display metadata and do not take part
    in equality.

    Attributes:
        squares (tuple): Square of each basis vector.
        names (tuple): Display name of each basis vector.
        dimension (int): Number of basis vectors ``n``.
    """

    __slots__ = ('_squares', '_names')

    def __init__(self, squares: Iterable, names: Optional[Sequence[str]] = None):
        """Builds a signature.

        Args:
            squares: Square of each basis vector, in order.
            names: Optional display names, one per basis vector.
        """
        squares = tuple(squares)
        if names is None:
            names = tuple(f"v{i + 1}" for i in range(len(squares)))
        else:
            names = tuple(str(name) for name in names)
            if len(names) != len(squares):
                raise ValueError(
                    f"expected {len(squares)} basis vector names, got {len(names)}"
                )
            if len(set(names)) != len(names):
                raise ValueError(f"basis vector names must be unique, got {names}")
        self._squares = squares
        self._names = names

    @classmethod
    def cl(cls, p: int, q: int = 0, r: int = 0) -> "Signature":
        """``Cl(p, q, r)``: ``p`` squares of +1, then ``q`` of -1, then ``r`` of 0."""
        if p < 0 or q < 0 or r < 0:
            raise ValueError(f"p, q, r must be non-negative, got {(p, q, r)}")
        return cls((1,) * p + (-1,) * q + (0,) * r)

    @classmethod
    def euclidean(cls, n: int) -> "Signature":
        """``Cl(n, 0, 0)``."""
        return cls.cl(n)

    @classmethod
    def from_string(cls, spec: str, names: Optional[Sequence[str]] = None) -> "Signature":
        """Parses a string of ``+``, ``-`` and ``0`` characters.

        Example:
            >>> Signature.from_string("-+++").squares
            (-1, 1, 1, 1)
        """
        lookup = {'+': 1, '-': -1, '0': 0}
        try:
            squares = tuple(lookup[ch] for ch in spec)
        except KeyError as err:
            raise ValueError(
                f"signature string may only contain '+', '-', '0', got {spec!r}"
            ) from err
        return cls(squares, names)

    @property
    def squares(self) -> Tuple:
        return self._squares

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    @property
    def dimension(self) -> int:
        return len(self._squares)

    @property
    def is_numeric(self) -> bool:
        """True when every square is a plain number."""
        return all(isinstance(s, Number) for s in self._squares)

    @property
    def is_degenerate(self) -> bool:
        """True when some basis vector squares to zero."""
        return any(iszero(s) for s in self._squares)

    def counts(self) -> Tuple[int, int, int]:
        """``(p, q, r)``: number of squares equal to +1, -1 and 0."""
        p = sum(1 for s in self._squares if isinstance(s, Number) and s == 1)
        q = sum(1 for s in self._squares if isinstance(s, Number) and s == -1)
        r = sum(1 for s in self._squares if isinstance(s, Number) and s == 0)
        return p, q, r

    def __getitem__(self, i: int):
        return self._squares[i]

    def __len__(self) -> int:
        return len(self._squares)

    def __iter__(self):
        return iter(self._squares)

    def _key(self):
        return tuple((type(s), s) for s in self._squares)

    def __eq__(self, other):
        if not isinstance(other, Signature):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return f"Signature({self._squares!r})"
