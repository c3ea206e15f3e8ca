# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Specialized evaluation of multilinear operations.

Two tiers:

1. The direct evaluator in :mod:`geoalg.algebra`: always correct, works
   for any coefficient type.
2. Cached kernels. A multilinear operation is traced once per
   ``(operation, signature, operand shapes)`` by calling the direct
   evaluator with placeholder coefficients: component ``j`` of argument
   ``i`` is a one-hot ``torch`` tensor along axis ``i``. Each output
   component then *is* its closed-form multilinear coefficient table, and
   stacking them gives a structure tensor ``T[z, a, b, ...]``. Evaluation
   is one :func:`torch.einsum`.

The one-hot trace is only exact for operations that are linear in each
multivector argument. Every freshly traced kernel is therefore checked
against direct evaluation on seeded random arguments, and again with
every argument doubled. A function that fails the check (``a * a``,
``a + b``, ``a + 1``) or cannot be traced at all is cached as rejected
and always runs on the direct tier. :data:`MULTILINEAR_OPS` lists the
built-in multilinear operations.

The cache is process-wide and append-only. Keys are static shapes, so
entries never go stale; concurrent population at worst traces the same
kernel twice and keeps the first one stored.
"""

import functools
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

import torch

from log import get_logger
from geoalg import algebra
from geoalg.bits import ncomponents as _count
from geoalg.multivector import (
    AbstractMultivector,
    BasisBlade,
    MixedMultivector,
    Multivector,
    isapprox,
    scalar_lmultiply,
    to_multivector,
)
from geoalg.signature import Signature
from geoalg.validation import check_same_signature

logger = get_logger(__name__)


@dataclass
class SpecializeConfig:
    """Settings for the specialized tier.

    Attributes:
        enabled: Use cached kernels when eligible. ``False`` forces the
            direct evaluator everywhere.
        max_dimension: Largest algebra dimension to specialize. Structure
            tensors grow as ``2^(n * (arity + 1))`` for mixed operands.
    """

    enabled: bool = True
    max_dimension: int = 8


_CONFIG = SpecializeConfig()

# key -> Kernel, or None for functions that stay on the direct tier
_KERNELS: Dict[tuple, Optional["Kernel"]] = {}

# Raised by placeholder tensors or verification inputs the function cannot handle
_TRACE_ERRORS = (TypeError, ValueError, RuntimeError, ArithmeticError)

MULTILINEAR_OPS: Dict[str, Callable] = {
    'geometric_prod': algebra.geometric_prod,
    'wedge': algebra.wedge,
    'inner': algebra.inner,
    'lcontract': algebra.lcontract,
    'rcontract': algebra.rcontract,
    'antiwedge': algebra.antiwedge,
    'scalar_prod': algebra.scalar_prod,
    'reversion': algebra.reversion,
    'involution': algebra.involution,
    'clifford_conj': algebra.clifford_conj,
    'flipdual': algebra.flipdual,
    'rdual': algebra.rdual,
    'ldual': algebra.ldual,
    'hodgedual': algebra.hodgedual,
    'invhodgedual': algebra.invhodgedual,
}


def configure(enabled: Optional[bool] = None, max_dimension: Optional[int] = None) -> SpecializeConfig:
    """Updates the process-wide settings and returns them."""
    if enabled is not None:
        _CONFIG.enabled = bool(enabled)
    if max_dimension is not None:
        if max_dimension < 0:
            raise ValueError(f"max_dimension must be non-negative, got {max_dimension}")
        _CONFIG.max_dimension = int(max_dimension)
    return _CONFIG


def get_config() -> SpecializeConfig:
    return _CONFIG


def cache_size() -> int:
    """Number of keys traced so far, rejected ones included."""
    return len(_KERNELS)


def shape_of(a: AbstractMultivector) -> Tuple:
    """Static storage shape: ``('grade', k)`` or ``('mixed',)``."""
    if isinstance(a, MixedMultivector):
        return ('mixed',)
    return ('grade', a.grade)


def _width(sig: Signature, shape: Tuple) -> int:
    if shape[0] == 'mixed':
        return _count(sig.dimension)
    return _count(sig.dimension, shape[1])


def _build(sig: Signature, shape: Tuple, comps):
    if shape[0] == 'mixed':
        return MixedMultivector(sig, comps)
    return Multivector(sig, shape[1], comps)


def _placeholder(sig: Signature, shape: Tuple, position: int, arity: int):
    """Argument whose component ``j`` is one-hot at index ``j`` of axis ``position``."""
    width = _width(sig, shape)
    view = [1] * arity
    view[position] = width
    eye = torch.eye(width, dtype=torch.float64)
    comps = [eye[j].reshape(view) for j in range(width)]
    return _build(sig, shape, comps)


class Kernel:
    """Structure tensor of a traced multilinear operation.

    Attributes:
        signature (Signature): Algebra the kernel was traced in.
        out_shape (tuple or None): Result storage shape, ``None`` for a
            plain scalar result.
        structure (torch.Tensor): ``[n_out, n_arg1, n_arg2, ...]``.
    """

    def __init__(self, signature: Signature, out_shape, structure: torch.Tensor):
        self.signature = signature
        self.out_shape = out_shape
        self.structure = structure

    @property
    def arity(self) -> int:
        return self.structure.ndim - 1

    def __call__(self, *args):
        complex_input = any(
            isinstance(c, complex) for a in args for _, c in a.nonzero_components()
        )
        dtype = torch.complex128 if complex_input else torch.float64
        vectors = [torch.tensor(a.components, dtype=dtype) for a in args]
        letters = "abcdefghijklmnopqrstuvwxy"[:self.arity]
        subscripts = "z" + letters + "," + ",".join(letters) + "->z"
        values = torch.einsum(subscripts, self.structure.to(dtype), *vectors).tolist()
        if self.out_shape is None:
            return values[0]
        return _build(self.signature, self.out_shape, values)


def trace(f: Callable, sig: Signature, shapes: Tuple) -> Kernel:
    """Evaluates ``f`` once on placeholder arguments of the given shapes."""
    arity = len(shapes)
    args = [_placeholder(sig, shape, i, arity) for i, shape in enumerate(shapes)]
    out = f(*args)
    full = tuple(_width(sig, shape) for shape in shapes)

    if isinstance(out, AbstractMultivector):
        if isinstance(out, BasisBlade):
            out = to_multivector(out)
        out_shape = shape_of(out)
        comps = out.components
    else:
        out_shape = None
        comps = [out]

    structure = torch.stack([
        torch.broadcast_to(torch.as_tensor(c, dtype=torch.float64), full) for c in comps
    ]) if comps else torch.zeros((0,) + full, dtype=torch.float64)
    return Kernel(sig, out_shape, structure)


def _random_args(sig: Signature, shapes: Tuple, generator: torch.Generator):
    return [
        _build(sig, shape, torch.randn(
            _width(sig, shape), generator=generator, dtype=torch.float64).tolist())
        for shape in shapes
    ]


def _agrees(x, y) -> bool:
    if isinstance(x, AbstractMultivector) or isinstance(y, AbstractMultivector):
        return isapprox(x, y)
    return abs(complex(x) - complex(y)) <= 1e-8 + 1e-5 * abs(complex(y))


def matches_direct(kernel: Kernel, f: Callable, args) -> bool:
    """Whether ``kernel`` reproduces ``f`` at ``args`` and at every argument doubled."""
    doubled = [scalar_lmultiply(2.0, a) for a in args]
    return all(_agrees(kernel(*xs), f(*xs)) for xs in (args, doubled))


def compile_kernel(f: Callable, sig: Signature, shapes: Tuple, seed: int = 0) -> Optional[Kernel]:
    """Traces ``f`` and verifies the kernel against direct evaluation.

    Args:
        f: Candidate operation.
        sig (Signature): Algebra of the operands.
        shapes (tuple): Operand storage shapes.
        seed (int, optional): Seed of the verification arguments.

    Returns:
        The kernel, or ``None`` when ``f`` is not multilinear or cannot be
        traced with tensor placeholders.
    """
    name = getattr(f, '__name__', repr(f))
    try:
        kernel = trace(f, sig, shapes)
        generator = torch.Generator().manual_seed(seed)
        if matches_direct(kernel, f, _random_args(sig, shapes, generator)):
            logger.debug("Traced %s for %r with shapes %s", name, sig, shapes)
            return kernel
        logger.debug("%s is not multilinear in %s; keeping direct evaluation", name, shapes)
    except _TRACE_ERRORS as err:
        logger.debug("Cannot trace %s for %r: %s", name, sig, err)
    return None


def _plain_numbers(values) -> bool:
    return all(
        isinstance(v, (int, float, complex)) and not isinstance(v, bool) for v in values
    )


def _eligible(args) -> bool:
    if not _CONFIG.enabled or not args:
        return False
    if not all(isinstance(a, AbstractMultivector) for a in args):
        return False
    sig = args[0].signature
    if any(a.signature != sig for a in args[1:]):
        return False
    # Fraction or symbolic squares do not mix with float64 tensors
    if not _plain_numbers(sig.squares) or sig.dimension > _CONFIG.max_dimension:
        return False
    return all(
        isinstance(c, (float, complex))
        for a in args for _, c in a.nonzero_components()
    )


def evaluate_specialized(f: Callable, *args):
    """Evaluates ``f(*args)`` through the cached kernel, tracing it if needed.

    Blades are widened to homogeneous multivectors before tracing. When
    ``f`` was rejected by :func:`compile_kernel` the call goes to ``f``
    directly.
    """
    wide = tuple(to_multivector(a) if isinstance(a, BasisBlade) else a for a in args)
    sig = wide[0].signature
    for other in wide[1:]:
        check_same_signature(wide[0], other, getattr(f, '__name__', 'specialized'))
    shapes = tuple(shape_of(a) for a in wide)
    key = (f, sig, shapes)

    if key not in _KERNELS:
        _KERNELS.setdefault(key, compile_kernel(f, sig, shapes))
    kernel = _KERNELS[key]
    if kernel is None:
        return f(*args)
    return kernel(*wide)


def specialized(f: Callable) -> Callable:
    """Wraps an operation with the two-tier strategy.

    Eligible calls (all arguments float/complex multivectors of a signature
    with plain numeric squares, within ``max_dimension``) go through the
    kernel cache; all others, including exact integer and rational
    coefficients, use ``f`` directly. Functions that are not linear in each
    argument are detected at trace time and stay on the direct path. The
    direct function stays reachable as ``wrapper.direct``.
    """
    @functools.wraps(f)
    def wrapper(*args):
        if _eligible(args):
            return evaluate_specialized(f, *args)
        return f(*args)

    wrapper.direct = f
    return wrapper


def specialized_op(name: str) -> Callable:
    """Specialized wrapper of a built-in operation from :data:`MULTILINEAR_OPS`."""
    try:
        return specialized(MULTILINEAR_OPS[name])
    except KeyError as err:
        raise KeyError(
            f"Unknown multilinear operation: {name}. Available: {list(MULTILINEAR_OPS)}"
        ) from err
