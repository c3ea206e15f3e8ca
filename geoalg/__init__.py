# geoalg: Geometric Algebra over Arbitrary Metric Signatures (C) 2026 Eunkyum Kim
# Licensed under the Apache License, Version 2.0 | "Unbending" Paradigm

"""Geometric algebra over arbitrary metric signatures.

Provides bitmask blade encoding, metric signatures, the three multivector
shapes (basis blade, homogeneous, mixed), the product engine with duals,
inverses, powers and exponentials, and an optional cached-kernel tier for
floating-point workloads.
"""

from .errors import (
    GeometricAlgebraError,
    SignatureMismatchError,
    ComponentCountError,
    NotInvertibleError,
)
from .signature import Signature
from .multivector import (
    AbstractMultivector,
    BasisBlade,
    Multivector,
    MixedMultivector,
    grades,
    grade_projection,
    promote_pair,
    scalar_part,
    to_blade,
    to_mixed,
    to_multivector,
)
from .algebra import (
    geometric_prod,
    graded_prod,
    wedge,
    inner,
    lcontract,
    rcontract,
    scalar_prod,
    reversion,
    involution,
    clifford_conj,
    flipdual,
    rdual,
    ldual,
    hodgedual,
    invhodgedual,
    antiwedge,
    inverse,
    divide,
    ldiv,
    rational_divide,
    power,
    exp,
)
from .basis import basis, basis_blades, blade_name, cayley_table, pseudoscalar
from .specialize import SpecializeConfig, configure, specialized, specialized_op
from .show import show

__version__ = "0.1.0"

__all__ = [
    # errors
    "GeometricAlgebraError",
    "SignatureMismatchError",
    "ComponentCountError",
    "NotInvertibleError",
    # model
    "Signature",
    "AbstractMultivector",
    "BasisBlade",
    "Multivector",
    "MixedMultivector",
    "grades",
    "grade_projection",
    "promote_pair",
    "scalar_part",
    "to_blade",
    "to_mixed",
    "to_multivector",
    # products
    "geometric_prod",
    "graded_prod",
    "wedge",
    "inner",
    "lcontract",
    "rcontract",
    "scalar_prod",
    "reversion",
    "involution",
    "clifford_conj",
    "flipdual",
    "rdual",
    "ldual",
    "hodgedual",
    "invhodgedual",
    "antiwedge",
    "inverse",
    "divide",
    "ldiv",
    "rational_divide",
    "power",
    "exp",
    # basis
    "basis",
    "basis_blades",
    "blade_name",
    "cayley_table",
    "pseudoscalar",
    # specialization
    "SpecializeConfig",
    "configure",
    "specialized",
    "specialized_op",
    # display
    "show",
]
