# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Exception hierarchy for geometric algebra operations."""


class GeometricAlgebraError(Exception):
    """Base class for all errors raised by :mod:`geoalg`."""


class SignatureMismatchError(GeometricAlgebraError, TypeError):
    """Operands belong to algebras with different metric signatures."""


class ComponentCountError(GeometricAlgebraError, ValueError):
    """Component storage does not match the shape implied by signature and grade."""


class NotInvertibleError(GeometricAlgebraError, ZeroDivisionError):
    """An element required to be invertible is not."""
