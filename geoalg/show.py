# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.

"""Plain-text rendering.

Consumes only ``nonzero_components`` and signature names; arithmetic never
depends on it.
"""

from geoalg.basis import blade_name


def _coeff_str(c) -> str:
    text = str(c)
    if text.startswith("(") and text.endswith(")"):
        return text
    if any(ch in text[1:] for ch in " +-"):
        return f"({text})"
    return text


def show_term(signature, bits: int, coeff) -> str:
    if bits == 0:
        return _coeff_str(coeff)
    return f"{_coeff_str(coeff)} {blade_name(signature, bits)}"


def show_inline(a) -> str:
    """``1 + 2 v12``-style sum of the nonzero terms (``0`` when empty)."""
    terms = [show_term(a.signature, bits, c) for bits, c in a.nonzero_components()]
    return " + ".join(terms) if terms else "0"


def show(a) -> str:
    name = type(a).__name__
    if name == "Multivector":
        name = f"Multivector[grade={a.grade}]"
    return f"{name}({show_inline(a)})"
