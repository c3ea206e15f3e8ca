# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


from omegaconf import DictConfig

from log import get_logger
from geoalg import algebra, specialize
from geoalg.basis import blade_name, cayley_table
from tasks.base import BaseTask

logger = get_logger(__name__)


def format_entry(signature, blade) -> str:
    """``v12``, ``-v12``, ``0`` or ``2.5 v12`` for one product blade."""
    c = blade.coeff
    if c == 0:
        return "0"
    name = blade_name(signature, blade.bits)
    if c == 1:
        return name
    if c == -1:
        return f"-{name}"
    return f"{c} {name}"


class CayleyTableTask(BaseTask):
    """Multiplication table of every basis blade pair.

    Also traces the geometric-product kernel over mixed operands, whose
    structure tensor is the same table in dense form.
    """

    def __init__(self, cfg: DictConfig):
        super().__init__(cfg)
        self.show_kernel = cfg.get('cayley', {}).get('show_kernel', True)

    def run(self):
        logger.info("Starting Task: %s on %r", self.__class__.__name__, self.signature)
        sig = self.signature
        names = [blade_name(sig, bits) for bits in range(1 << sig.dimension)]
        rows = [[format_entry(sig, blade) for blade in row] for row in cayley_table(sig)]

        width = max(len(entry) for entry in names + [e for row in rows for e in row])
        logger.info("%s | %s", " " * width, " ".join(n.rjust(width) for n in names))
        for name, row in zip(names, rows):
            logger.info("%s | %s", name.rjust(width), " ".join(e.rjust(width) for e in row))

        result = {'names': names, 'table': rows}
        if self.show_kernel and sig.is_numeric:
            kernel = specialize.trace(algebra.geometric_prod, sig, (('mixed',), ('mixed',)))
            nnz = int((kernel.structure != 0).sum().item())
            logger.info("Geometric product kernel: shape %s, %d nonzero entries",
                        tuple(kernel.structure.shape), nnz)
            result['kernel_nonzeros'] = nnz
        return result
