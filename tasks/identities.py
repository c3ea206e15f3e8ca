# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Randomized check of algebraic identities in a configured signature."""

from collections import OrderedDict

import numpy as np
from omegaconf import DictConfig
from tqdm import tqdm

from log import get_logger
from geoalg import algebra, specialize
from geoalg.errors import NotInvertibleError
from geoalg.multivector import MixedMultivector, Multivector, add, isapprox, one
from tasks.base import BaseTask

logger = get_logger(__name__)


def random_mixed(signature, rng: np.random.Generator) -> MixedMultivector:
    return MixedMultivector(signature, rng.standard_normal(1 << signature.dimension).tolist())


def random_vector(signature, rng: np.random.Generator) -> Multivector:
    return Multivector.vector(signature, rng.standard_normal(signature.dimension).tolist())


class IdentityCheckTask(BaseTask):
    """Samples random multivectors and verifies product identities.

    Each check returns ``True``/``False``; a check that does not apply to
    the sample (e.g. inverting a null vector) returns ``None`` and counts
    as skipped.
    """

    def __init__(self, cfg: DictConfig):
        super().__init__(cfg)
        check = cfg.get('check', {})
        self.samples = int(check.get('samples', 50))
        self.seed = int(check.get('seed', 0))
        self.rtol = float(check.get('rtol', 1e-5))
        self.atol = float(check.get('atol', 1e-8))
        if not self.signature.is_numeric:
            raise ValueError(f"identity checks need numeric squares, got {self.signature!r}")

    def close(self, x, y) -> bool:
        return isapprox(x, y, rtol=self.rtol, atol=self.atol)

    def checks(self):
        """Name -> ``fn(a, b, c, u, v)``."""
        gp = algebra.geometric_prod
        rev = algebra.reversion
        fast_gp = specialize.specialized(gp)
        degenerate = self.signature.is_degenerate

        def inverse_vector(a, b, c, u, v):
            try:
                return self.close(gp(u, algebra.inverse(u)), one(u))
            except NotInvertibleError:
                return None

        def hodge_roundtrip(a, b, c, u, v):
            if degenerate:
                return None
            return self.close(algebra.invhodgedual(algebra.hodgedual(a)), a)

        return OrderedDict([
            ('associativity', lambda a, b, c, u, v: self.close(gp(gp(a, b), c), gp(a, gp(b, c)))),
            ('distributivity', lambda a, b, c, u, v: self.close(gp(a, add(b, c)), add(gp(a, b), gp(a, c)))),
            ('reversion', lambda a, b, c, u, v: self.close(rev(gp(a, b)), gp(rev(b), rev(a)))),
            ('wedge_associativity', lambda a, b, c, u, v: self.close(
                algebra.wedge(algebra.wedge(a, b), c), algebra.wedge(a, algebra.wedge(b, c)))),
            ('vector_split', lambda a, b, c, u, v: self.close(
                gp(u, v), add(algebra.inner(u, v), algebra.wedge(u, v)))),
            ('complement_roundtrip', lambda a, b, c, u, v: (
                algebra.ldual(algebra.rdual(a)) == a and algebra.flipdual(algebra.flipdual(a)) == a)),
            ('hodge_roundtrip', hodge_roundtrip),
            ('inverse_vector', inverse_vector),
            ('specialized_product', lambda a, b, c, u, v: self.close(fast_gp(a, b), gp(a, b))),
        ])

    def run(self):
        logger.info("Starting Task: %s on %r (%d samples, seed %d)",
                    self.__class__.__name__, self.signature, self.samples, self.seed)
        rng = np.random.default_rng(self.seed)
        checks = self.checks()
        results = {name: {'passed': 0, 'failed': 0, 'skipped': 0} for name in checks}

        for _ in tqdm(range(self.samples), desc="Identities"):
            a, b, c = (random_mixed(self.signature, rng) for _ in range(3))
            u, v = random_vector(self.signature, rng), random_vector(self.signature, rng)
            for name, check in checks.items():
                outcome = check(a, b, c, u, v)
                if outcome is None:
                    results[name]['skipped'] += 1
                elif outcome:
                    results[name]['passed'] += 1
                else:
                    results[name]['failed'] += 1

        for name, counts in results.items():
            if counts['failed']:
                logger.warning("%-22s FAILED %d/%d", name, counts['failed'], self.samples)
            else:
                logger.info("%-22s passed %d, skipped %d", name, counts['passed'], counts['skipped'])
        logger.info("Kernel cache holds %d entries", specialize.cache_size())
        return results
