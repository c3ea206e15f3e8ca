# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


from abc import ABC, abstractmethod

from omegaconf import DictConfig, ListConfig

from log import get_logger, set_level
from geoalg import specialize
from geoalg.signature import Signature

logger = get_logger(__name__)


class BaseTask(ABC):
    """Abstract base class for all algebra tasks.

    Lifecycle: setup_signature -> configure specialization -> run.

    Attributes:
        cfg (DictConfig): Hydra configuration.
        signature (Signature): Metric of the algebra the task works in.
        specialize_config (SpecializeConfig): Active kernel-cache settings.
    """

    def __init__(self, cfg: DictConfig):
        """Sets up the task.

        Args:
            cfg (DictConfig): Hydra config.
        """
        self.cfg = cfg
        if cfg.get('log_level'):
            set_level(cfg.log_level)

        self.signature = self.setup_signature()

        spec_cfg = cfg.get('specialize') or {}
        self.specialize_config = specialize.configure(
            enabled=spec_cfg.get('enabled', None),
            max_dimension=spec_cfg.get('max_dimension', None),
        )

    def setup_signature(self) -> Signature:
        """Builds the signature from ``cfg.algebra``.

        Either ``squares`` (a list of numbers or a ``"+-0"`` string) or the
        counts ``p``, ``q``, ``r``.
        """
        alg = self.cfg.algebra
        names = alg.get('names', None)
        if names is not None:
            names = list(names)

        squares = alg.get('squares', None)
        if squares is not None:
            if isinstance(squares, str):
                sig = Signature.from_string(squares)
                return Signature(sig.squares, names) if names else sig
            if isinstance(squares, ListConfig):
                squares = list(squares)
            return Signature(squares, names)

        sig = Signature.cl(alg.get('p', 0), alg.get('q', 0), alg.get('r', 0))
        return Signature(sig.squares, names) if names else sig

    @abstractmethod
    def run(self):
        """Executes the task and returns its results."""
