# geoalg: Geometric Algebra over Arbitrary Metric Signatures
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Geoalg CLI Entry Point.

Dispatches algebra tasks: ``python main.py name=identities algebra.p=3 algebra.q=1``.
"""

import hydra
from omegaconf import DictConfig, OmegaConf

from log import get_logger
from tasks.cayley import CayleyTableTask
from tasks.identities import IdentityCheckTask

logger = get_logger(__name__)

TASK_MAP = {
    'cayley': CayleyTableTask,
    'identities': IdentityCheckTask,
}


def run_task(cfg: DictConfig):
    """Builds and runs the task named by ``cfg.name``.

    Args:
        cfg (DictConfig): The plan.

    Returns:
        Whatever the task's ``run`` returns.
    """
    task_name = cfg.name
    if task_name not in TASK_MAP:
        raise ValueError(f"Unknown task: {task_name}. Available: {list(TASK_MAP.keys())}")

    logger.debug("Config:\n%s", OmegaConf.to_yaml(cfg))
    TaskClass = TASK_MAP[task_name]
    task = TaskClass(cfg)
    return task.run()


@hydra.main(version_base=None, config_path="conf", config_name="config")
def main(cfg: DictConfig):
    run_task(cfg)


if __name__ == "__main__":
    main()
