"""Command-line tasks for the geoalg package.

Each task inherits from :class:`BaseTask`, which builds the signature and
applies specialization settings from the Hydra config, and implements ``run``.
"""

from .base import BaseTask
from .cayley import CayleyTableTask
from .identities import IdentityCheckTask

__all__ = [
    "BaseTask",
    "CayleyTableTask",
    "IdentityCheckTask",
]
