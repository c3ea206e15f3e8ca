import numpy as np
import pytest

from geoalg import specialize
from geoalg.basis import basis_blades
from geoalg.multivector import MixedMultivector
from geoalg.signature import Signature


@pytest.fixture
def cl3():
    return Signature.euclidean(3)


@pytest.fixture
def blades3(cl3):
    """``{'v1': ..., 'v12': ..., 'v123': ...}`` for Cl(3)."""
    return basis_blades(cl3)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_mixed(rng):
    """Factory for random float mixed multivectors."""
    def make(signature):
        return MixedMultivector(signature, rng.standard_normal(1 << signature.dimension).tolist())
    return make


@pytest.fixture(autouse=True)
def restore_specialize_config():
    cfg = specialize.get_config()
    saved = (cfg.enabled, cfg.max_dimension)
    yield
    specialize.configure(enabled=saved[0], max_dimension=saved[1])
