"""Tests for cached multilinear kernels and their equivalence with the direct evaluator."""

from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction

import pytest
import torch

from geoalg import algebra, specialize
from geoalg.basis import basis_blades
from geoalg.multivector import BasisBlade, MixedMultivector, Multivector
from geoalg.signature import Signature


SIGNATURES = [Signature.cl(2), Signature.cl(3), Signature.cl(2, 1), Signature.cl(3, 0, 1)]


# ── Helpers ────────────────────────────────────────────────────────────

def _random_homogeneous(sig, k, rng):
    from geoalg.bits import ncomponents
    return Multivector(sig, k, rng.standard_normal(ncomponents(sig.dimension, k)).tolist())


# ── Tracing ───────────────────────────────────────────────────────────

class TestTrace:
    def test_geometric_product_structure_is_cayley_table(self):
        sig = Signature.cl(2)
        kernel = specialize.trace(algebra.geometric_prod, sig, (('mixed',), ('mixed',)))
        T = kernel.structure
        assert T.shape == (4, 4, 4)
        # v1 v2 = v12, v2 v1 = -v12, v12 v12 = -1
        assert T[3, 1, 2].item() == 1.0
        assert T[3, 2, 1].item() == -1.0
        assert T[0, 3, 3].item() == -1.0
        # one nonzero per blade pair
        assert int((T != 0).sum().item()) == 16

    def test_degenerate_structure(self):
        sig = Signature.cl(1, 0, 1)
        kernel = specialize.trace(algebra.geometric_prod, sig, (('mixed',), ('mixed',)))
        assert kernel.structure[0, 2, 2].item() == 0.0
        assert kernel.arity == 2

    def test_graded_output_shape(self):
        sig = Signature.cl(3)
        kernel = specialize.trace(algebra.wedge, sig, (('grade', 1), ('grade', 1)))
        assert kernel.out_shape == ('grade', 2)
        assert tuple(kernel.structure.shape) == (3, 3, 3)

    def test_unary_trace(self):
        sig = Signature.cl(3)
        kernel = specialize.trace(algebra.reversion, sig, (('mixed',),))
        assert torch.equal(
            torch.diagonal(kernel.structure),
            torch.tensor([1.0, 1.0, 1.0, -1.0, 1.0, -1.0, -1.0, -1.0], dtype=torch.float64),
        )


# ── Equivalence with the direct evaluator ─────────────────────────────

class TestEquivalence:
    @pytest.mark.parametrize("sig", SIGNATURES, ids=repr)
    @pytest.mark.parametrize("name", ["geometric_prod", "wedge", "inner", "lcontract", "rcontract", "antiwedge"])
    def test_binary_ops_mixed(self, sig, name, random_mixed):
        fast = specialize.specialized_op(name)
        a, b = random_mixed(sig), random_mixed(sig)
        expected = specialize.MULTILINEAR_OPS[name](a, b)
        assert fast(a, b).isapprox(expected)

    @pytest.mark.parametrize("sig", SIGNATURES, ids=repr)
    @pytest.mark.parametrize("name", ["reversion", "involution", "clifford_conj", "flipdual", "rdual", "ldual", "hodgedual"])
    def test_unary_ops(self, sig, name, random_mixed):
        fast = specialize.specialized_op(name)
        a = random_mixed(sig)
        assert fast(a).isapprox(specialize.MULTILINEAR_OPS[name](a))

    @pytest.mark.parametrize("p,q", [(1, 1), (1, 2), (2, 2), (3, 1)])
    def test_homogeneous_operands(self, p, q, rng):
        sig = Signature.cl(3, 1)
        a, b = _random_homogeneous(sig, p, rng), _random_homogeneous(sig, q, rng)
        fast = specialize.specialized(algebra.geometric_prod)
        assert fast(a, b).isapprox(algebra.geometric_prod(a, b))
        fast_wedge = specialize.specialized(algebra.wedge)
        out = fast_wedge(a, b)
        direct = algebra.wedge(a, b)
        assert out.isapprox(direct)
        assert type(out) is type(direct)

    def test_scalar_result(self, cl3, random_mixed):
        a, b = random_mixed(cl3), random_mixed(cl3)
        fast = specialize.specialized(algebra.scalar_prod)
        value = fast(a, b)
        assert isinstance(value, float)
        assert value == pytest.approx(algebra.scalar_prod(a, b))

    def test_blade_arguments(self):
        e = basis_blades(Signature.cl(3))
        fast = specialize.specialized(algebra.geometric_prod)
        a = BasisBlade(e['v1'].signature, 0b001, 2.0)
        b = BasisBlade(e['v1'].signature, 0b010, 3.0)
        assert fast(a, b) == 6.0 * e['v12']

    def test_complex_coefficients(self, cl3, rng):
        a = MixedMultivector(cl3, (rng.standard_normal(8) + 1j * rng.standard_normal(8)).tolist())
        b = MixedMultivector(cl3, rng.standard_normal(8).tolist())
        fast = specialize.specialized(algebra.geometric_prod)
        assert fast(a, b).isapprox(algebra.geometric_prod(a, b))


# ── Cache and eligibility ─────────────────────────────────────────────

class TestCache:
    def test_kernel_reused(self, random_mixed):
        sig = Signature.cl(2, 2)
        fast = specialize.specialized(algebra.geometric_prod)
        fast(random_mixed(sig), random_mixed(sig))
        size = specialize.cache_size()
        fast(random_mixed(sig), random_mixed(sig))
        assert specialize.cache_size() == size

    def test_exact_coefficients_use_direct_path(self):
        sig = Signature.cl(1, 3)
        a = MixedMultivector(sig, [Fraction(1, 3)] * 16)
        size = specialize.cache_size()
        out = specialize.specialized(algebra.geometric_prod)(a, a)
        assert specialize.cache_size() == size
        assert out == algebra.geometric_prod(a, a)

    def test_disabled(self, random_mixed):
        specialize.configure(enabled=False)
        sig = Signature.cl(4, 1)
        size = specialize.cache_size()
        a = random_mixed(sig)
        specialize.specialized(algebra.geometric_prod)(a, a)
        assert specialize.cache_size() == size

    def test_max_dimension(self, random_mixed):
        specialize.configure(max_dimension=2)
        sig = Signature.cl(0, 3)
        size = specialize.cache_size()
        a = random_mixed(sig)
        specialize.specialized(algebra.geometric_prod)(a, a)
        assert specialize.cache_size() == size

    def test_invalid_max_dimension(self):
        with pytest.raises(ValueError):
            specialize.configure(max_dimension=-1)

    def test_unknown_op(self):
        with pytest.raises(KeyError):
            specialize.specialized_op("cross")

    def test_direct_attribute(self):
        fast = specialize.specialized(algebra.wedge)
        assert fast.direct is algebra.wedge

    def test_concurrent_population(self, random_mixed):
        def product(a, b):
            return algebra.geometric_prod(a, b)

        sig = Signature.cl(2, 1)
        pairs = [(random_mixed(sig), random_mixed(sig)) for _ in range(32)]
        fast = specialize.specialized(product)
        size = specialize.cache_size()
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda ab: fast(*ab), pairs))
        assert specialize.cache_size() == size + 1
        for (a, b), out in zip(pairs, results):
            assert out.isapprox(algebra.geometric_prod(a, b))


# ── Functions that are not multilinear ────────────────────────────────

class TestDirectFallback:
    def test_square(self, cl3):
        a = MixedMultivector(cl3, [0.5, 1.0, -2.0, 0.3, 0.7, 0.0, 1.5, -0.4])
        fast = specialize.specialized(lambda x: algebra.geometric_prod(x, x))
        expected = algebra.geometric_prod(a, a)
        assert fast(a).isapprox(expected)
        # second call hits the cached rejection
        assert fast(a).isapprox(expected)

    def test_sum_times_operand(self, cl3, random_mixed):
        a, b = random_mixed(cl3), random_mixed(cl3)
        fast = specialize.specialized(lambda x, y: (x + y) * y)
        assert fast(a, b).isapprox((a + b) * b)

    def test_scalar_shift(self, cl3, random_mixed):
        a = random_mixed(cl3)
        fast = specialize.specialized(lambda x: x + 1)
        assert fast(a).isapprox(a + 1)

    def test_untraceable_function(self, cl3):
        u = Multivector.vector(cl3, [1.0, 2.0, 0.5])
        fast = specialize.specialized(algebra.inverse)
        assert fast(u).isapprox(algebra.inverse(u))

    def test_compile_kernel_rejects_square(self, cl3):
        def square(x):
            return algebra.geometric_prod(x, x)

        assert specialize.compile_kernel(square, cl3, (('mixed',),)) is None

    def test_compile_kernel_accepts_wedge(self, cl3):
        kernel = specialize.compile_kernel(algebra.wedge, cl3, (('grade', 1), ('grade', 1)))
        assert kernel is not None
        assert kernel.out_shape == ('grade', 2)

    def test_fraction_squares_use_direct_path(self):
        sig = Signature((Fraction(1), Fraction(1)))
        a = MixedMultivector(sig, [0.5, 1.0, -2.0, 0.25])
        size = specialize.cache_size()
        out = specialize.specialized(algebra.geometric_prod)(a, a)
        assert specialize.cache_size() == size
        assert out.isapprox(algebra.geometric_prod(a, a))
