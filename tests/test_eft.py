import math

import pytest

from qdfloat.core import eft, gmpmath
from qdfloat.core.ops import OP


def exact(op, *args):
    return gmpmath.compute(op, *args, prec=2200)


def random_pairs(rng, count=200, emin=-40, emax=40):
    for i in range(count):
        a = math.ldexp(float(rng.uniform(-1.0, 1.0)), int(rng.integers(emin, emax)))
        b = math.ldexp(float(rng.uniform(-1.0, 1.0)), int(rng.integers(emin, emax)))
        yield a, b


class TestSums:

    def test_two_sum_is_exact(self, rng):
        for a, b in random_pairs(rng):
            s, e = eft.two_sum(a, b)
            assert s == a + b
            assert gmpmath.limbs_to_mpfr((s, e)) == exact(OP.add, a, b)

    def test_two_diff_is_exact(self, rng):
        for a, b in random_pairs(rng):
            s, e = eft.two_diff(a, b)
            assert s == a - b
            assert gmpmath.limbs_to_mpfr((s, e)) == exact(OP.sub, a, b)

    def test_quick_two_sum_is_exact_when_ordered(self, rng):
        for a, b in random_pairs(rng):
            if abs(a) < abs(b):
                a, b = b, a
            s, e = eft.quick_two_sum(a, b)
            assert gmpmath.limbs_to_mpfr((s, e)) == exact(OP.add, a, b)
            s, e = eft.quick_two_diff(a, b)
            assert gmpmath.limbs_to_mpfr((s, e)) == exact(OP.sub, a, b)

    def test_error_term_is_small(self):
        s, e = eft.two_sum(1.0, 2.0 ** -60)
        assert s == 1.0
        assert e == 2.0 ** -60

    def test_specials_propagate(self):
        s, e = eft.two_sum(math.inf, 1.0)
        assert s == math.inf
        s, e = eft.two_sum(math.nan, 1.0)
        assert math.isnan(s)


class TestProducts:

    def test_split(self, rng):
        for a, b in random_pairs(rng):
            hi, lo = eft.split(a)
            assert hi + lo == a
            # both halves fit in 27 bits, so their products are exact
            assert (math.frexp(hi)[0] * 2.0 ** 27).is_integer()
            assert (math.frexp(lo)[0] * 2.0 ** 27).is_integer()

    def test_split_huge(self):
        a = 1.7e308
        hi, lo = eft.split(a)
        assert math.isfinite(hi) and math.isfinite(lo)
        assert hi + lo == a

    def test_two_prod_is_exact(self, rng):
        for a, b in random_pairs(rng):
            p, e = eft.two_prod(a, b)
            assert p == a * b
            assert gmpmath.limbs_to_mpfr((p, e)) == exact(OP.mul, a, b)

    def test_two_prod_huge(self):
        a = 1.2345678901234567e300
        b = 1.0000000000000002e-10
        p, e = eft.two_prod(a, b)
        assert gmpmath.limbs_to_mpfr((p, e)) == exact(OP.mul, a, b)

    def test_two_sqr_is_exact(self, rng):
        for a, b in random_pairs(rng):
            p, e = eft.two_sqr(a)
            assert gmpmath.limbs_to_mpfr((p, e)) == exact(OP.mul, a, a)

    def test_overflow(self):
        p, e = eft.two_prod(1e200, 1e200)
        assert p == math.inf


class TestThreeTerm:

    def test_three_sum_is_exact(self, rng):
        for (a, b), (c, d) in zip(random_pairs(rng, 100), random_pairs(rng, 100)):
            x, y, z = eft.three_sum(a, b, c)
            assert (gmpmath.limbs_to_mpfr((x, y, z))
                    == gmpmath.limbs_to_mpfr((a, b, c)))

    def test_three_sum2(self, rng):
        for (a, b), (c, d) in zip(random_pairs(rng, 100), random_pairs(rng, 100)):
            x, y = eft.three_sum2(a, b, c)
            assert x == eft.three_sum(a, b, c)[0]

    @pytest.mark.parametrize('u, v, t', [
        (1.0, 2.0 ** -60, 2.0 ** -120),
        (1.0, 2.0 ** -60, -2.0 ** -60),
        (1.0, 0.0, 3.0),
        (0.0, 0.0, 0.0),
        (1.5, -2.0 ** -55, 2.0 ** -56),
    ])
    def test_quick_three_accum_is_exact(self, u, v, t):
        s, a, b = eft.quick_three_accum(u, v, t)
        assert gmpmath.limbs_to_mpfr((s, a, b)) == gmpmath.limbs_to_mpfr((u, v, t))

    def test_quick_three_accum_emits(self):
        # nothing cancels, so a complete component comes out
        s, a, b = eft.quick_three_accum(1.0, 2.0 ** -60, 2.0 ** -120)
        assert s == 1.0
        assert a == 2.0 ** -60
        assert b == 2.0 ** -120

    def test_quick_three_accum_absorbs(self):
        s, a, b = eft.quick_three_accum(1.0, 2.0 ** -60, -2.0 ** -60)
        assert s == 0.0
        assert a + b == 1.0
