"""Shared helpers for the test suite: random operands and error checks against gmpy2."""

import math

from qdfloat import Double, Quad
from qdfloat.core import gmpmath


# acceptable relative error for arithmetic and for transcendental functions
TOLERANCES = {
    Double: (2.0 ** -100, 2.0 ** -96),
    Quad: (2.0 ** -200, 2.0 ** -196),
}


def random_limbs(cls, rng, emin=-20, emax=20, gap=53):
    """Random limbs, most significant first, with every limb populated.
    With gap > 53 the limbs cannot overlap, so they are already normalized.
    """
    e = int(rng.integers(emin, emax + 1))
    limbs = [math.ldexp(float(rng.uniform(1.0, 2.0)), e - gap * i)
             for i in range(cls._ctx.limbs)]
    if rng.integers(2):
        limbs = [-x for x in limbs]
    return limbs


def random_value(cls, rng, emin=-20, emax=20, gap=53):
    return cls.new(*random_limbs(cls, rng, emin, emax, gap))


def assert_close(x, reference, tolerance, absolute=False):
    """Check the relative error of x, a multi-limb value, against reference,
    which is either an MPFR or another multi-limb value. With absolute=True,
    references smaller than 1 are held to an absolute error instead.
    """
    if not hasattr(reference, 'precision'):
        reference = gmpmath.limbs_to_mpfr(reference.limbs)
    err = gmpmath.relative_error(x.limbs, reference)
    if absolute and math.isfinite(err) and abs(float(reference)) < 1.0:
        err *= abs(float(reference))
    assert err <= tolerance, '{} vs. {}: relative error {}'.format(str(x), str(reference), repr(err))
