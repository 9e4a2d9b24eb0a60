"""Named constants and the tables used by the transcendental functions.

Every multi-limb type gets the same set of constants, each computed once,
at import time, with gmpy2 at the type's reference precision and then
split into limbs. They are plain class attributes (Double.PI, Quad.E, ...)
and are also collected into the read-only mapping CONSTANTS.
"""

import math

from ..core import gmpmath
from ..core import utils


# constants computed with gmpy2, see gmpmath.constant_exprs
named_constants = (
    'PI',
    'TAU',
    'FRAC_PI_2',
    'FRAC_PI_4',
    'FRAC_PI_16',
    'FRAC_1_PI',
    'E',
    'LN_2',
    'LN_10',
    'LOG2_E',
    'LOG10_E',
    'SQRT_2',
    'FRAC_1_SQRT_2',
)


def _from_mpfr(cls, x):
    return cls._from_limbs(gmpmath.mpfr_to_limbs(x, cls._ctx.limbs))


def _exact(cls, *limbs):
    n = cls._ctx.limbs
    return cls.raw(*(limbs + (0.0,) * (n - len(limbs))))


def install(cls):
    """Attach the constants and tables to cls, a MultiFloat subclass with a context."""
    ctx = cls._ctx
    n = ctx.limbs
    prec = ctx.ref_prec
    constants = {}

    # exactly representable values
    constants['ZERO'] = _exact(cls, 0.0)
    constants['NEG_ZERO'] = _exact(cls, -0.0)
    constants['ONE'] = _exact(cls, 1.0)
    constants['NEG_ONE'] = _exact(cls, -1.0)
    constants['NAN'] = _exact(cls, math.nan)
    constants['INFINITY'] = _exact(cls, math.inf)
    constants['NEG_INFINITY'] = _exact(cls, -math.inf)
    constants['EPSILON'] = _exact(cls, ctx.eps)

    # largest finite value: every limb is the biggest one that still fits
    # below half an ulp of the limb before it
    biggest = [1.7976931348623157e+308]
    for i in range(1, n):
        biggest.append(math.ldexp(1.0 - 2.0 ** -53, 1024 - 54 * i))
    constants['MAX'] = cls.raw(*biggest)
    constants['MIN'] = constants['MAX'].neg()
    # smallest normal value for which every limb below it is still a normal float
    constants['MIN_POSITIVE'] = _exact(cls, math.ldexp(1.0, -1022 + 53 * (n - 1)))

    for name in named_constants:
        constants[name] = _from_mpfr(cls, gmpmath.compute_constant(name, prec))

    for name, x in constants.items():
        setattr(cls, name, x)
    cls.CONSTANTS = utils.ImmutableDict(constants)

    # 1/3!, 1/4!, ... for the Taylor series
    cls.INV_FACTS = tuple(_from_mpfr(cls, gmpmath.compute_inv_factorial(k, prec))
                          for k in range(3, 3 + ctx.inv_facts))

    # sin(k*pi/16) and cos(k*pi/16) for k = 1, 2, 3, 4
    sines = []
    cosines = []
    for k in range(1, 5):
        s, c = gmpmath.compute_sin_cos_pi(k, 16, prec)
        sines.append(_from_mpfr(cls, s))
        cosines.append(_from_mpfr(cls, c))
    cls.SIN_TABLE = tuple(sines)
    cls.COS_TABLE = tuple(cosines)
