"""Exact conversion between limb tuples and MPFR numbers, and common
operations computed with GMP as a backend.

This is the only place that knows about gmpy2. It is used to produce
constant tables, to parse and format decimal strings, and as a
high-precision reference for checking the native multi-limb arithmetic.
"""

import math

import gmpy2 as gmp

from . import utils
from .ops import OP
from .renorm import renormalize


def _ctx(prec):
    return gmp.context(
        precision=max(2, prec),
        emin=gmp.get_emin_min(),
        emax=gmp.get_emax_max(),
        subnormalize=False,
        trap_underflow=False,
        trap_overflow=False,
        trap_inexact=False,
        trap_invalid=False,
        trap_erange=False,
        trap_divzero=False,
        # limbs are always rounded to nearest
        round=gmp.RoundToNearest,
    )


def mpfr(x, prec):
    """Convert x to an MPFR with prec bits, rounding to nearest."""
    with _ctx(prec):
        return gmp.mpfr(x)


def limbs_to_mpfr(limbs):
    """Exact sum of a tuple of limbs (or a single float) as an MPFR."""
    if isinstance(limbs, float):
        limbs = (limbs,)

    lead = limbs[0]
    if math.isnan(lead):
        return gmp.nan()
    elif math.isinf(lead):
        if lead < 0.0:
            return -gmp.inf()
        else:
            return gmp.inf()

    exps = [math.frexp(x)[1] for x in limbs if x != 0.0]
    if exps:
        # enough room to hold every bit of every limb
        prec = max(exps) - min(exps) + 54 + len(limbs)
    else:
        prec = 53

    with _ctx(prec):
        result = gmp.mpfr(lead)
        for x in limbs[1:]:
            result = result + x
        if gmp.is_zero(result) and math.copysign(1.0, lead) < 0:
            return -gmp.zero()
        return result


def mpfr_to_limbs(x, n):
    """Split an MPFR into a normalized tuple of n limbs, rounding each limb to nearest."""
    if gmp.is_nan(x):
        return (math.nan,) + (0.0,) * (n - 1)
    elif gmp.is_infinite(x):
        if gmp.is_signed(x):
            return (-math.inf,) + (0.0,) * (n - 1)
        else:
            return (math.inf,) + (0.0,) * (n - 1)
    elif gmp.is_zero(x):
        if gmp.is_signed(x):
            return (-0.0,) + (0.0,) * (n - 1)
        else:
            return (0.0,) * n

    limbs = []
    # subtracting the nearest float from the remainder is always exact
    with _ctx(max(x.precision, 53)):
        r = x
        for i in range(n):
            f = float(r)
            limbs.append(f)
            if math.isinf(f):
                return (f,) + (0.0,) * (n - 1)
            r = r - f

    # nearest-rounded limbs are already non-overlapping, but a limb can be
    # exactly half an ulp of the one before it, so let renormalize settle ties
    return renormalize(limbs, n)


def str_to_limbs(s, n, prec):
    """Parse a decimal (or inf / nan) string into n limbs."""
    try:
        x = mpfr(s.strip(), prec)
    except (ValueError, TypeError) as e:
        raise utils.ConversionError('cannot parse {} as a number: {}'.format(repr(s), str(e)))
    return mpfr_to_limbs(x, n)


def int_to_limbs(i, n):
    """Convert a python int to n limbs, exactly if it fits."""
    return mpfr_to_limbs(mpfr(i, max(53, i.bit_length())), n)


def limbs_to_str(limbs, digits):
    """Format limbs as a decimal string with the given number of significant digits."""
    x = limbs_to_mpfr(limbs)
    if gmp.is_nan(x):
        return 'nan'
    elif gmp.is_infinite(x):
        return '-inf' if gmp.is_signed(x) else 'inf'
    elif gmp.is_zero(x):
        return '-0.0' if gmp.is_signed(x) else '0.0'
    return '{0:.{1}g}'.format(x, digits)


def relative_error(limbs, ref):
    """abs(limbs - ref) / abs(ref) as a float, where ref is an MPFR.
    Matching special values count as exact, mismatched ones as infinitely wrong.
    """
    x = limbs_to_mpfr(limbs)
    if gmp.is_nan(x) or gmp.is_nan(ref):
        return 0.0 if (gmp.is_nan(x) and gmp.is_nan(ref)) else math.inf
    elif gmp.is_infinite(x) or gmp.is_infinite(ref):
        return 0.0 if x == ref else math.inf

    with _ctx(max(x.precision, ref.precision) + 64):
        diff = abs(x - ref)
        if gmp.is_zero(diff):
            return 0.0
        elif gmp.is_zero(ref):
            return math.inf
        return float(diff / abs(ref))


gmp_ops = {
    OP.add: gmp.add,
    OP.sub: gmp.sub,
    OP.mul: gmp.mul,
    OP.div: gmp.div,
    OP.neg: lambda x: -x,
    OP.sqrt: gmp.sqrt,
    OP.fabs: lambda x: abs(x),
    # the plain floor, ceil and trunc give back an mpz
    OP.floor: gmp.rint_floor,
    OP.ceil: gmp.rint_ceil,
    OP.round: gmp.rint_round,
    OP.trunc: gmp.rint_trunc,
    OP.cos: gmp.cos,
    OP.sin: gmp.sin,
    OP.tan: gmp.tan,
    OP.cosh: gmp.cosh,
    OP.sinh: gmp.sinh,
    OP.tanh: gmp.tanh,
    OP.acosh: gmp.acosh,
    OP.asinh: gmp.asinh,
    OP.atanh: gmp.atanh,
    OP.exp: gmp.exp,
    OP.log: gmp.log,
    OP.log10: gmp.log10,
    OP.log2: gmp.log2,
    OP.pow: lambda x, y: x ** y,
    OP.cbrt: gmp.cbrt,
    OP.asin: gmp.asin,
    OP.acos: gmp.acos,
    OP.atan: gmp.atan,
    OP.atan2: gmp.atan2,
}


def compute(opcode, *args, prec=212):
    """Compute op(*args) with prec bits of precision, rounded to nearest.
    Arguments are limb tuples or floats, and are converted exactly.
    NOTE: this does not trap on invalid operations, so it gives the
    MPFR answer for special cases like sqrt(-1) or log(0).
    """
    try:
        op = gmp_ops[opcode]
    except KeyError:
        raise ValueError('no reference implementation for {}'.format(repr(opcode)))

    inputs = [limbs_to_mpfr(arg) for arg in args]
    # gmpy2 really doesn't like it when you pass nan as an argument
    for f in inputs:
        if gmp.is_nan(f):
            return f

    with _ctx(prec):
        return op(*inputs)


constant_exprs = {
    'PI': gmp.const_pi,
    'TAU': lambda: 2 * gmp.const_pi(), # multiplication by 2 is exact
    'FRAC_PI_2': lambda: gmp.const_pi() / 2,
    'FRAC_PI_4': lambda: gmp.const_pi() / 4,
    'FRAC_PI_16': lambda: gmp.const_pi() / 16,
    'FRAC_1_PI': lambda: 1 / gmp.const_pi(),
    'E': lambda: gmp.exp(1),
    'LN_2': gmp.const_log2,
    'LN_10': lambda: gmp.log(10),
    'LOG2_E': lambda: 1 / gmp.const_log2(),
    'LOG10_E': lambda: 1 / gmp.log(10),
    'SQRT_2': lambda: gmp.sqrt(2),
    'FRAC_1_SQRT_2': lambda: gmp.rec_sqrt(2),
}

def compute_constant(name, prec=212):
    # a few extra bits, so that the final rounding to limbs dominates
    with _ctx(prec + 16):
        try:
            return constant_exprs[name]()
        except KeyError as e:
            raise ValueError('unknown constant {}'.format(repr(e.args[0])))


def compute_inv_factorial(k, prec=212):
    """1 / k!, rounded once."""
    with _ctx(prec + 16):
        return gmp.mpfr(1) / math.factorial(k)


def compute_sin_cos_pi(k, d, prec=212):
    """(sin(k*pi/d), cos(k*pi/d))"""
    with _ctx(prec + 32):
        angle = gmp.const_pi() * k / d
        return gmp.sin(angle), gmp.cos(angle)


def remainder_2pi(limbs, n, prec=212):
    """limbs - 2*pi*round(limbs / (2*pi)), rounded to n limbs.
    pi gets enough bits to cover the exponent of the argument, so that the
    result has prec good bits no matter how large the argument is.
    """
    x = limbs_to_mpfr(limbs)
    e = max(0, math.frexp(limbs[0])[1])
    with _ctx(e + prec + 64):
        return mpfr_to_limbs(gmp.remainder(x, 2 * gmp.const_pi()), n)
