"""Sine, cosine and tangent for the multi-limb types.

Arguments are reduced three times: to the nearest multiple of 2*pi, then
to a quadrant (a multiple of pi/2), and finally to a multiple of pi/16,
leaving a residual of magnitude at most about pi/32. The residual goes
through a Taylor series, and the result is rebuilt with the angle
addition formulas, using tabulated sines and cosines of k*pi/16 and the
usual sign rotations for the quadrant.

These work on any MultiFloat type, and use the constants installed on
that type by consts.install(). Arguments too large for the first step to
be done natively are reduced modulo 2*pi with gmpy2.
"""

import math

from ..core import gmpmath


# beyond this, the rounding error in z * 2pi is too large for a native
# reduction, and the argument is reduced with gmpy2 instead
_REDUCE_NATIVE = 2.0 ** 10


def sin_taylor(a):
    """sin(a) by its Taylor series, for abs(a) <= pi/32."""
    cls = type(a)
    if a.is_zero():
        return a

    inv_facts = cls.INV_FACTS
    threshold = a.fabs().mul(cls.EPSILON).mul_pwr2(0.5)
    x = a.sqr().neg()
    s = a
    r = a
    i = 0
    while True:
        r = r.mul(x)
        t = r.mul(inv_facts[i])
        s = s.add(t)
        i += 2
        if i >= len(inv_facts) or t.fabs() <= threshold:
            break
    return s


def cos_taylor(a):
    """cos(a) by its Taylor series, for abs(a) <= pi/32."""
    cls = type(a)
    if a.is_zero():
        return cls.ONE

    inv_facts = cls.INV_FACTS
    threshold = cls.EPSILON.mul_pwr2(0.5)
    x = a.sqr().neg()
    r = x
    s = cls.ONE.add(r.mul_pwr2(0.5))
    i = 1
    while True:
        r = r.mul(x)
        t = r.mul(inv_facts[i])
        s = s.add(t)
        i += 2
        if i >= len(inv_facts) or t.fabs() <= threshold:
            break
    return s


def sincos_taylor(a):
    """(sin(a), cos(a)) for abs(a) <= pi/32. Only the sine uses the series;
    the cosine follows from it, which is fine because it is close to 1.
    """
    cls = type(a)
    if a.is_zero():
        return a, cls.ONE

    s = sin_taylor(a)
    return s, cls.ONE.sub(s.sqr()).sqrt()


def reduce(a):
    """Reduce a to (j, k, t), with a = t + k*pi/16 + j*pi/2 (mod 2*pi).

    j is the quadrant, from 0 to 3, and k is between -4 and 4.
    """
    cls = type(a)

    # modulo 2*pi
    if abs(a[0]) < _REDUCE_NATIVE:
        z = a.div(cls.TAU).round()
        r = a.sub(z.mul(cls.TAU))
    else:
        r = cls._from_limbs(gmpmath.remainder_2pi(a.limbs, a.ctx.limbs, a.ctx.ref_prec))

    # modulo pi/2
    q = math.floor(r[0] / cls.FRAC_PI_2[0] + 0.5)
    t = r.sub(cls(q).mul(cls.FRAC_PI_2))
    j = q % 4

    # modulo pi/16
    q = math.floor(t[0] / cls.FRAC_PI_16[0] + 0.5)
    t = t.sub(cls(q).mul(cls.FRAC_PI_16))
    k = q

    return j, k, t


def _shift(k, s, c):
    # from (sin(t), cos(t)) to (sin(t + k*pi/16), cos(t + k*pi/16))
    if k == 0:
        return s, c

    cls = type(s)
    u = cls.COS_TABLE[abs(k) - 1]
    v = cls.SIN_TABLE[abs(k) - 1]
    if k > 0:
        return u.mul(s).add(v.mul(c)), u.mul(c).sub(v.mul(s))
    else:
        return u.mul(s).sub(v.mul(c)), u.mul(c).add(v.mul(s))


def _rotate(j, s, c):
    # from (sin(x), cos(x)) to (sin(x + j*pi/2), cos(x + j*pi/2))
    if j == 0:
        return s, c
    elif j == 1:
        return c, s.neg()
    elif j == 2:
        return s.neg(), c.neg()
    else:
        return c.neg(), s


def sin(a):
    cls = type(a)
    if a.is_zero():
        return a
    elif not a.is_finite():
        return cls.NAN

    j, k, t = reduce(a)

    if k == 0:
        # no table lookup, so only one of the series is needed
        if j == 0:
            return sin_taylor(t)
        elif j == 1:
            return cos_taylor(t)
        elif j == 2:
            return sin_taylor(t).neg()
        else:
            return cos_taylor(t).neg()

    s, c = _shift(k, *sincos_taylor(t))
    return _rotate(j, s, c)[0]


def cos(a):
    cls = type(a)
    if a.is_zero():
        return cls.ONE
    elif not a.is_finite():
        return cls.NAN

    j, k, t = reduce(a)

    if k == 0:
        if j == 0:
            return cos_taylor(t)
        elif j == 1:
            return sin_taylor(t).neg()
        elif j == 2:
            return cos_taylor(t).neg()
        else:
            return sin_taylor(t)

    s, c = _shift(k, *sincos_taylor(t))
    return _rotate(j, s, c)[1]


def sin_cos(a):
    cls = type(a)
    if a.is_zero():
        return a, cls.ONE
    elif not a.is_finite():
        return cls.NAN, cls.NAN

    j, k, t = reduce(a)
    s, c = _shift(k, *sincos_taylor(t))
    return _rotate(j, s, c)


def tan(a):
    """sin(a) / cos(a). Where the cosine comes out as an exact zero, this
    is a signed infinity rather than an error.
    """
    s, c = sin_cos(a)
    return s.div(c)


# inverse functions

def atan2(y, x):
    """The angle of the point (x, y), in [-pi, pi].

    Signed zeros and infinities are handled as for math.atan2. Otherwise
    the native atan2 of the leading limbs is polished with Newton steps
    on sin or cos, whichever is better conditioned at that angle.
    """
    cls = type(y)
    if y.is_nan() or x.is_nan():
        return cls.NAN

    if y.is_infinite():
        if x.is_infinite():
            if x.is_sign_negative():
                z = cls.PI.sub(cls.FRAC_PI_4)
            else:
                z = cls.FRAC_PI_4
        else:
            z = cls.FRAC_PI_2
        return z.neg() if y.is_sign_negative() else z
    elif x.is_infinite() or y.is_zero():
        if x.is_sign_negative():
            z = cls.PI
        else:
            z = cls.ZERO
        return z.neg() if y.is_sign_negative() else z
    elif x.is_zero():
        return cls.FRAC_PI_2.neg() if y.is_sign_negative() else cls.FRAC_PI_2

    # only the direction matters, so scale both so that squaring is safe
    e = max(math.frexp(x[0])[1], math.frexp(y[0])[1])
    x = x.ldexp(-e)
    y = y.ldexp(-e)
    r = x.sqr().add(y.sqr()).sqrt()
    xx = x.div(r)
    yy = y.div(r)

    z = cls(math.atan2(y[0], x[0]))
    for i in range(y.ctx.atan_iters):
        s, c = sin_cos(z)
        if abs(xx[0]) > abs(yy[0]):
            z = z.add(yy.sub(s).div(c))
        else:
            z = z.sub(xx.sub(c).div(s))
    return z


def atan(a):
    return atan2(a, type(a).ONE)


def asin(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return a

    d = cls.ONE.sub(a.fabs())
    if d.is_sign_negative() and not d.is_zero():
        return cls.NAN
    elif d.is_zero():
        return cls.FRAC_PI_2.neg() if a.is_sign_negative() else cls.FRAC_PI_2

    # (1 - a)(1 + a) keeps its precision as a approaches +-1
    return atan2(a, cls.ONE.sub(a).mul(cls.ONE.add(a)).sqrt())


def acos(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return cls.FRAC_PI_2

    d = cls.ONE.sub(a.fabs())
    if d.is_sign_negative() and not d.is_zero():
        return cls.NAN
    elif d.is_zero():
        return cls.PI if a.is_sign_negative() else cls.ZERO

    return atan2(cls.ONE.sub(a).mul(cls.ONE.add(a)).sqrt(), a)
