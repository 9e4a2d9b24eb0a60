"""Exponential, logarithm and hyperbolic functions for the multi-limb types.

exp reduces its argument by multiples of ln(2) and then by a power of two,
sums a short Taylor series, and squares the result back up. log takes the
native logarithm as a first guess and polishes it with Newton iterations on
exp. Everything else is built from those two, except near zero, where the
exponential formulas cancel badly and a series is used instead.

Like native floats, these never raise; out of domain arguments give NaN.
"""

import math


# below this, sinh and tanh use a series instead of exp
_SMALL = 0.05
# above this, tanh is +-1 to every precision we support
_TANH_SATURATE = 100.0
# above this, squaring the argument of asinh / acosh would overflow
_HUGE = 2.0 ** 500
# exp overflows above log(MAX), and underflows below log of half the
# smallest subnormal
_EXP_MAX = 709.79
_EXP_MIN = -745.2
# above this, exp(-x) is lost next to exp(x), and exp(x) alone may overflow
_EXP_ONE_SIDED = 700.0


def exp(a):
    cls = type(a)
    ctx = a.ctx

    if a.is_nan():
        return cls.NAN
    elif a[0] < _EXP_MIN:
        return cls.ZERO
    elif a[0] > _EXP_MAX:
        return cls.INFINITY
    elif a.is_zero():
        return cls.ONE
    elif a == cls.ONE:
        return cls.E

    inv_k = 2.0 ** -ctx.exp_kbits
    m = math.floor(a[0] / cls.LN_2[0] + 0.5)
    r = a.sub(cls.LN_2.mul(cls(m))).mul_pwr2(inv_k)

    # s = exp(r) - 1, keeping the leading 1 out of it so squaring stays accurate
    inv_facts = cls.INV_FACTS
    thresh = inv_k * ctx.eps
    p = r.sqr()
    s = r.add(p.mul_pwr2(0.5))
    i = 0
    while True:
        p = p.mul(r)
        t = p.mul(inv_facts[i])
        i += 1
        s = s.add(t)
        if abs(t[0]) <= thresh or i >= ctx.exp_terms:
            break

    # (1 + s)**2 - 1 = 2s + s**2
    for i in range(ctx.exp_kbits):
        s = s.mul_pwr2(2.0).add(s.sqr())
    s = s.add(cls.ONE)

    return s.ldexp(m)


def log(a):
    """Natural logarithm. The argument is split as m * 2**e with m near 1,
    so that the Newton iterations never see a tiny or huge exp(-x).
    """
    cls = type(a)

    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return cls.NEG_INFINITY
    elif a.is_sign_negative():
        return cls.NAN
    elif a.is_infinite():
        return a
    elif a == cls.ONE:
        return cls.ZERO

    e = math.frexp(a[0])[1]
    m = a.ldexp(-e)
    if m[0] < 0.7071067811865476:
        m = m.mul_pwr2(2.0)
        e -= 1

    x = cls(math.log(m[0]))
    for i in range(a.ctx.log_iters):
        x = x.add(m.mul(x.neg().exp())).sub(cls.ONE)

    if e == 0:
        return x
    else:
        return x.add(cls.LN_2.mul(cls(e)))


def _sinh_taylor(a):
    cls = type(a)
    s = a
    t = a
    r = a.sqr()
    thresh = abs(a[0]) * a.ctx.eps
    m = 1.0
    # the series converges fast for small a; the cap only guards underflow
    for i in range(2 * len(cls.INV_FACTS)):
        m += 2.0
        t = t.mul(r).div(cls((m - 1.0) * m))
        s = s.add(t)
        if abs(t[0]) <= thresh:
            break
    return s


def _half_exp(a):
    # exp(|a|) / 2, without overflowing where the quotient is still finite
    return exp(a.fabs().sub(type(a).LN_2))


def sinh(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return a

    if abs(a[0]) > _EXP_ONE_SIDED:
        h = _half_exp(a)
        return h.neg() if a.is_sign_negative() else h
    elif abs(a[0]) > _SMALL:
        ea = exp(a)
        return ea.sub(ea.recip()).mul_pwr2(0.5)
    else:
        return _sinh_taylor(a)


def cosh(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return cls.ONE

    if abs(a[0]) > _EXP_ONE_SIDED:
        return _half_exp(a)
    ea = exp(a)
    return ea.add(ea.recip()).mul_pwr2(0.5)


def sinh_cosh(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN, cls.NAN
    elif a.is_zero():
        return a, cls.ONE

    if abs(a[0]) <= _SMALL:
        s = _sinh_taylor(a)
        c = cls.ONE.add(s.sqr()).sqrt()
    elif abs(a[0]) > _EXP_ONE_SIDED:
        c = _half_exp(a)
        s = c.neg() if a.is_sign_negative() else c
    else:
        ea = exp(a)
        inv_ea = ea.recip()
        s = ea.sub(inv_ea).mul_pwr2(0.5)
        c = ea.add(inv_ea).mul_pwr2(0.5)
    return s, c


def tanh(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return a
    elif abs(a[0]) > _TANH_SATURATE:
        return a.signum()

    if abs(a[0]) > _SMALL:
        ea = exp(a)
        inv_ea = ea.recip()
        return ea.sub(inv_ea).div(ea.add(inv_ea))
    else:
        s = _sinh_taylor(a)
        c = cls.ONE.add(s.sqr()).sqrt()
        return s.div(c)


def asinh(a):
    cls = type(a)
    if a.is_nan():
        return cls.NAN
    elif a.is_zero():
        return a
    elif a.is_sign_negative():
        # odd function; this avoids cancellation in a + sqrt(a**2 + 1)
        return asinh(a.neg()).neg()

    if a[0] > _HUGE:
        return log(a).add(cls.LN_2)
    else:
        return log(a.add(a.sqr().add(cls.ONE).sqrt()))


def acosh(a):
    cls = type(a)
    if a.is_nan() or a < cls.ONE:
        return cls.NAN

    if a[0] > _HUGE:
        return log(a).add(cls.LN_2)
    else:
        return log(a.add(a.sqr().sub(cls.ONE).sqrt()))


def atanh(a):
    """Inverse hyperbolic tangent; +-1 give +-inf."""
    cls = type(a)
    if a.is_nan() or a.fabs() > cls.ONE:
        return cls.NAN
    elif a.is_zero():
        return a

    return log(cls.ONE.add(a).div(cls.ONE.sub(a))).mul_pwr2(0.5)


# logarithms in other bases, and powers

def log10(a):
    return log(a).mul(type(a).LOG10_E)


def log2(a):
    return log(a).mul(type(a).LOG2_E)


def log_base(a, b):
    """Logarithm of a to the base b."""
    return log(a).div(log(b))


def powf(a, b):
    """a raised to the power b, as exp(b * log(a)).

    Negative bases are allowed when b is an integer; otherwise they give NaN.
    """
    cls = type(a)
    if b.is_zero() or a == cls.ONE:
        return cls.ONE
    elif a.is_nan() or b.is_nan():
        return cls.NAN
    elif a.is_zero():
        if b.is_sign_negative():
            return cls.INFINITY
        else:
            return cls.ZERO

    if a.is_sign_negative():
        if b.is_infinite():
            # only the magnitude matters, as for math.pow
            return powf(a.neg(), b)
        elif b.floor() != b:
            return cls.NAN
        # an odd power keeps the sign
        odd = b.mul_pwr2(0.5).floor() != b.mul_pwr2(0.5)
        r = exp(b.mul(log(a.neg())))
        return r.neg() if odd else r

    return exp(b.mul(log(a)))
