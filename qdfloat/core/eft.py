"""Error-free transformations on native binary64 floats.

Every function here returns a rounded result together with the exact
rounding error, so that (result + error) is the mathematical value of
the operation, as long as nothing overflows. These are the building
blocks for all of the multi-limb arithmetic.

Nothing is special-cased: infinities and NaN go through the native
operations and come out however those operations produce them. Callers
are responsible for resolving special values first.
"""


# 2**27 + 1, splits a 53-bit significand into two 26-bit halves
_SPLITTER = 134217729.0
# above this magnitude, _SPLITTER * a can overflow
_SPLIT_THRESH = 6.69692879491417e+299
_SPLIT_DOWN = 3.7252902984619140625e-09 # 2**-28
_SPLIT_UP = 268435456.0 # 2**28


def quick_two_sum(a: float, b: float):
    """Exact sum of a and b, assuming abs(a) >= abs(b)."""
    s = a + b
    e = b - (s - a)
    return s, e

def quick_two_diff(a: float, b: float):
    """Exact difference of a and b, assuming abs(a) >= abs(b)."""
    s = a - b
    e = (a - s) - b
    return s, e

def two_sum(a: float, b: float):
    """Exact sum of a and b, with no precondition on their magnitudes."""
    s = a + b
    bb = s - a
    e = (a - (s - bb)) + (b - bb)
    return s, e

def two_diff(a: float, b: float):
    """Exact difference of a and b, with no precondition on their magnitudes."""
    s = a - b
    bb = s - a
    e = (a - (s - bb)) - (b + bb)
    return s, e


def split(a: float):
    """Dekker split: hi + lo == a, where hi and lo each fit in 26 bits."""
    if a > _SPLIT_THRESH or a < -_SPLIT_THRESH:
        a *= _SPLIT_DOWN
        t = _SPLITTER * a
        hi = t - (t - a)
        lo = a - hi
        return hi * _SPLIT_UP, lo * _SPLIT_UP
    else:
        t = _SPLITTER * a
        hi = t - (t - a)
        lo = a - hi
        return hi, lo

def two_prod(a: float, b: float):
    """Exact product of a and b."""
    p = a * b
    a_hi, a_lo = split(a)
    b_hi, b_lo = split(b)
    e = ((a_hi * b_hi - p) + a_hi * b_lo + a_lo * b_hi) + a_lo * b_lo
    return p, e

def two_sqr(a: float):
    """Exact square of a."""
    p = a * a
    hi, lo = split(a)
    e = ((hi * hi - p) + 2.0 * hi * lo) + lo * lo
    return p, e


def three_sum(a: float, b: float, c: float):
    """Sum three values into three non-overlapping components."""
    t1, t2 = two_sum(a, b)
    a, t3 = two_sum(c, t1)
    b, c = two_sum(t2, t3)
    return a, b, c

def three_sum2(a: float, b: float, c: float):
    """Sum three values into two components; the second absorbs the remaining error."""
    t1, t2 = two_sum(a, b)
    a, t3 = two_sum(c, t1)
    return a, t2 + t3

def quick_three_accum(a: float, b: float, c: float):
    """Accumulate c into the running pair (a, b).

    Returns (s, a, b). If the accumulation produced a complete component,
    s is that component and (a, b) are the new running pair. Otherwise s
    is zero and the running pair absorbed everything.
    """
    s, b = two_sum(b, c)
    s, a = two_sum(a, s)

    if a != 0.0 and b != 0.0:
        return s, a, b

    if b == 0.0:
        b = a
        a = s
    else:
        a = s
    return 0.0, a, b
