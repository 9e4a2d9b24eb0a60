"""Renormalization of loose limb terms into canonical multi-limb form.

A canonical (normalized) tuple has nonzero limbs in strictly decreasing
order of magnitude, with no overlapping significand bits: adding a limb
to the one before it with native addition leaves the bigger one unchanged.
All of the arithmetic produces a handful of raw, possibly overlapping
terms, and relies on renormalize() to put them back into this form.
"""

import math

from .eft import two_sum, quick_two_sum


def _sweep(terms, n):
    c = list(terms)

    # sweep up from the least significant term, leaving exact errors behind
    s = c[-1]
    for i in range(len(c) - 2, -1, -1):
        s, c[i + 1] = two_sum(c[i], s)
    c[0] = s

    if not math.isfinite(s):
        return (s,) + (0.0,) * (n - 1)

    # sweep down, emitting a limb whenever the error term stops interacting
    limbs = []
    for t in c[1:]:
        if len(limbs) == n - 1:
            s += t
        else:
            s, e = quick_two_sum(s, t)
            if e != 0.0:
                limbs.append(s)
                s = e
    limbs.append(s)

    if len(limbs) < n:
        limbs.extend([0.0] * (n - len(limbs)))
    return tuple(limbs)


def renormalize(terms, n):
    """Collapse a sequence of terms into a normalized tuple of n limbs.

    The terms should be roughly in order of decreasing significance (the
    first term is the leading one, used to detect special values), but they
    may overlap or be out of order among themselves. The sum of the terms is
    preserved to the precision of n limbs.

    Special values short-circuit: if the leading term (or the total) is
    infinite or NaN, that value is returned with zero trailing limbs, and
    if every term is zero the leading term's signed zero is returned.
    """
    lead = terms[0]
    if not math.isfinite(lead):
        return (lead,) + (0.0,) * (n - 1)
    if not any(terms):
        return (lead,) + (0.0,) * (n - 1)

    limbs = _sweep(terms, n)

    # cancellation between partial sums, or terms accumulated into the last
    # limb, can leave neighboring limbs overlapping; a second sweep over just
    # the limbs settles them
    if any(hi + lo != hi for hi, lo in zip(limbs, limbs[1:])):
        limbs = _sweep(limbs, n)
    return limbs


def is_normalized(limbs):
    """Check the canonical form invariant for a tuple of limbs.

    Each nonzero limb must be strictly smaller than the one before it, and
    within one unit in the last place of it. Non-finite values are considered
    normalized if all trailing limbs are zero.
    """
    lead = limbs[0]
    if not math.isfinite(lead):
        return not any(limbs[1:])

    for hi, lo in zip(limbs, limbs[1:]):
        if lo == 0.0:
            continue
        if hi == 0.0 or abs(lo) >= abs(hi) or abs(lo) > math.ulp(hi):
            return False
    # once a limb is zero, everything after it must be too
    for i, x in enumerate(limbs):
        if x == 0.0:
            return not any(limbs[i:])
    return True
