"""Double-double arithmetic.

A Double is the unevaluated sum of two binary64 floats, for about 106 bits
of significand (roughly 32 decimal digits) with the exponent range of a
native float.
"""

from ..core.eft import two_sum, two_prod
from ..core.renorm import renormalize
from . import evalctx
from . import multi
from . import consts


class Double(multi.MultiFloat):

    __slots__ = ()

    _ctx = evalctx.qd_ctx(2)

    @staticmethod
    def _add_limbs(a, b):
        s0, e0 = two_sum(a[0], b[0])
        s1, e1 = two_sum(a[1], b[1])
        return renormalize((s0, e0, s1, e1), 2)

    @staticmethod
    def _mul_limbs(a, b):
        p, e = two_prod(a[0], b[0])
        c1, d1 = two_prod(a[0], b[1])
        c2, d2 = two_prod(a[1], b[0])
        return renormalize((p, e, c1, c2, d1 + d2 + a[1] * b[1]), 2)

    @staticmethod
    def _mul_float_limbs(a, f):
        p0, e0 = two_prod(a[0], f)
        p1, e1 = two_prod(a[1], f)
        return renormalize((p0, e0, p1, e1), 2)

    @classmethod
    def _div_limbs(cls, a, b):
        # long division, one leading limb at a time
        q0 = a[0] / b[0]
        r = cls._sub_limbs(a, cls._mul_float_limbs(b, q0))

        q1 = r[0] / b[0]
        r = cls._sub_limbs(r, cls._mul_float_limbs(b, q1))

        q2 = r[0] / b[0]
        return renormalize((q0, q1, q2), 2)


consts.install(Double)
