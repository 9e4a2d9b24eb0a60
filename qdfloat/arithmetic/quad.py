"""Quad-double arithmetic.

A Quad is the unevaluated sum of four binary64 floats, for about 212 bits
of significand (roughly 64 decimal digits) with the exponent range of a
native float. The kernels here follow the classic quad-double algorithms:
addition merges the limbs of both operands by magnitude into a two-float
accumulator, and multiplication drops the partial products of order
eps**4 and below.
"""

from ..core.eft import (
    quick_two_sum, two_sum, two_prod,
    three_sum, three_sum2, quick_three_accum,
)
from ..core.renorm import renormalize
from . import evalctx
from . import multi
from . import consts


class Quad(multi.MultiFloat):

    __slots__ = ()

    _ctx = evalctx.qd_ctx(4)

    @staticmethod
    def _add_limbs(a, b):
        x = [0.0, 0.0, 0.0, 0.0]
        i = j = k = 0

        # seed the accumulator with the two biggest limbs
        if abs(a[i]) > abs(b[j]):
            u = a[i]
            i += 1
        else:
            u = b[j]
            j += 1
        if abs(a[i]) > abs(b[j]):
            v = a[i]
            i += 1
        else:
            v = b[j]
            j += 1
        u, v = quick_two_sum(u, v)

        while k < 4:
            if i >= 4 and j >= 4:
                x[k] = u
                if k < 3:
                    x[k + 1] = v
                break

            if i >= 4:
                t = b[j]
                j += 1
            elif j >= 4:
                t = a[i]
                i += 1
            elif abs(a[i]) > abs(b[j]):
                t = a[i]
                i += 1
            else:
                t = b[j]
                j += 1

            s, u, v = quick_three_accum(u, v, t)
            if s != 0.0:
                x[k] = s
                k += 1

        # whatever didn't make it into the accumulator is far below the last limb
        for t in a[i:]:
            x[3] += t
        for t in b[j:]:
            x[3] += t

        return renormalize(x, 4)

    @staticmethod
    def _mul_limbs(a, b):
        p0, q0 = two_prod(a[0], b[0])

        p1, q1 = two_prod(a[0], b[1])
        p2, q2 = two_prod(a[1], b[0])

        p3, q3 = two_prod(a[0], b[2])
        p4, q4 = two_prod(a[1], b[1])
        p5, q5 = two_prod(a[2], b[0])

        p1, p2, q0 = three_sum(p1, p2, q0)

        # six-three sum of p2, q1, q2, p3, p4, p5
        p2, q1, q2 = three_sum(p2, q1, q2)
        p3, p4, p5 = three_sum(p3, p4, p5)
        s0, t0 = two_sum(p2, p3)
        s1, t1 = two_sum(q1, p4)
        s2 = q2 + p5
        s1, t0 = two_sum(s1, t0)
        s2 += t0 + t1

        # terms of order eps**3
        s1 += (a[0] * b[3] + a[1] * b[2] + a[2] * b[1] + a[3] * b[0]
               + q0 + q3 + q4 + q5)

        return renormalize((p0, p1, s0, s1, s2), 4)

    @staticmethod
    def _mul_float_limbs(a, f):
        h0, l0 = two_prod(a[0], f)
        h1, l1 = two_prod(a[1], f)
        h2, l2 = two_prod(a[2], f)
        h3 = a[3] * f

        s1, t0 = two_sum(h1, l0)
        s2, t1, t2 = three_sum(t0, h2, l1)
        s3, t3 = three_sum2(t1, h3, l2)

        return renormalize((h0, s1, s2, s3, t2 + t3), 4)

    @classmethod
    def _div_limbs(cls, a, b):
        # long division, one leading limb at a time
        q0 = a[0] / b[0]
        r = cls._sub_limbs(a, cls._mul_float_limbs(b, q0))

        q1 = r[0] / b[0]
        r = cls._sub_limbs(r, cls._mul_float_limbs(b, q1))

        q2 = r[0] / b[0]
        r = cls._sub_limbs(r, cls._mul_float_limbs(b, q2))

        q3 = r[0] / b[0]
        r = cls._sub_limbs(r, cls._mul_float_limbs(b, q3))

        q4 = r[0] / b[0]
        return renormalize((q0, q1, q2, q3, q4), 4)


consts.install(Quad)
