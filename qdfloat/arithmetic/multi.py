"""Common behavior of the multi-limb extended precision types.

A MultiFloat is the unevaluated sum of a fixed number of native floats,
called limbs, stored most significant first. The subclasses decide how
many limbs there are and supply the arithmetic kernels (_add_limbs,
_mul_limbs, _mul_float_limbs, _div_limbs), which work on plain tuples and
only ever see finite, nonzero operands. Everything else, including all of
the special value handling, is shared and lives here.
"""

import math
import numbers

import numpy as np

from ..core import gmpmath
from ..core import utils
from ..core.eft import two_sum, two_diff, two_prod
from ..core.renorm import renormalize
from . import trig
from . import hyper


def _ldexp(x, n):
    try:
        return math.ldexp(x, n)
    except OverflowError:
        return math.copysign(math.inf, x)


class MultiFloat(object):

    __slots__ = ('_limbs',)

    # must be provided by subclasses
    _ctx = None

    # numpy should defer to our reflected operators, rather than trying
    # to build an object array
    __array_ufunc__ = None

    @property
    def ctx(self):
        """The format description (number of limbs, precision, etc.) of this type."""
        return self._ctx

    @property
    def limbs(self):
        """The limbs, most significant first.
        The real value is exactly the sum of the limbs.
        """
        return self._limbs

    # construction

    def __init__(self, x=0.0):
        """Convert x to this type. x can be a float, an int, a numpy scalar,
        a decimal string, or another multi-limb number. Floats and small ints
        are converted exactly; everything else is rounded to nearest, limb
        by limb.
        """
        self._limbs = self._convert(x)

    @classmethod
    def _convert(cls, x):
        n = cls._ctx.limbs
        if isinstance(x, MultiFloat):
            if len(x._limbs) == n:
                return x._limbs
            else:
                return renormalize(x._limbs, n)
        elif isinstance(x, (float, np.floating)):
            return (float(x),) + (0.0,) * (n - 1)
        elif isinstance(x, (int, np.integer)):
            i = int(x)
            if -(1 << 53) <= i <= (1 << 53):
                return (float(i),) + (0.0,) * (n - 1)
            else:
                return gmpmath.int_to_limbs(i, n)
        elif isinstance(x, str):
            return gmpmath.str_to_limbs(x, n, cls._ctx.ref_prec)
        else:
            raise utils.ConversionError('cannot convert {} to {}'
                                        .format(repr(x), cls.__name__))

    @classmethod
    def _from_limbs(cls, limbs):
        x = cls.__new__(cls)
        x._limbs = limbs
        return x

    @classmethod
    def _check_count(cls, limbs):
        if len(limbs) != cls._ctx.limbs:
            raise utils.ContractError('{} takes exactly {:d} limbs, got {:d}'
                                      .format(cls.__name__, cls._ctx.limbs, len(limbs)))

    @classmethod
    def raw(cls, *limbs):
        """Use the arguments as the limbs, without normalizing them.

        The caller must make sure they are already normalized; if not, the
        result will misbehave in comparisons, classification and arithmetic.
        This is mostly useful for constants, where normalization is
        obviously unnecessary.
        """
        cls._check_count(limbs)
        return cls._from_limbs(tuple(float(x) for x in limbs))

    @classmethod
    def new(cls, *limbs):
        """Normalize the arguments and use them as the limbs.

        The arguments are taken to be exactly the desired value: any rounding
        error they carry (e.g. new(1.1, 0.0) is not 11/10) is kept.
        """
        cls._check_count(limbs)
        return cls._from_limbs(renormalize(tuple(float(x) for x in limbs), cls._ctx.limbs))

    @classmethod
    def from_add(cls, a, b):
        """The exact sum of two native floats."""
        return cls._from_limbs(renormalize(two_sum(float(a), float(b)), cls._ctx.limbs))

    @classmethod
    def from_sub(cls, a, b):
        """The exact difference of two native floats."""
        return cls._from_limbs(renormalize(two_diff(float(a), float(b)), cls._ctx.limbs))

    @classmethod
    def from_mul(cls, a, b):
        """The exact product of two native floats."""
        return cls._from_limbs(renormalize(two_prod(float(a), float(b)), cls._ctx.limbs))

    @classmethod
    def from_div(cls, a, b):
        """The quotient of two native floats, to the precision of this type."""
        return cls(float(a)).div(cls(float(b)))

    @classmethod
    def _signed_zero(cls, negative):
        if negative:
            return cls.NEG_ZERO
        else:
            return cls.ZERO

    @classmethod
    def _signed_inf(cls, negative):
        if negative:
            return cls.NEG_INFINITY
        else:
            return cls.INFINITY

    def _coerce(self, other):
        cls = type(self)
        if isinstance(other, cls):
            return other
        elif isinstance(other, MultiFloat):
            # no implicit conversion between formats
            return NotImplemented
        elif isinstance(other, (float, int, np.floating, np.integer)):
            return cls(other)
        else:
            return NotImplemented

    def _operand(self, other):
        # like _coerce, for the named methods that have no reflected form
        coerced = self._coerce(other)
        if coerced is NotImplemented:
            raise TypeError('unsupported operand type for {}: {}'
                            .format(type(self).__name__, type(other).__name__))
        return coerced

    # limb access

    def __getitem__(self, i):
        """Read one limb. There is deliberately no way to write one."""
        if not isinstance(i, numbers.Integral) or i < 0 or i >= len(self._limbs):
            raise utils.LimbIndexError('{} limb index out of range (must be in [0, {:d}]): {}'
                                       .format(type(self).__name__, len(self._limbs) - 1, repr(i)))
        return self._limbs[i]

    def __iter__(self):
        return iter(self._limbs)

    # classification

    def is_zero(self):
        """Is this value zero (of either sign)? All limbs must be zero."""
        return all(x == 0.0 for x in self._limbs)

    def is_nan(self):
        return math.isnan(self._limbs[0])

    def is_infinite(self):
        return math.isinf(self._limbs[0])

    def is_finite(self):
        """Is this value a finite real number, i.e. not an infinity or NaN?"""
        return math.isfinite(self._limbs[0])

    def is_sign_negative(self):
        """The sign bit of the leading limb. Distinguishes -0 from +0."""
        return math.copysign(1.0, self._limbs[0]) < 0.0

    def is_sign_positive(self):
        return not self.is_sign_negative()

    def signum(self):
        cls = type(self)
        if self.is_nan():
            return cls.NAN
        elif self.is_sign_negative():
            return cls.NEG_ONE
        else:
            return cls.ONE

    # comparison

    def compareto(self, other):
        """Compare to another number of the same type. The ordering returned is:
            -1 iff self < other
             0 iff self = other
             1 iff self > other
          None iff self and other are unordered
        """
        if self.is_nan() or other.is_nan():
            return None

        # normalized limbs compare lexicographically
        if self._limbs < other._limbs:
            return -1
        elif self._limbs == other._limbs:
            return 0
        else:
            return 1

    def _order(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compareto(other)

    def __lt__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return order
        return order is not None and order < 0

    def __le__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return order
        return order is not None and order <= 0

    def __eq__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return order
        return order is not None and order == 0

    def __ne__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return order
        return order is None or order != 0

    def __ge__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return order
        return order is not None and order >= 0

    def __gt__(self, other):
        order = self._order(other)
        if order is NotImplemented:
            return order
        return order is not None and order > 0

    def __hash__(self):
        # agree with float hashing when the value fits in one limb
        if any(self._limbs[1:]):
            return hash(self._limbs)
        else:
            return hash(self._limbs[0])

    def __bool__(self):
        return not self.is_zero()

    # special values, resolved before the arithmetic kernels get to see anything

    def _special_add(self, other):
        if self.is_nan() or other.is_nan():
            return type(self).NAN
        elif self.is_infinite():
            if other.is_infinite() and self.is_sign_negative() != other.is_sign_negative():
                return type(self).NAN
            else:
                return self
        elif other.is_infinite():
            return other
        elif self.is_zero():
            if other.is_zero():
                return self._signed_zero(self.is_sign_negative() and other.is_sign_negative())
            else:
                return other
        elif other.is_zero():
            return self
        else:
            return None

    def _special_mul(self, other):
        if self.is_nan() or other.is_nan():
            return type(self).NAN

        negative = self.is_sign_negative() != other.is_sign_negative()
        if self.is_infinite() or other.is_infinite():
            if self.is_zero() or other.is_zero():
                return type(self).NAN
            else:
                return self._signed_inf(negative)
        elif self.is_zero() or other.is_zero():
            return self._signed_zero(negative)
        else:
            return None

    def _special_div(self, other):
        if self.is_nan() or other.is_nan():
            return type(self).NAN

        negative = self.is_sign_negative() != other.is_sign_negative()
        if other.is_zero():
            if self.is_zero():
                return type(self).NAN
            else:
                return self._signed_inf(negative)
        elif self.is_infinite():
            if other.is_infinite():
                return type(self).NAN
            else:
                return self._signed_inf(negative)
        elif other.is_infinite() or self.is_zero():
            return self._signed_zero(negative)
        else:
            return None

    # arithmetic

    @classmethod
    def _sub_limbs(cls, a, b):
        return cls._add_limbs(a, tuple(-x for x in b))

    def _overflowed(self, limbs, negative):
        # operands are finite here, so a NaN can only come out of an overflow
        if math.isnan(limbs[0]):
            return self._signed_inf(negative)
        return self._from_limbs(limbs)

    def add(self, other):
        special = self._special_add(other)
        if special is not None:
            return special

        limbs = self._add_limbs(self._limbs, other._limbs)
        if not any(limbs):
            # exact cancellation keeps the sign of the left operand
            return self._signed_zero(self.is_sign_negative())
        return self._overflowed(limbs, self._limbs[0] + other._limbs[0] < 0.0)

    def sub(self, other):
        return self.add(other.neg())

    def mul(self, other):
        special = self._special_mul(other)
        if special is not None:
            return special
        limbs = self._mul_limbs(self._limbs, other._limbs)
        return self._overflowed(limbs, self.is_sign_negative() != other.is_sign_negative())

    def div(self, other):
        special = self._special_div(other)
        if special is not None:
            return special
        limbs = self._div_limbs(self._limbs, other._limbs)
        return self._overflowed(limbs, self.is_sign_negative() != other.is_sign_negative())

    def neg(self):
        return self._from_limbs(tuple(-x for x in self._limbs))

    def fabs(self):
        if self.is_sign_negative():
            return self.neg()
        else:
            return self

    def sqr(self):
        return self.mul(self)

    def recip(self):
        """1 / self"""
        return type(self).ONE.div(self)

    def _scaled(self, limbs):
        # an overflowing leading limb takes the trailing limbs with it
        if math.isinf(limbs[0]):
            return self._signed_inf(limbs[0] < 0.0)
        return self._from_limbs(limbs)

    def mul_pwr2(self, f):
        """Multiply by f, which must be a power of two. This is exact,
        barring overflow or underflow.
        """
        return self._scaled(tuple(x * f for x in self._limbs))

    def ldexp(self, n):
        """Multiply by 2**n."""
        return self._scaled(tuple(_ldexp(x, n) for x in self._limbs))

    def powi(self, n):
        """Raise to the integer power n, by repeated squaring."""
        cls = type(self)
        if n == 0:
            return cls.ONE

        result = cls.ONE
        base = self
        m = abs(n)
        while True:
            if m & 1:
                result = result.mul(base)
            m >>= 1
            if m == 0:
                break
            base = base.sqr()

        if n < 0:
            return result.recip()
        else:
            return result

    def sqrt(self):
        """Square root, by Newton iteration on the reciprocal square root.
        The argument is scaled by an even power of two first, so that the
        squares in the iteration can neither overflow nor underflow.
        """
        cls = type(self)
        if self.is_nan():
            return cls.NAN
        elif self.is_zero():
            return self
        elif self.is_sign_negative():
            return cls.NAN
        elif self.is_infinite():
            return self

        k = math.frexp(self._limbs[0])[1] // 2
        a = self.ldexp(-2 * k)

        r = cls(1.0 / math.sqrt(a._limbs[0]))
        h = a.mul_pwr2(0.5)
        half = cls(0.5)
        for i in range(self._ctx.sqrt_iters):
            r = r.add(half.sub(h.mul(r.sqr())).mul(r))

        return a.mul(r).ldexp(k)

    def nroot(self, n):
        """The real n-th root, for a positive integer n.

        Computed as the reciprocal of a Newton iteration on x**-n, after
        scaling by a power of two that is a multiple of n. Odd roots of
        negative numbers are negative; even ones are NaN.
        """
        cls = type(self)
        if not isinstance(n, numbers.Integral) or n < 1:
            raise utils.ContractError('root must be a positive integer, got {}'.format(repr(n)))
        if n == 1:
            return self
        elif n == 2:
            return self.sqrt()

        if self.is_nan():
            return cls.NAN
        elif self.is_zero():
            return self
        elif self.is_sign_negative():
            if n % 2 == 0:
                return cls.NAN
            return self.neg().nroot(n).neg()
        elif self.is_infinite():
            return self

        k = math.frexp(self._limbs[0])[1] // n
        a = self.ldexp(-n * k)

        x = cls(math.exp(-math.log(a._limbs[0]) / n))
        inv_n = cls(n).recip()
        for i in range(self._ctx.sqrt_iters):
            x = x.add(x.mul(cls.ONE.sub(a.mul(x.powi(n)))).mul(inv_n))

        return x.recip().ldexp(k)

    def cbrt(self):
        return self.nroot(3)

    # rounding to integers

    def _from_integral_limbs(self, limbs):
        result = self._from_limbs(renormalize(limbs, len(limbs)))
        if result.is_zero():
            return self._signed_zero(self.is_sign_negative())
        else:
            return result

    def floor(self):
        if not self.is_finite() or self.is_zero():
            return self

        limbs = [0.0] * len(self._limbs)
        for i, x in enumerate(self._limbs):
            f = float(math.floor(x))
            limbs[i] = f
            if f != x:
                break
        return self._from_integral_limbs(limbs)

    def ceil(self):
        if not self.is_finite() or self.is_zero():
            return self
        return self.neg().floor().neg()

    def trunc(self):
        if self.is_sign_negative():
            return self.ceil()
        else:
            return self.floor()

    def round(self):
        """Round to the nearest integer, with ties away from zero."""
        if not self.is_finite() or self.is_zero():
            return self

        # ties go away from zero, as decided by the sign of the whole value
        up = not self.is_sign_negative()
        n = len(self._limbs)
        limbs = [0.0] * n
        for i, x in enumerate(self._limbs):
            f = float(math.floor(x))
            if f == x:
                limbs[i] = x
                continue

            d = x - f
            if i + 1 < n:
                rest = self._limbs[i + 1]
            else:
                rest = 0.0
            # a tie in this limb is broken by the limbs below it
            if d > 0.5 or (d == 0.5 and (rest > 0.0 or (rest == 0.0 and up))):
                f += 1.0
            limbs[i] = f
            break
        return self._from_integral_limbs(limbs)

    def fract(self):
        """The fractional part, self - trunc(self), with the sign of self."""
        return self.sub(self.trunc())

    def min(self, other):
        """The smaller of self and other. A NaN is ignored unless both are NaN."""
        other = self._operand(other)
        if self.is_nan():
            return other
        elif other.is_nan() or self <= other:
            return self
        else:
            return other

    def max(self, other):
        """The larger of self and other. A NaN is ignored unless both are NaN."""
        other = self._operand(other)
        if self.is_nan():
            return other
        elif other.is_nan() or self >= other:
            return self
        else:
            return other

    # transcendental functions

    def sin(self):
        return trig.sin(self)

    def cos(self):
        return trig.cos(self)

    def sin_cos(self):
        """Compute (sin(self), cos(self)), more cheaply than calling both."""
        return trig.sin_cos(self)

    def tan(self):
        return trig.tan(self)

    def exp(self):
        return hyper.exp(self)

    def log(self):
        return hyper.log(self)

    def sinh(self):
        return hyper.sinh(self)

    def cosh(self):
        return hyper.cosh(self)

    def sinh_cosh(self):
        """Compute (sinh(self), cosh(self)), more cheaply than calling both."""
        return hyper.sinh_cosh(self)

    def tanh(self):
        return hyper.tanh(self)

    def asinh(self):
        return hyper.asinh(self)

    def acosh(self):
        return hyper.acosh(self)

    def atanh(self):
        return hyper.atanh(self)

    def log10(self):
        return hyper.log10(self)

    def log2(self):
        return hyper.log2(self)

    def log_base(self, b):
        return hyper.log_base(self, self._operand(b))

    def powf(self, b):
        return hyper.powf(self, self._operand(b))

    def asin(self):
        return trig.asin(self)

    def acos(self):
        return trig.acos(self)

    def atan(self):
        return trig.atan(self)

    def atan2(self, x):
        """The angle of the point (x, self), like math.atan2(self, x)."""
        return trig.atan2(self, self._operand(x))

    # sums and products of iterables

    @classmethod
    def sum(cls, xs):
        """Add up xs, starting from zero; empty input gives ZERO."""
        total = cls.ZERO
        for x in xs:
            total = total.add(total._operand(x))
        return total

    @classmethod
    def product(cls, xs):
        """Multiply xs together, starting from one; empty input gives ONE."""
        total = cls.ONE
        for x in xs:
            total = total.mul(total._operand(x))
        return total

    # python operators

    def __neg__(self):
        return self.neg()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.fabs()

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self.add(other)

    def __radd__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other.add(self)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self.sub(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other.sub(self)

    def __mul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self.mul(other)

    def __rmul__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other.mul(self)

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return self.div(other)

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return other
        return other.div(self)

    # conversion

    def __float__(self):
        return self._limbs[0]

    def __int__(self):
        t = self.trunc()
        if not t.is_finite():
            # let float produce the usual OverflowError / ValueError
            return int(t._limbs[0])
        return sum(int(x) for x in t._limbs)

    def to_mpfr(self):
        """The exact value as a gmpy2 mpfr."""
        return gmpmath.limbs_to_mpfr(self._limbs)

    def __repr__(self):
        return '{}.raw({})'.format(type(self).__name__, ', '.join(repr(x) for x in self._limbs))

    def __str__(self):
        return gmpmath.limbs_to_str(self._limbs, self._ctx.digits)
