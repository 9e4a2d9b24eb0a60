"""Randomized differential testing of the multi-limb types against gmpy2.

Run with python -m qdfloat.test [reps]. Each operation is evaluated on
random operands, and the result is compared to the same operation computed
by MPFR with plenty of extra precision. A result that is not normalized, or
that is further from the reference than the tolerance for its format, is a
failure; a result that is inexact but within tolerance is fine.
"""

import sys
import math

import numpy

from .core import gmpmath, renorm
from .core.ops import OP
from .arithmetic import double, quad


# operations to test, with the range of exponents (of 2) to draw
# operands from, and an optional domain restriction
test_ops = {
    OP.add: (-30, 30, None),
    OP.sub: (-30, 30, None),
    OP.mul: (-30, 30, None),
    OP.div: (-30, 30, None),
    OP.sqrt: (-60, 60, 'positive'),
    OP.floor: (-10, 60, None),
    OP.ceil: (-10, 60, None),
    OP.round: (-10, 60, None),
    OP.trunc: (-10, 60, None),
    OP.sin: (-8, 4, None),
    OP.cos: (-8, 4, None),
    OP.tan: (-8, 0, None),
    OP.exp: (-8, 8, None),
    OP.log: (-60, 60, 'positive'),
    OP.sinh: (-8, 4, None),
    OP.cosh: (-8, 4, None),
    OP.tanh: (-8, 4, None),
    OP.asinh: (-8, 8, None),
    OP.acosh: (0, 8, 'above_one'),
    OP.atanh: (-8, -1, None),
    OP.log10: (-60, 60, 'positive'),
    OP.log2: (-60, 60, 'positive'),
    OP.pow: (-4, 1, 'positive'),
    OP.cbrt: (-60, 60, None),
    OP.asin: (-8, -1, None),
    OP.acos: (-8, -1, None),
    OP.atan: (-8, 8, None),
    OP.atan2: (-8, 8, None),
}

op_methods = {
    OP.add: 'add',
    OP.sub: 'sub',
    OP.mul: 'mul',
    OP.div: 'div',
    OP.sqrt: 'sqrt',
    OP.floor: 'floor',
    OP.ceil: 'ceil',
    OP.round: 'round',
    OP.trunc: 'trunc',
    OP.sin: 'sin',
    OP.cos: 'cos',
    OP.tan: 'tan',
    OP.exp: 'exp',
    OP.log: 'log',
    OP.sinh: 'sinh',
    OP.cosh: 'cosh',
    OP.tanh: 'tanh',
    OP.asinh: 'asinh',
    OP.acosh: 'acosh',
    OP.atanh: 'atanh',
    OP.log10: 'log10',
    OP.log2: 'log2',
    OP.pow: 'powf',
    OP.cbrt: 'cbrt',
    OP.asin: 'asin',
    OP.acos: 'acos',
    OP.atan: 'atan',
    OP.atan2: 'atan2',
}

binary_ops = {OP.add, OP.sub, OP.mul, OP.div, OP.pow, OP.atan2}

# acceptable relative error for each format;
# the transcendental functions are allowed a few more bits
tolerances = {
    2: (2.0 ** -100, 2.0 ** -96),
    4: (2.0 ** -200, 2.0 ** -196),
}


def random_value(cls, rng, emin, emax, domain=None):
    """A random normalized value of type cls, with every limb populated."""
    n = cls._ctx.limbs
    e = int(rng.integers(emin, emax + 1))
    limbs = []
    for i in range(n):
        limbs.append(math.ldexp(float(rng.uniform(1.0, 2.0)), e - 53 * i))
    if domain is None and rng.integers(2):
        limbs = [-x for x in limbs]
    x = cls.new(*limbs)
    if domain == 'above_one':
        x = x.add(cls.ONE)
    return x


def test_op(opcode, cls, rng):
    """Returns True on failure, False on success."""
    emin, emax, domain = test_ops[opcode]
    method = op_methods[opcode]
    if opcode in binary_ops:
        args = [random_value(cls, rng, emin, emax, domain) for i in range(2)]
        answer = getattr(args[0], method)(args[1])
    else:
        args = [random_value(cls, rng, emin, emax, domain)]
        answer = getattr(args[0], method)()

    ctx = cls._ctx
    reference = gmpmath.compute(opcode, *(x.limbs for x in args), prec=ctx.ref_prec)
    err = gmpmath.relative_error(answer.limbs, reference)
    if opcode in binary_ops or opcode in {OP.sqrt, OP.floor, OP.ceil, OP.round, OP.trunc}:
        tolerance = tolerances[ctx.limbs][0]
    else:
        tolerance = tolerances[ctx.limbs][1]

    failed = False
    if not renorm.is_normalized(answer.limbs):
        print('denormalized result on {} {}\n  {}\n  got {}'.format(
            cls.__name__, opcode.name, repr(args), repr(answer),
        ))
        failed = True
    if err > tolerance:
        print('failure on {} {}\n  {}\n  got {} vs. reference {}\n  relative error {}'.format(
            cls.__name__, opcode.name, repr(args), str(answer), str(reference), repr(err),
        ))
        failed = True

    return failed


def run_test(cls, ops=None, reps=100, seed=None):
    if ops is None:
        ops = list(test_ops)
    rng = numpy.random.default_rng(seed)

    print('Running test on {} for {:d} ops...'.format(cls.__name__, len(ops)))
    attempts = 0
    failures = 0
    for opcode in ops:
        try:
            print('{} '.format(opcode.name), end='', flush=True)
            any_fails = False
            for rep in range(reps):
                failed = test_op(opcode, cls, rng)
                any_fails = any_fails or failed
                if failed:
                    print('!', end='', flush=True)
                else:
                    print('.', end='', flush=True)
            print('')
            attempts += 1
            if any_fails:
                failures += 1
        except KeyboardInterrupt:
            print('ABORT', flush=True)
            continue

    print('\n...Done. {:d} attempts, {:d} failures.'.format(attempts, failures))
    return failures


if __name__ == '__main__':
    if len(sys.argv) > 1:
        reps = int(sys.argv[1])
    else:
        reps = 100

    failures = 0
    for cls in (double.Double, quad.Quad):
        failures += run_test(cls, reps=reps)
    sys.exit(1 if failures else 0)
