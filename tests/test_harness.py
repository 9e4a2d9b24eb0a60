from qdfloat import Double
from qdfloat import test as harness
from qdfloat.core import gmpmath
from qdfloat.core.ops import OP
from qdfloat.core.renorm import is_normalized


class TestHarness:

    def test_random_value(self, cls, rng):
        for i in range(20):
            x = harness.random_value(cls, rng, -4, 4, 'positive')
            assert x > cls.ZERO
            assert is_normalized(x.limbs)
            y = harness.random_value(cls, rng, -4, 4, 'above_one')
            assert y > cls.ONE

    def test_every_op_has_a_reference(self):
        for opcode in harness.test_ops:
            assert opcode in harness.op_methods
            assert opcode in gmpmath.gmp_ops

    def test_rounding_references_are_mpfr(self):
        for opcode in (OP.floor, OP.ceil, OP.round, OP.trunc):
            reference = gmpmath.compute(opcode, (2.5, 2.0 ** -60))
            assert hasattr(reference, 'precision')
            assert gmpmath.relative_error((2.0, 0.0), reference) >= 0.0

    def test_all_ops_pass(self, cls, capsys):
        assert harness.run_test(cls, reps=10, seed=7) == 0
        out = capsys.readouterr().out
        assert '{:d} attempts, 0 failures'.format(len(harness.test_ops)) in out

    def test_reports_failures(self, capsys):
        saved = harness.tolerances[2]
        harness.tolerances[2] = (0.0, 0.0)
        try:
            failures = harness.run_test(Double, ops=[OP.div], reps=5, seed=7)
        finally:
            harness.tolerances[2] = saved
        assert failures == 1
        assert 'failure on Double div' in capsys.readouterr().out
