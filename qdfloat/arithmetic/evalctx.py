"""Static configuration for the multi-limb formats."""


class QDCtx(object):
    """Describes a multi-limb format: how many limbs, how precise it is,
    and how hard the transcendental functions have to work to reach that
    precision.
    """

    # relative precision of each format, used as the convergence threshold
    _eps = {
        2: 2.0 ** -104,
        4: 2.0 ** -209,
    }

    # significant decimal digits shown by str()
    _digits = {
        2: 32,
        4: 64,
    }

    # exp: the argument is divided by 2**exp_kbits before the Taylor series,
    # and the result squared back up exp_kbits times
    _exp_kbits = {
        2: 9,
        4: 16,
    }

    def __init__(self, limbs=2):
        if limbs not in self._eps:
            raise ValueError('unsupported number of limbs {}, must be 2 or 4'.format(repr(limbs)))

        self.limbs = limbs
        self.p = 53 * limbs
        self.eps = self._eps[limbs]
        self.digits = self._digits[limbs]
        # precision for gmpy2 conversions; constants are rounded once from this
        self.ref_prec = self.p + 64

        # series and iteration bounds
        self.exp_kbits = self._exp_kbits[limbs]
        if limbs == 2:
            self.inv_facts = 20
            self.exp_terms = 6
            self.log_iters = 2
            self.sqrt_iters = 2
            self.atan_iters = 2
        else:
            self.inv_facts = 40
            self.exp_terms = 12
            self.log_iters = 3
            self.sqrt_iters = 3
            self.atan_iters = 3

    def __repr__(self):
        return '{}(limbs={})'.format(type(self).__name__, repr(self.limbs))

    def __str__(self):
        return '\n'.join([
            type(self).__name__ + ':',
            '    limbs: ' + str(self.limbs),
            '    p: ' + str(self.p),
            '    eps: ' + repr(self.eps),
            '    digits: ' + str(self.digits),
        ])

    def __eq__(self, other):
        return isinstance(other, QDCtx) and self.limbs == other.limbs

    def __hash__(self):
        return hash((type(self), self.limbs))


used_ctxs = {}
def qd_ctx(limbs):
    try:
        return used_ctxs[limbs]
    except KeyError:
        ctx = QDCtx(limbs=limbs)
        used_ctxs[limbs] = ctx
        return ctx
