"""Standard operation codes, shared by the multi-limb types and the reference backend."""

from enum import IntEnum, unique

@unique
class OP(IntEnum):
    add = 0
    sub = 1
    mul = 2
    div = 3
    neg = 4
    sqrt = 5
    fabs = 6
    floor = 7
    ceil = 8
    round = 9
    trunc = 10
    cos = 11
    sin = 12
    tan = 13
    cosh = 14
    sinh = 15
    tanh = 16
    acosh = 17
    asinh = 18
    atanh = 19
    exp = 20
    log = 21
    log10 = 22
    log2 = 23
    pow = 24
    cbrt = 25
    asin = 26
    acos = 27
    atan = 28
    atan2 = 29
