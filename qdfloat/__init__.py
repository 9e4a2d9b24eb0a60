from .core import utils, ops, eft, renorm, gmpmath
from .arithmetic import evalctx, multi, consts, trig, hyper, double, quad

Double = double.Double
Quad = quad.Quad
QDCtx = evalctx.QDCtx
MultiFloat = multi.MultiFloat

QDError = utils.QDError
ContractError = utils.ContractError
LimbIndexError = utils.LimbIndexError
ConversionError = utils.ConversionError
