"""
Printers turning SymPy scalars into MATLAB and C99 source text.
"""

from sympy import I, Mul
from sympy.printing.c import C99CodePrinter
from sympy.printing.precedence import precedence
from sympy.printing.str import StrPrinter

# complex.h accessors
COMPLEX_FUNCTIONS = {
    "re": "creal",
    "im": "cimag",
    "conjugate": "conj",
    "arg": "carg",
}


class _WrittenOrderMixin:
    """Products built with ``evaluate=False`` keep their factors as written."""

    def _print_Mul(self, expr):
        if Mul(*expr.args).args != expr.args:
            prec = precedence(expr)
            return "*".join(self.parenthesize(arg, prec) for arg in expr.args)
        return super()._print_Mul(expr)


class ScriptPrinter(_WrittenOrderMixin, StrPrinter):
    """MATLAB/Octave flavoured string printer: ``x^2``, ``1i``, ``abs``."""

    def _print_Pow(self, expr, rational=False):
        return super()._print_Pow(expr, rational=rational).replace("**", "^")

    def _print_Mul(self, expr):
        coeff, rest = expr.as_coeff_Mul()
        if rest is I and (coeff.is_Integer or coeff.is_Float):
            return "%si" % self._print(coeff)
        return super()._print_Mul(expr)

    def _print_ImaginaryUnit(self, expr):
        return "1i"

    def _print_Exp1(self, expr):
        return "exp(1)"

    def _print_Abs(self, expr):
        return "abs(%s)" % self._print(expr.args[0])

    def _print_ceiling(self, expr):
        return "ceil(%s)" % self._print(expr.args[0])

    def _print_re(self, expr):
        return "real(%s)" % self._print(expr.args[0])

    def _print_im(self, expr):
        return "imag(%s)" % self._print(expr.args[0])

    def _print_conjugate(self, expr):
        return "conj(%s)" % self._print(expr.args[0])


class NumericPrinter(_WrittenOrderMixin, C99CodePrinter):
    """C99 printer with ``complex.h`` support."""

    def __init__(self, settings=None):
        settings = dict(settings or {})
        functions = dict(COMPLEX_FUNCTIONS)
        functions.update(settings.get("user_functions", {}))
        settings["user_functions"] = functions
        super().__init__(settings)

    def _print_ImaginaryUnit(self, expr):
        return "I"


def script_code(expr) -> str:
    return ScriptPrinter().doprint(expr)


def c_code(expr) -> str:
    return NumericPrinter().doprint(expr)
