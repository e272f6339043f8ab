"""
SymPy algebra engine.

Scalars are plain SymPy expressions, arrays are ``ImmutableMatrix``.
Occurrence tests and substitutions are structural (``has``/``xreplace``):
``x**4`` does not contain ``x**2`` and is left alone when ``x**2`` is
replaced.

Formulas use MATLAB conventions: ``^`` is a power, ``2i``/``1.5j`` are
imaginary literals and bare ``i``/``j`` are the imaginary unit.
"""

import re
from tokenize import TokenError
from typing import Any, Dict, List, Optional, Sequence, Tuple

import sympy as sp
from sympy import I, ImmutableMatrix, Matrix, Mul, Pow, Symbol, collect, preorder_traversal
from sympy.matrices import MatrixBase
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from ..errors import ParseError, UnsupportedShapeError
from .base import AlgebraEngine, engine_operation
from .printing import c_code, script_code

TRANSFORMATIONS = standard_transformations + (convert_xor,)

# 2i, 1.5j, 1e-3i
_IMAGINARY_LITERAL = re.compile(r"(?<![\w.])((?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)[ij](?!\w)")

# Names that SymPy would resolve to its own functions or singletons
_PLAIN_SYMBOLS = ("N", "O", "Q", "S", "beta", "gamma", "zeta")

_COMPLEX_PARTS = (sp.re, sp.im, sp.conjugate)

_PARSE_ERRORS = (SyntaxError, TokenError, TypeError, ValueError, NameError, sp.SympifyError)


def _namespace() -> Dict[str, Any]:
    names = {name: Symbol(name) for name in _PLAIN_SYMBOLS}
    names["i"] = I
    names["j"] = I
    return names


def _flat(expr) -> List[Any]:
    """Elements in column-major order."""
    if isinstance(expr, MatrixBase):
        rows, cols = expr.shape
        return [expr[i, j] for j in range(cols) for i in range(rows)]
    return [expr]


def _map(expr, func):
    if isinstance(expr, MatrixBase):
        rows, cols = expr.shape
        return ImmutableMatrix(rows, cols, [func(expr[i, j]) for i in range(rows) for j in range(cols)])
    return func(expr)


def _compound_nodes(expr):
    """Non-atomic subexpressions of every element, pre-order, column-major."""
    for element in _flat(expr):
        for node in preorder_traversal(element):
            if isinstance(node, sp.Expr) and not node.is_Atom:
                yield node


def _size(expr) -> int:
    return sum(1 for _ in preorder_traversal(expr))


def _collect_powers(expr):
    """Collect ``expr`` in the symbols it raises to an integer power of 2 or more."""
    powered = {
        p.base
        for p in expr.atoms(Pow)
        if p.base.is_Symbol and p.exp.is_Integer and p.exp > 1
    }
    if not powered:
        return expr
    return collect(expr, sorted(powered, key=str))


class SympyEngine(AlgebraEngine):
    """Algebra engine backed by SymPy.

    The engine holds no state, one instance can serve any number of calls.

    Example:
        >>> engine = SympyEngine()
        >>> expr = engine.parse("a*x^2 + b*x^2")
        >>> engine.render_script(engine.simplify_collect(expr))
        'x^2*(a + b)'
    """

    # ========== Construction ==========

    @engine_operation
    def parse(self, text: str) -> Any:
        source = _IMAGINARY_LITERAL.sub(r"(\1*I)", text.strip())
        if not source:
            raise ParseError(text, "empty formula")
        if "==" in source:
            raise ParseError(text, "equations are not expressions, solve them first")
        try:
            expr = parse_expr(source, local_dict=_namespace(), transformations=TRANSFORMATIONS)
        except _PARSE_ERRORS as exc:
            raise ParseError(text, str(exc) or type(exc).__name__) from exc
        if isinstance(expr, MatrixBase):
            return ImmutableMatrix(expr)
        if not isinstance(expr, sp.Expr):
            raise ParseError(text, f"{type(expr).__name__} is not an arithmetic expression")
        return expr

    @engine_operation
    def from_object(self, value: Any) -> Any:
        if isinstance(value, MatrixBase):
            return ImmutableMatrix(value)
        try:
            expr = sp.sympify(value, strict=True)
        except sp.SympifyError as exc:
            raise UnsupportedShapeError(
                f"cannot use {type(value).__name__} as an expression"
            ) from exc
        if isinstance(expr, MatrixBase):
            return ImmutableMatrix(expr)
        if not isinstance(expr, sp.Expr):
            raise UnsupportedShapeError(f"{type(expr).__name__} is not an arithmetic expression")
        return expr

    @engine_operation
    def stack(self, rows: Sequence[Sequence[Any]]) -> Any:
        if not rows or any(len(row) == 0 for row in rows):
            raise UnsupportedShapeError("cannot stack an empty set of expressions")
        bands = []
        for row in rows:
            blocks = [Matrix(b) if isinstance(b, MatrixBase) else Matrix([[b]]) for b in row]
            heights = {b.rows for b in blocks}
            if len(heights) != 1:
                raise UnsupportedShapeError(
                    f"blocks of one row have different heights {sorted(heights)}"
                )
            bands.append(Matrix.hstack(*blocks))
        widths = {band.cols for band in bands}
        if len(widths) != 1:
            raise UnsupportedShapeError(f"rows have different widths {sorted(widths)}")
        return ImmutableMatrix(Matrix.vstack(*bands))

    @engine_operation
    def symbol(self, name: str) -> Any:
        return Symbol(name)

    @engine_operation
    def power(self, variable: Any, exponent: int) -> Any:
        return Pow(variable, exponent)

    @engine_operation
    def product(self, left: Any, right: Any) -> Any:
        return Mul(left, right, evaluate=False)

    @engine_operation
    def solve(self, equation: str, variable: str) -> List[Any]:
        sides = equation.split("==")
        if len(sides) != 2:
            raise ParseError(equation, "expected exactly one '=='")
        lhs, rhs = (self.parse(side) for side in sides)
        return list(sp.solve(sp.Eq(lhs, rhs), Symbol(variable)))

    # ========== Queries ==========

    @engine_operation
    def shape(self, expr: Any) -> Tuple[int, int]:
        if isinstance(expr, MatrixBase):
            return tuple(expr.shape)
        return (1, 1)

    @engine_operation
    def element(self, expr: Any, row: int, col: int) -> Any:
        if isinstance(expr, MatrixBase):
            return expr[row, col]
        if (row, col) != (0, 0):
            raise IndexError(f"scalar has no element ({row}, {col})")
        return expr

    @engine_operation
    def free_variables(self, expr: Any) -> List[Any]:
        return sorted(expr.free_symbols, key=str)

    @engine_operation
    def variable_name(self, variable: Any) -> str:
        return str(variable)

    @engine_operation
    def contains(self, expr: Any, pattern: Any) -> bool:
        return any(e.has(pattern) for e in _flat(expr))

    @engine_operation
    def has_imaginary(self, expr: Any) -> bool:
        return any(e.has(I, *_COMPLEX_PARTS) for e in _flat(expr))

    # ========== Rewriting ==========

    @engine_operation
    def simplify_collect(self, expr: Any) -> Any:
        return _map(expr, _collect_powers)

    @engine_operation
    def substitute(self, expr: Any, pattern: Any, replacement: Any) -> Any:
        return _map(expr, lambda e: e.xreplace({pattern: replacement}))

    @engine_operation
    def extract_common_subexpr(self, expr: Any, name: str) -> Tuple[Any, Optional[Any]]:
        # first seen wins among equally large candidates
        counts: Dict[Any, int] = {}
        for node in _compound_nodes(expr):
            counts[node] = counts.get(node, 0) + 1
        repeated = [node for node, count in counts.items() if count > 1]
        if not repeated:
            return expr, None
        best = max(repeated, key=_size)
        return self.substitute(expr, best, Symbol(name)), best

    @engine_operation
    def has_repeats(self, expr: Any) -> bool:
        seen = set()
        for node in _compound_nodes(expr):
            if node in seen:
                return True
            seen.add(node)
        return False

    # ========== Rendering ==========

    @engine_operation
    def render_script(self, expr: Any) -> str:
        return script_code(expr)

    @engine_operation
    def render_numeric(self, expr: Any) -> str:
        return c_code(expr)
