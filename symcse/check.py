"""
Numeric cross-check of a transform result.

Evaluates the definitions in order at sample values, then the result, and
compares with the original expression evaluated directly. Values are
complex so square roots of negative numbers stay finite.

Requires the SymPy engine.
"""

from beartype import beartype
from beartype.typing import Any, Dict, Mapping, Optional

import numpy as np
import sympy as sp

from .driver import coerce_input
from .engine import SympyEngine
from .model import CseResult


def _evaluate(expr, env: Dict[str, complex]) -> complex:
    symbols = sorted(expr.free_symbols, key=str)
    missing = [str(s) for s in symbols if str(s) not in env]
    if missing:
        raise KeyError(f"no value for {', '.join(missing)}")
    func = sp.lambdify(symbols, expr, modules="numpy")
    return complex(func(*(env[str(s)] for s in symbols)))


def _evaluate_array(expr, env: Dict[str, complex]) -> np.ndarray:
    if isinstance(expr, sp.MatrixBase):
        rows, cols = expr.shape
        return np.array(
            [[_evaluate(expr[i, j], env) for j in range(cols)] for i in range(rows)],
            dtype=complex,
        )
    return np.array([[_evaluate(expr, env)]], dtype=complex)


@beartype
def evaluate(result: CseResult, values: Mapping[str, Any]) -> np.ndarray:
    """Evaluate the definitions in order, then the result.

    Returns a ``rows x cols`` complex array.
    """
    env = {name: complex(value) for name, value in values.items()}
    for definition in result.definitions:
        env[definition.name] = _evaluate(definition.expr, env)
    return _evaluate_array(result.result.expr, env)


@beartype
def verify(
    original: Any,
    result: CseResult,
    values: Mapping[str, Any],
    rtol: float = 1e-9,
    atol: float = 1e-12,
    engine: Optional[SympyEngine] = None,
) -> bool:
    """True if ``result`` reproduces ``original`` at ``values``."""
    expr = coerce_input(engine or SympyEngine(), original)
    env = {name: complex(value) for name, value in values.items()}
    expected = _evaluate_array(expr, env)
    actual = evaluate(result, values)
    return expected.shape == actual.shape and bool(np.allclose(actual, expected, rtol=rtol, atol=atol))
