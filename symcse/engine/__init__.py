"""
Algebra engines.

The transform driver only talks to :class:`AlgebraEngine`; SymPy is the
bundled implementation.
"""

from symcse.engine.base import AlgebraEngine, engine_operation
from symcse.engine.sympy import SympyEngine


def default_engine() -> AlgebraEngine:
    return SympyEngine()


__all__ = ["AlgebraEngine", "SympyEngine", "default_engine", "engine_operation"]
