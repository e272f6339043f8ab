"""
symcse - Common subexpression elimination for symbolic expressions

Rewrites scalar, vector and matrix expressions into power chains and shared
temporaries, then prints them as MATLAB and C code.

    >>> from symcse import transform
    >>> print(transform("a^2 + a^3 + a^4", max_power=6).scripting_code)
    a_2 = a*a;
    a_3 = a_2*a;
    a_4 = a_3*a;
    r = a_2 + a_3 + a_4;
"""

__version__ = "0.1.0"

from .config import CseOptions
from .driver import CseDriver, Stage, coerce_input, transform
from .engine import AlgebraEngine, SympyEngine
from .errors import (
    CseError,
    EngineError,
    IterationLimitWarning,
    NameCollisionError,
    OptionsError,
    ParseError,
    UnsupportedShapeError,
)
from .kinds import classify_text
from .model import CseResult, Definition, NumericKind, ResultTarget

__all__ = [
    "AlgebraEngine",
    "CseDriver",
    "CseError",
    "CseOptions",
    "CseResult",
    "Definition",
    "EngineError",
    "IterationLimitWarning",
    "NameCollisionError",
    "NumericKind",
    "OptionsError",
    "ParseError",
    "ResultTarget",
    "Stage",
    "SympyEngine",
    "UnsupportedShapeError",
    "classify_text",
    "coerce_input",
    "transform",
    "__version__",
    "load_ipython_extension",
]


def load_ipython_extension(ipython):
    """
    Load symcse magic commands for Jupyter notebooks.

    Usage in a notebook:
        %load_ext symcse

        %%cse
        a*x^2 + b*x^2 + c
    """
    from .magic import load_ipython_extension as _load

    _load(ipython)
