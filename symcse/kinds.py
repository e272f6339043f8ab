"""
Real/complex classification of generated quantities.

Definitions are classified structurally by the algebra engine when they are
created and the verdict is stored on the :class:`Definition`. A result is
complex when its own expression is complex or when any definition is;
temporaries have already been substituted by name, so their markers are not
visible in the result's own rendering.

:func:`classify_text` classifies already rendered source text instead, for
code that did not come out of an engine.
"""

import re

from beartype import beartype
from beartype.typing import Any, Iterable

from .engine.base import AlgebraEngine
from .model import Definition, NumericKind

IMAGINARY_TOKEN = "<imag>"

_NUMBER = r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"

# 1i, 2.5i, 2*i, 2*I, I, bare i
_IMAGINARY = re.compile(r"(?<![\w.])(?:" + _NUMBER + r"\s*\*?\s*)?[iI](?!\w)")

_PART_ACCESSOR = re.compile(r"(?<![\w.])(?:real|imag|creal|cimag|conj)\s*\(")


def normalize_imaginary(text: str) -> str:
    """Replace every spelling of the imaginary unit with ``IMAGINARY_TOKEN``."""
    return _IMAGINARY.sub(IMAGINARY_TOKEN, text)


@beartype
def classify_text(text: str) -> NumericKind:
    """Classify rendered MATLAB or C source of a single expression."""
    if IMAGINARY_TOKEN in normalize_imaginary(text) or _PART_ACCESSOR.search(text):
        return NumericKind.COMPLEX
    return NumericKind.REAL


@beartype
def classify(engine: AlgebraEngine, expr: Any) -> NumericKind:
    if engine.has_imaginary(expr):
        return NumericKind.COMPLEX
    return NumericKind.REAL


@beartype
def define(engine: AlgebraEngine, name: str, expr: Any) -> Definition:
    """Create a definition with its kind worked out once."""
    return Definition(name=name, expr=expr, kind=classify(engine, expr))


@beartype
def aggregate(definitions: Iterable[Definition], own: NumericKind) -> NumericKind:
    if own is NumericKind.COMPLEX or any(d.is_complex for d in definitions):
        return NumericKind.COMPLEX
    return NumericKind.REAL
