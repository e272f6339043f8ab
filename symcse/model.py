"""
Values produced by a transform call.

A transform yields an ordered sequence of :class:`Definition` records and a
:class:`ResultTarget`. Definitions only ever refer to earlier names, so
emitting them in order gives valid straight-line code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class NumericKind(Enum):
    """Element type of a generated quantity."""

    REAL = "real"
    COMPLEX = "complex"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Definition:
    """One temporary: ``name = expr``."""

    name: str
    expr: Any
    kind: NumericKind = NumericKind.REAL

    @property
    def is_complex(self) -> bool:
        return self.kind is NumericKind.COMPLEX


@dataclass(frozen=True)
class ResultTarget:
    """The final expression after extraction, with its display name."""

    name: str
    expr: Any
    shape: Tuple[int, int]
    kind: NumericKind = NumericKind.REAL

    @property
    def is_scalar(self) -> bool:
        return self.shape == (1, 1)

    @property
    def count(self) -> int:
        """Number of elements."""
        return self.shape[0] * self.shape[1]

    @property
    def is_complex(self) -> bool:
        return self.kind is NumericKind.COMPLEX


@dataclass(frozen=True)
class CseResult:
    """Both code listings plus the data they were rendered from."""

    scripting_code: str
    lowlevel_code: str
    definitions: Tuple[Definition, ...]
    result: ResultTarget

    @property
    def defs(self) -> Dict[str, Any]:
        """Definitions as an ordered ``name -> expr`` mapping."""
        return {d.name: d.expr for d in self.definitions}

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(d.name for d in self.definitions)

    def __str__(self):
        return f"{self.scripting_code}\n\n{self.lowlevel_code}"
