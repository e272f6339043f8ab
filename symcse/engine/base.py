"""
Base algebra engine interface.
"""

import functools
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from ..errors import CseError, EngineError

F = TypeVar("F", bound=Callable[..., Any])


def engine_operation(func: F) -> F:
    """Report foreign failures of an engine method as :class:`EngineError`.

    symcse's own errors pass through unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CseError:
            raise
        except Exception as exc:
            raise EngineError(func.__name__, exc) from exc

    return wrapper


class AlgebraEngine(ABC):
    """
    Abstract base class for algebra engines.

    The driver treats expressions as opaque values and only reaches into
    them through these operations. Every operation returns a new
    expression; nothing is modified in place.

    Arrays are two dimensional. Scalars have shape ``(1, 1)``.
    """

    # ========== Construction ==========

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse a formula into an expression, raising ParseError."""

    @abstractmethod
    def from_object(self, value: Any) -> Any:
        """Convert a native object (number, symbol, matrix) into an expression."""

    @abstractmethod
    def stack(self, rows: Sequence[Sequence[Any]]) -> Any:
        """Build an array expression from a rectangular grid of blocks.

        Blocks in a row are joined horizontally, rows vertically. Shapes
        that do not line up raise UnsupportedShapeError.
        """

    @abstractmethod
    def symbol(self, name: str) -> Any:
        """A fresh symbol called ``name``."""

    @abstractmethod
    def power(self, variable: Any, exponent: int) -> Any:
        """The pattern ``variable^exponent``."""

    @abstractmethod
    def product(self, left: Any, right: Any) -> Any:
        """``left*right`` kept as written, without folding into a power."""

    @abstractmethod
    def solve(self, equation: str, variable: str) -> List[Any]:
        """Solutions of a ``lhs == rhs`` formula for ``variable``."""

    # ========== Queries ==========

    @abstractmethod
    def shape(self, expr: Any) -> Tuple[int, int]:
        """``(rows, cols)`` of an expression."""

    @abstractmethod
    def element(self, expr: Any, row: int, col: int) -> Any:
        """One element of an array expression (the expression itself for scalars)."""

    @abstractmethod
    def free_variables(self, expr: Any) -> List[Any]:
        """Free variables in a stable order."""

    @abstractmethod
    def variable_name(self, variable: Any) -> str:
        """Name of a free variable."""

    @abstractmethod
    def contains(self, expr: Any, pattern: Any) -> bool:
        """True if ``pattern`` occurs literally somewhere in ``expr``."""

    @abstractmethod
    def has_imaginary(self, expr: Any) -> bool:
        """True if ``expr`` has an imaginary unit or a real/imaginary part accessor."""

    # ========== Rewriting ==========

    @abstractmethod
    def simplify_collect(self, expr: Any) -> Any:
        """Canonical, collected form of ``expr``."""

    @abstractmethod
    def substitute(self, expr: Any, pattern: Any, replacement: Any) -> Any:
        """Replace every literal occurrence of ``pattern``."""

    @abstractmethod
    def extract_common_subexpr(self, expr: Any, name: str) -> Tuple[Any, Optional[Any]]:
        """Pull out the largest subexpression occurring at least twice.

        Returns the rewritten expression and the extracted subexpression,
        or ``(expr, None)`` when nothing repeats.
        """

    @abstractmethod
    def has_repeats(self, expr: Any) -> bool:
        """True if some subexpression occurs at least twice."""

    # ========== Rendering ==========

    @abstractmethod
    def render_script(self, expr: Any) -> str:
        """Render a scalar in MATLAB/Octave syntax."""

    @abstractmethod
    def render_numeric(self, expr: Any) -> str:
        """Render a scalar as a C99 expression."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
