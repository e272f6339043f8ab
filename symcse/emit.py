"""
Rendering of definitions and results as MATLAB and C source.

MATLAB arrays are written as one bracketed literal, one source line per
row::

    r = [ ...
     a, b; ...
     c, d
    ];

C arrays are flattened in column-major order with 0-based indices, the
layout MATLAB uses natively. For the matrix above ``r[1]`` is ``c``, the
element below ``a``.
"""

from beartype import beartype
from beartype.typing import Any, Iterator, List, Sequence, Tuple

from .engine.base import AlgebraEngine
from .model import Definition, NumericKind, ResultTarget

REAL_TYPE = "double"
COMPLEX_TYPE = "double complex"


@beartype
def type_name(kind: NumericKind, real_type: str = REAL_TYPE, complex_type: str = COMPLEX_TYPE) -> str:
    return complex_type if kind is NumericKind.COMPLEX else real_type


def column_major(shape: Tuple[int, int]) -> Iterator[Tuple[int, int, int]]:
    """Yield ``(flat_index, row, col)`` with the row index varying fastest."""
    rows, cols = shape
    for col in range(cols):
        for row in range(rows):
            yield col * rows + row, row, col


@beartype
def script_listing(
    engine: AlgebraEngine, definitions: Sequence[Definition], result: ResultTarget
) -> str:
    lines = [f"{d.name} = {engine.render_script(d.expr)};" for d in definitions]
    lines.extend(_script_result(engine, result))
    return "\n".join(lines)


def _script_result(engine: AlgebraEngine, result: ResultTarget) -> List[str]:
    if result.is_scalar:
        value = engine.render_script(engine.element(result.expr, 0, 0))
        return [f"{result.name} = {value};"]
    rows, cols = result.shape
    lines = [f"{result.name} = [ ..."]
    for row in range(rows):
        cells = ", ".join(
            engine.render_script(engine.element(result.expr, row, col)) for col in range(cols)
        )
        lines.append(f" {cells}; ..." if row < rows - 1 else f" {cells}")
    lines.append("];")
    return lines


@beartype
def lowlevel_listing(
    engine: AlgebraEngine,
    definitions: Sequence[Definition],
    result: ResultTarget,
    real_type: str = REAL_TYPE,
    complex_type: str = COMPLEX_TYPE,
) -> str:
    lines = [
        f"{type_name(d.kind, real_type, complex_type)} {d.name} = {engine.render_numeric(d.expr)};"
        for d in definitions
    ]
    ctype = type_name(result.kind, real_type, complex_type)
    if result.is_scalar:
        value = engine.render_numeric(engine.element(result.expr, 0, 0))
        lines.append(f"{ctype} {result.name} = {value};")
    else:
        lines.append(f"{ctype} {result.name}[{result.count}];")
        for index, row, col in column_major(result.shape):
            value = engine.render_numeric(engine.element(result.expr, row, col))
            lines.append(f"{result.name}[{index}] = {value};")
    return "\n".join(lines)
