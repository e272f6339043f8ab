"""
Transform driver.

Runs the stages of one transform call in a fixed order::

    INIT -> POWER_EXTRACTION -> SUBEXPR_EXTRACTION -> RESULT_FORMATTING -> DONE

No stage is repeated and nothing is retried; any error ends the call
without output.
"""

import logging
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

import numpy as np
from beartype import beartype

from .config import CseOptions
from .emit import lowlevel_listing, script_listing
from .engine import AlgebraEngine, default_engine
from .errors import IterationLimitWarning, UnsupportedShapeError
from .kinds import aggregate, classify
from .model import CseResult, Definition, ResultTarget
from .names import RESULT, NameAllocator
from .powers import extract_powers
from .subexpr import extract_subexpressions, stopped_at_limit

log = logging.getLogger(__name__)


class Stage(Enum):
    INIT = "init"
    POWER_EXTRACTION = "power_extraction"
    SUBEXPR_EXTRACTION = "subexpr_extraction"
    RESULT_FORMATTING = "result_formatting"
    DONE = "done"


# =============================================================================
# Input coercion
# =============================================================================


def _item(engine: AlgebraEngine, value: Any) -> Any:
    if isinstance(value, str):
        return engine.parse(value)
    return engine.from_object(value)


def _scalar(engine: AlgebraEngine, value: Any) -> Any:
    expr = _item(engine, value)
    if engine.shape(expr) != (1, 1):
        raise UnsupportedShapeError(
            f"matrix rows take scalar entries, got shape {engine.shape(expr)}"
        )
    return expr


def coerce_input(engine: AlgebraEngine, value: Any) -> Any:
    """Turn any accepted input into a single engine expression.

    - a formula string or a single expression is used as is
    - a flat list/tuple (of formulas or expressions) is stacked into a column
    - a list of lists is a matrix, one inner list per row
    - a NumPy array is read through ``tolist()``
    """
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if isinstance(value, str):
        return engine.parse(value)
    if isinstance(value, (list, tuple)):
        if len(value) == 0:
            raise UnsupportedShapeError("no expressions given")
        nested = [isinstance(item, (list, tuple)) for item in value]
        if all(nested):
            rows = [[_scalar(engine, item) for item in row] for row in value]
            lengths = {len(row) for row in rows}
            if len(lengths) != 1:
                raise UnsupportedShapeError(f"rows have different lengths {sorted(lengths)}")
            return engine.stack(rows)
        if any(nested):
            raise UnsupportedShapeError("input mixes rows and single entries")
        return engine.stack([[_item(engine, item)] for item in value])
    return engine.from_object(value)


# =============================================================================
# Driver
# =============================================================================


@dataclass
class CseDriver:
    """Owns the working expression, the definitions and the names of one call.

    Parameters
    ----------
    engine : AlgebraEngine
        Algebra engine doing all symbolic work
    options : CseOptions
        Prefix, bounds and names for this call
    """

    engine: AlgebraEngine
    options: CseOptions = field(default_factory=CseOptions)

    stage: Stage = Stage.INIT
    definitions: List[Definition] = field(default_factory=list)
    names: Optional[NameAllocator] = None
    expr: Any = None
    truncated: bool = False

    def run(self, value: Any) -> CseResult:
        if self.stage is not Stage.INIT:
            raise RuntimeError(f"driver already used, stage is {self.stage.value}")
        self._init(value)
        self._power_extraction()
        self._subexpr_extraction()
        result = self._result_formatting()
        self.stage = Stage.DONE
        return result

    def _init(self, value: Any) -> None:
        engine = self.engine
        self.expr = engine.simplify_collect(coerce_input(engine, value))
        self.names = NameAllocator(
            engine.variable_name(v) for v in engine.free_variables(self.expr)
        )
        self.names.allocate(self.options.target_name, RESULT)
        self.stage = Stage.POWER_EXTRACTION

    def _power_extraction(self) -> None:
        self.expr, defs = extract_powers(
            self.engine, self.expr, self.names, self.options.max_power
        )
        self.definitions.extend(defs)
        self.stage = Stage.SUBEXPR_EXTRACTION

    def _subexpr_extraction(self) -> None:
        self.expr, defs = extract_subexpressions(
            self.engine,
            self.expr,
            self.names,
            self.options.name_prefix,
            self.options.max_cse_iterations,
        )
        self.definitions.extend(defs)
        self.truncated = stopped_at_limit(
            self.engine, self.expr, defs, self.options.max_cse_iterations
        )
        self.stage = Stage.RESULT_FORMATTING

    def _result_formatting(self) -> CseResult:
        engine = self.engine
        options = self.options
        kind = aggregate(self.definitions, classify(engine, self.expr))
        target = ResultTarget(
            name=options.target_name,
            expr=self.expr,
            shape=engine.shape(self.expr),
            kind=kind,
        )
        definitions = tuple(self.definitions)
        log.debug(
            "%s: %d definitions, shape %s, %s",
            target.name,
            len(definitions),
            target.shape,
            target.kind,
        )
        return CseResult(
            scripting_code=script_listing(engine, definitions, target),
            lowlevel_code=lowlevel_listing(
                engine, definitions, target, options.real_type, options.complex_type
            ),
            definitions=definitions,
            result=target,
        )


@beartype
def transform(
    exprs: Any,
    options: Optional[CseOptions] = None,
    *,
    engine: Optional[AlgebraEngine] = None,
    **overrides: Any,
) -> CseResult:
    """Rewrite expressions into power chains and shared temporaries.

    Args:
        exprs: A formula, an expression, a list of formulas/expressions
            (stacked into a column), a list of rows, or a NumPy array
        options: Call settings, defaults when omitted
        engine: Algebra engine, SymPy when omitted
        **overrides: Replace individual ``CseOptions`` fields

    Returns:
        CseResult with the MATLAB listing in ``scripting_code`` and the C
        listing in ``lowlevel_code``

    Example:
        >>> result = transform("a*x^2 + b*x^2 + c")
        >>> print(result.scripting_code)
        x_2 = x*x;
        r = c + x_2*(a + b);
    """
    options = (options or CseOptions()).with_overrides(**overrides)
    driver = CseDriver(engine=engine or default_engine(), options=options)
    result = driver.run(exprs)
    if driver.truncated:
        # one frame for this body, one for the beartype wrapper
        warnings.warn(
            f"stopped after {options.max_cse_iterations} extraction passes with repeated "
            "subexpressions left, raise max_cse_iterations to extract them",
            IterationLimitWarning,
            stacklevel=3,
        )
    return result
