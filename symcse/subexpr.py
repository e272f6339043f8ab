"""
Iterative common subexpression extraction.

Each pass pulls out one repeated subexpression under the name
``<prefix><pass>``. Later passes search the rewritten expression, so a
temporary can be defined in terms of earlier ones.
"""

import logging

from beartype import beartype
from beartype.typing import Any, List, Tuple

from .engine.base import AlgebraEngine
from .kinds import define
from .model import Definition
from .names import CSE_TEMPORARY, NameAllocator

log = logging.getLogger(__name__)


@beartype
def extract_subexpressions(
    engine: AlgebraEngine,
    expr: Any,
    names: NameAllocator,
    prefix: str = "tmp",
    max_iterations: int = 10,
) -> Tuple[Any, List[Definition]]:
    """Run up to ``max_iterations`` extraction passes.

    Stops early once the engine finds nothing that occurs twice.
    """
    definitions: List[Definition] = []
    for index in range(1, max_iterations + 1):
        name = f"{prefix}{index}"
        names.check(name)
        rewritten, subexpr = engine.extract_common_subexpr(expr, name)
        if subexpr is None:
            break
        names.allocate(name, CSE_TEMPORARY)
        definitions.append(define(engine, name, subexpr))
        if log.isEnabledFor(logging.DEBUG):
            log.debug("%s = %s;", name, engine.render_script(subexpr))
        expr = rewritten
    return expr, definitions


@beartype
def stopped_at_limit(
    engine: AlgebraEngine, expr: Any, definitions: List[Definition], max_iterations: int
) -> bool:
    """True if every pass produced a definition and repeats are still left."""
    return 0 < max_iterations == len(definitions) and engine.has_repeats(expr)
