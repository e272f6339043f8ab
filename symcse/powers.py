"""
Power chain extraction.

Integer powers of a free variable are replaced by a chain of products,
``x_2 = x*x``, ``x_3 = x_2*x``, ... up to the highest power that occurs.
Occurrence is tested literally on the engine's canonical form, so ``x^2``
hidden inside ``x^4`` does not count.
"""

import logging

from beartype import beartype
from beartype.typing import Any, List, Tuple

from .engine.base import AlgebraEngine
from .kinds import define
from .model import Definition
from .names import POWER_TEMPORARY, NameAllocator

log = logging.getLogger(__name__)


@beartype
def highest_power(engine: AlgebraEngine, expr: Any, variable: Any, max_power: int) -> int:
    """Largest ``k <= max_power`` with ``variable^k`` in ``expr``, 0 if none above 1."""
    for k in range(max_power, 1, -1):
        if engine.contains(expr, engine.power(variable, k)):
            return k
    return 0


@beartype
def extract_powers(
    engine: AlgebraEngine,
    expr: Any,
    names: NameAllocator,
    max_power: int = 10,
) -> Tuple[Any, List[Definition]]:
    """Replace powers of every free variable by a power chain.

    Returns the rewritten expression and the chain definitions, variables
    in engine order and powers ascending within a variable.
    """
    definitions: List[Definition] = []
    if max_power < 2:
        return expr, definitions
    for variable in engine.free_variables(expr):
        k = highest_power(engine, expr, variable, max_power)
        if k < 2:
            continue
        base = engine.variable_name(variable)
        previous = variable
        for exponent in range(2, k + 1):
            name = names.allocate(f"{base}_{exponent}", POWER_TEMPORARY)
            temp = engine.symbol(name)
            definition = define(engine, name, engine.product(previous, variable))
            definitions.append(definition)
            if log.isEnabledFor(logging.DEBUG):
                log.debug("%s = %s;", name, engine.render_script(definition.expr))
            expr = engine.substitute(expr, engine.power(variable, exponent), temp)
            previous = temp
    return expr, definitions
