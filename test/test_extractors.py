"""
Tests for power chain and subexpression extraction.
"""

import logging

import pytest
import sympy as sp
from sympy import I, Symbol

from symcse.errors import NameCollisionError
from symcse.model import NumericKind
from symcse.names import NameAllocator
from symcse.powers import extract_powers, highest_power
from symcse.subexpr import extract_subexpressions, stopped_at_limit

a, b, c, x, y = sp.symbols("a b c x y")


# ---------------------------------------------------------------------------
# Power chains
# ---------------------------------------------------------------------------


class TestPowers:
    def test_highest_power(self, engine):
        expr = a * x**3 + x**7
        assert highest_power(engine, expr, x, 10) == 7
        assert highest_power(engine, expr, x, 5) == 3
        assert highest_power(engine, expr, a, 10) == 0

    def test_chain(self, engine, names):
        expr, defs = extract_powers(engine, a**2 + a**3 + a**4, names, 6)
        assert [d.name for d in defs] == ["a_2", "a_3", "a_4"]
        a_2, a_3, a_4 = (Symbol(n) for n in ("a_2", "a_3", "a_4"))
        assert [engine.render_script(d.expr) for d in defs] == ["a*a", "a_2*a", "a_3*a"]
        assert expr == a_2 + a_3 + a_4

    def test_chain_fills_gaps(self, engine, names):
        # x^3 alone still needs x_2 to build x_3
        expr, defs = extract_powers(engine, y + x**3, names)
        assert [d.name for d in defs] == ["x_2", "x_3"]
        assert expr == y + Symbol("x_3")

    def test_every_link_logged(self, engine, names, caplog):
        caplog.set_level(logging.DEBUG, logger="symcse")
        extract_powers(engine, y + x**3, names)
        assert "x_2 = x*x;" in caplog.text
        assert "x_3 = x_2*x;" in caplog.text

    def test_powers_above_bound_stay(self, engine, names):
        expr, defs = extract_powers(engine, x**2 + x**12, names, 10)
        assert [d.name for d in defs] == ["x_2"]
        assert expr == Symbol("x_2") + x**12

    def test_variables_in_order(self, engine, names):
        _, defs = extract_powers(engine, y**2 + a**2 * b, names)
        assert [d.name for d in defs] == ["a_2", "y_2"]

    def test_no_powers(self, engine, names):
        expr = a * x + b * sp.sin(x)
        rewritten, defs = extract_powers(engine, expr, names)
        assert defs == []
        assert rewritten == expr

    @pytest.mark.parametrize("max_power", [0, 1])
    def test_low_bound_is_noop(self, engine, names, max_power):
        expr = x**2 + x**3
        rewritten, defs = extract_powers(engine, expr, names, max_power)
        assert defs == []
        assert rewritten == expr

    def test_chain_is_real(self, engine, names):
        _, defs = extract_powers(engine, (a + 2 * I) * x**2, names)
        assert [d.kind for d in defs] == [NumericKind.REAL]

    def test_collision_with_free_variable(self, engine):
        names = NameAllocator(["x", "x_2"])
        with pytest.raises(NameCollisionError) as info:
            extract_powers(engine, x**2 + Symbol("x_2"), names)
        assert info.value.name == "x_2"


# ---------------------------------------------------------------------------
# Subexpressions
# ---------------------------------------------------------------------------


class TestSubexpressions:
    def test_one_definition_per_pass(self, engine, names):
        expr = sp.ImmutableMatrix([sp.sin(a * x + b), sp.cos(a * x + b), c * y, c * y + 1])
        rewritten, defs = extract_subexpressions(engine, expr, names)
        t1, t2 = Symbol("tmp1"), Symbol("tmp2")
        assert [d.name for d in defs] == ["tmp1", "tmp2"]
        assert defs[0].expr == a * x + b
        assert defs[1].expr == c * y
        assert rewritten == sp.ImmutableMatrix([sp.sin(t1), sp.cos(t1), t2, t2 + 1])

    def test_prefix(self, engine, names):
        _, defs = extract_subexpressions(engine, sp.ImmutableMatrix([a * x, a * x + b]), names, "t")
        assert [d.name for d in defs] == ["t1"]

    def test_zero_iterations(self, engine, names):
        expr = sp.ImmutableMatrix([a * x, a * x + b])
        rewritten, defs = extract_subexpressions(engine, expr, names, "tmp", 0)
        assert defs == []
        assert rewritten == expr

    def test_stopped_at_limit(self, engine, names):
        expr = sp.ImmutableMatrix(
            [sp.sin(a * b), sp.sin(a * b) + c, sp.cos(x * y), sp.cos(x * y) + c]
        )
        rewritten, defs = extract_subexpressions(engine, expr, names, "tmp", 1)
        assert len(defs) == 1
        assert stopped_at_limit(engine, rewritten, defs, 1)

    def test_not_stopped_when_done(self, engine, names):
        expr = sp.ImmutableMatrix([a * x, a * x + b])
        rewritten, defs = extract_subexpressions(engine, expr, names, "tmp", 1)
        assert len(defs) == 1
        assert not stopped_at_limit(engine, rewritten, defs, 1)
        assert not stopped_at_limit(engine, expr, [], 0)

    def test_complex_temporary(self, engine, names):
        expr = sp.ImmutableMatrix([(a + 2 * I) * x, (a + 2 * I) * y])
        rewritten, defs = extract_subexpressions(engine, expr, names)
        assert defs[0].expr == a + 2 * I
        assert defs[0].kind is NumericKind.COMPLEX
        assert not engine.has_imaginary(rewritten)

    def test_collision_with_free_variable(self, engine):
        names = NameAllocator(["tmp1", "x"])
        with pytest.raises(NameCollisionError):
            extract_subexpressions(engine, sp.sin(x) + Symbol("tmp1"), names)
