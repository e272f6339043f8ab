"""Shared helpers for symcse tests."""

import cmath
import math
import re

import sympy as sp

EPS = 1e-9

SAMPLE_VALUES = {
    "a": 1.3,
    "b": -0.7,
    "c": 2.1,
    "d": 0.45,
    "x": 0.4,
    "y": -1.9,
    "z": 0.8,
}


def lines(code: str) -> list:
    return code.split("\n")


def split_assignment(line: str):
    """``"name = rhs;"`` -> ``("name", "rhs")``."""
    assert line.endswith(";"), line
    name, rhs = line[:-1].split(" = ", 1)
    return name, rhs


def matlab_to_sympy(rhs: str) -> sp.Expr:
    """Read back a real MATLAB right hand side."""
    return sp.sympify(rhs.replace("^", "**"))


def same(e1, e2) -> bool:
    """Check two SymPy expressions are algebraically equal."""
    return sp.simplify(sp.sympify(e1) - sp.sympify(e2)) == 0


# C99 / complex.h names appearing in low-level listings
C_NAMESPACE = {
    "pow": lambda base, exponent: complex(base) ** exponent,
    "sqrt": cmath.sqrt,
    "cbrt": lambda v: complex(v) ** (1.0 / 3.0),
    "exp": cmath.exp,
    "log": cmath.log,
    "sin": cmath.sin,
    "cos": cmath.cos,
    "tan": cmath.tan,
    "fabs": abs,
    "creal": lambda v: complex(v).real,
    "cimag": lambda v: complex(v).imag,
    "conj": lambda v: complex(v).conjugate(),
    "I": 1j,
    "M_E": math.e,
    "M_PI": math.pi,
    "M_SQRT2": math.sqrt(2),
    "M_SQRT1_2": math.sqrt(0.5),
}

_C_ELEMENT = re.compile(r"^(\w+)\[(\d+)\] = (.+);$")
_C_ARRAY = re.compile(r"^[\w ]+? (\w+)\[(\d+)\];$")
_C_SCALAR = re.compile(r"^[\w ]+? (\w+) = (.+);$")


def _c_eval(rhs: str, env: dict) -> complex:
    return complex(eval(rhs, {"__builtins__": {}}, {**C_NAMESPACE, **env}))


def run_c_listing(code: str, values: dict) -> dict:
    """Execute a low-level listing statement by statement.

    Returns every assigned name; arrays come back as lists in the listing's
    flat index order.
    """
    env = {name: complex(value) for name, value in values.items()}
    for line in lines(code):
        m = _C_ELEMENT.match(line)
        if m:
            name, index, rhs = m.groups()
            env[name][int(index)] = _c_eval(rhs, env)
            continue
        m = _C_ARRAY.match(line)
        if m:
            env[m.group(1)] = [None] * int(m.group(2))
            continue
        m = _C_SCALAR.match(line)
        assert m, line
        env[m.group(1)] = _c_eval(m.group(2), env)
    return env
