"""Pytest fixtures for symcse tests."""

import pytest
import sympy as sp

from symcse import SympyEngine
from symcse.names import NameAllocator


@pytest.fixture
def engine():
    return SympyEngine()


@pytest.fixture
def syms():
    """Symbols a, b, c, d, x, y, z keyed by name."""
    return {s.name: s for s in sp.symbols("a b c d x y z")}


@pytest.fixture
def names():
    return NameAllocator()
