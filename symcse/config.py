"""
Options for :func:`symcse.transform`.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Optional

from .errors import OptionsError

DEFAULT_RESULT_NAME = "r"


@dataclass(frozen=True)
class CseOptions:
    """Settings of one transform call.

    Parameters
    ----------
    name_prefix : str
        Prefix of CSE temporaries, ``tmp`` gives ``tmp1``, ``tmp2``, ...
    max_cse_iterations : int
        Upper bound on subexpression extraction passes.
    max_power : int
        Highest power of a free variable turned into a power chain.
    result_name : str, optional
        Name of the final assignment, ``r`` when not given.
    real_type, complex_type : str
        Element types declared in the C listing.
    """

    name_prefix: str = "tmp"
    max_cse_iterations: int = 10
    max_power: int = 10
    result_name: Optional[str] = None
    real_type: str = "double"
    complex_type: str = "double complex"

    def __post_init__(self):
        for name in ("name_prefix", "real_type", "complex_type"):
            if not isinstance(getattr(self, name), str):
                raise OptionsError(f"{name} must be a string, got {getattr(self, name)!r}")
        if self.result_name is not None and not isinstance(self.result_name, str):
            raise OptionsError(f"result_name must be a string or None, got {self.result_name!r}")
        if not self.name_prefix.isidentifier():
            raise OptionsError(f"name_prefix must be an identifier, got {self.name_prefix!r}")
        if self.result_name is not None and not self.result_name.isidentifier():
            raise OptionsError(f"result_name must be an identifier, got {self.result_name!r}")
        for name in ("max_cse_iterations", "max_power"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise OptionsError(f"{name} must be a non-negative integer, got {value!r}")
        if not self.real_type.strip() or not self.complex_type.strip():
            raise OptionsError("element type names must not be empty")

    @property
    def target_name(self) -> str:
        """Result name with the ``r`` fallback applied."""
        return self.result_name or DEFAULT_RESULT_NAME

    def with_overrides(self, **overrides: Any) -> "CseOptions":
        """Copy with some fields replaced, rejecting unknown field names."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise OptionsError(
                f"unknown option(s) {', '.join(unknown)}; expected one of {', '.join(sorted(known))}"
            )
        return replace(self, **overrides)
