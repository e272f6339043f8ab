"""
Exceptions raised by symcse.

Every error derives from :class:`CseError` so callers can catch the whole
family at once. Nothing is retried: algebra failures are not transient.
"""


class CseError(Exception):
    """Base class for all symcse errors."""


class ParseError(CseError, ValueError):
    """Input text cannot be parsed into an expression."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        self.reason = reason
        msg = f"cannot parse {text!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class NameCollisionError(CseError, ValueError):
    """A generated name clashes with a free variable or an earlier name."""

    def __init__(self, name: str, owner: str):
        self.name = name
        self.owner = owner
        super().__init__(f"name {name!r} is already taken by {owner}")


class EngineError(CseError, RuntimeError):
    """An algebra engine operation failed."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"algebra engine failed in {operation}: {cause}")


class UnsupportedShapeError(CseError, ValueError):
    """Input cannot be arranged into a rectangular array of expressions."""


class OptionsError(CseError, ValueError):
    """Invalid transform options."""


class IterationLimitWarning(UserWarning):
    """Extraction stopped at its pass limit with repeats remaining."""
