"""
Registry of the names used by one transform call.
"""

from beartype import beartype
from beartype.typing import Dict, Iterable, Iterator

from .errors import NameCollisionError

FREE_VARIABLE = "a free variable"
RESULT = "the result"
POWER_TEMPORARY = "a power temporary"
CSE_TEMPORARY = "a subexpression temporary"


@beartype
class NameAllocator:
    """Tracks free variables, the result name and every generated temporary.

    A name can be taken once. Taking it again raises
    :class:`NameCollisionError` naming the current owner.
    """

    def __init__(self, free_variables: Iterable[str] = ()) -> None:
        self._owners: Dict[str, str] = {}
        for name in free_variables:
            self.allocate(name, FREE_VARIABLE)

    def check(self, name: str) -> None:
        """Raise if ``name`` is taken, without taking it."""
        if name in self._owners:
            raise NameCollisionError(name, self._owners[name])

    def allocate(self, name: str, owner: str) -> str:
        self.check(name)
        self._owners[name] = owner
        return name

    def __contains__(self, name: object) -> bool:
        return name in self._owners

    def __iter__(self) -> Iterator[str]:
        return iter(self._owners)

    def __len__(self) -> int:
        return len(self._owners)
