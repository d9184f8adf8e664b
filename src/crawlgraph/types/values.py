"""Small immutable value types: node handles, names and labels."""

from dataclasses import dataclass
from functools import total_ordering

_ALLOCATOR = object()


@total_ordering
class Id:
    """
    Dense handle of a node inside a Collection.

    Ids are handed out by the collection only; ``int(node_id)`` gives back
    the slot index.
    """

    __slots__ = ("_index",)

    def __init__(self, index: int, *, _allocator=None):
        if _allocator is not _ALLOCATOR:
            raise TypeError("Id handles are allocated by a Collection")
        object.__setattr__(self, "_index", index)

    def __setattr__(self, name, value):
        raise AttributeError("Id is immutable")

    def __int__(self) -> int:
        return self._index

    def __eq__(self, other):
        if not isinstance(other, Id):
            return NotImplemented
        return self._index == other._index

    def __lt__(self, other):
        if not isinstance(other, Id):
            return NotImplemented
        return self._index < other._index

    def __hash__(self) -> int:
        return hash(self._index)

    def __repr__(self) -> str:
        return f"Id({self._index})"

    def __reduce__(self):
        return (_allocate, (self._index,))


def _allocate(index: int) -> Id:
    """Create the Id for slot ``index``. Reserved for the collection."""
    return Id(index, _allocator=_ALLOCATOR)


@dataclass(frozen=True)
class Name:
    """A name describing an entity, e.g. a page title."""
    value: str

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Label:
    """A label attached to an entity."""
    value: str

    def as_str(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value
