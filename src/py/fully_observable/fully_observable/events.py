from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class CollectionChangeAction(Enum):
    INSERT = "insert"
    REMOVE = "remove"
    REPLACE = "replace"
    CLEAR = "clear"
    MOVE = "move"
    RESET = "reset"


@dataclass(frozen=True)
class CollectionChangedEvent(Generic[T]):
    """Describes one structural mutation of a collection.

    ``new_items`` holds the items that entered (insert, replace, move, reset),
    ``old_items`` the ones that left (remove, replace, move, clear, reset).
    Indices are ``-1`` when the action has no position.
    """

    action: CollectionChangeAction
    new_items: tuple[T, ...] = ()
    old_items: tuple[T, ...] = ()
    new_index: int = -1
    old_index: int = -1


@dataclass(frozen=True)
class ItemPropertyChangedEvent(Generic[T]):
    """A field of an item held by a collection changed."""

    item: T
    field_name: str
