"""Observable collection that forwards change notifications of its items.

Listeners are called synchronously, in subscription order, on the caller's
stack. Nothing here is thread-safe.
"""

from .collection import FullyObservableCollection
from .core import INotifyFieldChanged, IPublisher, Publisher
from .events import (
    CollectionChangeAction,
    CollectionChangedEvent,
    ItemPropertyChangedEvent,
)
from .item import Entry, ObservableItem

__all__ = [
    "CollectionChangeAction",
    "CollectionChangedEvent",
    "Entry",
    "FullyObservableCollection",
    "INotifyFieldChanged",
    "IPublisher",
    "ItemPropertyChangedEvent",
    "ObservableItem",
    "Publisher",
]
