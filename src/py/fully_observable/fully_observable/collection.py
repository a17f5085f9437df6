import logging
import operator
from typing import Generic, Iterable, Iterator, MutableSequence, TypeVar, Union
from typing_extensions import override

from .core import Handle, INotifyFieldChanged, Listener, Publisher
from .events import (
    CollectionChangeAction,
    CollectionChangedEvent,
    ItemPropertyChangedEvent,
)

T = TypeVar("T", bound=INotifyFieldChanged)


class FullyObservableCollection(MutableSequence[T], Generic[T]):
    """Ordered collection that also re-broadcasts field changes of its items.

    Structural mutations notify ``collection_changed`` listeners with a
    :class:`CollectionChangedEvent`. While an item is held, its field changes
    are forwarded to ``item_property_changed`` listeners as an
    :class:`ItemPropertyChangedEvent`.

    Subscriptions to items are keyed by instance, so an instance held twice
    has a single subscription, and removing either occurrence drops it.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self.collection_changed = Publisher()
        self.item_property_changed = Publisher()
        self._subscriptions: dict[int, tuple[T, Handle]] = {}

        initial = list(items)
        for item in initial:
            self._check_item(item)
        self._items: list[T] = initial
        for item in self._items:
            self._observe(item)

    def subscribe(self, listener: Listener) -> Handle:
        return self.item_property_changed.subscribe(listener)

    def unsubscribe(self, handle_or_listener: Union[Handle, Listener]) -> bool:
        return self.item_property_changed.unsubscribe(handle_or_listener)

    def subscribe_collection_changed(self, listener: Listener) -> Handle:
        return self.collection_changed.subscribe(listener)

    def unsubscribe_collection_changed(
        self, handle_or_listener: Union[Handle, Listener]
    ) -> bool:
        return self.collection_changed.unsubscribe(handle_or_listener)

    @property
    def subscription_count(self) -> int:
        return len(self._subscriptions)

    def is_observing(self, item: object) -> bool:
        return id(item) in self._subscriptions

    @override
    def __len__(self) -> int:
        return len(self._items)

    @override
    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    @override
    def __getitem__(self, index: int) -> T:  # type: ignore[override]
        return self._items[self._normalize_index(index)]

    @override
    def __setitem__(self, index: int, item: T) -> None:  # type: ignore[override]
        i = self._normalize_index(index)
        self._check_item(item)

        old = self._items[i]
        self._items[i] = item
        self._unobserve(old)
        self._observe(item)

        self._on_collection_changed(
            CollectionChangedEvent(
                CollectionChangeAction.REPLACE,
                new_items=(item,),
                old_items=(old,),
                new_index=i,
                old_index=i,
            )
        )

    @override
    def __delitem__(self, index: int) -> None:  # type: ignore[override]
        i = self._normalize_index(index)

        old = self._items.pop(i)
        self._unobserve(old)

        self._on_collection_changed(
            CollectionChangedEvent(
                CollectionChangeAction.REMOVE, old_items=(old,), old_index=i
            )
        )

    @override
    def insert(self, index: int, item: T) -> None:
        i = self._normalize_index(index, allow_end=True)
        self._check_item(item)

        self._items.insert(i, item)
        self._observe(item)

        self._on_collection_changed(
            CollectionChangedEvent(
                CollectionChangeAction.INSERT, new_items=(item,), new_index=i
            )
        )

    @override
    def clear(self) -> None:
        old = tuple(self._items)
        self._items.clear()
        for item in old:
            self._unobserve(item)

        self._on_collection_changed(
            CollectionChangedEvent(CollectionChangeAction.CLEAR, old_items=old)
        )

    def move(self, old_index: int, new_index: int) -> None:
        """Move the item at ``old_index`` so that it ends up at ``new_index``."""
        src = self._normalize_index(old_index)
        dst = self._normalize_index(new_index)

        item = self._items.pop(src)
        self._items.insert(dst, item)

        self._on_collection_changed(
            CollectionChangedEvent(
                CollectionChangeAction.MOVE,
                new_items=(item,),
                old_items=(item,),
                new_index=dst,
                old_index=src,
            )
        )

    def reset(self, items: Iterable[T] = ()) -> None:
        """Replace the whole content, emitting a single reset event."""
        new = list(items)
        for item in new:
            self._check_item(item)

        old = self._items
        self._items = new
        for item in old:
            self._unobserve(item)
        for item in new:
            self._observe(item)

        self._on_collection_changed(
            CollectionChangedEvent(
                CollectionChangeAction.RESET,
                new_items=tuple(new),
                old_items=tuple(old),
            )
        )

    @override
    def reverse(self) -> None:
        # Pairwise swaps would briefly hold an instance twice and lose its
        # subscription, so reverse as a single reset.
        self.reset(reversed(self._items))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def _on_collection_changed(self, event: CollectionChangedEvent[T]) -> None:
        self.collection_changed.notify(event)

    def _on_item_property_changed(self, item: T, field_name: str) -> None:
        self.item_property_changed.notify(ItemPropertyChangedEvent(item, field_name))

    def _child_field_changed(self, sender: object, field_name: str) -> None:
        self._on_item_property_changed(sender, field_name)  # type: ignore[arg-type]

    def _observe(self, item: T) -> None:
        key = id(item)
        if key in self._subscriptions:
            return
        handle = item.subscribe(self._child_field_changed)
        self._subscriptions[key] = (item, handle)
        logging.getLogger(__name__).debug("Observing %r (handle %d).", item, handle)

    def _unobserve(self, item: T) -> None:
        entry = self._subscriptions.pop(id(item), None)
        if entry is None:
            return
        _, handle = entry
        item.unsubscribe(handle)
        logging.getLogger(__name__).debug("Stopped observing %r.", item)

    def _normalize_index(self, index: int, allow_end: bool = False) -> int:
        if isinstance(index, slice):
            raise TypeError(f"{type(self).__name__} does not support slicing")
        i = operator.index(index)
        size = len(self._items)
        if i < 0:
            i += size
        upper = size if allow_end else size - 1
        if not 0 <= i <= upper:
            raise IndexError(f"{type(self).__name__} index out of range: {index}")
        return i

    @staticmethod
    def _check_item(item: object) -> None:
        if not isinstance(item, INotifyFieldChanged):
            raise TypeError(
                f"items must implement INotifyFieldChanged, got {type(item).__name__}"
            )
