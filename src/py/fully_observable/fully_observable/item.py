from typing import Callable, Union
from typing_extensions import override

from .core import Handle, INotifyFieldChanged, Publisher

FieldListener = Callable[[object, str], None]


class ObservableItem(INotifyFieldChanged):
    """Base for records whose field setters notify listeners.

    Subclasses call ``_notify_field_changed`` with the field's name after
    assigning it. There is no equality check: every assignment notifies.
    """

    def __init__(self) -> None:
        self._field_changed = Publisher()

    @property
    def listener_count(self) -> int:
        return len(self._field_changed)

    @override
    def subscribe(self, listener: FieldListener) -> Handle:
        return self._field_changed.subscribe(listener)

    @override
    def unsubscribe(self, handle_or_listener: Union[Handle, FieldListener]) -> bool:
        return self._field_changed.unsubscribe(handle_or_listener)

    def _notify_field_changed(self, field_name: str) -> None:
        self._field_changed.notify(self, field_name)


class Entry(ObservableItem):
    ID = "Id"
    NAME = "Name"

    def __init__(self, id: int = 0, name: str = "") -> None:
        super().__init__()
        self.id = id
        self.name = name

    @property
    def id(self) -> int:
        return self._id

    @id.setter
    def id(self, value: int) -> None:
        self._id = value
        self._notify_field_changed(Entry.ID)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value
        self._notify_field_changed(Entry.NAME)

    def __repr__(self) -> str:
        return f"Entry(id={self._id!r}, name={self._name!r})"
