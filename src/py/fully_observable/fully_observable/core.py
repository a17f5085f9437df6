from typing import Callable, Optional, Union
from typing_extensions import override
import logging

Listener = Callable[..., None]
Handle = int


class IPublisher:
    def subscribe(self, listener: Listener) -> Handle:
        """
        Register a listener and return its subscription handle.
        """
        raise NotImplementedError

    def unsubscribe(self, handle_or_listener: Union[Handle, Listener]) -> bool:
        """
        Remove one registration, by handle or by callback.
        """
        raise NotImplementedError

    def notify(self, *args: object) -> None:
        """
        Invoke all listeners with the given arguments.
        """
        raise NotImplementedError


class INotifyFieldChanged:
    """Capability of an object whose field mutations can be observed.

    Listeners are called as ``listener(item, field_name)``.
    """

    def subscribe(self, listener: Callable[[object, str], None]) -> Handle:
        raise NotImplementedError

    def unsubscribe(
        self, handle_or_listener: Union[Handle, Callable[[object, str], None]]
    ) -> bool:
        raise NotImplementedError


class Publisher(IPublisher):
    def __init__(self) -> None:
        self._listeners: dict[Handle, Listener] = {}
        self._next_handle: Handle = 0

    def __len__(self) -> int:
        return len(self._listeners)

    @override
    def subscribe(self, listener: Listener) -> Handle:
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {listener!r}")
        handle = self._next_handle
        self._next_handle += 1
        self._listeners[handle] = listener
        return handle

    @override
    def unsubscribe(self, handle_or_listener: Union[Handle, Listener]) -> bool:
        if isinstance(handle_or_listener, int):
            return self._listeners.pop(handle_or_listener, None) is not None

        for handle, listener in self._listeners.items():
            if listener == handle_or_listener:
                del self._listeners[handle]
                return True
        return False

    def clear(self) -> None:
        self._listeners.clear()

    @override
    def notify(self, *args: object) -> None:
        """
        Call every listener in subscription order.

        Registrations made or dropped by a listener take effect on the next
        notify. A failing listener does not stop the others; the first
        exception is re-raised once all of them ran.
        """
        first_error: Optional[Exception] = None
        for listener in list(self._listeners.values()):
            try:
                listener(*args)
            except Exception as e:
                logging.getLogger(__name__).exception("Listener %r failed.", listener)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
