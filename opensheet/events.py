"""A minimal observer mechanism used to announce model changes."""

from __future__ import annotations

from typing import Any, Callable


class Signal:
    """A list of callbacks that are invoked, in connection order, on emit."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]) -> None:
        """Register ``callback`` to be called on every emit."""
        self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> None:
        """Remove ``callback``; raises ValueError if it was never connected."""
        try:
            self._callbacks.remove(callback)
        except ValueError:
            raise ValueError("callback is not connected to this signal") from None

    def emit(self, *args: Any) -> None:
        """Call every connected callback with ``args``."""
        for callback in list(self._callbacks):
            callback(*args)

    def __len__(self) -> int:
        return len(self._callbacks)