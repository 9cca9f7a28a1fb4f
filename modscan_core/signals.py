"""A minimal observer primitive used to report events to listeners."""

from __future__ import annotations

from typing import Any, Callable


class Signal:
    """A list of callables that are invoked, in connection order, on emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, slot: object) -> bool:
        return slot in self._slots

    def connect(self, slot: Callable[..., Any]) -> Callable[..., Any]:
        """Register ``slot``; returns it so the method can serve as a decorator."""
        if not callable(slot):
            raise TypeError("slot must be callable")
        self._slots.append(slot)
        return slot

    def disconnect(self, slot: Callable[..., Any]) -> None:
        """Remove one registration of ``slot``; raise ValueError if absent."""
        try:
            self._slots.remove(slot)
        except ValueError:
            raise ValueError("slot is not connected") from None

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        for slot in list(self._slots):
            slot(*args)