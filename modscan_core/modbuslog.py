"""A bounded log of Modbus traffic entries."""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator

from .signals import Signal

DEFAULT_ROW_LIMIT = 30


class MessageLog:
    """Keeps the most recent entries, discarding the oldest beyond the row limit.

    ``rows_inserted`` is emitted with the row index of each new entry and
    ``reset`` after the log is cleared.
    """

    def __init__(self, row_limit: int = DEFAULT_ROW_LIMIT) -> None:
        self.rows_inserted = Signal()
        self.reset = Signal()
        self._items: deque[Any] = deque()
        self._row_limit = max(1, row_limit)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, row: int) -> Any:
        return self._items[row]

    @property
    def row_limit(self) -> int:
        return self._row_limit

    def append(self, item: Any) -> None:
        """Add ``item``; ``None`` is ignored. Old entries make room first."""
        if item is None:
            return
        while len(self._items) >= self._row_limit:
            self._items.popleft()
        self._items.append(item)
        self.rows_inserted.emit(len(self._items) - 1)

    def clear(self) -> None:
        self._items.clear()
        self.reset.emit()

    def set_row_limit(self, value: int) -> None:
        """Set the limit (at least 1); it takes effect on the next append."""
        self._row_limit = max(1, value)

    def item_at(self, row: int) -> Any:
        """The entry at ``row``, or ``None`` if there is none."""
        return self._items[row] if 0 <= row < len(self._items) else None