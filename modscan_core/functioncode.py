"""Selection and free entry of a Modbus function code."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from .signals import Signal

INVALID_FUNCTION_CODE = 0x00
_UINT32_MAX = 0xFFFFFFFF
_DEC_RE = re.compile(r"\+?[0-9]+")
_HEX_RE = re.compile(r"(?:0[xX])?([0-9a-fA-F]+)")


class FunctionCodeInputMode(IntEnum):
    DEC = 0
    HEX = 1


@dataclass
class _Item:
    code: int
    name: str
    text: str


class FunctionCodeSelector:
    """A list of known function codes that may also accept a typed code."""

    def __init__(self, editable: bool = False) -> None:
        self.function_code_changed = Signal()
        self._editable = bool(editable)
        self._items: list[_Item] = []
        self._current_index = -1
        self._current_text = ""
        self._current_func = INVALID_FUNCTION_CODE
        self._has_focus = False
        self._mode = FunctionCodeInputMode.DEC
        self.set_input_mode(FunctionCodeInputMode.DEC)

    @property
    def editable(self) -> bool:
        return self._editable

    @property
    def input_mode(self) -> FunctionCodeInputMode:
        return self._mode

    @property
    def current_function_code(self) -> int:
        return self._current_func

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_text(self) -> str:
        return self._current_text

    @property
    def items(self) -> list[str]:
        return [item.text for item in self._items]

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    def __len__(self) -> int:
        return len(self._items)

    def add_item(self, code: int, name: str) -> None:
        self._items.append(_Item(code, name, f"{self.format_code(code)}: {name}"))
        if self._current_index == -1 and len(self._items) == 1:
            self.set_current_index(0)

    def add_items(self, items: Iterable[tuple[int, str]]) -> None:
        for code, name in items:
            self.add_item(code, name)

    def set_current_function_code(self, code: int) -> None:
        self._current_func = code
        idx = self._find_code(code)
        if idx != -1:
            self.set_current_index(idx)
        else:
            self.set_current_text(self.format_code(code))

    def set_input_mode(self, mode: FunctionCodeInputMode) -> None:
        """Change the notation; items are relabelled only when editable."""
        self._mode = FunctionCodeInputMode(mode)
        if not self._editable:
            return
        for item in self._items:
            item.text = f"{self.format_code(item.code)}: {item.name}"
        if self._current_index >= 0:
            self._current_text = self._items[self._current_index].text
        self._update()

    def format_code(self, code: int) -> str:
        if self._mode is FunctionCodeInputMode.DEC:
            return str(code).rjust(2, "0")
        prefix = "" if self._editable and self._has_focus else "0x"
        return prefix + format(code, "X").rjust(2, "0")

    def set_current_text(self, text: str) -> None:
        if self._editable:
            if text != self._current_text:
                self._current_text = text
                self._on_current_text_changed(text)
        else:
            idx = self._find_text(text)
            if idx != -1:
                self.set_current_index(idx)

    def set_current_index(self, index: int) -> None:
        if not -1 <= index < len(self._items):
            raise IndexError(f"item index {index} out of range")
        new_text = self._items[index].text if index >= 0 else ""
        changed = index != self._current_index
        self._current_index = index
        if self._editable:
            if self._current_text != new_text:
                self._current_text = new_text
                self._on_current_text_changed(new_text)
        elif changed:
            self._current_text = new_text
        if changed:
            self._on_current_index_changed(index)
            if not self._editable:
                self._on_current_text_changed(new_text)

    def focus_in(self) -> None:
        self._has_focus = True
        if self._editable:
            self.set_current_text(self.format_code(self._current_func))

    def focus_out(self) -> None:
        self._has_focus = False
        self._update()

    def _find_code(self, code: int) -> int:
        return next((i for i, item in enumerate(self._items) if item.code == code), -1)

    def _find_text(self, text: str) -> int:
        return next((i for i, item in enumerate(self._items) if item.text == text), -1)

    def _update(self) -> None:
        idx = self._find_code(self._current_func)
        if idx != -1:
            self.set_current_index(idx)
        else:
            self.set_current_text(self.format_code(self._current_func))

    def _parse(self, text: str) -> int | None:
        s = text.strip()
        if self._mode is FunctionCodeInputMode.DEC:
            if not _DEC_RE.fullmatch(s):
                return None
            number = int(s)
        else:
            match = _HEX_RE.fullmatch(s)
            if match is None:
                return None
            number = int(match.group(1), 16)
        return number & 0xFF if number <= _UINT32_MAX else None

    def _on_current_index_changed(self, index: int) -> None:
        if index >= 0:
            self._current_func = self._items[index].code
            self.function_code_changed.emit(self._current_func)

    def _on_current_text_changed(self, text: str) -> None:
        idx = self._find_text(text)
        if idx != -1:
            self._current_func = self._items[idx].code
            return
        parsed = self._parse(text)
        self._current_func = parsed if parsed is not None else INVALID_FUNCTION_CODE