"""Editing state for a separator-delimited list of byte values."""

from __future__ import annotations

import re
from enum import IntEnum

from .signals import Signal

_UINT32_MAX = 0xFFFFFFFF
_DEC_NUMBER = re.compile(r"\+?[0-9]+")
_HEX_NUMBER = re.compile(r"(?:0[xX])?([0-9a-fA-F]+)")


class ByteInputMode(IntEnum):
    """How the byte values are written."""

    DEC = 0
    HEX = 1


def split_by_separator(text: str, sep: str) -> str:
    """Group ``text`` into pairs of characters joined by ``sep``.

    A trailing unpaired character is dropped.
    """
    return sep.join(text[i : i + 2] for i in range(0, len(text) - 1, 2))


def _parse_byte(part: str, mode: ByteInputMode) -> int | None:
    s = part.strip()
    if mode is ByteInputMode.DEC:
        if not _DEC_NUMBER.fullmatch(s):
            return None
        number = int(s)
    else:
        match = _HEX_NUMBER.fullmatch(s)
        if match is None:
            return None
        number = int(match.group(1), 16)
    if number > _UINT32_MAX:
        return None
    return number & 0xFF


class ByteListEditor:
    """The text and byte value of a byte-list entry field, kept in step."""

    def __init__(self, mode: ByteInputMode = ByteInputMode.DEC) -> None:
        self.value_changed = Signal()
        self._separator = " "
        self._text = ""
        self._value = b""
        self._mode = ByteInputMode(mode)
        self._pattern = self._build_pattern()
        self.set_input_mode(mode)

    @property
    def value(self) -> bytes:
        return self._value

    @property
    def text(self) -> str:
        return self._text

    @property
    def input_mode(self) -> ByteInputMode:
        return self._mode

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def is_empty(self) -> bool:
        return not self._text

    def set_value(self, value: bytes) -> None:
        """Show ``value`` in the current notation and store it."""
        value = bytes(value)
        text = self._format(value)
        if text != self._text:
            self._set_plain_text(text)
        if value != self._value:
            self._value = value
            self.value_changed.emit(self._value)

    def set_input_mode(self, mode: ByteInputMode) -> None:
        """Switch between decimal and hexadecimal notation."""
        self._mode = ByteInputMode(mode)
        self._pattern = self._build_pattern()
        self.set_value(self._value)

    def set_text(self, text: str) -> None:
        """Replace the text, then normalise it into a value."""
        self._set_plain_text(text)
        self._update_value()

    def accepts(self, text: str) -> bool:
        """Whether ``text`` as a whole is valid input for the current mode."""
        return self._pattern.fullmatch(text) is not None

    def can_insert(self, text: str) -> bool:
        """Whether pasted ``text`` would be accepted."""
        return self.accepts(text.replace("0x", "").strip())

    def insert(self, text: str) -> bool:
        """Paste ``text`` at the end of the field; return whether it was taken."""
        cleaned = text.replace("0x", "").strip()
        if len(cleaned) > 2 and self._separator not in cleaned:
            cleaned = split_by_separator(cleaned, self._separator)
        if not self.accepts(cleaned):
            return False
        self._set_plain_text(self._text + cleaned)
        self._update_value()
        return True

    def focus_out(self) -> None:
        self._update_value()

    def _build_pattern(self) -> re.Pattern[str]:
        sep = r"\s" if self._separator == " " else re.escape(self._separator)
        digits = "0-9" if self._mode is ByteInputMode.DEC else "0-9a-fA-F"
        return re.compile(rf"(?:[{digits}]{{1,2}}[{sep}]?)*")

    def _format(self, value: bytes) -> str:
        if self._mode is ByteInputMode.DEC:
            return self._separator.join(str(b) for b in value)
        return self._separator.join(f"{b:02X}" for b in value)

    def _parse(self, text: str) -> bytes:
        parsed = (_parse_byte(part, self._mode) for part in text.split(self._separator))
        return bytes(b for b in parsed if b is not None)

    def _set_plain_text(self, text: str) -> None:
        self._text = text
        self._on_text_changed()

    def _on_text_changed(self) -> None:
        value = self._parse(self._text)
        if value != self._value:
            self._value = value
            self.value_changed.emit(self._value)

    def _update_value(self) -> None:
        value = self._parse(self._text)
        self.set_value(value if value else self._value)