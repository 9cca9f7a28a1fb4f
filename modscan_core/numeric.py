"""Numeric text entry: parsing, clamping and formatting of a single value."""

from __future__ import annotations

import math
import re
import struct
import sys
from enum import IntEnum
from typing import Any, Callable

from .signals import Signal

FLT_MAX = 3.4028234663852886e38
DBL_MAX = sys.float_info.max
_DEFAULT_MAX_LENGTH = 32767


class NumericInputMode(IntEnum):
    """The numeric type an editor accepts."""

    INT32 = 0
    UINT32 = 1
    HEX = 2
    FLOAT = 3
    DOUBLE = 4
    INT64 = 5
    UINT64 = 6


def _to_int(value: Any, bits: int, signed: bool) -> int:
    """Convert like a variant-to-integer conversion: round floats, wrap to width."""
    if value is None:
        n = 0
    elif isinstance(value, float):
        if not math.isfinite(value):
            return 0
        rounded = math.floor(abs(value) + 0.5)
        n = rounded if value >= 0 else -rounded
    else:
        n = int(value)
    n &= (1 << bits) - 1
    if signed and n >= 1 << (bits - 1):
        n -= 1 << bits
    return n


def _to_float32(value: Any) -> float:
    x = 0.0 if value is None else float(value)
    if not math.isfinite(x):
        return x
    try:
        return struct.unpack("<f", struct.pack("<f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def _to_double(value: Any) -> float:
    return 0.0 if value is None else float(value)


_CONVERTERS: dict[NumericInputMode, Callable[[Any], int | float]] = {
    NumericInputMode.INT32: lambda v: _to_int(v, 32, True),
    NumericInputMode.UINT32: lambda v: _to_int(v, 32, False),
    NumericInputMode.HEX: lambda v: _to_int(v, 32, False),
    NumericInputMode.FLOAT: _to_float32,
    NumericInputMode.DOUBLE: _to_double,
    NumericInputMode.INT64: lambda v: _to_int(v, 64, True),
    NumericInputMode.UINT64: lambda v: _to_int(v, 64, False),
}

_DEFAULT_RANGES: dict[NumericInputMode, tuple[int | float, int | float]] = {
    NumericInputMode.INT32: (-(2**31), 2**31 - 1),
    NumericInputMode.HEX: (-(2**31), 2**31 - 1),
    NumericInputMode.UINT32: (0, 2**32 - 1),
    NumericInputMode.FLOAT: (-FLT_MAX, FLT_MAX),
    NumericInputMode.DOUBLE: (-DBL_MAX, DBL_MAX),
    NumericInputMode.INT64: (-(2**63), 2**63 - 1),
    NumericInputMode.UINT64: (0, 2**64 - 1),
}

_DEC_RE = re.compile(r"[+-]?\d+")
_UDEC_RE = re.compile(r"\+?\d+")
_HEX_RE = re.compile(r"(?:0[xX])?[0-9a-fA-F]+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _parse_int(text: str, bits: int, signed: bool) -> int | None:
    s = text.strip()
    if not (_DEC_RE if signed else _UDEC_RE).fullmatch(s):
        return None
    n = int(s)
    lo, hi = ((-(1 << (bits - 1)), (1 << (bits - 1)) - 1) if signed else (0, (1 << bits) - 1))
    return n if lo <= n <= hi else None


def _parse_hex(text: str) -> int | None:
    s = text.strip()
    if not _HEX_RE.fullmatch(s):
        return None
    n = int(s, 16)
    return n if n <= 2**32 - 1 else None


def _parse_float(text: str, single: bool) -> float | None:
    s = text.strip()
    if not _FLOAT_RE.fullmatch(s):
        return None
    x = float(s)
    if single:
        x = _to_float32(x)
    return x if math.isfinite(x) else None


_PARSERS: dict[NumericInputMode, Callable[[str], int | float | None]] = {
    NumericInputMode.INT32: lambda t: _parse_int(t, 32, True),
    NumericInputMode.UINT32: lambda t: _parse_int(t, 32, False),
    NumericInputMode.HEX: _parse_hex,
    NumericInputMode.FLOAT: lambda t: _parse_float(t, True),
    NumericInputMode.DOUBLE: lambda t: _parse_float(t, False),
    NumericInputMode.INT64: lambda t: _parse_int(t, 64, True),
    NumericInputMode.UINT64: lambda t: _parse_int(t, 64, False),
}


def _clamp(lo: Any, value: Any, hi: Any) -> Any:
    return max(lo, min(value, hi))


class NumericEditor:
    """The state of a one-line numeric entry field.

    The text and the value are kept in step: text changes update the value,
    and setting a value (or finishing an edit) rewrites the text in the
    canonical form for the current mode.
    """

    def __init__(self, mode: NumericInputMode = NumericInputMode.INT32) -> None:
        self.value_changed = Signal()
        self.range_changed = Signal()
        self._text = ""
        self._value: int | float | None = None
        self._minimum: int | float | None = None
        self._maximum: int | float | None = None
        self._mode = NumericInputMode(mode)
        self._padding_zeroes = False
        self._padding_width = 0
        self._max_length = _DEFAULT_MAX_LENGTH
        self._has_focus = False
        self._blocked = False
        self.range_changed.connect(self._on_range_changed)
        self.set_input_mode(mode)
        self.set_value(0)

    @property
    def value(self) -> int | float | None:
        return self._value

    @property
    def text(self) -> str:
        return self._text

    @property
    def input_mode(self) -> NumericInputMode:
        return self._mode

    @property
    def padding_zeroes(self) -> bool:
        return self._padding_zeroes

    @property
    def padding_width(self) -> int:
        return self._padding_width

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def range(self) -> tuple[Any, Any]:
        return self._minimum, self._maximum

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    def set_value(self, value: Any) -> None:
        """Clamp ``value`` into range, store it and show it."""
        self._internal_set_value(value)

    def set_input_range(self, bottom: Any, top: Any) -> None:
        self._minimum = bottom
        self._maximum = top
        self.range_changed.emit(self._minimum, self._maximum)

    def set_input_mode(self, mode: NumericInputMode) -> None:
        """Switch the numeric type; a range is only defaulted if none is set."""
        self._mode = NumericInputMode(mode)
        if self._minimum is None or self._maximum is None:
            self._minimum, self._maximum = _DEFAULT_RANGES[self._mode]
        self.range_changed.emit(self._minimum, self._maximum)

    def set_padding_zeroes(self, on: bool) -> None:
        self._padding_zeroes = bool(on)

    def set_text(self, text: str) -> None:
        """Replace the text, then normalise it into a value."""
        self._set_line_text(text)
        self._update_value()

    def type_text(self, text: str) -> None:
        """Replace the text as a user edit would, without normalising it."""
        self._set_line_text(text)

    def focus_in(self) -> None:
        self._has_focus = True
        self._update_value()

    def focus_out(self) -> None:
        self._has_focus = False
        self._update_value()

    def editing_finished(self) -> None:
        self._update_value()

    def _set_line_text(self, text: str) -> None:
        text = text[: self._max_length]
        if text != self._text:
            self._text = text
            if not self._blocked:
                self._on_text_changed(text)

    def _set_max_length(self, length: int) -> None:
        self._max_length = length
        if len(self._text) > length:
            self._set_line_text(self._text)

    def _bounds(self) -> tuple[Any, Any]:
        conv = _CONVERTERS[self._mode]
        if self._mode is NumericInputMode.HEX:
            lo = conv(self._minimum) if _to_int(self._minimum, 32, True) > 0 else 0
        else:
            lo = conv(self._minimum)
        return lo, conv(self._maximum)

    def _format(self, value: Any) -> str:
        mode = self._mode
        if mode is NumericInputMode.HEX:
            prefix = "" if self._has_focus else "0x"
            digits = format(value, "X")
            if self._padding_zeroes:
                digits = digits.zfill(self._padding_width)
            return prefix + digits
        if mode is NumericInputMode.FLOAT:
            return f"{value:g}"
        if mode is NumericInputMode.DOUBLE:
            return f"{_to_float32(value):g}"
        text = str(value)
        return text.zfill(self._padding_width) if self._padding_zeroes else text

    def _internal_set_value(self, value: Any) -> None:
        lo, hi = self._bounds()
        value = _clamp(lo, _CONVERTERS[self._mode](value), hi)
        text = self._format(value)
        if text != self._text:
            self._set_line_text(text)
        if value != self._value:
            self._value = value
            if not self._blocked:
                self.value_changed.emit(self._value)

    def _update_value(self) -> None:
        parsed = _PARSERS[self._mode](self._text)
        self._internal_set_value(parsed if parsed is not None else self._value)

    def _on_text_changed(self, text: str) -> None:
        parsed = _PARSERS[self._mode](text)
        if parsed is None:
            return
        lo, hi = self._bounds()
        value = _clamp(lo, parsed, hi)
        if value != self._value:
            self._value = value
            if not self._blocked:
                self.value_changed.emit(self._value)

    def _on_range_changed(self, bottom: Any, top: Any) -> None:
        self._blocked = True
        try:
            mode = self._mode
            if mode in (NumericInputMode.INT32, NumericInputMode.INT64):
                bits = 32 if mode is NumericInputMode.INT32 else 64
                nums = len(str(_to_int(top, bits, True)))
                self._padding_width = max(1, nums)
                self._set_max_length(max(2, nums + 1))
            elif mode in (NumericInputMode.UINT32, NumericInputMode.UINT64):
                bits = 32 if mode is NumericInputMode.UINT32 else 64
                nums = len(str(_to_int(top, bits, False)))
                self._padding_width = max(1, nums)
                self._set_max_length(max(1, nums))
            elif mode is NumericInputMode.HEX:
                nums = len(format(_to_int(top, 32, False), "x"))
                self._padding_width = max(1, nums)
                self._set_max_length(max(1, nums + 2))
            else:
                self._set_max_length(_DEFAULT_MAX_LENGTH)
            self._internal_set_value(self._value)
        finally:
            self._blocked = False