"""Fixed choice lists for the connection and display settings, plus small input helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Any, Iterable, Iterator, NamedTuple

from .signals import Signal
from .simulator import RegisterType, SimulationMode


class AddressBase(Enum):
    """Whether point addresses are shown counting from zero or from one."""

    BASE0 = auto()
    BASE1 = auto()


class ByteOrder(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN = auto()


class Parity(IntEnum):
    NONE = 0
    EVEN = 2
    ODD = 3
    SPACE = 4
    MARK = 5


class FlowControl(IntEnum):
    NONE = 0
    HARDWARE = 1
    SOFTWARE = 2


class ConnectionType(Enum):
    TCP = auto()
    SERIAL = auto()


class ConnectionPort(NamedTuple):
    """The data attached to a connection choice."""

    connection_type: ConnectionType
    port_name: str


@dataclass
class _Choice:
    text: str
    data: Any


class ChoiceList:
    """An ordered list of labelled values with one current selection.

    ``current_changed`` is emitted with the current item's data whenever the
    current index changes (``None`` when nothing is selected).
    """

    def __init__(self, items: Iterable[tuple[str, Any]] = ()) -> None:
        self.current_changed = Signal()
        self._items: list[_Choice] = []
        self._current = -1
        for text, data in items:
            self.add(text, data)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return ((item.text, item.data) for item in self._items)

    @property
    def texts(self) -> list[str]:
        return [item.text for item in self._items]

    @property
    def current_index(self) -> int:
        return self._current

    @property
    def current_data(self) -> Any:
        return self._items[self._current].data if self._current >= 0 else None

    @property
    def current_text(self) -> str:
        return self._items[self._current].text if self._current >= 0 else ""

    def add(self, text: str, data: Any = None) -> None:
        """Append an item; the first item added becomes current."""
        self._items.append(_Choice(text, data))
        if self._current == -1 and len(self._items) == 1:
            self.set_current_index(0)

    def find(self, data: Any) -> int:
        """Index of the first item carrying ``data``, or -1."""
        return next((i for i, item in enumerate(self._items) if item.data == data), -1)

    def find_text(self, text: str) -> int:
        """Index of the first item labelled ``text``, or -1."""
        return next((i for i, item in enumerate(self._items) if item.text == text), -1)

    def set_current(self, data: Any) -> None:
        """Select the item carrying ``data``; clears the selection if there is none."""
        self.set_current_index(self.find(data))

    def set_current_index(self, index: int) -> None:
        if not -1 <= index < len(self._items):
            raise IndexError(f"choice index {index} out of range")
        if index != self._current:
            self._current = index
            self._on_index_changed()
            self.current_changed.emit(self.current_data)

    def _on_index_changed(self) -> None:
        """Hook for subclasses that track extra state on selection."""


class _AddressBaseChoices(ChoiceList):
    def set_current(self, data: Any) -> None:
        idx = self.find(data)
        if idx == self.current_index:
            self.current_changed.emit(self.current_data)
        elif idx != -1:
            self.set_current_index(idx)


class _ConnectionChoices(ChoiceList):
    def set_current(self, data: Any) -> None:
        idx = self.find(ConnectionPort(*data))
        if idx != -1:
            self.set_current_index(idx)

    @property
    def current_connection_type(self) -> ConnectionType | None:
        data = self.current_data
        return data.connection_type if data is not None else None

    @property
    def current_port_name(self) -> str:
        data = self.current_data
        return data.port_name if data is not None else ""


_INT_RE = re.compile(r"[+-]?\d+")


class NumericChoiceList(ChoiceList):
    """A list of integer choices that may also accept a typed value."""

    def __init__(self, editable: bool = False) -> None:
        self._editable = bool(editable)
        self._edit_text = ""
        super().__init__()

    @property
    def editable(self) -> bool:
        return self._editable

    @property
    def current_text(self) -> str:
        return self._edit_text if self._editable else super().current_text

    @property
    def current_value(self) -> int:
        """The current text as an integer, or 0 if it is not one."""
        text = self.current_text
        if not _INT_RE.fullmatch(text):
            return 0
        number = int(text)
        return number if -(2**31) <= number <= 2**31 - 1 else 0

    def add_value(self, value: int) -> None:
        self.add(str(int(value)), None)

    def set_current_value(self, value: int) -> None:
        """Select the matching item, or type the value in when editable."""
        text = str(int(value))
        idx = self.find_text(text)
        if idx != -1:
            self.set_current_index(idx)
        elif self._editable:
            self._edit_text = text

    def _on_index_changed(self) -> None:
        if self._editable:
            self._edit_text = super().current_text


def address_base_choices() -> ChoiceList:
    return _AddressBaseChoices([("0-based", AddressBase.BASE0), ("1-based", AddressBase.BASE1)])


def boolean_choices() -> ChoiceList:
    return ChoiceList([("Disable", False), ("Enable", True)])


def byte_order_choices() -> ChoiceList:
    return ChoiceList(
        [("Little-Endian", ByteOrder.LITTLE_ENDIAN), ("Big-Endian", ByteOrder.BIG_ENDIAN)]
    )


def connection_choices(ports: Iterable[str]) -> ChoiceList:
    """The TCP choice followed by a direct connection for each serial port."""
    choices = _ConnectionChoices([("Remote TCP/IP Server", ConnectionPort(ConnectionType.TCP, ""))])
    for port in ports:
        choices.add(f"Direct Connection to {port}", ConnectionPort(ConnectionType.SERIAL, port))
    return choices


def flow_control_choices() -> ChoiceList:
    return ChoiceList(
        [
            ("NO CONTROL", FlowControl.NONE),
            ("HARDWARE (RTS/CTS)", FlowControl.HARDWARE),
            ("SOFTWARE (XON/XOFF)", FlowControl.SOFTWARE),
        ]
    )


def parity_choices() -> ChoiceList:
    return ChoiceList([("ODD", Parity.ODD), ("EVEN", Parity.EVEN), ("NONE", Parity.NONE)])


def point_type_choices() -> ChoiceList:
    return ChoiceList(
        [
            ("01: COIL STATUS", RegisterType.COILS),
            ("02: INPUT STATUS", RegisterType.DISCRETE_INPUTS),
            ("03: HOLDING REGISTER", RegisterType.HOLDING_REGISTERS),
            ("04: INPUT REGISTER", RegisterType.INPUT_REGISTERS),
        ]
    )


def simulation_mode_choices(register_type: RegisterType) -> ChoiceList:
    """The simulation modes that make sense for ``register_type``."""
    choices = ChoiceList()
    if register_type in (RegisterType.COILS, RegisterType.DISCRETE_INPUTS):
        choices.add("Random", SimulationMode.RANDOM)
        choices.add("Toggle", SimulationMode.TOGGLE)
    elif register_type in (RegisterType.HOLDING_REGISTERS, RegisterType.INPUT_REGISTERS):
        choices.add("Random", SimulationMode.RANDOM)
        choices.add("Increment", SimulationMode.INCREMENT)
        choices.add("Decrement", SimulationMode.DECREMENT)
    return choices


def format_padded(value: int, maximum: int) -> str:
    """``value`` zero-padded to as many digits as ``maximum`` has."""
    width = max(1, len(str(maximum)))
    return f"{value:0{width}d}"


_OCTET = r"(?:[0-1]?[0-9]?[0-9]|2[0-4][0-9]|25[0-5])"
_IP_RE = re.compile(rf"{_OCTET}(?:\.{_OCTET}){{3}}")


def is_valid_ip_address(text: str) -> bool:
    """Whether ``text`` is a dotted-quad IPv4 address."""
    return _IP_RE.fullmatch(text) is not None