"""Periodic value simulation for Modbus registers and coils."""

from __future__ import annotations

import math
import random
import struct
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any, NamedTuple

from .signals import Signal


class RegisterType(IntEnum):
    """Modbus data tables."""

    INVALID = 0
    DISCRETE_INPUTS = 1
    COILS = 2
    INPUT_REGISTERS = 3
    HOLDING_REGISTERS = 4


class DataDisplayMode(Enum):
    """How register contents are interpreted."""

    BINARY = auto()
    UINT16 = auto()
    INT16 = auto()
    HEX = auto()
    FLOATING_PT = auto()
    SWAPPED_FP = auto()
    DBL_FLOAT = auto()
    SWAPPED_DBL = auto()
    INT32 = auto()
    SWAPPED_INT32 = auto()
    UINT32 = auto()
    SWAPPED_UINT32 = auto()
    INT64 = auto()
    SWAPPED_INT64 = auto()
    UINT64 = auto()
    SWAPPED_UINT64 = auto()


class SimulationMode(Enum):
    """Kinds of simulation."""

    OFF = auto()
    RANDOM = auto()
    INCREMENT = auto()
    DECREMENT = auto()
    TOGGLE = auto()


@dataclass(frozen=True)
class ValueRange:
    """An inclusive numeric range."""

    lower: float = 0.0
    upper: float = 65535.0


@dataclass
class RandomSimulationParams:
    range: ValueRange = field(default_factory=ValueRange)


@dataclass
class IncrementSimulationParams:
    step: float = 1.0
    range: ValueRange = field(default_factory=ValueRange)


@dataclass
class DecrementSimulationParams:
    step: float = 1.0
    range: ValueRange = field(default_factory=ValueRange)


@dataclass
class ModbusSimulationParams:
    """Settings for one simulated point; ``interval`` is in timer ticks."""

    mode: SimulationMode = SimulationMode.OFF
    interval: int = 1
    random_params: RandomSimulationParams = field(default_factory=RandomSimulationParams)
    increment_params: IncrementSimulationParams = field(default_factory=IncrementSimulationParams)
    decrement_params: DecrementSimulationParams = field(default_factory=DecrementSimulationParams)

    def __post_init__(self) -> None:
        if self.interval < 1:
            raise ValueError("simulation interval must be at least 1")


@dataclass(frozen=True)
class _Kind:
    """A fixed-width numeric type with C-like conversion rules."""

    bits: int
    signed: bool = False
    floating: bool = False

    def cast(self, x: Any) -> int | float:
        if self.floating:
            x = float(x)
            if self.bits == 64 or not math.isfinite(x):
                return x
            try:
                return struct.unpack("<f", struct.pack("<f", x))[0]
            except OverflowError:
                return math.copysign(math.inf, x)
        if isinstance(x, float):
            if not math.isfinite(x):
                return 0
            x = math.trunc(x)
        x = int(x) & ((1 << self.bits) - 1)
        if self.signed and x >= 1 << (self.bits - 1):
            x -= 1 << self.bits
        return x

    def read(self, value: Any) -> int | float:
        """Convert a stored value the way a variant conversion would."""
        if value is None:
            return self.cast(0)
        if isinstance(value, bool):
            return self.cast(int(value))
        if isinstance(value, float) and not self.floating:
            if not math.isfinite(value):
                return 0
            rounded = math.floor(abs(value) + 0.5)
            return self.cast(rounded if value >= 0 else -rounded)
        return self.cast(value)


_INT16 = _Kind(16, signed=True)
_UINT16 = _Kind(16)
_INT32 = _Kind(32, signed=True)
_UINT32 = _Kind(32)
_INT64 = _Kind(64, signed=True)
_UINT64 = _Kind(64)
_FLOAT32 = _Kind(32, floating=True)
_FLOAT64 = _Kind(64, floating=True)

_M = DataDisplayMode

_STEP_KINDS: dict[DataDisplayMode, _Kind] = {
    _M.INT16: _INT16,
    _M.BINARY: _UINT16,
    _M.UINT16: _UINT16,
    _M.HEX: _UINT16,
    _M.INT32: _INT32,
    _M.SWAPPED_INT32: _INT32,
    _M.UINT32: _UINT32,
    _M.SWAPPED_UINT32: _UINT32,
    _M.FLOATING_PT: _FLOAT32,
    _M.SWAPPED_FP: _FLOAT32,
    _M.DBL_FLOAT: _FLOAT64,
    _M.SWAPPED_DBL: _FLOAT64,
    _M.INT64: _INT64,
    _M.SWAPPED_INT64: _INT64,
    _M.UINT64: _UINT64,
    _M.SWAPPED_UINT64: _UINT64,
}

# Modes whose random values span the whole range including the upper bound.
_SIXTEEN_BIT_MODES = frozenset({_M.BINARY, _M.INT16, _M.UINT16, _M.HEX})

_BIT_TYPES = frozenset({RegisterType.COILS, RegisterType.DISCRETE_INPUTS})
_WORD_TYPES = frozenset({RegisterType.HOLDING_REGISTERS, RegisterType.INPUT_REGISTERS})


class _Key(NamedTuple):
    register_type: RegisterType
    address: int
    device_id: int


@dataclass
class _Simulation:
    mode: DataDisplayMode
    params: ModbusSimulationParams
    current_value: Any = None


class DataSimulator:
    """Keeps a set of simulated points and updates them on every timer tick.

    The owner drives the simulator by calling :meth:`tick` once every
    ``INTERVAL_MS`` milliseconds while :attr:`running` is true.
    """

    INTERVAL_MS = 1000

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._elapsed = 0
        self._running = False
        self._simulations: dict[_Key, _Simulation] = {}
        self.simulation_started = Signal()
        self.simulation_stopped = Signal()
        self.data_simulated = Signal()

    def __enter__(self) -> DataSimulator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed(self) -> int:
        return self._elapsed

    def start_simulation(
        self,
        mode: DataDisplayMode,
        register_type: RegisterType,
        address: int,
        device_id: int,
        params: ModbusSimulationParams,
    ) -> None:
        """Register (or replace) a simulation and make sure the timer runs."""
        value: Any = None
        if params.mode is SimulationMode.INCREMENT:
            value = params.increment_params.range.lower
            self.data_simulated.emit(mode, register_type, address, device_id, value)
        elif params.mode is SimulationMode.DECREMENT:
            value = params.decrement_params.range.upper
            self.data_simulated.emit(mode, register_type, address, device_id, value)

        key = _Key(register_type, address, device_id)
        self._simulations[key] = _Simulation(mode, params, value)
        self.resume_simulations()
        self.simulation_started.emit(register_type, address, device_id)

    def stop_simulation(self, register_type: RegisterType, address: int, device_id: int) -> None:
        self._simulations.pop(_Key(register_type, address, device_id), None)
        self.simulation_stopped.emit(register_type, address, device_id)

    def stop_simulations(self) -> None:
        self.pause_simulations()
        self._simulations.clear()

    def pause_simulations(self) -> None:
        self._running = False

    def resume_simulations(self) -> None:
        self._running = True

    def restart_simulations(self) -> None:
        """Start every registered simulation again from its initial value."""
        self.pause_simulations()
        for key in sorted(self._simulations):
            entry = self._simulations[key]
            self.start_simulation(entry.mode, key.register_type, key.address, key.device_id, entry.params)

    def simulation_params(
        self, register_type: RegisterType, address: int, device_id: int
    ) -> ModbusSimulationParams:
        entry = self._simulations.get(_Key(register_type, address, device_id))
        return entry.params if entry is not None else ModbusSimulationParams()

    def simulation_map(self, device_id: int) -> dict[tuple[RegisterType, int], ModbusSimulationParams]:
        """Parameters of one device's simulations keyed by (register type, address)."""
        return {
            (key.register_type, key.address): self._simulations[key].params
            for key in sorted(self._simulations)
            if key.device_id == device_id
        }

    def tick(self) -> None:
        """Advance the simulation by one timer interval; no-op while paused."""
        if not self._running:
            return
        self._elapsed += 1
        for key in sorted(self._simulations):
            entry = self._simulations.get(key)
            if entry is None:
                continue
            params = entry.params
            if self._elapsed % params.interval:
                continue
            if params.mode is SimulationMode.RANDOM:
                self._random(key, entry)
            elif params.mode is SimulationMode.INCREMENT:
                self._step(key, entry, params.increment_params, increment=True)
            elif params.mode is SimulationMode.DECREMENT:
                self._step(key, entry, params.decrement_params, increment=False)
            elif params.mode is SimulationMode.TOGGLE:
                self._toggle(key, entry)

    def close(self) -> None:
        self.stop_simulations()

    def _generate(self, kind: _Kind, lower: float, upper: float) -> int | float:
        return kind.cast(lower + self._rng.random() * (upper - lower))

    def _random(self, key: _Key, entry: _Simulation) -> None:
        rng = entry.params.random_params.range
        mode = entry.mode
        if key.register_type in _BIT_TYPES:
            entry.current_value = self._generate(_UINT16, rng.lower, rng.upper + 1)
        elif key.register_type in _WORD_TYPES:
            if mode in _SIXTEEN_BIT_MODES:
                entry.current_value = self._generate(_UINT16, rng.lower, rng.upper + 1)
            else:
                entry.current_value = self._generate(_STEP_KINDS[mode], rng.lower, rng.upper)
        self._emit_current(key, entry)

    def _step(
        self,
        key: _Key,
        entry: _Simulation,
        params: IncrementSimulationParams | DecrementSimulationParams,
        *,
        increment: bool,
    ) -> None:
        kind = _STEP_KINDS[entry.mode]
        value = kind.read(entry.current_value)
        step = kind.cast(params.step)
        value = kind.cast(value + step if increment else value - step)
        rng = params.range
        if value > rng.upper or value < rng.lower:
            value = kind.cast(rng.lower if increment else rng.upper)
        entry.current_value = value
        self._emit_current(key, entry)

    def _toggle(self, key: _Key, entry: _Simulation) -> None:
        entry.current_value = not bool(entry.current_value)
        self.data_simulated.emit(
            DataDisplayMode.BINARY, key.register_type, key.address, key.device_id, entry.current_value
        )

    def _emit_current(self, key: _Key, entry: _Simulation) -> None:
        if entry.current_value is not None:
            self.data_simulated.emit(
                entry.mode, key.register_type, key.address, key.device_id, entry.current_value
            )