# modscan-core

modscan-core holds the parts of a Modbus scanner that work without a user interface. It has no dependencies outside the standard library.

## Modules

- **`modscan_core.signals`**: `Signal` is a small observer. You register callables with `connect`, remove them with `disconnect`, and call them all in order with `emit`.
- **`modscan_core.simulator`**: `DataSimulator` produces simulated values for coils and registers. Each simulated point is keyed by `RegisterType`, address and device id. The modes (`SimulationMode`) are random, increment, decrement and toggle. The `DataDisplayMode` decides which numeric type a value is generated in: 16-, 32- or 64-bit signed or unsigned, float or double. Parameters are described by `ModbusSimulationParams`, `RandomSimulationParams`, `IncrementSimulationParams`, `DecrementSimulationParams` and `ValueRange`. New values are reported through the `data_simulated` signal. Starting and stopping a simulation is reported through `simulation_started` and `simulation_stopped`.
- **`modscan_core.numeric`**: `NumericEditor` keeps a one-line numeric entry and its value in step. It parses, clamps to a range and formats the value. The modes (`NumericInputMode`) are int32, uint32, hex, float, double, int64 and uint64. Zero padding is optional.
- **`modscan_core.bytelist`**: `ByteListEditor` edits a list of bytes written in decimal or hex (`ByteInputMode`) and separated by spaces. It validates text that is typed or pasted. The module also has `split_by_separator`, which groups text into pairs of characters.
- **`modscan_core.functioncode`**: `FunctionCodeSelector` holds a list of known Modbus function codes. When it is editable it also accepts a code that is typed in. Codes are shown in decimal or hex (`FunctionCodeInputMode`).
- **`modscan_core.statistics`**: `PollStatistics` counts the polls sent and the valid responses received. `summary()` returns both counts as text.
- **`modscan_core.choices`**: `ChoiceList` and `NumericChoiceList` are ordered lists of labelled values with one current selection. Ready-made lists are built by these functions:
  - `address_base_choices`
  - `boolean_choices`
  - `byte_order_choices`
  - `connection_choices`
  - `flow_control_choices`
  - `parity_choices`
  - `point_type_choices`
  - `simulation_mode_choices`

  The module also has `format_padded`, which zero-pads a value to the width of a maximum, and `is_valid_ip_address`, which checks for a dotted-quad IPv4 address.
- **`modscan_core.modbuslog`**: `MessageLog` keeps the most recent entries up to a row limit (30 by default). When the log is full, the oldest entry is dropped to make room for a new one.

## Example

```python
from modscan_core.simulator import (
    DataSimulator, DataDisplayMode, RegisterType,
    ModbusSimulationParams, SimulationMode,
)

sim = DataSimulator()
sim.data_simulated.connect(lambda mode, rtype, addr, dev, value: print(addr, value))

params = ModbusSimulationParams(mode=SimulationMode.TOGGLE)
sim.start_simulation(DataDisplayMode.BINARY, RegisterType.COILS, 0, 1, params)
sim.tick()   # one timer period elapsed: coil 0 toggles to True
sim.close()
```

`DataSimulator` has no timer of its own. Call `tick()` once for each elapsed period; `DataSimulator.INTERVAL_MS` gives that period in milliseconds. A simulation with `interval` n updates on every n-th tick. While the simulator is paused, `tick()` does nothing. A simulator can also be used as a context manager, which stops all simulations on exit.

## What this package does not do

- It does not talk Modbus. There is no TCP or serial client and no frame encoding or decoding.
- It has no windows or widgets.
- It has no command-line program.
- It does not save settings or logs.

The editors and selectors hold state and report changes through signals, so a front end can be built on top of them.

## Installation and tests

```
pip install .
pip install .[test]
pytest
```