"""Modbus scanner core: register data simulation, value editors, selectors, statistics and a bounded message log."""

__version__ = "0.1.0"