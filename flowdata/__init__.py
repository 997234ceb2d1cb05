"""Parsing of flow-management API data into FIRs, events and flow measures, with download and scheduling helpers."""

__version__ = "0.1.0"