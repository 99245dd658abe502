"""Output sinks for exporting analyses."""

from prospect_engine.sinks.console import ConsoleSink
from prospect_engine.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
