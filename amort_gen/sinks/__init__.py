"""Output sinks for exporting schedules."""

from amort_gen.sinks.console import ConsoleSink
from amort_gen.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
