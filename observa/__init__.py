"""Observable values, callback lists, running statistics, timers, a stopwatch and INI files."""

__version__ = "0.2.0"