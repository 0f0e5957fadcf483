"""Incremental word, line, character and byte counting for edited text."""

__all__ = [
    "adapters",
    "cache",
    "config",
    "errors",
    "host",
    "runtime",
    "stats",
]

__version__ = "0.1.0"
