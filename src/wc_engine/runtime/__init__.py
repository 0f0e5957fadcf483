"""Runtime services shared by the engine (logging, profiling)."""

from . import telemetry

__all__ = ["telemetry"]
