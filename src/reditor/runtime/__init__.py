"""Runtime services (logging and timing spans) shared by every layer."""

from . import telemetry

__all__ = ["telemetry"]
