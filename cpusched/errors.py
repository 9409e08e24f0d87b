from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by the simulation engine."""


class InvalidInput(SchedulerError, ValueError):
    """
    The process set, quantum or algorithm name cannot be simulated.

    Raised before any simulator state is created, so a rejected input never
    produces a partial result.
    """


class ResourceExhausted(SchedulerError):
    """An internal structure could not be allocated; the run was aborted."""
