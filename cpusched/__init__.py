"""
Deterministic CPU dispatch simulator.

Computes the execution timeline and per-process metrics produced by FCFS,
SJF, SRTF and Round Robin for a set of (pid, arrival, burst) processes.
"""

from .algorithms import run_algorithm, run_all
from .errors import InvalidInput, ResourceExhausted, SchedulerError
from .models import Process, ScheduleResult, Segment

__all__ = [
    "InvalidInput",
    "Process",
    "ResourceExhausted",
    "ScheduleResult",
    "SchedulerError",
    "Segment",
    "run_algorithm",
    "run_all",
]
