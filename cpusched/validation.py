from __future__ import annotations

from typing import Iterable, Optional, Tuple

from .errors import InvalidInput
from .models import Process


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Iterable[Process]) -> Tuple[Process, ...]:
    """
    Check a process set and return it as an immutable tuple.

    Rejects an empty set, non-integer fields, negative arrivals,
    non-positive bursts and duplicate ids.
    """
    procs = tuple(processes)
    if not procs:
        raise InvalidInput("At least one process is required")

    seen: set[int] = set()
    for p in procs:
        if not (_is_int(p.pid) and _is_int(p.arrival_time) and _is_int(p.burst_time)):
            raise InvalidInput(f"Process fields must be integers: {p!r}")
        if p.arrival_time < 0:
            raise InvalidInput(f"Process {p.pid}: arrival time must be >= 0 (got {p.arrival_time})")
        if p.burst_time <= 0:
            raise InvalidInput(f"Process {p.pid}: burst time must be > 0 (got {p.burst_time})")
        if p.pid in seen:
            raise InvalidInput(f"Duplicate process id {p.pid}")
        seen.add(p.pid)

    return procs


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or not _is_int(quantum) or quantum <= 0:
        raise InvalidInput("Round Robin requires a positive quantum (use --quantum)")
    return quantum
