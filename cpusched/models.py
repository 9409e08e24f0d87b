from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int


@dataclass(frozen=True)
class Segment:
    """
    One contiguous interval of the timeline.

    ``pid`` is the owning process id, or ``None`` while the CPU is idle.
    """

    pid: Optional[int]
    start_time: int
    end_time: int

    def __post_init__(self) -> None:
        if self.start_time >= self.end_time:
            raise ValueError(
                f"Segment must have positive length: [{self.start_time}, {self.end_time})"
            )

    @property
    def is_idle(self) -> bool:
        return self.pid is None

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[Segment] = field(default_factory=list)
    averages: Dict[str, float] = field(default_factory=dict)
    system: Optional[SystemMetrics] = None
