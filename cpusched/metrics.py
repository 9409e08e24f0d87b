from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import Process, ProcessMetrics, ScheduleResult, SystemMetrics


def compute_process_metrics(
    processes: Sequence[Process],
    start: Sequence[Optional[int]],
    end: Sequence[Optional[int]],
) -> List[ProcessMetrics]:
    """
    Derive response, waiting and turnaround time for each process from the
    start/end arrays a simulator produced (parallel to ``processes``).
    """
    metrics: List[ProcessMetrics] = []
    for p, start_time, completion_time in zip(processes, start, end):
        if start_time is None or completion_time is None:
            raise ValueError(f"Process {p.pid} was never scheduled to completion")

        turnaround_time = completion_time - p.arrival_time
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=start_time,
                completion_time=completion_time,
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=start_time - p.arrival_time,
            )
        )
    return metrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline segments. Idle segments do not count as busy time.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(seg.length for seg in result.timeline if not seg.is_idle)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=len(result.processes) / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )
    result.system = system
    return system


AVERAGED_FIELDS = (
    ("avg_response", "response_time"),
    ("avg_waiting", "waiting_time"),
    ("avg_turnaround", "turnaround_time"),
)


def summarize_process_metrics(processes: List[ProcessMetrics]) -> Dict[str, float]:
    """Mean response, waiting and turnaround time; all zero for an empty run."""
    n = len(processes)
    return {
        name: sum(getattr(p, attr) for p in processes) / n if n else 0.0
        for name, attr in AVERAGED_FIELDS
    }
