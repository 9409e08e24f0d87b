from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .errors import InvalidInput, ResourceExhausted
from .metrics import compute_process_metrics, compute_system_metrics, summarize_process_metrics
from .models import Process, ScheduleResult, Segment
from .queues import ArrivalCursor, PrioritySelector, ReadyQueue, burst_key, remaining_key
from .timeline import Timeline
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def _finish(
    algorithm: str,
    quantum: Optional[int],
    processes: Sequence[Process],
    timeline: Timeline,
    start: List[Optional[int]],
    end: List[Optional[int]],
) -> ScheduleResult:
    timeline.coalesce()
    metrics = compute_process_metrics(processes, start, end)
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=metrics,
        timeline=timeline.segments(),
        averages=summarize_process_metrics(metrics),
    )
    compute_system_metrics(result)
    logger.debug(
        "%s: %d processes, %d segments, makespan %d",
        algorithm,
        len(processes),
        len(timeline),
        timeline.end_time,
    )
    return result


def _idle_until_next_arrival(cursor: ArrivalCursor, timeline: Timeline, time: int) -> int:
    next_arrival = cursor.next_arrival()
    if next_arrival is None:
        raise RuntimeError(f"CPU idle at t={time} with no pending arrivals")
    timeline.idle(time, next_arrival)
    return next_arrival


def schedule_fcfs(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Dispatch order is (arrival, pid); the CPU idles until the next process
    arrives whenever the queue runs dry.
    """
    procs = validate_processes(processes)
    n = len(procs)
    order = sorted(range(n), key=lambda i: (procs[i].arrival_time, procs[i].pid))

    time = 0
    timeline = Timeline()
    start: List[Optional[int]] = [None] * n
    end: List[Optional[int]] = [None] * n

    for i in order:
        p = procs[i]
        if time < p.arrival_time:
            timeline.idle(time, p.arrival_time)
            time = p.arrival_time

        start[i] = time
        timeline.push(Segment(p.pid, time, time + p.burst_time))
        time += p.burst_time
        end[i] = time

    return _finish("FCFS", None, procs, timeline, start, end)


def schedule_sjf(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time (tie-breaker:
    earlier arrival, then PID).
    """
    procs = validate_processes(processes)
    n = len(procs)

    cursor = ArrivalCursor(procs)
    ready = PrioritySelector(burst_key(procs))

    time = 0
    timeline = Timeline()
    start: List[Optional[int]] = [None] * n
    end: List[Optional[int]] = [None] * n
    dispatched = 0

    while dispatched < n:
        for i in cursor.admit(time):
            ready.push(i)

        if not ready:
            time = _idle_until_next_arrival(cursor, timeline, time)
            continue

        i = ready.pop()
        p = procs[i]
        start[i] = time
        timeline.push(Segment(p.pid, time, time + p.burst_time))
        time += p.burst_time
        end[i] = time
        dispatched += 1

    return _finish("SJF (non-preemptive)", None, procs, timeline, start, end)


def schedule_srtf(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The clock jumps from one decision point to the next: either the running
    process finishes, or the next arrival gives the selector a chance to
    preempt it.
    """
    procs = validate_processes(processes)
    n = len(procs)

    remaining = [p.burst_time for p in procs]
    cursor = ArrivalCursor(procs)
    ready = PrioritySelector(remaining_key(procs, remaining))

    time = 0
    timeline = Timeline()
    start: List[Optional[int]] = [None] * n
    end: List[Optional[int]] = [None] * n
    completed = 0
    last: Optional[int] = None

    while completed < n:
        for i in cursor.admit(time):
            ready.push(i)

        if not ready:
            time = _idle_until_next_arrival(cursor, timeline, time)
            last = None
            continue

        i = ready.peek()
        p = procs[i]
        if last is not None and last != i and remaining[last] > 0:
            logger.debug("srtf: t=%d pid %s preempts pid %s", time, p.pid, procs[last].pid)
        last = i

        if start[i] is None:
            start[i] = time

        finish = time + remaining[i]
        next_arrival = cursor.next_arrival()

        if next_arrival is None or finish <= next_arrival:
            ready.pop()
            timeline.occupy(p.pid, time, finish)
            remaining[i] = 0
            end[i] = finish
            time = finish
            completed += 1
        else:
            # Run up to the next arrival, then re-key with the new remaining time.
            ready.pop()
            timeline.occupy(p.pid, time, next_arrival)
            remaining[i] -= next_arrival - time
            ready.push(i)
            time = next_arrival

    return _finish("SRTF", None, procs, timeline, start, end)


def schedule_rr(processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice is running are queued before the
    process that was just preempted.
    """
    procs = validate_processes(processes)
    quantum = validate_quantum(quantum)
    n = len(procs)

    remaining = [p.burst_time for p in procs]
    cursor = ArrivalCursor(procs)
    ready = ReadyQueue(n)

    time = 0
    timeline = Timeline()
    start: List[Optional[int]] = [None] * n
    end: List[Optional[int]] = [None] * n
    completed = 0

    for i in cursor.admit(time):
        ready.push(i)

    while completed < n:
        if not ready:
            time = _idle_until_next_arrival(cursor, timeline, time)
            for j in cursor.admit(time):
                ready.push(j)
            continue

        i = ready.pop()
        p = procs[i]
        if start[i] is None:
            start[i] = time

        run_time = min(remaining[i], quantum)
        timeline.occupy(p.pid, time, time + run_time)
        time += run_time
        remaining[i] -= run_time

        # Arrivals during the slice go ahead of the preempted process.
        for j in cursor.admit(time):
            ready.push(j)

        if remaining[i] == 0:
            end[i] = time
            completed += 1
        else:
            ready.push(i)

    return _finish("Round Robin", quantum, procs, timeline, start, end)


Scheduler = Callable[..., ScheduleResult]

ALGORITHMS: Dict[str, Scheduler] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "rr": schedule_rr,
}

ALGORITHM_ORDER = ("fcfs", "sjf", "srtf", "rr")


def run_algorithm(name: str, processes: Iterable[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is used by round-robin and
    ignored by the others.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise InvalidInput(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHM_ORDER)})")

    func = ALGORITHMS[key]
    try:
        return func(processes, quantum=quantum)
    except MemoryError as exc:
        raise ResourceExhausted(f"Out of memory while running {key}") from exc


def run_all(
    processes: Iterable[Process],
    quantum: int = DEFAULT_QUANTUM,
    algorithms: Optional[Sequence[str]] = None,
    workers: int = 1,
) -> List[ScheduleResult]:
    """
    Run several algorithms over the same process set.

    Every input is validated before any simulator starts. With ``workers > 1``
    the simulators run on a thread pool; results keep the order of
    ``algorithms`` either way.
    """
    names = [a.lower() for a in (algorithms or ALGORITHM_ORDER)]
    for name in names:
        if name not in ALGORITHMS:
            raise InvalidInput(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHM_ORDER)})")
    procs = validate_processes(processes)
    if "rr" in names:
        validate_quantum(quantum)

    if workers <= 1:
        return [run_algorithm(name, procs, quantum=quantum) for name in names]

    logger.debug("running %d algorithms on %d threads", len(names), workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(run_algorithm, name, procs, quantum) for name in names]
        return [f.result() for f in futures]
