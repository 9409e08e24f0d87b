from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from .models import ScheduleResult

FIELDNAMES = [
    "algorithm",
    "pid",
    "arrival_time",
    "burst_time",
    "start_time",
    "completion_time",
    "response_time",
    "waiting_time",
    "turnaround_time",
]


def write_results_csv(results: Iterable[ScheduleResult], path: str | Path) -> int:
    """
    Write one row per process per algorithm. Returns the number of rows.
    """
    path = Path(path)
    rows = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        for result in results:
            for p in result.processes:
                writer.writerow(
                    {
                        "algorithm": result.algorithm,
                        "pid": p.pid,
                        "arrival_time": p.arrival_time,
                        "burst_time": p.burst_time,
                        "start_time": p.start_time,
                        "completion_time": p.completion_time,
                        "response_time": p.response_time,
                        "waiting_time": p.waiting_time,
                        "turnaround_time": p.turnaround_time,
                    }
                )
                rows += 1
    return rows
