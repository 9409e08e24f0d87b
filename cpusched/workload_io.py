from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List

from .errors import InvalidInput
from .models import Process


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON, CSV or whitespace-separated text file into a
    list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    loaders = {".json": _load_json, ".csv": _load_csv, ".txt": _load_text}
    if suffix not in loaders:
        raise InvalidInput(f"Unsupported workload format: {suffix} (use .json, .csv or .txt)")

    try:
        return loaders[suffix](path)
    except UnicodeDecodeError as exc:
        raise InvalidInput(f"{path}: not valid UTF-8") from exc


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInput(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise InvalidInput("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _load_text(path: Path) -> List[Process]:
    """
    One process per line as ``PID Arrival Burst``; blank lines and lines
    starting with ``#`` are skipped.
    """
    processes: List[Process] = []
    with path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            fields = line.split()
            if len(fields) != 3:
                raise InvalidInput(f"{path}:{lineno}: expected 'PID Arrival Burst', got {line!r}")
            try:
                pid, arrival_time, burst_time = (int(x) for x in fields)
            except ValueError as exc:
                raise InvalidInput(f"{path}:{lineno}: non-integer field in {line!r}") from exc
            processes.append(Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time))
    return processes


def _int_field(mapping, key: str) -> int:
    # ints as-is, strings only when they spell an integer; floats are never truncated
    value = mapping[key]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise TypeError(f"{key} must be an integer, got {value!r}")
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _int_field(mapping, "pid")
        arrival_time = _int_field(mapping, "arrival_time")
        burst_time = _int_field(mapping, "burst_time")
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidInput(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
    )
