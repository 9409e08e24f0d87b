from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Segment

IDLE_LABEL = "idle"


def _label(seg: Segment) -> str:
    return IDLE_LABEL if seg.is_idle else f"P{seg.pid}"


def render_gantt(segments: List[Segment]) -> str:
    """
    Plain-text Gantt chart: ``=`` for busy ticks, ``.`` for idle ticks.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = seg.length
        line += ("." if seg.is_idle else "=") * width
        labels += _label(seg)[:width].ljust(width)
        time_marks += f"{seg.end_time:>{max(width, 3)}}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            " " + labels,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[Segment]) -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = str(segments[0].start_time)

    for seg in segments:
        width = seg.length
        label = _label(seg)[:width].ljust(width)

        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(label, style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(seg.pid)}")
            labels.append(label, style="bold")

        time_marks += f"{seg.end_time:>{max(width, 3)}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def tick_listing(segments: List[Segment]) -> Iterator[Tuple[int, Optional[int]]]:
    """
    Yield ``(tick, pid)`` for every tick of the timeline; ``pid`` is None
    while the CPU is idle.
    """
    for seg in segments:
        for t in range(seg.start_time, seg.end_time):
            yield t, seg.pid
