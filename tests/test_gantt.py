from rich.console import Console

from cpusched.algorithms import schedule_fcfs
from cpusched.gantt import build_rich_gantt, render_gantt, tick_listing
from cpusched.models import Process, Segment


def test_render_gantt_marks_idle_ticks():
    res = schedule_fcfs([Process(1, 2, 3), Process(2, 5, 1)])
    chart = render_gantt(res.timeline)
    lines = chart.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|..====|"
    assert "P1" in lines[2]
    assert lines[2].startswith(" id")


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_tick_listing():
    segments = [Segment(None, 0, 1), Segment(4, 1, 3), Segment(2, 3, 4)]
    assert list(tick_listing(segments)) == [(0, None), (1, 4), (2, 4), (3, 2)]


def test_rich_gantt_renders():
    res = schedule_fcfs([Process(1, 0, 5), Process(2, 1, 3)])
    panel, marks = build_rich_gantt(res.timeline)
    console = Console(record=True, width=120)
    console.print(panel)
    assert "Gantt Chart" in console.export_text()
    assert marks.split() == ["0", "5", "8"]
