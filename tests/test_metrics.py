import pytest

from cpusched.algorithms import schedule_fcfs
from cpusched.metrics import compute_process_metrics, compute_system_metrics, summarize_process_metrics
from cpusched.models import Process, ScheduleResult


def test_compute_process_metrics():
    procs = [Process(1, 0, 5), Process(2, 1, 3)]
    metrics = compute_process_metrics(procs, [0, 1], [8, 4])
    assert [(m.response_time, m.waiting_time, m.turnaround_time) for m in metrics] == [(0, 3, 8), (0, 0, 3)]


def test_unscheduled_process_is_an_error():
    with pytest.raises(ValueError):
        compute_process_metrics([Process(1, 0, 5)], [None], [None])


def test_summary_averages():
    res = schedule_fcfs([Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 8)])
    assert res.averages["avg_response"] == pytest.approx(10 / 3)
    assert res.averages["avg_waiting"] == pytest.approx(10 / 3)
    assert res.averages["avg_turnaround"] == pytest.approx(26 / 3)
    assert summarize_process_metrics(res.processes) == res.averages


def test_system_metrics_exclude_idle_time():
    res = schedule_fcfs([Process(5, 3, 2), Process(9, 10, 1)])
    assert res.system.makespan == 11
    assert res.system.cpu_busy_time == 3
    assert res.system.cpu_utilization == pytest.approx(3 / 11)
    assert res.system.throughput == pytest.approx(2 / 11)


def test_empty_result():
    result = ScheduleResult(algorithm="FCFS", quantum=None)
    system = compute_system_metrics(result)
    assert system.makespan == 0
    assert result.system is system
    assert summarize_process_metrics([])["avg_waiting"] == 0.0


def test_summary_keys_for_empty_run():
    assert summarize_process_metrics([]) == {
        "avg_response": 0.0,
        "avg_waiting": 0.0,
        "avg_turnaround": 0.0,
    }
