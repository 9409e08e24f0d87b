import logging

import pytest

from cpusched.models import Process
from cpusched.queues import ArrivalCursor, PrioritySelector, ReadyQueue, burst_key, remaining_key


def _procs():
    return [
        Process(30, arrival_time=2, burst_time=4),
        Process(10, arrival_time=0, burst_time=4),
        Process(20, arrival_time=0, burst_time=4),
        Process(40, arrival_time=1, burst_time=1),
    ]


def test_burst_key_orders_by_burst_arrival_pid():
    procs = _procs()
    heap = PrioritySelector(burst_key(procs))
    for i in range(len(procs)):
        heap.push(i)
    order = [procs[heap.pop()].pid for _ in range(len(procs))]
    assert order == [40, 10, 20, 30]
    assert not heap


def test_remaining_key_reflects_updates_on_repush():
    procs = _procs()
    remaining = [p.burst_time for p in procs]
    heap = PrioritySelector(remaining_key(procs, remaining))
    heap.push(1)
    heap.push(2)
    assert heap.peek() == 1

    i = heap.pop()
    remaining[2] = 1
    heap.pop()
    heap.push(2)
    heap.push(i)
    assert procs[heap.peek()].pid == 20
    assert len(heap) == 2


def test_empty_selector_raises():
    heap = PrioritySelector(burst_key(_procs()))
    with pytest.raises(IndexError):
        heap.peek()
    with pytest.raises(IndexError):
        heap.pop()


def test_ready_queue_membership_is_unique():
    q = ReadyQueue(3)
    assert q.push(2)
    assert q.push(0)
    assert not q.push(2)
    assert q.snapshot() == [2, 0]
    assert 2 in q
    assert q.pop() == 2
    assert 2 not in q
    assert q.push(2)
    assert q.snapshot() == [0, 2]


def test_arrival_cursor_advances_monotonically():
    procs = _procs()
    cursor = ArrivalCursor(procs)
    assert cursor.next_arrival() == 0
    assert [procs[i].pid for i in cursor.admit(0)] == [10, 20]
    assert cursor.admit(0) == []
    assert cursor.next_arrival() == 1
    assert [procs[i].pid for i in cursor.admit(5)] == [40, 30]
    assert not cursor.pending
    assert cursor.next_arrival() is None


def test_arrival_cursor_logs_admissions(caplog):
    procs = _procs()
    cursor = ArrivalCursor(procs)
    with caplog.at_level(logging.DEBUG, logger="cpusched.queues"):
        cursor.admit(0)
        cursor.admit(0)
    assert [r.getMessage() for r in caplog.records] == ["t=0 admitted pids [10, 20]"]
