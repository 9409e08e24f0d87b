from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Sequence, Tuple

from .models import Process

logger = logging.getLogger(__name__)

SelectionKey = Tuple[int, int, int]


def burst_key(processes: Sequence[Process]) -> Callable[[int], SelectionKey]:
    """Order positions by (burst, arrival, pid)."""

    def key(i: int) -> SelectionKey:
        p = processes[i]
        return (p.burst_time, p.arrival_time, p.pid)

    return key


def remaining_key(processes: Sequence[Process], remaining: List[int]) -> Callable[[int], SelectionKey]:
    """
    Order positions by (remaining time, arrival, pid).

    The key reads ``remaining`` when a position is pushed, so a position whose
    remaining time changed must be popped and pushed again.
    """

    def key(i: int) -> SelectionKey:
        p = processes[i]
        return (remaining[i], p.arrival_time, p.pid)

    return key


class PrioritySelector:
    """
    Min-heap of process positions ordered by a three-part key.
    """

    def __init__(self, key: Callable[[int], SelectionKey]) -> None:
        self._key = key
        self._heap: List[Tuple[SelectionKey, int]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def push(self, index: int) -> None:
        heapq.heappush(self._heap, (self._key(index), index))

    def peek(self) -> int:
        if not self._heap:
            raise IndexError("peek from empty selector")
        return self._heap[0][1]

    def pop(self) -> int:
        if not self._heap:
            raise IndexError("pop from empty selector")
        return heapq.heappop(self._heap)[1]


class ReadyQueue:
    """
    FIFO of process positions; a position is never queued twice at once.
    """

    def __init__(self, size: int) -> None:
        self._queue: Deque[int] = deque()
        self._in_queue = [False] * size

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __contains__(self, index: int) -> bool:
        return self._in_queue[index]

    def push(self, index: int) -> bool:
        """Enqueue ``index`` at the tail; return False if it is already queued."""
        if self._in_queue[index]:
            return False
        self._queue.append(index)
        self._in_queue[index] = True
        return True

    def pop(self) -> int:
        index = self._queue.popleft()
        self._in_queue[index] = False
        return index

    def snapshot(self) -> List[int]:
        return list(self._queue)


class ArrivalCursor:
    """
    Admission pointer over process positions sorted by (arrival, pid).

    The pointer only moves forward: each position is admitted exactly once.
    """

    def __init__(self, processes: Sequence[Process]) -> None:
        self._processes = processes
        self._order = sorted(
            range(len(processes)),
            key=lambda i: (processes[i].arrival_time, processes[i].pid),
        )
        self._pos = 0

    @property
    def pending(self) -> bool:
        return self._pos < len(self._order)

    def next_arrival(self) -> Optional[int]:
        if not self.pending:
            return None
        return self._processes[self._order[self._pos]].arrival_time

    def admit(self, time: int) -> List[int]:
        """Return every not-yet-admitted position with arrival <= ``time``."""
        admitted: List[int] = []
        while self._pos < len(self._order):
            i = self._order[self._pos]
            if self._processes[i].arrival_time > time:
                break
            admitted.append(i)
            self._pos += 1
        if admitted:
            logger.debug(
                "t=%d admitted pids %s",
                time,
                [self._processes[i].pid for i in admitted],
            )
        return admitted
