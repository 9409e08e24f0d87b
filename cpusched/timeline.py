from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .models import Segment


class Timeline:
    """
    Ordered, appendable sequence of execution and idle segments.

    Segments must be pushed in non-decreasing start order without overlap.
    Call :meth:`coalesce` once a simulator has finished emitting.
    """

    def __init__(self) -> None:
        self._segments: List[Segment] = []

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    @property
    def end_time(self) -> int:
        return self._segments[-1].end_time if self._segments else 0

    def push(self, segment: Segment) -> None:
        if self._segments and segment.start_time < self._segments[-1].end_time:
            last = self._segments[-1]
            raise ValueError(
                f"Segment [{segment.start_time}, {segment.end_time}) overlaps "
                f"[{last.start_time}, {last.end_time})"
            )
        self._segments.append(segment)

    def occupy(self, pid: Optional[int], start_time: int, end_time: int) -> None:
        """
        Record that ``pid`` holds the CPU over ``[start_time, end_time)``.

        Extends the trailing segment when it has the same owner and ends
        exactly at ``start_time``; otherwise opens a new segment.
        """
        if self._segments:
            last = self._segments[-1]
            if last.pid == pid and last.end_time == start_time:
                self._segments[-1] = Segment(pid, last.start_time, end_time)
                return
        self.push(Segment(pid, start_time, end_time))

    def idle(self, start_time: int, end_time: int) -> None:
        if end_time > start_time:
            self.occupy(None, start_time, end_time)

    def coalesce(self) -> "Timeline":
        merged: List[Segment] = []
        for seg in self._segments:
            if merged and merged[-1].pid == seg.pid and merged[-1].end_time == seg.start_time:
                merged[-1] = Segment(seg.pid, merged[-1].start_time, seg.end_time)
            else:
                merged.append(seg)
        self._segments = merged
        return self

    def segments(self) -> List[Segment]:
        return list(self._segments)

    def span(self) -> Tuple[int, int]:
        if not self._segments:
            return (0, 0)
        return (self._segments[0].start_time, self._segments[-1].end_time)

    def busy_time_by_pid(self) -> Dict[int, int]:
        totals: Dict[int, int] = {}
        for seg in self._segments:
            if not seg.is_idle:
                totals[seg.pid] = totals.get(seg.pid, 0) + seg.length
        return totals
