import pytest

from cpusched.models import Segment
from cpusched.timeline import Timeline


def _spans(timeline):
    return [(s.pid, s.start_time, s.end_time) for s in timeline]


def test_segment_rejects_empty_interval():
    with pytest.raises(ValueError):
        Segment(1, 4, 4)
    with pytest.raises(ValueError):
        Segment(None, 5, 3)


def test_push_rejects_overlap():
    tl = Timeline()
    tl.push(Segment(1, 0, 3))
    with pytest.raises(ValueError):
        tl.push(Segment(2, 2, 5))


def test_occupy_extends_same_owner():
    tl = Timeline()
    tl.occupy(1, 0, 2)
    tl.occupy(1, 2, 4)
    tl.occupy(2, 4, 5)
    tl.occupy(1, 5, 6)
    assert _spans(tl) == [(1, 0, 4), (2, 4, 5), (1, 5, 6)]


def test_idle_skips_zero_length():
    tl = Timeline()
    tl.idle(0, 0)
    tl.idle(0, 2)
    tl.idle(2, 3)
    assert _spans(tl) == [(None, 0, 3)]


def test_coalesce_merges_touching_segments():
    tl = Timeline()
    for seg in [Segment(1, 0, 1), Segment(1, 1, 3), Segment(None, 3, 4), Segment(None, 4, 6), Segment(2, 6, 7)]:
        tl.push(seg)
    tl.coalesce()
    assert _spans(tl) == [(1, 0, 3), (None, 3, 6), (2, 6, 7)]


def test_coalesce_keeps_gapped_segments_apart():
    tl = Timeline()
    tl.push(Segment(1, 0, 2))
    tl.push(Segment(1, 3, 5))
    tl.coalesce()
    assert len(tl) == 2


def test_coalesce_is_idempotent():
    tl = Timeline()
    for seg in [Segment(1, 0, 1), Segment(1, 1, 2), Segment(2, 2, 3), Segment(2, 3, 4)]:
        tl.push(seg)
    once = tl.coalesce().segments()
    twice = tl.coalesce().segments()
    assert once == twice == [Segment(1, 0, 2), Segment(2, 2, 4)]


def test_busy_time_and_span():
    tl = Timeline()
    tl.idle(0, 2)
    tl.occupy(7, 2, 5)
    tl.occupy(8, 5, 6)
    tl.occupy(7, 6, 8)
    assert tl.busy_time_by_pid() == {7: 5, 8: 1}
    assert tl.span() == (0, 8)
    assert tl.end_time == 8
    assert Timeline().span() == (0, 0)
