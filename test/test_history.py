# test/test_history.py
import pytest

from vitaltimeline.core import Timeline, TimelineHistory
from vitaltimeline.core.exceptions import InvalidTimeline


def _snapshots(n):
    return [Timeline(duration=10 + i) for i in range(n)]


def test_commit_undo_redo():
    t0, t1, t2 = _snapshots(3)
    h = TimelineHistory(t0).commit(t1).commit(t2)
    assert h.present is t2 and h.can_undo and not h.can_redo

    h = h.undo()
    assert h.present is t1 and h.can_redo
    h = h.undo()
    assert h.present is t0 and not h.can_undo

    h = h.redo().redo()
    assert h.present is t2 and not h.can_redo


def test_commit_clears_future():
    t0, t1, t2 = _snapshots(3)
    h = TimelineHistory(t0).commit(t1).undo().commit(t2)
    assert h.present is t2
    assert not h.can_redo
    assert h.past == (t0,)


def test_noops_return_same_history():
    t0, = _snapshots(1)
    h = TimelineHistory(t0)
    assert h.undo() is h
    assert h.redo() is h
    assert h.commit(t0) is h


def test_limit_drops_oldest():
    snaps = _snapshots(5)
    h = TimelineHistory(snaps[0], limit=2)
    for t in snaps[1:]:
        h = h.commit(t)
    assert h.past == (snaps[2], snaps[3])
    assert h.undo().undo().present is snaps[2]
    assert not h.undo().undo().can_undo


def test_negative_limit_rejected():
    with pytest.raises(InvalidTimeline):
        TimelineHistory(Timeline(), limit=-1)
