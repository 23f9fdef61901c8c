# test/test_series.py
import numpy as np
import pytest

from vitaltimeline.core.series import DataPoint, SignalSeries
from vitaltimeline.core.exceptions import InvalidSeries


def test_init_ok_basic():
    s = SignalSeries(
        time=np.array([0, 1000, 2000]),
        values=np.array([70.0, 80.0, 90.0]),
        modified=np.array([False, True, False]),
    )

    assert s.n == 3
    assert len(s) == 3
    assert s.t_start == 0
    assert s.t_end == 2000
    assert s.time.dtype == np.int64
    assert s.point(1) == DataPoint(1000, 80.0, True)


def test_init_rejects_non_1d():
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([[0, 1000]]), values=np.array([1.0, 2.0]), modified=[False, False])


def test_init_rejects_length_mismatch():
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([0, 1000, 2000]), values=np.array([1.0, 2.0]), modified=[False] * 3)


def test_init_rejects_duplicate_or_decreasing_time():
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([0, 1000, 1000]), values=np.zeros(3), modified=np.zeros(3, bool))
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([0, 2000, 1000]), values=np.zeros(3), modified=np.zeros(3, bool))


def test_init_rejects_fractional_or_negative_time():
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([0.0, 0.5]), values=np.zeros(2), modified=np.zeros(2, bool))
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([-1000, 0]), values=np.zeros(2), modified=np.zeros(2, bool))


def test_init_rejects_non_finite_values():
    with pytest.raises(InvalidSeries):
        SignalSeries(time=np.array([0, 1000]), values=np.array([1.0, np.nan]), modified=np.zeros(2, bool))


def test_arrays_are_copied_and_read_only():
    v = np.array([1.0, 2.0])
    s = SignalSeries(time=np.array([0, 1000]), values=v, modified=np.zeros(2, bool))

    v[0] = 99.0
    assert s.values[0] == 1.0
    with pytest.raises(ValueError):
        s.values[0] = 5.0


def test_baseline_fills_default_unmodified():
    s = SignalSeries.baseline(np.array([0, 500, 1000]), 98)
    assert np.allclose(s.values, [98.0, 98.0, 98.0])
    assert not s.modified.any()


def test_index_of_exact_only():
    s = SignalSeries.baseline(np.array([0, 1000, 2000]), 1.0)
    assert s.index_of(1000) == 1
    assert s.index_of(1500) is None
    assert s.index_of(3000) is None
    assert s.point_at(2000) == DataPoint(2000, 1.0, False)
    assert s.point_at(2500) is None


def test_from_points_and_points_round_trip():
    pts = [DataPoint(0, 1.0), DataPoint(1000, 2.0, True)]
    s = SignalSeries.from_points(pts)
    assert list(s.points()) == pts


def test_with_values_keeps_time_and_flags():
    s = SignalSeries(time=np.array([0, 1000]), values=np.array([1.0, 2.0]), modified=np.array([True, False]))
    out = s.with_values(np.array([5.0, 6.0]))
    assert np.array_equal(out.time, s.time)
    assert np.array_equal(out.modified, [True, False])
    assert np.allclose(out.values, [5.0, 6.0])


def test_clamped():
    s = SignalSeries(time=np.array([0, 1000]), values=np.array([-5.0, 300.0]), modified=np.zeros(2, bool))
    assert np.allclose(s.clamped(0, 220).values, [0.0, 220.0])


def test_to_numpy_copy_flag():
    s = SignalSeries.baseline(np.array([0, 1000]), 1.0)

    t_view, v_view = s.to_numpy(copy=False)
    t_cp, v_cp = s.to_numpy(copy=True)

    assert t_view is s.time and v_view is s.values
    assert t_cp is not s.time and v_cp is not s.values
    assert np.array_equal(t_cp, s.time) and np.allclose(v_cp, s.values)


def test_equals_compares_all_arrays():
    a = SignalSeries.baseline(np.array([0, 1000]), 1.0)
    b = SignalSeries.baseline(np.array([0, 1000]), 1.0)
    c = a.with_values(a.values, np.array([True, False]))
    assert a.equals(b)
    assert not a.equals(c)


def test_datapoint_normalizes_types_and_rejects_negative_time():
    p = DataPoint(np.int64(1000), np.float32(2.5), 1)
    assert type(p.time_ms) is int and type(p.value) is float and p.user_modified is True
    with pytest.raises(InvalidSeries):
        DataPoint(-1, 0.0)
