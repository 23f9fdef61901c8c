# test/test_resample.py
import numpy as np

from vitaltimeline.core import definition, grid
from vitaltimeline.core.resample import resample_rate, resize_duration
from vitaltimeline.core.series import SignalSeries

HR = definition("HR")


def _series():
    times = grid.grid_times(10, 1000)
    values = np.linspace(60.0, 100.0, times.size)
    modified = np.zeros(times.size, dtype=bool)
    modified[3] = True
    return SignalSeries(time=times, values=values, modified=modified)


def test_resize_extends_with_baseline():
    s = _series()
    out = resize_duration(s, grid.grid_times(15, 1000), HR)
    assert out.n == 16
    assert np.allclose(out.values[:11], s.values)
    assert np.array_equal(out.modified[:11], s.modified)
    assert np.allclose(out.values[11:], HR.default)
    assert not out.modified[11:].any()


def test_resize_truncate_then_extend_keeps_shared_samples():
    s = _series()
    short = resize_duration(s, grid.grid_times(5, 1000), HR)
    back = resize_duration(short, grid.grid_times(10, 1000), HR)
    assert np.allclose(back.values[:6], s.values[:6])
    assert np.allclose(back.values[6:], HR.default)
    assert back.modified[3]


def test_resample_finer_interpolates_and_ors_flags():
    s = _series()
    out = resample_rate(s, grid.grid_times(10, 500), HR)
    assert out.n == 21
    assert np.allclose(out.values[::2], s.values)
    assert np.isclose(out.values[1], (s.values[0] + s.values[1]) / 2)
    # 2500 and 3500 sit next to the edited sample at 3000
    assert out.modified[5] and out.modified[6] and out.modified[7]
    assert not out.modified[4]


def test_resample_round_trip_is_exact():
    s = _series()
    fine = resample_rate(s, grid.grid_times(10, 250), HR)
    back = resample_rate(fine, s.time, HR)
    assert back.equals(s)


def test_resample_coarser_keeps_exact_hits():
    s = _series()
    out = resample_rate(s, grid.grid_times(10, 3000), HR)
    assert np.array_equal(out.time, [0, 3000, 6000, 9000])
    assert np.allclose(out.values, s.values[[0, 3, 6, 9]])
    assert out.modified.tolist() == [False, True, False, False]


def test_resample_holds_edge_neighbours_and_defaults_when_empty():
    s = SignalSeries(time=np.array([2000, 4000]), values=np.array([80.0, 90.0]), modified=np.array([True, False]))
    out = resample_rate(s, grid.grid_times(6, 1000), HR)
    assert out.values.tolist() == [80.0, 80.0, 80.0, 85.0, 90.0, 90.0, 90.0]
    assert out.modified.tolist() == [True, True, True, True, False, False, False]

    empty = SignalSeries(time=np.array([], dtype=np.int64), values=np.array([]), modified=np.array([], dtype=bool))
    out = resample_rate(empty, grid.grid_times(2, 1000), HR)
    assert np.allclose(out.values, HR.default)


def test_resample_clips_to_bounds():
    s = SignalSeries(time=np.array([0, 1000]), values=np.array([250.0, 250.0]), modified=np.zeros(2, bool))
    assert np.allclose(resample_rate(s, grid.grid_times(1, 500), HR).values, 220.0)
