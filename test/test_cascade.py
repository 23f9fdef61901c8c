# test/test_cascade.py
import numpy as np

from vitaltimeline.core import definition, grid
from vitaltimeline.core.cascade import apply_cascade, last_edit_offset
from vitaltimeline.core.interpolate import regenerate_series
from vitaltimeline.core.resample import resize_duration
from vitaltimeline.core.series import DataPoint

HR = definition("HR")


def _edited(value=90.0, at=60_000, duration=120):
    times = grid.grid_times(duration, 1000)
    return regenerate_series([DataPoint(at, value, True)], times, HR, 1000)


def test_offset_of_last_edit():
    assert last_edit_offset(_edited(90.0), 120_000, HR) == 20.0
    assert last_edit_offset(_edited(50.0), 120_000, HR) == -20.0


def test_no_edit_means_no_cascade():
    s = regenerate_series([], grid.grid_times(10, 1000), HR, 1000)
    assert last_edit_offset(s, 10_000, HR) is None
    assert apply_cascade(s, 5_000, HR) is s


def test_extension_continues_last_edit():
    s = resize_duration(_edited(90.0), grid.grid_times(180, 1000), HR)
    out = apply_cascade(s, 120_000, HR)
    assert np.allclose(out.values[121:], 90.0)
    assert np.allclose(out.values[:121], s.values[:121])
    assert np.flatnonzero(out.modified).tolist() == [60]


def test_offset_is_additive_to_default():
    # a 40 bpm rise continues as default + 40
    s = resize_duration(_edited(110.0), grid.grid_times(130, 1000), HR)
    out = apply_cascade(s, 120_000, HR)
    assert np.allclose(out.values[121:], 110.0)


def test_modified_sample_after_cutoff_blocks_cascade():
    s = _edited(90.0, at=100_000)
    assert last_edit_offset(s, 60_000, HR) is None
    assert apply_cascade(s, 60_000, HR) is s
