# test/test_grid.py
import numpy as np
import pytest

from vitaltimeline.core import grid
from vitaltimeline.core.exceptions import InvalidTimeline


def test_grid_times_inclusive_of_last_whole_step():
    t = grid.grid_times(1.0, 300)
    assert t.dtype == np.int64
    assert np.array_equal(t, [0, 300, 600, 900])
    assert grid.sample_count(1.0, 300) == 3
    assert grid.grid_size(1.0, 300) == 4


def test_default_grid_size():
    assert grid.sample_count(1800, 1000) == 1800
    assert grid.grid_times(1800, 1000)[-1] == 1_800_000


def test_fractional_duration_uses_integer_ms():
    assert grid.duration_ms(0.3) == 300
    assert grid.sample_count(0.3, 100) == 3


@pytest.mark.parametrize("duration,rate", [(0, 1000), (-5, 1000), (float("nan"), 1000), (10, 0), (10, 1.5), (10, True)])
def test_validate_grid_rejects(duration, rate):
    with pytest.raises(InvalidTimeline):
        grid.validate_grid(duration, rate)


def test_nearest_index_rounds_and_clamps():
    assert grid.nearest_index(1400, 10, 1000) == 1
    assert grid.nearest_index(1500, 10, 1000) == 2
    assert grid.nearest_index(-300, 10, 1000) == 0
    assert grid.nearest_index(20_000, 10, 1000) == 10


def test_sub_millisecond_duration_is_floored():
    assert grid.duration_ms(0.0015) == 1
    assert grid.sample_count(0.0015, 1) == 1
    assert grid.grid_times(0.0015, 1).tolist() == [0, 1]
    assert grid.duration_ms(0.1 * 3) == 300
