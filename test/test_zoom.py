# test/test_zoom.py
import pytest

from vitaltimeline.core.zoom import (
    ZoomScale,
    ZoomState,
    detect_scale,
    snap_interval,
    snap_time,
    window_width,
    zoom_from_start,
    zoom_to,
)


def test_zoom_to_centres_window():
    z = zoom_to("30s", 100, 1800)
    assert z == ZoomState(ZoomScale.S30, 85.0, 115.0)
    assert z.center == 100.0


def test_zoom_to_shifts_inside_duration():
    assert zoom_to("5m", 10, 1800) == ZoomState(ZoomScale.M5, 0.0, 300.0)
    assert zoom_to("10m", 1790, 1800) == ZoomState(ZoomScale.M10, 1200.0, 1800.0)
    assert zoom_to(ZoomScale.FULL, 5, 600) == ZoomState.full(600)


def test_window_never_exceeds_duration():
    assert window_width(ZoomScale.M10, 120) == 120.0
    assert zoom_to("5s", 1, 2) == ZoomState(ZoomScale.S5, 0.0, 2.0)


def test_zoom_from_start_pans_and_clamps():
    assert zoom_from_start("5m", 100, 1800) == ZoomState(ZoomScale.M5, 100.0, 400.0)
    assert zoom_from_start("5m", 1700, 1800) == ZoomState(ZoomScale.M5, 1500.0, 1800.0)


def test_clamp_to_shorter_duration():
    z = ZoomState(ZoomScale.S30, 1790.0, 1820.0).clamp_to(1800)
    assert z == ZoomState(ZoomScale.S30, 1770.0, 1800.0)
    assert ZoomState.full(1800).clamp_to(600) == ZoomState.full(600)


@pytest.mark.parametrize(
    "span,scale",
    [(4, ZoomScale.S5), (30, ZoomScale.S30), (300, ZoomScale.M5), (600, ZoomScale.M10), (1000, ZoomScale.FULL)],
)
def test_detect_scale(span, scale):
    assert detect_scale(span) is scale


def test_snap_time():
    assert snap_interval("5s") == 1.0
    assert snap_time(12.4, "30s") == 10.0
    assert snap_time(12.5, "30s") == 15.0
    assert snap_time(95, "10m") == 120.0


def test_unknown_scale_rejected():
    with pytest.raises(ValueError):
        zoom_to("1h", 0, 1800)
