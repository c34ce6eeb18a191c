import pytest

from ridelog.analyze.classify import SpeedBand
from ridelog.models import EnrichedSample
from ridelog.playback.controller import PlaybackController
from ridelog.visualize.segments import attach_surface, build_segments, track_bounds


def _seq(*speeds):
    return tuple(
        EnrichedSample(lat=10.0 + i, lon=20.0 - i, speed_m_s=s) for i, s in enumerate(speeds)
    )


class RecordingSurface:
    def __init__(self):
        self.draws = []
        self.markers = []

    def draw_track(self, segments, bounds):
        self.draws.append((segments, bounds))

    def move_marker(self, lat, lon):
        self.markers.append((lat, lon))


def test_segments_use_mean_endpoint_speed():
    # 0 and 5.6 m/s average to 2.8 m/s = 10.08 km/h
    segments = build_segments(_seq(0.0, 5.6, 20.0))

    assert len(segments) == 2
    assert segments[0].start == (10.0, 20.0)
    assert segments[0].end == (11.0, 19.0)
    assert segments[0].speed_m_s == pytest.approx(2.8)
    assert segments[0].band is SpeedBand.MODERATE
    assert segments[1].band is SpeedBand.VERY_HIGH  # 12.8 m/s = 46.1 km/h
    assert segments[1].color == SpeedBand.VERY_HIGH.color


def test_single_point_has_no_segments():
    assert build_segments(_seq(0.0)) == []


def test_bounds():
    b = track_bounds(_seq(0, 0, 0))
    assert b.south_west == (10.0, 18.0)
    assert b.north_east == (12.0, 20.0)


def test_attach_surface_pushes_marker_on_cursor_change(scheduler):
    c = PlaybackController(_seq(0, 1, 2), scheduler=scheduler)
    surface = RecordingSurface()
    detach = attach_surface(c, surface)

    assert len(surface.draws) == 1
    assert surface.markers == [(10.0, 20.0)]

    c.play()  # no cursor change, no marker push
    assert surface.markers == [(10.0, 20.0)]

    scheduler.fire()
    c.seek(2)
    assert surface.markers == [(10.0, 20.0), (11.0, 19.0), (12.0, 18.0)]

    c.load(_seq(0, 0))
    assert len(surface.draws) == 2
    assert surface.markers[-1] == (10.0, 20.0)

    detach()
    c.seek(1)
    assert surface.markers[-1] == (10.0, 20.0)
    c.close()
