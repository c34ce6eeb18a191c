from __future__ import annotations

import datetime as dt
import math
from pathlib import Path

import matplotlib
import pytest

matplotlib.use("Agg")

from ridelog.analyze.distance import EARTH_RADIUS_M

GPX11 = "http://www.topografix.com/GPX/1/1"
TCX2 = "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"
T0 = dt.datetime(2024, 5, 1, 7, 0, 0, tzinfo=dt.timezone.utc)

# Degrees of latitude spanning 10 m on the meridian
DLAT_10M = math.degrees(10.0 / EARTH_RADIUS_M)


@pytest.fixture
def sample_gpx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.gpx"


@pytest.fixture
def sample_tcx_path() -> Path:
    return Path(__file__).parent / "data" / "sample.tcx"


@pytest.fixture
def make_gpx():
    """Build a one-track GPX document from (lat, lon, ele, time) tuples."""

    def build(points, *, name: str | None = None, ns: str | None = GPX11) -> str:
        pts = []
        for lat, lon, ele, time in points:
            body = ""
            if ele is not None:
                body += f"<ele>{ele}</ele>"
            if time is not None:
                body += f"<time>{time.isoformat().replace('+00:00', 'Z')}</time>"
            pts.append(f'<trkpt lat="{lat!r}" lon="{lon!r}">{body}</trkpt>')
        name_el = f"<name>{name}</name>" if name is not None else ""
        xmlns = f' xmlns="{ns}"' if ns else ""
        return (
            f'<gpx version="1.1" creator="test"{xmlns}>'
            f"<trk>{name_el}<trkseg>{''.join(pts)}</trkseg></trk></gpx>"
        )

    return build


@pytest.fixture
def straight_line_points():
    """Three points 10 m apart along the meridian, 1 s apart."""
    return [(i * DLAT_10M, 0.0, None, T0 + dt.timedelta(seconds=i)) for i in range(3)]


class FakeHandle:
    def __init__(self, scheduler: FakeScheduler, delay: float, callback):
        self.scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records call_later() requests; fire() runs the newest live one."""

    def __init__(self) -> None:
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback, *args):
        h = FakeHandle(self, delay, lambda: callback(*args))
        self.handles.append(h)
        return h

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self) -> None:
        h = self.pending[-1]
        h.fired = True
        h.callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
