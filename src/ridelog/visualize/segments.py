# ridelog/visualize/segments.py
"""
What a map surface needs to draw a track: speed-colored segments, fit
bounds, and a marker that follows the playback cursor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

from ridelog.analyze.classify import SpeedBand, classify
from ridelog.models import EnrichedSample
from ridelog.playback.controller import PlaybackController, PlaybackState

LatLon = tuple[float, float]


@dataclass(frozen=True)
class ColoredSegment:
    start: LatLon
    end: LatLon
    speed_m_s: float
    band: SpeedBand

    @property
    def color(self) -> str:
        return self.band.color


@dataclass(frozen=True)
class Bounds:
    south_west: LatLon
    north_east: LatLon


class RenderSurface(Protocol):
    def draw_track(self, segments: Sequence[ColoredSegment], bounds: Bounds) -> None: ...

    def move_marker(self, lat: float, lon: float) -> None: ...


def build_segments(samples: Sequence[EnrichedSample]) -> list[ColoredSegment]:
    """One segment per consecutive pair, colored by the mean endpoint speed."""
    segments: list[ColoredSegment] = []
    for p1, p2 in zip(samples, samples[1:]):
        speed = (p1.speed_m_s + p2.speed_m_s) / 2
        segments.append(
            ColoredSegment(
                start=(p1.lat, p1.lon),
                end=(p2.lat, p2.lon),
                speed_m_s=speed,
                band=classify(speed),
            )
        )
    return segments


def track_bounds(samples: Sequence[EnrichedSample]) -> Bounds:
    lats = [p.lat for p in samples]
    lons = [p.lon for p in samples]
    return Bounds(south_west=(min(lats), min(lons)), north_east=(max(lats), max(lons)))


def attach_surface(controller: PlaybackController, surface: RenderSurface) -> Callable[[], None]:
    """
    Draw the controller's track on `surface` and keep its marker on the
    cursor. Returns a callable that detaches the surface.

    The track is redrawn whenever the controller loads another sequence;
    the marker moves only when the cursor does.
    """
    shown: dict = {"sequence": None, "cursor": None}

    def on_change(state: PlaybackState) -> None:
        redraw = shown["sequence"] is not state.sequence
        if redraw:
            surface.draw_track(build_segments(state.sequence), track_bounds(state.sequence))
            shown["sequence"] = state.sequence
        if redraw or shown["cursor"] != state.cursor:
            shown["cursor"] = state.cursor
            p = state.current
            surface.move_marker(p.lat, p.lon)

    on_change(controller.state)
    return controller.add_listener(on_change)
