# ridelog/playback/readout.py
"""
Display values for a transport control: what the panel under the map shows
for the sample at the cursor.

Clock values are shown in UTC, the zone every parsed timestamp is stored in,
so a readout does not depend on the viewer's machine.
"""

from __future__ import annotations

import datetime as _dt
import math
from dataclasses import dataclass
from typing import Optional

from ridelog.models import KMH_PER_MS
from ridelog.playback.controller import PlaybackState


def format_clock(t: Optional[_dt.datetime]) -> str:
    if t is None:
        return "--:--:--"
    if t.tzinfo is not None:
        t = t.astimezone(_dt.timezone.utc)
    return t.strftime("%H:%M:%S")


def format_speed_kmh(speed_m_s: Optional[float]) -> str:
    if speed_m_s is None:
        return "0.0"
    return f"{speed_m_s * KMH_PER_MS:.1f}"


def format_elevation(ele: Optional[float]) -> str:
    # Half-up rounding: 12.5 m shows as 13, not banker's 12
    if ele is None or math.isnan(ele):
        return "0"
    return str(math.floor(ele + 0.5))


def format_distance_km(cum_dist_m: Optional[float]) -> str:
    if cum_dist_m is None:
        return "0.00"
    return f"{cum_dist_m / 1000:.2f}"


@dataclass(frozen=True)
class Readout:
    cursor: int
    extent: int
    playing: bool
    rate: float
    clock: str
    speed_kmh: str
    elevation_m: str
    distance_km: str
    start_clock: str
    end_clock: str

    @classmethod
    def from_state(cls, state: PlaybackState) -> Readout:
        p = state.current
        return cls(
            cursor=state.cursor,
            extent=state.extent,
            playing=state.playing,
            rate=state.rate,
            clock=format_clock(p.time),
            speed_kmh=format_speed_kmh(p.speed_m_s),
            elevation_m=format_elevation(p.ele),
            distance_km=format_distance_km(p.cum_dist_m),
            start_clock=format_clock(state.sequence[0].time),
            end_clock=format_clock(state.sequence[-1].time),
        )

    def line(self) -> str:
        """One-line rendering for terminals and logs."""
        return (
            f"[{self.cursor}/{self.extent}] {self.clock}  "
            f"{self.speed_kmh} km/h  {self.elevation_m} m  {self.distance_km} km"
        )
