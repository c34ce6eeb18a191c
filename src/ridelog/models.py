# ridelog/models.py
"""
Core data model for ridelog.

Plain frozen dataclasses with no framework dependencies. Samples are produced
by the format parsers (RawSample) and the enrichment engine (EnrichedSample)
and are never mutated afterwards.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from typing import Optional

DEFAULT_TITLE = "Untitled Ride"

# m/s -> km/h
KMH_PER_MS = 3.6


@dataclass(frozen=True)
class RawSample:
    """
    One track point as read from a file.

    lat/lon are not range-checked: malformed input propagates as NaN.
    """
    lat: float
    lon: float
    ele: Optional[float] = None
    time: Optional[_dt.datetime] = None


@dataclass(frozen=True)
class EnrichedSample(RawSample):
    speed_m_s: float = 0.0
    cum_dist_m: float = 0.0

    @property
    def speed_kmh(self) -> float:
        return self.speed_m_s * KMH_PER_MS


@dataclass(frozen=True)
class ParsedTrack:
    """Parser output: a title plus the ordered raw samples."""
    title: str
    samples: tuple[RawSample, ...]


@dataclass(frozen=True)
class TrackStatistics:
    """
    Summary computed once at ingestion time.

    started_at/finished_at are None when the source had no time data;
    consumers treat that as "unknown duration".
    """
    title: str
    started_at: Optional[_dt.datetime]
    finished_at: Optional[_dt.datetime]
    total_distance_m: float
    elevation_gain_m: float
    max_speed_m_s: float
    avg_speed_m_s: float

    @property
    def duration_s(self) -> Optional[float]:
        if self.started_at is None or self.finished_at is None:
            return None
        return (self.finished_at - self.started_at).total_seconds()
