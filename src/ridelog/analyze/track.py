# ridelog/analyze/track.py
"""
Track analysis functions for ridelog
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional, Sequence

from ridelog.analyze.distance import distance
from ridelog.errors import EmptyTrackError
from ridelog.formats.parse import parse
from ridelog.models import DEFAULT_TITLE, EnrichedSample, RawSample, TrackStatistics


def _step_speed(p0: RawSample, p1: RawSample, d_m: float) -> float:
    """Speed over one step; 0 when either time is missing or dt <= 0."""
    if p0.time is None or p1.time is None:
        return 0.0
    dt_s = (p1.time - p0.time).total_seconds()
    if dt_s <= 0:
        return 0.0
    return d_m / dt_s


def _ele_or_zero(ele: Optional[float]) -> float:
    # Missing elevation counts as 0 m, so a gap in <ele> can register as a
    # climb. Existing statistics depend on this.
    if ele is None or math.isnan(ele):
        return 0.0
    return ele


def enrich_samples(samples: Sequence[RawSample]) -> tuple[EnrichedSample, ...]:
    """Add speed (m/s) and cumulative distance (m), strictly in input order."""
    if not samples:
        raise EmptyTrackError("Cannot enrich an empty track")

    first = samples[0]
    out = [EnrichedSample(lat=first.lat, lon=first.lon, ele=first.ele, time=first.time)]
    cum = 0.0

    for p0, p1 in zip(samples, samples[1:]):
        d_m = distance(p0.lat, p0.lon, p1.lat, p1.lon)
        cum += d_m
        out.append(
            EnrichedSample(
                lat=p1.lat,
                lon=p1.lon,
                ele=p1.ele,
                time=p1.time,
                speed_m_s=_step_speed(p0, p1, d_m),
                cum_dist_m=cum,
            )
        )

    return tuple(out)


def elevation_gain(samples: Sequence[RawSample]) -> float:
    """Sum of positive consecutive elevation deltas."""
    gain = 0.0
    for p0, p1 in zip(samples, samples[1:]):
        diff = _ele_or_zero(p1.ele) - _ele_or_zero(p0.ele)
        if diff > 0:
            gain += diff
    return gain


def compute_statistics(samples: Sequence[EnrichedSample], title: str = DEFAULT_TITLE) -> TrackStatistics:
    """
    Summarize an enriched track.

    max/avg speed only consider samples moving faster than 0 m/s, so the
    first sample and stopped or untimed steps do not drag the average down.
    """
    if not samples:
        raise EmptyTrackError("Cannot summarize an empty track")

    speeds = [s.speed_m_s for s in samples if s.speed_m_s > 0]

    return TrackStatistics(
        title=title,
        started_at=samples[0].time,
        finished_at=samples[-1].time,
        total_distance_m=samples[-1].cum_dist_m,
        elevation_gain_m=elevation_gain(samples),
        max_speed_m_s=max(speeds) if speeds else 0.0,
        avg_speed_m_s=(sum(speeds) / len(speeds)) if speeds else 0.0,
    )


def enrich(
    samples: Sequence[RawSample], *, title: str = DEFAULT_TITLE
) -> tuple[tuple[EnrichedSample, ...], TrackStatistics]:
    """
    Enrich raw samples and summarize them.

    Raises:
      EmptyTrackError if `samples` is empty.
    """
    enriched = enrich_samples(samples)
    return enriched, compute_statistics(enriched, title)


def analyze_track(path: Path) -> tuple[tuple[EnrichedSample, ...], TrackStatistics]:
    """Read a .gpx/.tcx file, parse it by suffix and enrich it."""
    path = Path(path)
    track = parse(path.read_bytes(), path.name)
    return enrich(track.samples, title=track.title)
