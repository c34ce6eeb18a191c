# ridelog/analyze/classify.py
"""
Speed bands used to color rendered track segments.

The band -> color table lives here so a rendering surface only needs a
lookup, not any knowledge of speed thresholds.
"""

from __future__ import annotations

import enum
import math

from ridelog.models import KMH_PER_MS


class SpeedBand(enum.IntEnum):
    LOW = 0
    MODERATE = 1
    ELEVATED = 2
    HIGH = 3
    VERY_HIGH = 4

    @property
    def color(self) -> str:
        return BAND_COLORS[self]

    @property
    def label(self) -> str:
        return BAND_LABELS[self]


BAND_COLORS = {
    SpeedBand.LOW: "#3b82f6",        # blue
    SpeedBand.MODERATE: "#10b981",   # green
    SpeedBand.ELEVATED: "#fbbf24",   # yellow
    SpeedBand.HIGH: "#f59e0b",       # orange
    SpeedBand.VERY_HIGH: "#ef4444",  # red
}

BAND_LABELS = {
    SpeedBand.LOW: "< 10 km/h",
    SpeedBand.MODERATE: "10-20 km/h",
    SpeedBand.ELEVATED: "20-30 km/h",
    SpeedBand.HIGH: "30-40 km/h",
    SpeedBand.VERY_HIGH: "> 40 km/h",
}

# Lower bound (km/h, inclusive) of each band above LOW
_THRESHOLDS_KMH = (
    (40.0, SpeedBand.VERY_HIGH),
    (30.0, SpeedBand.HIGH),
    (20.0, SpeedBand.ELEVATED),
    (10.0, SpeedBand.MODERATE),
)


def classify_kmh(speed_kmh: float) -> SpeedBand:
    """
    Band for a speed in km/h. Exact thresholds fall into the upper band.

    NaN is treated as LOW.
    """
    if math.isnan(speed_kmh):
        return SpeedBand.LOW
    for lower, band in _THRESHOLDS_KMH:
        if speed_kmh >= lower:
            return band
    return SpeedBand.LOW


def classify(speed_m_s: float) -> SpeedBand:
    return classify_kmh(speed_m_s * KMH_PER_MS)


def legend() -> list[tuple[SpeedBand, str, str]]:
    """(band, label, color) rows in ascending order, for a map legend."""
    return [(band, band.label, band.color) for band in SpeedBand]
