# ridelog/visualize/plot.py
"""
Plotting routines for ridelog

A matplotlib implementation of the RenderSurface protocol: lon on x, lat on
y, one line per speed-colored segment and a dot for the playback cursor.
"""

from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.lines import Line2D

from ridelog.analyze.classify import legend
from ridelog.visualize.segments import Bounds, ColoredSegment, build_segments, track_bounds

START_COLOR = "#10b981"
END_COLOR = "#ef4444"
MARKER_COLOR = "#8b5cf6"


class MatplotlibSurface:
    def __init__(self, ax=None, *, title: Optional[str] = None):
        if ax is None:
            _, ax = plt.subplots(figsize=(8, 6))
        self.ax = ax
        self.title = title
        self.collection: Optional[LineCollection] = None
        self.marker: Optional[Line2D] = None

    def draw_track(self, segments: Sequence[ColoredSegment], bounds: Bounds) -> None:
        ax = self.ax
        ax.clear()
        self.marker = None

        lines = [[(s.start[1], s.start[0]), (s.end[1], s.end[0])] for s in segments]
        colors = [s.color for s in segments]
        self.collection = LineCollection(lines, colors=colors, linewidths=2, alpha=0.7)
        ax.add_collection(self.collection)

        if segments:
            first, last = segments[0], segments[-1]
            ax.plot(first.start[1], first.start[0], "o", color=START_COLOR, label="start")
            ax.plot(last.end[1], last.end[0], "o", color=END_COLOR, label="finish")

        (south, west), (north, east) = bounds.south_west, bounds.north_east
        pad_lat = (north - south) * 0.05 or 0.001
        pad_lon = (east - west) * 0.05 or 0.001
        ax.set_xlim(west - pad_lon, east + pad_lon)
        ax.set_ylim(south - pad_lat, north + pad_lat)

        handles = [Line2D([0], [0], color=color, lw=3, label=label) for _, label, color in legend()]
        ax.legend(handles=handles, title="Speed", loc="lower right", fontsize="small")
        ax.set_xlabel("Longitude")
        ax.set_ylabel("Latitude")
        ax.set_title(self.title or "Track coloured by speed")

    def move_marker(self, lat: float, lon: float) -> None:
        if self.marker is None:
            (self.marker,) = self.ax.plot([lon], [lat], "o", color=MARKER_COLOR, markersize=9)
        else:
            self.marker.set_data([lon], [lat])


def plot_track(samples, *, cursor: Optional[int] = None, title: Optional[str] = None, show: bool = True):
    """Draw an enriched track once; returns the surface for further use."""
    surface = MatplotlibSurface(title=title)
    surface.draw_track(build_segments(samples), track_bounds(samples))
    if cursor is not None:
        p = samples[cursor]
        surface.move_marker(p.lat, p.lon)
    if show:
        plt.show()
    return surface
