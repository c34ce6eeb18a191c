# ridelog/formats/gpx.py
"""
GPX reader for ridelog

This module is intentionally format-focused:
- GPX namespace handling (1.0, 1.1, or none)
- extracting the first track's points and name

Only the first <trk> is read. Files with several tracks keep the rest
unread; no multi-track merging is attempted.
"""

from __future__ import annotations

from typing import Union
from xml.etree import ElementTree as ET

from ridelog.errors import NoTrackDataError
from ridelog.formats.xmlutil import (
    float_or_nan,
    load_root,
    namespace_of,
    optional_float,
    parse_time_utc,
    qn,
)
from ridelog.models import DEFAULT_TITLE, ParsedTrack, RawSample


def _find_first_trk(root: ET.Element, ns: str) -> ET.Element | None:
    return root.find(qn(ns, "trk"))


def _track_title(trk: ET.Element, ns: str) -> str:
    name = (trk.findtext(qn(ns, "name")) or "").strip()
    return name or DEFAULT_TITLE


def extract_trackpoints(trk: ET.Element, ns: str) -> list[RawSample]:
    """Extract ordered trackpoints from every <trkseg> of one <trk>."""
    pts: list[RawSample] = []

    for trkpt in trk.iter(qn(ns, "trkpt")):
        lat = float_or_nan(trkpt.get("lat"))
        lon = float_or_nan(trkpt.get("lon"))
        ele = optional_float(trkpt.findtext(qn(ns, "ele")))
        time = parse_time_utc(trkpt.findtext(qn(ns, "time")))

        pts.append(RawSample(lat=lat, lon=lon, ele=ele, time=time))

    return pts


def parse_gpx(data: Union[bytes, str]) -> ParsedTrack:
    """
    Parse GPX content into a ParsedTrack.

    Raises:
      MalformedFileError, NoTrackDataError
    """
    root = load_root(data)
    ns = namespace_of(root)

    trk = _find_first_trk(root, ns)
    if trk is None:
        raise NoTrackDataError("No track data found in GPX file")

    pts = extract_trackpoints(trk, ns)
    if not pts:
        raise NoTrackDataError("No track data found in GPX file")

    return ParsedTrack(title=_track_title(trk, ns), samples=tuple(pts))
