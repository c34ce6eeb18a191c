# ridelog/formats/tcx.py
"""
TCX (Garmin Training Center) reader for ridelog.

Walks TrainingCenterDatabase -> Activities -> Activity[0] -> Lap* -> Track*
-> Trackpoint*. Laps are concatenated in document order. Trackpoints
without a <Position> (heart-rate only, pauses) are dropped.
"""

from __future__ import annotations

from typing import Union
from xml.etree import ElementTree as ET

from ridelog.errors import NoActivityDataError, NoTrackpointsError
from ridelog.formats.xmlutil import (
    float_or_nan,
    load_root,
    namespace_of,
    optional_float,
    parse_time_utc,
    qn,
)
from ridelog.models import DEFAULT_TITLE, ParsedTrack, RawSample

TCX_NS = "http://www.garmin.com/xmlschemas/TrainingCenterDatabase/v2"


def _first_activity(root: ET.Element, ns: str) -> ET.Element | None:
    activities = root.find(qn(ns, "Activities"))
    if activities is None:
        return None
    return activities.find(qn(ns, "Activity"))


def _trackpoint_sample(tp: ET.Element, ns: str) -> RawSample | None:
    pos = tp.find(qn(ns, "Position"))
    if pos is None:
        return None
    return RawSample(
        lat=float_or_nan(pos.findtext(qn(ns, "LatitudeDegrees"))),
        lon=float_or_nan(pos.findtext(qn(ns, "LongitudeDegrees"))),
        ele=optional_float(tp.findtext(qn(ns, "AltitudeMeters"))),
        time=parse_time_utc(tp.findtext(qn(ns, "Time"))),
    )


def extract_trackpoints(activity: ET.Element, ns: str) -> list[RawSample]:
    pts: list[RawSample] = []
    for lap in activity.findall(qn(ns, "Lap")):
        for track in lap.findall(qn(ns, "Track")):
            for tp in track.findall(qn(ns, "Trackpoint")):
                sample = _trackpoint_sample(tp, ns)
                if sample is not None:
                    pts.append(sample)
    return pts


def parse_tcx(data: Union[bytes, str]) -> ParsedTrack:
    """
    Parse TCX content into a ParsedTrack titled by the activity's Sport.

    Raises:
      MalformedFileError, NoActivityDataError, NoTrackpointsError
    """
    root = load_root(data)
    ns = namespace_of(root)

    activity = _first_activity(root, ns)
    if activity is None:
        raise NoActivityDataError("No activity data found in TCX file")

    pts = extract_trackpoints(activity, ns)
    if not pts:
        raise NoTrackpointsError("No trackpoints found in TCX file")

    title = (activity.get("Sport") or "").strip() or DEFAULT_TITLE
    return ParsedTrack(title=title, samples=tuple(pts))
