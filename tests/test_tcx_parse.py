import datetime as dt

import pytest

from ridelog.errors import NoActivityDataError, NoTrackpointsError
from ridelog.formats.tcx import TCX_NS, parse_tcx


def _tcx(body: str, ns: str = TCX_NS) -> str:
    return f'<TrainingCenterDatabase xmlns="{ns}">{body}</TrainingCenterDatabase>'


def _tp(lat, lon, time="2024-06-02T06:30:00Z", alt=None):
    alt_el = f"<AltitudeMeters>{alt}</AltitudeMeters>" if alt is not None else ""
    return (
        f"<Trackpoint><Time>{time}</Time><Position>"
        f"<LatitudeDegrees>{lat}</LatitudeDegrees><LongitudeDegrees>{lon}</LongitudeDegrees>"
        f"</Position>{alt_el}</Trackpoint>"
    )


def test_sample_walks_laps_of_first_activity(sample_tcx_path):
    track = parse_tcx(sample_tcx_path.read_bytes())

    assert track.title == "Biking"
    # 4 trackpoints in activity 0, one without Position; activity 1 ignored
    assert len(track.samples) == 3
    assert [p.ele for p in track.samples] == [10.0, 12.5, 11.0]
    assert track.samples[1].lat == pytest.approx(48.857)
    assert track.samples[2].time == dt.datetime(2024, 6, 2, 6, 30, 30, tzinfo=dt.timezone.utc)


def test_single_lap_single_trackpoint():
    doc = _tcx(
        '<Activities><Activity Sport="Running"><Lap><Track>'
        + _tp(1.5, 2.5, alt=3)
        + "</Track></Lap></Activity></Activities>"
    )
    track = parse_tcx(doc)
    assert track.title == "Running"
    (p,) = track.samples
    assert (p.lat, p.lon, p.ele) == (1.5, 2.5, 3.0)


def test_missing_sport_uses_default():
    doc = _tcx("<Activities><Activity><Lap><Track>" + _tp(1, 2) + "</Track></Lap></Activity></Activities>")
    assert parse_tcx(doc).title == "Untitled Ride"


def test_without_namespace():
    doc = _tcx(
        '<Activities><Activity Sport="Biking"><Lap><Track>'
        + _tp(1, 2)
        + _tp(1.1, 2.1)
        + "</Track></Lap></Activity></Activities>",
        ns="",
    ).replace(' xmlns=""', "")
    assert len(parse_tcx(doc).samples) == 2


def test_no_activities():
    with pytest.raises(NoActivityDataError):
        parse_tcx(_tcx("<Courses/>"))


def test_activities_without_activity():
    with pytest.raises(NoActivityDataError):
        parse_tcx(_tcx("<Activities/>"))


def test_no_positioned_trackpoints():
    doc = _tcx(
        '<Activities><Activity Sport="Biking"><Lap><Track>'
        "<Trackpoint><Time>2024-06-02T06:30:00Z</Time></Trackpoint>"
        "<Trackpoint><Time>2024-06-02T06:30:01Z</Time><AltitudeMeters>5</AltitudeMeters></Trackpoint>"
        "</Track></Lap></Activity></Activities>"
    )
    with pytest.raises(NoTrackpointsError):
        parse_tcx(doc)


def test_lap_without_track():
    doc = _tcx('<Activities><Activity Sport="Biking"><Lap><TotalTimeSeconds>1</TotalTimeSeconds></Lap></Activity></Activities>')
    with pytest.raises(NoTrackpointsError):
        parse_tcx(doc)
