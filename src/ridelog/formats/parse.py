# ridelog/formats/parse.py
"""
Format dispatch: pick the GPX or TCX reader from a filename/extension hint.
"""

from __future__ import annotations

import enum
from typing import Union

from ridelog.errors import UnsupportedFormatError
from ridelog.formats.gpx import parse_gpx
from ridelog.formats.tcx import parse_tcx
from ridelog.models import ParsedTrack


class TrackFormat(enum.Enum):
    GPX = "gpx"
    TCX = "tcx"


SUPPORTED_SUFFIXES = tuple(f".{f.value}" for f in TrackFormat)


def detect_format(format_hint: str) -> TrackFormat:
    """
    Resolve a hint such as "ride.GPX", ".tcx" or "gpx" (case-insensitive).

    Raises:
      UnsupportedFormatError for anything other than gpx/tcx.
    """
    ext = (format_hint or "").strip().rsplit(".", 1)[-1].lower()
    try:
        return TrackFormat(ext)
    except ValueError:
        raise UnsupportedFormatError(
            f"Unsupported file format {format_hint!r}. Please use a GPX or TCX file."
        ) from None


def parse(data: Union[bytes, str], format_hint: str) -> ParsedTrack:
    """Parse raw file content; no file I/O happens here."""
    fmt = detect_format(format_hint)
    if fmt is TrackFormat.GPX:
        return parse_gpx(data)
    return parse_tcx(data)
