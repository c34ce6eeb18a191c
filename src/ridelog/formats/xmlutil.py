# ridelog/formats/xmlutil.py
"""
Small ElementTree helpers shared by the GPX and TCX readers.

Both dialects are namespaced XML, but real-world exports disagree on which
namespace (GPX 1.0 vs 1.1, TCX with or without the Garmin URI), so readers
take the namespace from the document root instead of hard-coding it.
"""

from __future__ import annotations

import datetime as _dt
import math
import re
from typing import Optional, Union
from xml.etree import ElementTree as ET

from ridelog.errors import MalformedFileError

_FRACTION_RE = re.compile(r"(?<=\d\d:\d\d:\d\d)\.(\d+)")


def load_root(data: Union[bytes, str]) -> ET.Element:
    """
    Parse raw file content into the document root element.

    Raises:
      MalformedFileError if the content is not well-formed XML.
    """
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedFileError(f"Not a well-formed XML document ({e})") from e


def namespace_of(elem: ET.Element) -> str:
    """
    Return the namespace URI of an element's tag, or "" when it has none.

    ElementTree represents namespaced tags internally as
      "{namespace-uri}tag"
    """
    if elem.tag.startswith("{"):
        return elem.tag[1:].split("}", 1)[0]
    return ""


def qn(ns: str, tag: str) -> str:
    """Build an ElementTree-qualified name for `tag` in namespace `ns`."""
    return f"{{{ns}}}{tag}" if ns else tag


def float_or_nan(text: Optional[str]) -> float:
    """
    Coerce attribute/element text to float.

    Missing or unparseable values become NaN; coordinates are trusted and
    never rejected here.
    """
    if text is None:
        return math.nan
    try:
        return float(text.strip())
    except ValueError:
        return math.nan


def optional_float(text: Optional[str]) -> Optional[float]:
    """Like float_or_nan, but an absent or blank value is None."""
    if text is None or not text.strip():
        return None
    return float_or_nan(text)


def parse_time_utc(text: Optional[str]) -> Optional[_dt.datetime]:
    """
    Parse an ISO-8601 timestamp from a <time>/<Time> node.

    Expected examples:
      - "2026-01-02T21:14:44Z"
      - "2026-01-02T21:14:44.123Z"
      - "2026-01-02T21:14:44+00:00"

    Returns a tz-aware UTC datetime, or None if the text is empty or
    unparseable.
    """
    if not text:
        return None
    s = text.strip()
    if not s:
        return None

    # Exports commonly use Z for UTC.
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    # fromisoformat() before 3.11 wants exactly 3 or 6 fraction digits
    s = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), s, count=1)

    try:
        dt = _dt.datetime.fromisoformat(s)
    except ValueError:
        return None

    # Naive times are assumed UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_dt.timezone.utc)

    return dt.astimezone(_dt.timezone.utc)
