# ridelog/ingest/ride_ingest.py
"""Ride ingestion: file -> parse -> enrich -> store.

Ingestion is all-or-nothing. Parsing and enrichment both finish before the
store is touched, so a rejected file never leaves partial points behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ridelog.analyze.track import enrich
from ridelog.formats.parse import parse
from ridelog.ingest.store import TrackStore
from ridelog.models import EnrichedSample, TrackStatistics
from ridelog.util.logging import log


@dataclass(frozen=True)
class IngestResult:
    track_id: str
    stats: TrackStatistics
    samples: tuple[EnrichedSample, ...]


def ingest_bytes(data: Union[bytes, str], filename: str, store: TrackStore) -> IngestResult:
    """
    Parse, enrich and store one file's content.

    Raises:
      ParseError, EnrichmentError (nothing stored)
    """
    track = parse(data, filename)
    samples, stats = enrich(track.samples, title=track.title)
    log(f"Parsed {filename}: {len(samples)} points, {stats.total_distance_m:.0f} m")

    track_id = store.save_track(stats, samples)
    log(f"Stored {filename} as track {track_id}")
    return IngestResult(track_id=track_id, stats=stats, samples=samples)


def ingest_file(path: Path, store: TrackStore) -> IngestResult:
    path = Path(path)
    return ingest_bytes(path.read_bytes(), path.name, store)
