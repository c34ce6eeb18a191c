# ridelog/ingest/store.py
"""
Track store interface.

Durable storage is somebody else's job; ridelog only needs a store that
takes one TrackStatistics record plus the full enriched sequence, and hands
the sequence back in the same order later.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Protocol, Sequence

from ridelog.errors import TrackNotFoundError
from ridelog.models import EnrichedSample, TrackStatistics
from ridelog.util.logging import utc_now_iso


class TrackStore(Protocol):
    def save_track(self, stats: TrackStatistics, samples: Sequence[EnrichedSample]) -> str: ...

    def load_samples(self, track_id: str) -> tuple[EnrichedSample, ...]: ...

    def load_statistics(self, track_id: str) -> TrackStatistics: ...

    def list_tracks(self) -> list[tuple[str, TrackStatistics]]: ...


@dataclass(frozen=True)
class StoredTrack:
    track_id: str
    stats: TrackStatistics
    samples: tuple[EnrichedSample, ...]
    stored_utc: str


class MemoryTrackStore:
    """In-process TrackStore. Tracks are listed newest first, like a dashboard."""

    def __init__(self) -> None:
        self._tracks: dict[str, StoredTrack] = {}

    def __len__(self) -> int:
        return len(self._tracks)

    def save_track(self, stats: TrackStatistics, samples: Sequence[EnrichedSample]) -> str:
        track_id = uuid.uuid4().hex
        self._tracks[track_id] = StoredTrack(
            track_id=track_id,
            stats=stats,
            samples=tuple(samples),
            stored_utc=utc_now_iso(),
        )
        return track_id

    def _get(self, track_id: str) -> StoredTrack:
        try:
            return self._tracks[track_id]
        except KeyError:
            raise TrackNotFoundError(f"No track stored under id {track_id!r}") from None

    def load_samples(self, track_id: str) -> tuple[EnrichedSample, ...]:
        return self._get(track_id).samples

    def load_statistics(self, track_id: str) -> TrackStatistics:
        return self._get(track_id).stats

    def list_tracks(self) -> list[tuple[str, TrackStatistics]]:
        return [(t.track_id, t.stats) for t in reversed(self._tracks.values())]
