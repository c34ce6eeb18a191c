# ridelog/errors

"""
ridelog.errors

Central exception hierarchy for ridelog.

Rationale:
  - Parsers, the enrichment engine and the playback controller raise specific,
    meaningful errors.
  - Callers can catch RidelogError (broad) or specific subclasses (narrow).
"""


class RidelogError(RuntimeError):
    """Base class for all ridelog runtime errors."""


# ---- Parse errors ------------------------------

class ParseError(RidelogError):
    """A track file was rejected; nothing from it may be stored."""

class UnsupportedFormatError(ParseError):
    """File extension is neither .gpx nor .tcx."""

class MalformedFileError(ParseError):
    """File content is not well-formed XML."""

class NoTrackDataError(ParseError):
    """GPX has no <trk>, or its first track has no points."""

class NoActivityDataError(ParseError):
    """TCX has no Activities/Activity node."""

class NoTrackpointsError(ParseError):
    """TCX activity yielded zero trackpoints carrying a Position."""


# ---- Enrichment errors -------------------------

class EnrichmentError(RidelogError):
    """Errors in the kinematic enrichment pass."""

class EmptyTrackError(EnrichmentError):
    """Enrichment was handed zero samples (parser contract violated)."""


# ---- Playback errors ---------------------------

class PlaybackError(RidelogError):
    """Errors raised by the playback controller."""

class IndexOutOfRangeError(PlaybackError):
    """Seek target is outside [0, len - 1]."""

class InvalidRateError(PlaybackError):
    """Playback rate must be a finite number > 0."""


# ---- Track store errors ------------------------

class StorageError(RidelogError):
    """Errors interacting with a track store."""

class TrackNotFoundError(StorageError):
    """No track is stored under the requested id."""


# ---- CLI helpers -------------------------------

class FzfNotFoundError(RidelogError):
    """fzf is required but not available on PATH."""
