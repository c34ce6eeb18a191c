# ridelog/util/paths.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ridelog.formats.parse import SUPPORTED_SUFFIXES


def is_track_file(path: Path) -> bool:
    """True for regular files ending in .gpx/.tcx (any case)."""
    return path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES


def iter_track_files(root: Path) -> Iterable[Path]:
    """Yield .gpx/.tcx files under `root`, sorted, skipping hidden directories."""
    if not root.is_dir():
        return
    for p in sorted(root.rglob("*")):
        rel = p.relative_to(root)
        if any(part.startswith(".") for part in rel.parts[:-1]):
            continue
        if is_track_file(p):
            yield p
