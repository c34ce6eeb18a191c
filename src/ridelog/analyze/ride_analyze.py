#!/usr/bin/env python3
"""
ridelog-analyze: print distance/speed/elevation statistics for ride files.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ridelog.analyze.track import analyze_track
from ridelog.config import load_config
from ridelog.errors import ParseError, RidelogError
from ridelog.formats.parse import SUPPORTED_SUFFIXES
from ridelog.models import KMH_PER_MS, TrackStatistics
from ridelog.util.fzf import fzf_select_paths
from ridelog.util.logging import log
from ridelog.util.paths import iter_track_files


TSV_HEADER = (
    "file\ttitle\tpoints\tdistance_m\tduration_s\televation_gain_m"
    "\tavg_speed_kmh\tmax_speed_kmh\tstarted_at\tfinished_at"
)


def _iso(t) -> str:
    return t.isoformat() if t is not None else ""


def print_report(path: Path, points: int, stats: TrackStatistics, *, tsv: bool) -> None:
    duration = stats.duration_s
    if tsv:
        print(
            f"{path}\t"
            f"{stats.title}\t"
            f"{points}\t"
            f"{stats.total_distance_m:.2f}\t"
            f"{'' if duration is None else f'{duration:.1f}'}\t"
            f"{stats.elevation_gain_m:.1f}\t"
            f"{stats.avg_speed_m_s * KMH_PER_MS:.2f}\t"
            f"{stats.max_speed_m_s * KMH_PER_MS:.2f}\t"
            f"{_iso(stats.started_at)}\t"
            f"{_iso(stats.finished_at)}"
        )
    else:
        print(f"\n{path}")
        print(f"  title          : {stats.title}")
        print(f"  points         : {points}")
        print(f"  distance (km)  : {stats.total_distance_m / 1000:.2f}")
        print(f"  duration (s)   : {'unknown' if duration is None else f'{duration:.1f}'}")
        print(f"  elev gain (m)  : {stats.elevation_gain_m:.1f}")
        print(f"  avg speed km/h : {stats.avg_speed_m_s * KMH_PER_MS:.1f}")
        print(f"  max speed km/h : {stats.max_speed_m_s * KMH_PER_MS:.1f}")
        print(f"  started        : {_iso(stats.started_at) or 'unknown'}")
        print(f"  finished       : {_iso(stats.finished_at) or 'unknown'}")


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="ridelog: Analyze GPX/TCX ride file(s).")
    ap.add_argument("files", nargs="*",
                    help="One or more .gpx/.tcx files. If omitted, use fzf selection under the work root.")
    ap.add_argument("--work-root", default=None,
                    help="Working root (default: from ridelog config or ~/Rides/_work)")
    ap.add_argument("--tsv", action="store_true",
                    help="Print tab-separated output (good for piping).")
    ap.add_argument("--plot", action="store_true",
                    help="Show each track coloured by speed band.")

    args = ap.parse_args(argv)

    if args.files:
        selected = [Path(f).expanduser() for f in args.files]
    else:
        cfg = load_config()
        work_root = Path(args.work_root).expanduser() if args.work_root else cfg.paths.work_root
        candidates = list(iter_track_files(work_root))
        if not candidates:
            raise SystemExit(f"No {'/'.join(SUPPORTED_SUFFIXES)} files found under {work_root}")
        try:
            selected = fzf_select_paths(candidates, header="Select ride file(s) to analyze:", multi=True)
        except RidelogError as e:
            raise SystemExit(str(e)) from e

    if args.tsv:
        print(TSV_HEADER)

    failed = 0
    for path in selected:
        if not path.is_file():
            log(f"Skipping (not a file): {path}")
            failed += 1
            continue
        try:
            samples, stats = analyze_track(path)
        except ParseError as e:
            log(f"Rejected {path}: {e}")
            failed += 1
            continue
        print_report(path, len(samples), stats, tsv=args.tsv)

        if args.plot:
            from ridelog.visualize.plot import plot_track
            plot_track(samples, title=stats.title)

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
