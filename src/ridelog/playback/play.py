#!/usr/bin/env python3
"""
ridelog-play: replay a ride in the terminal.

Ingests one file into an in-memory store, then runs the playback controller
on an asyncio loop and prints a readout line for every cursor move.
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from ridelog.config import load_config
from ridelog.errors import PlaybackError, ParseError
from ridelog.ingest.ride_ingest import ingest_file
from ridelog.ingest.store import MemoryTrackStore
from ridelog.playback.controller import PlaybackController, PlaybackState
from ridelog.playback.readout import Readout
from ridelog.util.logging import log


async def replay(controller: PlaybackController, *, ticks: int) -> int:
    """
    Play until `ticks` cursor moves happened (default: one full lap back to
    the start). Returns the number of moves seen.
    """
    done = asyncio.get_running_loop().create_future()
    moves = 0
    was_playing = controller.playing

    def on_change(state: PlaybackState) -> None:
        nonlocal moves, was_playing
        started = state.playing and not was_playing
        was_playing = state.playing
        # Only ticks arrive while already playing
        if started or not state.playing:
            return
        moves += 1
        print(Readout.from_state(state).line())
        if moves >= ticks and not done.done():
            controller.pause()
            done.set_result(None)

    remove = controller.add_listener(on_change)
    try:
        print(Readout.from_state(controller.state).line())
        if ticks > 0:
            controller.play()
            await done
    finally:
        remove()
        controller.close()
    return moves


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()

    ap = argparse.ArgumentParser(description="ridelog: Replay a GPX/TCX ride.")
    ap.add_argument("file", help="A .gpx or .tcx file")
    ap.add_argument("--rate", type=float, default=cfg.playback.default_rate,
                    help=f"Playback rate, e.g. {', '.join(f'{r:g}' for r in cfg.playback.rate_choices)}")
    ap.add_argument("--ticks", type=int, default=None,
                    help="Stop after this many cursor moves (default: one full lap)")
    args = ap.parse_args(argv)

    store = MemoryTrackStore()
    try:
        result = ingest_file(Path(args.file).expanduser(), store)
    except ParseError as e:
        log(f"Rejected {args.file}: {e}")
        return 1

    samples = store.load_samples(result.track_id)
    ticks = args.ticks if args.ticks is not None else len(samples)

    try:
        controller = PlaybackController(
            samples,
            base_period=cfg.playback.base_period_s,
            rate=args.rate,
        )
    except PlaybackError as e:
        log(str(e))
        return 2

    print(f"{result.stats.title}: {len(samples)} points")
    asyncio.run(replay(controller, ticks=ticks))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
