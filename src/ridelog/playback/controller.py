# ridelog/playback/controller.py
"""
Playback controller: a cursor over an enriched track plus an autoplay clock.

The controller is a plain state machine (Paused <-> Playing) that pushes
every new PlaybackState to registered listeners. UI bindings (map marker,
scrubber, transport buttons) are listeners or callers; nothing here knows
about them.

Scheduling is cooperative. The autoplay tick is a timer on the same event
loop that runs every other controller call, so there is no locking. Any
object with asyncio's `call_later(delay, callback) -> handle.cancel()` shape
works as the scheduler; by default the running asyncio loop is used.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional, Protocol, Sequence

from ridelog.errors import IndexOutOfRangeError, InvalidRateError, PlaybackError
from ridelog.models import EnrichedSample

# Tick granularity at rate 1.0, in seconds
BASE_PERIOD_S = 0.1


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


@dataclass(frozen=True)
class PlaybackState:
    sequence: Sequence[EnrichedSample]
    cursor: int = 0
    playing: bool = False
    rate: float = 1.0

    @property
    def current(self) -> EnrichedSample:
        return self.sequence[self.cursor]

    @property
    def extent(self) -> int:
        """Highest valid cursor (len - 1), as shown on a scrubber."""
        return len(self.sequence) - 1


Listener = Callable[[PlaybackState], None]


def _check_rate(rate: float) -> float:
    try:
        r = float(rate)
    except (TypeError, ValueError):
        raise InvalidRateError(f"Playback rate must be a number, got {rate!r}") from None
    if not math.isfinite(r) or r <= 0:
        raise InvalidRateError(f"Playback rate must be > 0, got {rate!r}")
    return r


class PlaybackController:
    """
    Owns the cursor, the playing flag, the rate and the autoplay timer for
    one track at a time. The sample sequence itself is borrowed read-only.
    """

    def __init__(
        self,
        samples: Sequence[EnrichedSample],
        *,
        scheduler: Optional[Scheduler] = None,
        base_period: float = BASE_PERIOD_S,
        rate: float = 1.0,
    ) -> None:
        if base_period <= 0:
            raise PlaybackError(f"base_period must be > 0, got {base_period!r}")
        self._scheduler = scheduler
        self._base_period = base_period
        self._handle: Optional[TimerHandle] = None
        self._listeners: list[Listener] = []
        self._state = PlaybackState(sequence=self._check_sequence(samples), rate=_check_rate(rate))

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def cursor(self) -> int:
        return self._state.cursor

    @property
    def playing(self) -> bool:
        return self._state.playing

    @property
    def rate(self) -> float:
        return self._state.rate

    @property
    def current(self) -> EnrichedSample:
        return self._state.current

    @property
    def period(self) -> float:
        """Seconds between autoplay ticks at the current rate."""
        return self._base_period / self._state.rate

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that removes it again."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def _set_state(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------
    def _get_scheduler(self) -> Scheduler:
        if self._scheduler is None:
            # Raises RuntimeError outside a running loop: autoplay needs one.
            self._scheduler = asyncio.get_running_loop()
        return self._scheduler

    def _schedule(self) -> None:
        self._handle = self._get_scheduler().call_later(self.period, self.tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def seek(self, index: int) -> None:
        """
        Move the cursor. Always leaves playback Paused (scrubbing interrupts
        autoplay) and notifies listeners synchronously.

        Raises:
          IndexOutOfRangeError, leaving the state untouched.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise IndexOutOfRangeError(f"Seek index must be an int, got {index!r}")
        if not 0 <= index <= self._state.extent:
            raise IndexOutOfRangeError(
                f"Seek index {index} outside [0, {self._state.extent}]"
            )
        self._cancel()
        self._set_state(cursor=index, playing=False)

    def reset(self) -> None:
        self.seek(0)

    def play(self) -> None:
        if self._state.playing:
            return
        self._schedule()
        self._set_state(playing=True)

    def pause(self) -> None:
        if not self._state.playing:
            return
        self._cancel()
        self._set_state(playing=False)

    def toggle(self) -> None:
        if self._state.playing:
            self.pause()
        else:
            self.play()

    def set_rate(self, rate: float) -> None:
        """
        Change the playback rate; the tick period becomes base_period / rate.

        Raises:
          InvalidRateError for non-finite or non-positive rates.
        """
        r = _check_rate(rate)
        self._cancel()
        self._set_state(rate=r)
        if self._state.playing and self._handle is None:
            self._schedule()

    def tick(self) -> None:
        """Advance one sample, wrapping to 0 after the last; timer callback."""
        # Called by hand while Playing, the pending timer must not keep running.
        self._cancel()
        if not self._state.playing:
            return
        self._set_state(cursor=(self._state.cursor + 1) % len(self._state.sequence))
        # A listener may have paused, or re-armed the timer via set_rate.
        if self._state.playing and self._handle is None:
            self._schedule()

    def load(self, samples: Sequence[EnrichedSample]) -> None:
        """Swap in another track: stops autoplay and rewinds to 0."""
        sequence = self._check_sequence(samples)
        self._cancel()
        self._set_state(sequence=sequence, cursor=0, playing=False)

    def close(self) -> None:
        """Cancel any pending tick and drop all listeners."""
        self._cancel()
        if self._state.playing:
            self._state = replace(self._state, playing=False)
        self._listeners.clear()

    def __enter__(self) -> PlaybackController:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @staticmethod
    def _check_sequence(samples: Sequence[EnrichedSample]) -> tuple[EnrichedSample, ...]:
        seq = tuple(samples)
        if not seq:
            raise PlaybackError("Cannot play back an empty track")
        return seq
