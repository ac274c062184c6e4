"""Fixed-cadence draw loop with a cooldown after every jackpot.

Each tick draws, scores and stores one result per registered lottery, then
pushes the results to the live feed. A tick that produces a perfect score
pauses the loop: ticks during the cooldown do nothing, and the first tick at
or after the resume time draws again as usual.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

from lottery_live.lottery import LotteryVariant, RandomNumberSource, SystemRandomSource
from lottery_live.repositories.draw_result_repository import JACKPOT_SCORE, DrawResultRecord
from lottery_live.schemas.result import encode_result
from lottery_live.services.broadcaster import Broadcaster
from lottery_live.services.result_store import ResultStore

logger = logging.getLogger(__name__)


class SchedulerState(str, Enum):
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


@dataclass(frozen=True)
class PauseState:
    """Pause flag plus the clock reading at which drawing resumes."""

    paused: bool = False
    resume_at: float = 0.0

    @property
    def state(self) -> SchedulerState:
        return SchedulerState.PAUSED if self.paused else SchedulerState.RUNNING


class DrawScheduler:
    """Run every lottery once per interval and publish the results."""

    def __init__(
        self,
        variants: Iterable[LotteryVariant],
        store: ResultStore,
        broadcaster: Broadcaster,
        *,
        source: RandomNumberSource | None = None,
        interval: float = 1.0,
        pause_seconds: float = 30.0,
        max_workers: int = 4,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        if pause_seconds < 0:
            raise ValueError("pause_seconds must not be negative")
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")

        self._variants = {variant.key: variant for variant in variants}
        self._store = store
        self._broadcaster = broadcaster
        self._source = source or SystemRandomSource()
        self._interval = float(interval)
        self._pause_seconds = float(pause_seconds)
        self._max_workers = max_workers
        self._clock = clock

        self._state_lock = threading.Lock()
        self._pause = PauseState()

        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def pause_state(self) -> PauseState:
        with self._state_lock:
            return self._pause

    @property
    def state(self) -> SchedulerState:
        return self.pause_state.state

    @property
    def interval(self) -> float:
        return self._interval

    def seconds_until_resume(self) -> float:
        pause = self.pause_state
        if not pause.paused:
            return 0.0
        return max(0.0, pause.resume_at - self._clock())

    def tick(self) -> list[DrawResultRecord]:
        """Run one tick body and return the stored results.

        Returns an empty list while paused. Errors from drawing or storing
        propagate to the caller; nothing is published for a failed tick.
        """

        now = self._clock()
        if not self._resume_if_due(now):
            return []

        results = self._draw_all()
        for record in results:
            variant = self._variants[record.lottery_type]
            self._broadcaster.publish(encode_result(variant.schema, record))

        if any(record.score == JACKPOT_SCORE for record in results):
            with self._state_lock:
                self._pause = PauseState(paused=True, resume_at=now + self._pause_seconds)
            logger.info(
                "JACKPOT in %s, pausing draws for %.0f seconds",
                ", ".join(r.lottery_type for r in results if r.score == JACKPOT_SCORE),
                self._pause_seconds,
            )
        return results

    def _resume_if_due(self, now: float) -> bool:
        with self._state_lock:
            if not self._pause.paused:
                return True
            if now < self._pause.resume_at:
                return False
            self._pause = PauseState()
        logger.info("Resuming lottery draws after jackpot cooldown")
        return True

    def _draw_all(self) -> list[DrawResultRecord]:
        variants = list(self._variants.values())
        if not variants:
            return []

        workers = min(self._max_workers, len(variants))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="draw") as pool:
            futures = [pool.submit(self._draw_one, variant) for variant in variants]
        # Leaving the executor block waits for every variant.
        return [future.result() for future in futures]

    def _draw_one(self, variant: LotteryVariant) -> DrawResultRecord:
        draw = variant.draw(self._source)
        guess = variant.draw(self._source)
        score = variant.score(guess, draw)
        return self._store.append(variant.key, draw, [guess], score)

    def next_delay(self, elapsed: float) -> float:
        """Seconds to wait after a tick body that took ``elapsed`` seconds."""
        return max(0.0, self._interval - elapsed)

    def run_forever(self) -> None:
        """Tick until :meth:`stop` is called. Tick errors are logged, not raised."""

        logger.info(
            "Draw scheduler started: %s every %.2fs",
            ", ".join(self._variants) or "no lotteries",
            self._interval,
        )
        while not self._stop.is_set():
            started = self._clock()
            try:
                self.tick()
            except Exception:
                logger.exception("Draw tick failed")
            self._stop.wait(self.next_delay(self._clock() - started))
        logger.info("Draw scheduler stopped")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="draw-scheduler", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
