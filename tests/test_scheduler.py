from __future__ import annotations

import json
import threading
import time
import unittest

from lottery_live.lottery import DEFAULT_VARIANT_REGISTRY, EUROJACKPOT, POWERBALL
from lottery_live.services.broadcaster import Broadcaster
from lottery_live.services.result_store import ResultStore
from lottery_live.services.scheduler import DrawScheduler, SchedulerState
from tests.helpers import CyclingSource, FakeClock, TempDatabase

# Powerball draws and guesses come out identical (jackpot every time);
# EuroJackpot guesses share the stars but none of the numbers (2/7).
JACKPOT_ON_POWERBALL = {
    (1, 69): 5,
    (1, 26): 1,
    (1, 50): 10,
    (1, 12): 2,
}

NO_JACKPOT = {
    (1, 69): 10,
    (1, 26): 2,
    (1, 50): 10,
    (1, 12): 2,
}


class _FailingStore:
    def __init__(self) -> None:
        self.calls = 0
        self._lock = threading.Lock()

    def append(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        with self._lock:
            self.calls += 1
        raise RuntimeError("database unavailable")


class DrawSchedulerTickTests(unittest.TestCase):
    def setUp(self) -> None:
        self.db = TempDatabase()
        self.store = ResultStore(self.db.session_factory)
        self.broadcaster = Broadcaster()
        self.feed = self.broadcaster.subscribe()
        self.clock = FakeClock()

    def tearDown(self) -> None:
        self.db.close()

    def _scheduler(self, cycles: dict[tuple[int, int], int] | None = None) -> DrawScheduler:
        return DrawScheduler(
            DEFAULT_VARIANT_REGISTRY,
            self.store,
            self.broadcaster,
            source=CyclingSource(cycles) if cycles is not None else None,
            interval=1.0,
            pause_seconds=30.0,
            clock=self.clock,
        )

    def _drain_feed(self) -> list[dict]:
        messages = []
        while (payload := self.feed.get(timeout=0)) is not None:
            messages.append(json.loads(payload))
        return messages

    def test_tick_stores_and_publishes_one_result_per_lottery(self) -> None:
        scheduler = self._scheduler()
        results = scheduler.tick()

        self.assertEqual(sorted(r.lottery_type for r in results), ["eurojackpot", "powerball"])
        self.assertEqual(self.store.count_by_variant("eurojackpot"), 1)
        self.assertEqual(self.store.count_by_variant("powerball"), 1)

        messages = self._drain_feed()
        self.assertEqual(sorted(m["lottery_type"] for m in messages), ["eurojackpot", "powerball"])
        for message in messages:
            self.assertEqual(
                set(message), {"id", "lottery_type", "draw", "guesses", "score", "timestamp"}
            )
            self.assertEqual(len(message["guesses"]), 1)
            self.assertEqual(message["draw"]["type"], message["lottery_type"])
            self.assertTrue(0.0 <= message["score"] <= 1.0)

    def test_stored_score_compares_guess_against_draw(self) -> None:
        scheduler = self._scheduler()
        for record in scheduler.tick():
            variant = EUROJACKPOT if record.lottery_type == "eurojackpot" else POWERBALL
            self.assertEqual(record.score, variant.score(record.guesses[0], record.draw))

    def test_without_jackpot_every_tick_draws(self) -> None:
        scheduler = self._scheduler(NO_JACKPOT)
        for _ in range(3):
            self.assertEqual(len(scheduler.tick()), 2)
            self.assertEqual(scheduler.state, SchedulerState.RUNNING)
            self.clock.advance(1)
        self.assertEqual(self.store.count_jackpots(), 0)

    def test_jackpot_pauses_all_lotteries_for_thirty_seconds(self) -> None:
        # Pausing on a jackpot is a deliberate behavior; an always-ticking
        # loop would fail the cooldown assertions below.
        scheduler = self._scheduler(JACKPOT_ON_POWERBALL)

        results = scheduler.tick()
        scores = {r.lottery_type: r.score for r in results}
        self.assertEqual(scores["powerball"], 1.0)
        self.assertAlmostEqual(scores["eurojackpot"], 2 / 7)
        self.assertEqual(self.store.count_jackpots(), 1)
        # Both results of the jackpot tick are still published.
        self.assertEqual(len(self._drain_feed()), 2)
        self.assertEqual(scheduler.state, SchedulerState.PAUSED)
        self.assertEqual(scheduler.pause_state.resume_at, 30.0)

        for _ in range(29):
            self.clock.advance(1)
            self.assertEqual(scheduler.tick(), [])
        self.assertEqual(self.store.count_by_variant("powerball"), 1)
        self.assertEqual(self.store.count_by_variant("eurojackpot"), 1)
        self.assertEqual(self._drain_feed(), [])
        self.assertAlmostEqual(scheduler.seconds_until_resume(), 1.0)

        self.clock.advance(1)
        resumed = scheduler.tick()
        self.assertEqual(len(resumed), 2)
        self.assertEqual(self.store.count_by_variant("powerball"), 2)
        self.assertEqual(self.store.count_jackpots(), 2)
        # The resumed tick hit another jackpot, so the cooldown starts again.
        self.assertEqual(scheduler.pause_state.resume_at, 60.0)

    def test_pause_state_is_per_instance(self) -> None:
        jackpot = self._scheduler(JACKPOT_ON_POWERBALL)
        other = self._scheduler(NO_JACKPOT)

        jackpot.tick()
        self.assertEqual(jackpot.state, SchedulerState.PAUSED)
        self.assertEqual(other.state, SchedulerState.RUNNING)
        self.assertEqual(len(other.tick()), 2)

    def test_failed_tick_raises_and_publishes_nothing(self) -> None:
        store = _FailingStore()
        scheduler = DrawScheduler(
            DEFAULT_VARIANT_REGISTRY, store, self.broadcaster, clock=self.clock  # type: ignore[arg-type]
        )
        with self.assertRaises(RuntimeError):
            scheduler.tick()
        # Both lotteries were attempted before the failure surfaced.
        self.assertEqual(store.calls, 2)
        self.assertEqual(self._drain_feed(), [])
        self.assertEqual(scheduler.state, SchedulerState.RUNNING)

    def test_no_lotteries_is_a_no_op(self) -> None:
        scheduler = DrawScheduler([], self.store, self.broadcaster, clock=self.clock)
        self.assertEqual(scheduler.tick(), [])


class DrawSchedulerLoopTests(unittest.TestCase):
    def test_next_delay_corrects_for_tick_duration(self) -> None:
        scheduler = DrawScheduler([], _FailingStore(), Broadcaster(), interval=1.0)  # type: ignore[arg-type]
        self.assertAlmostEqual(scheduler.next_delay(0.25), 0.75)
        self.assertEqual(scheduler.next_delay(1.0), 0.0)
        # Overruns are not caught up.
        self.assertEqual(scheduler.next_delay(2.5), 0.0)

    def test_loop_survives_failing_ticks(self) -> None:
        store = _FailingStore()
        scheduler = DrawScheduler(
            DEFAULT_VARIANT_REGISTRY, store, Broadcaster(), interval=0.01  # type: ignore[arg-type]
        )
        with self.assertLogs("lottery_live.services.scheduler", level="ERROR"):
            scheduler.start()
            deadline = time.monotonic() + 5
            while store.calls < 6 and time.monotonic() < deadline:
                time.sleep(0.01)
            self.assertTrue(scheduler.running)
            scheduler.stop()

        self.assertGreaterEqual(store.calls, 6)
        self.assertFalse(scheduler.running)

    def test_start_is_idempotent(self) -> None:
        scheduler = DrawScheduler([], _FailingStore(), Broadcaster(), interval=0.01)  # type: ignore[arg-type]
        scheduler.start()
        first = scheduler._thread
        scheduler.start()
        self.assertIs(scheduler._thread, first)
        scheduler.stop()

    def test_invalid_arguments(self) -> None:
        for kwargs in ({"interval": 0}, {"pause_seconds": -1}, {"max_workers": 0}):
            with self.subTest(kwargs=kwargs), self.assertRaises(ValueError):
                DrawScheduler([], _FailingStore(), Broadcaster(), **kwargs)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
