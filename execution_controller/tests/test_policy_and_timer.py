"""Unit tests for candidate sampling and the periodic runner."""

import random
import threading
import unittest

from core.models import Quote
from execution_controller.policy import SamplingPolicy
from execution_controller.timer import PeriodicTask


def _listing(count: int):
    return tuple(
        Quote(asset_id=f"coin-{index}", symbol=f"c{index}", current_price=1.0, high_24h=1.0, low_24h=1.0)
        for index in range(count)
    )


class SamplingPolicyTests(unittest.TestCase):
    def test_picks_only_from_top_of_listing(self) -> None:
        policy = SamplingPolicy(top_n=3)
        listing = _listing(10)
        rng = random.Random(1)

        picked = {policy.pick(listing, rng).asset_id for _ in range(200)}

        self.assertEqual(picked, {"coin-0", "coin-1", "coin-2"})

    def test_short_listing_uses_what_exists(self) -> None:
        policy = SamplingPolicy(top_n=20)
        self.assertEqual(policy.pick(_listing(1), random.Random(3)).asset_id, "coin-0")

    def test_empty_listing_yields_nothing(self) -> None:
        self.assertIsNone(SamplingPolicy().pick((), random.Random()))

    def test_same_seed_same_sequence(self) -> None:
        policy = SamplingPolicy(top_n=5)
        listing = _listing(8)
        first = [policy.pick(listing, random.Random(42)).asset_id for _ in range(3)]
        second = [policy.pick(listing, random.Random(42)).asset_id for _ in range(3)]
        self.assertEqual(first, second)

    def test_rejects_non_positive_settings(self) -> None:
        with self.assertRaises(ValueError):
            SamplingPolicy(top_n=0)
        with self.assertRaises(ValueError):
            SamplingPolicy(period_seconds=0)


class PeriodicTaskTests(unittest.TestCase):
    def test_runs_until_stopped_and_survives_errors(self) -> None:
        calls = []
        done = threading.Event()

        def action() -> None:
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("first call fails")
            done.set()

        task = PeriodicTask(0.01, action, name="TestTask")
        with self.assertLogs("execution_controller.timer", level="ERROR"):
            task.start()
            self.assertTrue(done.wait(timeout=2.0))
        task.stop()

        self.assertFalse(task.running)
        self.assertGreaterEqual(len(calls), 2)

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            PeriodicTask(0, lambda: None, name="Never")


if __name__ == "__main__":
    unittest.main()
