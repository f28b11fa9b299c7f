"""Unit tests for the transaction log and notification stream."""

import unittest

from execution_engine.journal import TransactionLog
from execution_engine.models import TradeDirection, TradeOrigin, Transaction
from execution_engine.notifications import NotificationCenter, NotificationLevel


def _transaction(transaction_id: str, sequence: int) -> Transaction:
    return Transaction(
        transaction_id=transaction_id,
        sequence=sequence,
        direction=TradeDirection.BUY,
        asset_id="alpha",
        symbol="alp",
        quantity=1.0,
        price=10.0,
        notional_usd=10.0,
        timestamp="2026-01-01T00:00:00+00:00",
        origin=TradeOrigin.MANUAL,
    )


class TransactionLogTests(unittest.TestCase):
    def test_display_order_is_most_recent_first(self) -> None:
        log = TransactionLog()
        log.append(_transaction("a", 1))
        log.append(_transaction("b", 2))

        self.assertEqual([item.transaction_id for item in log.all()], ["b", "a"])
        self.assertEqual([item.transaction_id for item in log.chronological()], ["a", "b"])
        self.assertEqual(log.latest().transaction_id, "b")
        self.assertEqual(len(log), 2)

    def test_duplicate_ids_are_refused(self) -> None:
        log = TransactionLog()
        log.append(_transaction("a", 1))
        with self.assertRaises(ValueError):
            log.append(_transaction("a", 2))
        self.assertEqual(len(log), 1)

    def test_empty_log(self) -> None:
        log = TransactionLog()
        self.assertIsNone(log.latest())
        self.assertEqual(log.all(), ())


class NotificationCenterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.center = NotificationCenter(history=2, time_provider=lambda: "t0")

    def test_history_is_bounded_and_newest_first(self) -> None:
        self.center.success("one")
        self.center.error("two")
        self.center.info("three")

        recent = self.center.recent()
        self.assertEqual([item.message for item in recent], ["three", "two"])
        self.assertEqual(recent[1].level, NotificationLevel.ERROR)
        self.assertEqual(self.center.latest().to_dict(), {"message": "three", "level": "info", "timestamp": "t0"})

    def test_subscribers_receive_and_can_unsubscribe(self) -> None:
        received = []
        unsubscribe = self.center.subscribe(received.append)

        self.center.info("hello")
        unsubscribe()
        self.center.info("ignored")

        self.assertEqual([item.message for item in received], ["hello"])

    def test_failing_subscriber_does_not_block_publish(self) -> None:
        def broken(_notification) -> None:
            raise RuntimeError("boom")

        self.center.subscribe(broken)
        with self.assertLogs("execution_engine.notifications", level="ERROR"):
            notification = self.center.success("still delivered")

        self.assertEqual(self.center.latest(), notification)


if __name__ == "__main__":
    unittest.main()
