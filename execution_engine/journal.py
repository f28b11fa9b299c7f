"""Append-only transaction log."""

import threading
from typing import Iterator, List, Optional, Set, Tuple

from .models import Transaction


class TransactionLog:
    """Time-ordered record of executed trades; entries are never removed."""

    def __init__(self) -> None:
        self._entries: List[Transaction] = []
        self._ids: Set[str] = set()
        self._lock = threading.Lock()

    def append(self, transaction: Transaction) -> None:
        with self._lock:
            if transaction.transaction_id in self._ids:
                raise ValueError(
                    f"Transaction already recorded: {transaction.transaction_id}"
                )
            self._entries.append(transaction)
            self._ids.add(transaction.transaction_id)

    def all(self) -> Tuple[Transaction, ...]:
        """Most recent first, for display."""

        with self._lock:
            return tuple(reversed(self._entries))

    def chronological(self) -> Tuple[Transaction, ...]:
        with self._lock:
            return tuple(self._entries)

    def latest(self) -> Optional[Transaction]:
        with self._lock:
            return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.chronological())
