"""
Live snapshot subscriptions.

A subscription pairs a loader (the query, e.g. "customers assigned to X") with
a callback. The callback gets a full snapshot right away and again every time
a write to that collection is published. There is no diffing; consumers
recompute from the whole snapshot.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, Sequence

from utils.error_handling import AppError
from utils.logging_config import get_logger

logger = get_logger(__name__)

Loader = Callable[[], Sequence]
Callback = Callable[[Sequence], None]

CUSTOMERS = "customers"
STAFF = "staff"


@dataclass
class _Subscription:
    collection: str
    loader: Loader
    callback: Callback


class SnapshotFeed:
    """In-process publisher of collection snapshots."""

    def __init__(self) -> None:
        self._subscriptions: Dict[int, _Subscription] = {}
        self._ids = itertools.count(1)

    def subscribe(self, collection: str, loader: Loader, callback: Callback) -> Callable[[], None]:
        """Register a query; returns the function that cancels it."""
        sub_id = next(self._ids)
        subscription = _Subscription(collection, loader, callback)
        self._subscriptions[sub_id] = subscription
        self._emit(subscription)

        def unsubscribe() -> None:
            self._subscriptions.pop(sub_id, None)

        return unsubscribe

    def publish(self, collection: str) -> None:
        """Re-run every query on ``collection`` and push the fresh snapshots."""
        for subscription in list(self._subscriptions.values()):
            if subscription.collection == collection:
                self._emit(subscription)

    def subscriber_count(self, collection: str) -> int:
        return sum(1 for s in self._subscriptions.values() if s.collection == collection)

    def _emit(self, subscription: _Subscription) -> None:
        try:
            snapshot = list(subscription.loader())
        except AppError as exc:
            # Subscribers keep their last snapshot when a refresh read fails.
            logger.warning(
                "Snapshot refresh failed",
                extra={"collection": subscription.collection, "error": str(exc)},
            )
            return
        subscription.callback(snapshot)
