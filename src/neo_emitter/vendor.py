"""Bookkeeping of subscriptions grouped by event type."""

from __future__ import annotations

from typing import Dict, Hashable

from .logging import get_logger
from .subscription import EventSubscription

LOGGER = get_logger("vendor")

# Bucket keys are insertion indices; a removed slot holds ``None`` and is
# never compacted so keys captured by an in-progress emission stay valid.
SubscriptionBucket = Dict[int, "EventSubscription | None"]


class EventSubscriptionVendor:
    """Stores subscriptions and hands out the live bucket for each event type."""

    def __init__(self) -> None:
        self._subscriptions_for_type: Dict[Hashable, SubscriptionBucket] = {}

    def add_subscription(
        self, event_type: Hashable, subscription: EventSubscription
    ) -> EventSubscription:
        """Store ``subscription`` under ``event_type`` and return it unchanged."""

        bucket = self._subscriptions_for_type.setdefault(event_type, {})
        key = len(bucket)
        subscription.event_type = event_type
        subscription.key = key
        bucket[key] = subscription
        return subscription

    def remove_subscription(self, subscription: EventSubscription) -> None:
        if subscription.removed:
            return
        bucket = self._subscriptions_for_type.get(subscription.event_type)
        if bucket is not None and bucket.get(subscription.key) is subscription:
            bucket[subscription.key] = None
        subscription.removed = True

    def remove_all_subscriptions(self, event_type: Hashable | None = None) -> None:
        """Remove every subscription, or only those of ``event_type``."""

        if event_type is None:
            buckets = list(self._subscriptions_for_type.values())
            self._subscriptions_for_type = {}
        else:
            bucket = self._subscriptions_for_type.pop(event_type, None)
            buckets = [bucket] if bucket is not None else []

        removed = 0
        for bucket in buckets:
            for key, subscription in bucket.items():
                if subscription is None:
                    continue
                subscription.removed = True
                bucket[key] = None
                removed += 1
        LOGGER.debug("removed_subscriptions=%s event_type=%r", removed, event_type)

    def get_subscriptions_for_type(self, event_type: Hashable) -> SubscriptionBucket | None:
        """Return the live bucket for ``event_type``, tombstones included.

        The mapping is internal state, not a copy. Callers iterating it must
        tolerate slots turning into ``None`` while they iterate.
        """

        return self._subscriptions_for_type.get(event_type)


__all__ = ["EventSubscriptionVendor", "SubscriptionBucket"]
