"""Synchronous multicast event emitter."""

from __future__ import annotations

from contextlib import nullcontext
from typing import Any, Hashable, List

from .config import EmitterSettings
from .exceptions import InvalidOperationError
from .logging import get_logger, log_event
from .subscription import EmitterSubscription, Listener, call_listener
from .telemetry import MetricsCollector
from .vendor import EventSubscriptionVendor

NOT_EMITTING_MESSAGE = "Not in an emitting cycle; there is no current subscription"


class BaseEventEmitter:
    """Manages a set of listeners and publishes events to them.

    The emitter is a plain multicast mechanism: ``emit`` runs every listener
    registered for the event type on the caller's stack before returning.
    Listeners may add or remove listeners, or emit further events, while they
    run. Listeners added during an emission are first called by the next
    ``emit``; listeners removed during an emission are skipped immediately.

    Example::

        emitter = BaseEventEmitter()
        emitter.add_listener("some_event", print)
        emitter.emit("some_event", "abc")  # prints 'abc'
    """

    def __init__(self, settings: EmitterSettings | None = None) -> None:
        self.settings = settings or EmitterSettings()
        self.telemetry = MetricsCollector()
        self._logger = get_logger(self.settings.logger_name)
        self._subscriber = EventSubscriptionVendor()
        self._current_subscription: EmitterSubscription | None = None

    def add_listener(
        self, event_type: Hashable, listener: Listener, context: Any = None
    ) -> EmitterSubscription:
        """Register ``listener`` to be called when ``event_type`` is emitted.

        When ``context`` is given it is passed to the listener as the first
        positional argument, ahead of the emitted arguments. The returned
        subscription cancels this registration via ``remove()``.
        """

        subscription = self._subscriber.add_subscription(
            event_type, EmitterSubscription(self._subscriber, listener, context)
        )
        self._logger.debug(
            "listener_added key=%s", subscription.key, extra={"event_type": event_type}
        )
        return subscription

    def once(
        self, event_type: Hashable, listener: Listener, context: Any = None
    ) -> EmitterSubscription:
        """Like :meth:`add_listener`, but the listener is removed before its first call."""

        def _invoke_once(*args: Any, **kwargs: Any) -> None:
            self.remove_current_listener()
            call_listener(listener, context, *args, **kwargs)

        return self.add_listener(event_type, _invoke_once)

    def remove_all_listeners(self, event_type: Hashable | None = None) -> None:
        """Remove every listener, or only those registered for ``event_type``."""

        self._subscriber.remove_all_subscriptions(event_type)

    def remove_current_listener(self) -> None:
        """Remove the listener that is currently being invoked.

        Only valid from inside a listener while ``emit`` is running.

        :raises InvalidOperationError: when not inside an emitting cycle.
        """

        if self._current_subscription is None:
            raise InvalidOperationError(NOT_EMITTING_MESSAGE)
        self._subscriber.remove_subscription(self._current_subscription)

    def listeners(self, event_type: Hashable) -> List[EmitterSubscription]:
        """Return the live subscriptions for ``event_type`` in registration order."""

        subscriptions = self._subscriber.get_subscriptions_for_type(event_type)
        if subscriptions is None:
            return []
        return [subscription for subscription in subscriptions.values() if subscription is not None]

    def emit(self, event_type: Hashable, /, *args: Any, **kwargs: Any) -> None:
        """Call every listener registered for ``event_type`` with the given arguments.

        Exceptions raised by a listener propagate to the caller and the
        remaining listeners of this emission are not called.
        """

        collect_metrics = self.settings.collect_metrics
        if collect_metrics:
            self.telemetry.increment("emit")

        subscriptions = self._subscriber.get_subscriptions_for_type(event_type)
        if subscriptions is None:
            return

        keys = list(subscriptions)
        if self.settings.log_emissions:
            live = sum(1 for subscription in subscriptions.values() if subscription is not None)
            log_event(self._logger, "event_emitted", {"event_type": event_type, "listeners": live})

        # Per-type metrics only for types that have listeners registered.
        timer = nullcontext()
        if collect_metrics:
            self.telemetry.increment(f"emit.{event_type}")
            timer = self.telemetry.time(f"emit.{event_type}")

        previous = self._current_subscription
        try:
            with timer:
                for key in keys:
                    subscription = subscriptions.get(key)
                    # The subscription may have been removed during this emission.
                    if subscription is None:
                        continue
                    self._current_subscription = subscription
                    self._emit_to_subscription(subscription, event_type, *args, **kwargs)
                    if collect_metrics:
                        self.telemetry.increment("delivered")
        finally:
            self._current_subscription = previous

    def _emit_to_subscription(
        self,
        subscription: EmitterSubscription,
        event_type: Hashable,
        /,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        """Hook controlling how a single subscription receives an event.

        Subclasses override this to add logging or error boundaries specific
        to their environment. ``event_type`` is informational; only the
        emitted arguments reach the listener.
        """

        call_listener(subscription.listener, subscription.context, *args, **kwargs)


__all__ = ["BaseEventEmitter", "NOT_EMITTING_MESSAGE"]
