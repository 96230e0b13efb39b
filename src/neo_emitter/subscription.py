"""Subscription handles returned when a listener is registered."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Hashable

if TYPE_CHECKING:  # pragma: no cover
    from .vendor import EventSubscriptionVendor

Listener = Callable[..., Any]


def call_listener(listener: Listener, context: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Invoke ``listener`` with the emitted arguments.

    A non-``None`` context is passed as the first positional argument, so an
    unbound method registered with its instance behaves like a bound one.
    """

    if context is None:
        return listener(*args, **kwargs)
    return listener(context, *args, **kwargs)


class EventSubscription:
    """A capability token for cancelling exactly one registration.

    ``event_type`` and ``key`` are assigned by the vendor when the
    subscription is stored.
    """

    def __init__(self, subscriber: "EventSubscriptionVendor") -> None:
        self.subscriber = subscriber
        self.event_type: Hashable | None = None
        self.key: int | None = None
        self.removed = False

    def remove(self) -> None:
        """Cancel the registration. Calling it again is a no-op."""

        self.subscriber.remove_subscription(self)

    def __repr__(self) -> str:
        state = "removed" if self.removed else "active"
        return f"<{type(self).__name__} {self.event_type!r}#{self.key} {state}>"


class EmitterSubscription(EventSubscription):
    """Subscription that also carries the listener and its calling context."""

    def __init__(
        self,
        subscriber: "EventSubscriptionVendor",
        listener: Listener,
        context: Any = None,
    ) -> None:
        super().__init__(subscriber)
        self.listener = listener
        self.context = context


__all__ = ["EmitterSubscription", "EventSubscription", "Listener", "call_listener"]
