"""Event holding so that late subscribers can replay earlier events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Tuple

from .emitter import BaseEventEmitter
from .exceptions import InvalidOperationError
from .subscription import EmitterSubscription, Listener, call_listener

NO_CURRENT_EVENT_MESSAGE = "Not in an emitting cycle; there is no current event"

HeldEvent = Tuple[Tuple[Any, ...], Dict[str, Any]]


@dataclass(frozen=True, slots=True)
class HeldEventToken:
    """Identifies one held event so it can be released later."""

    event_type: Hashable
    index: int


class EventHolder:
    """Remembers emitted events per type until they are released."""

    def __init__(self) -> None:
        self._held_events: Dict[Hashable, List[HeldEvent | None]] = {}
        self._current_event_key: HeldEventToken | None = None

    def hold_event(self, event_type: Hashable, /, *args: Any, **kwargs: Any) -> HeldEventToken:
        events = self._held_events.setdefault(event_type, [])
        token = HeldEventToken(event_type, len(events))
        events.append((args, kwargs))
        return token

    def emit_to_listener(
        self, event_type: Hashable, listener: Listener, context: Any = None
    ) -> None:
        """Replay every held event of ``event_type`` to ``listener`` in hold order.

        Events held while replaying are not part of this replay.
        """

        events = self._held_events.get(event_type)
        if not events:
            return

        previous = self._current_event_key
        try:
            for index in range(len(events)):
                held = events[index]
                if held is None:
                    continue
                self._current_event_key = HeldEventToken(event_type, index)
                args, kwargs = held
                call_listener(listener, context, *args, **kwargs)
        finally:
            self._current_event_key = previous

    def release_current_event(self) -> None:
        """Release the event currently being replayed.

        :raises InvalidOperationError: when no replay is in progress.
        """

        if self._current_event_key is None:
            raise InvalidOperationError(NO_CURRENT_EVENT_MESSAGE)
        self.release_event(self._current_event_key)

    def release_event(self, token: HeldEventToken) -> None:
        events = self._held_events.get(token.event_type)
        if events is not None and 0 <= token.index < len(events):
            events[token.index] = None

    def release_event_type(self, event_type: Hashable) -> None:
        # Tombstoned in place: outstanding tokens must not alias later events.
        events = self._held_events.get(event_type)
        if events is not None:
            events[:] = [None] * len(events)

    def held_events(self, event_type: Hashable) -> List[HeldEvent]:
        """Return the ``(args, kwargs)`` pairs still held for ``event_type``."""

        return [held for held in self._held_events.get(event_type, ()) if held is not None]


class EventEmitterWithHolding:
    """Emitter facade that can hold events for listeners that subscribe later.

    ``emit_and_hold`` emits like ``emit`` and also remembers the event;
    ``add_retroactive_listener`` registers a listener and immediately replays
    the held events of its type to it. A listener releases the event it is
    handling with :meth:`release_current_event` so later subscribers do not
    see it.
    """

    def __init__(self, emitter: BaseEventEmitter, holder: EventHolder) -> None:
        self._emitter = emitter
        self._event_holder = holder
        self._current_event_token: HeldEventToken | None = None
        self._emitting_held_events = False

    def add_listener(
        self, event_type: Hashable, listener: Listener, context: Any = None
    ) -> EmitterSubscription:
        return self._emitter.add_listener(event_type, listener, context)

    def once(
        self, event_type: Hashable, listener: Listener, context: Any = None
    ) -> EmitterSubscription:
        return self._emitter.once(event_type, listener, context)

    def add_retroactive_listener(
        self, event_type: Hashable, listener: Listener, context: Any = None
    ) -> EmitterSubscription:
        """Register ``listener`` and replay the held events of ``event_type`` to it."""

        subscription = self._emitter.add_listener(event_type, listener, context)
        previous = self._emitting_held_events
        self._emitting_held_events = True
        try:
            self._event_holder.emit_to_listener(event_type, listener, context)
        finally:
            self._emitting_held_events = previous
        return subscription

    def remove_all_listeners(self, event_type: Hashable | None = None) -> None:
        self._emitter.remove_all_listeners(event_type)

    def remove_current_listener(self) -> None:
        self._emitter.remove_current_listener()

    def listeners(self, event_type: Hashable) -> List[EmitterSubscription]:
        return self._emitter.listeners(event_type)

    def emit(self, event_type: Hashable, /, *args: Any, **kwargs: Any) -> None:
        self._emitter.emit(event_type, *args, **kwargs)

    def emit_and_hold(self, event_type: Hashable, /, *args: Any, **kwargs: Any) -> None:
        """Emit the event and hold it for listeners added retroactively."""

        previous = self._current_event_token
        self._current_event_token = self._event_holder.hold_event(event_type, *args, **kwargs)
        try:
            self._emitter.emit(event_type, *args, **kwargs)
        finally:
            self._current_event_token = previous

    def release_current_event(self) -> None:
        """Release the held event being emitted or replayed; no-op otherwise."""

        if self._current_event_token is not None:
            self._event_holder.release_event(self._current_event_token)
        elif self._emitting_held_events:
            self._event_holder.release_current_event()

    def release_held_event_type(self, event_type: Hashable) -> None:
        self._event_holder.release_event_type(event_type)


__all__ = [
    "EventEmitterWithHolding",
    "EventHolder",
    "HeldEventToken",
    "NO_CURRENT_EVENT_MESSAGE",
]
