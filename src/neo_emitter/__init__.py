"""NEO emitter: a synchronous publish/subscribe dispatcher."""

from .config import EmitterSettings, build_settings_from_dict
from .emitter import BaseEventEmitter
from .exceptions import ConfigurationError, EmitterError, InvalidOperationError
from .holder import EventEmitterWithHolding, EventHolder, HeldEventToken
from .subscription import EmitterSubscription, EventSubscription
from .vendor import EventSubscriptionVendor

__all__ = [
    "BaseEventEmitter",
    "ConfigurationError",
    "EmitterError",
    "EmitterSettings",
    "EmitterSubscription",
    "EventEmitterWithHolding",
    "EventHolder",
    "EventSubscription",
    "EventSubscriptionVendor",
    "HeldEventToken",
    "InvalidOperationError",
    "build_settings_from_dict",
]
