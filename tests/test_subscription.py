from neo_emitter.subscription import EmitterSubscription, EventSubscription, call_listener
from neo_emitter.vendor import EventSubscriptionVendor


class _FakeVendor:
    def __init__(self):
        self.removed = []

    def remove_subscription(self, subscription):
        self.removed.append(subscription)


def test_remove_delegates_to_vendor():
    vendor = _FakeVendor()
    subscription = EventSubscription(vendor)

    subscription.remove()

    assert vendor.removed == [subscription]


def test_emitter_subscription_keeps_listener_and_context():
    vendor = EventSubscriptionVendor()
    listener = print
    context = object()

    subscription = EmitterSubscription(vendor, listener, context)

    assert subscription.subscriber is vendor
    assert subscription.listener is listener
    assert subscription.context is context
    assert subscription.removed is False


def test_repr_reports_state():
    vendor = EventSubscriptionVendor()
    subscription = vendor.add_subscription("type1", EmitterSubscription(vendor, print))

    assert repr(subscription) == "<EmitterSubscription 'type1'#0 active>"
    subscription.remove()
    assert repr(subscription) == "<EmitterSubscription 'type1'#0 removed>"


def test_call_listener_without_context():
    assert call_listener(lambda a, b=0: a + b, None, 1, b=2) == 3


def test_call_listener_threads_context_first():
    assert call_listener(lambda ctx, value: (ctx, value), "ctx", "value") == ("ctx", "value")
