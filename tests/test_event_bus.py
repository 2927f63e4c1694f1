from concentration.events.bus import EventBus


def test_event_bus_emit_subscribe():
    bus = EventBus()
    received = {}

    def handler(sender, **kwargs):
        received.update(kwargs)

    bus.subscribe("test", handler)
    bus.emit("test", value=42, msg="hello")

    assert received["value"] == 42
    assert received["msg"] == "hello"


def test_emit_without_subscribers_is_a_no_op():
    EventBus().emit("nobody_listens", value=1)


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    calls = []

    def handler(sender, **kwargs):
        calls.append(kwargs)

    bus.subscribe("ping", handler)
    bus.emit("ping", n=1)
    bus.unsubscribe("ping", handler)
    bus.emit("ping", n=2)

    assert calls == [{"n": 1}]


def test_bound_methods_stay_subscribed_without_other_references():
    bus = EventBus()
    seen = []

    class Listener:
        def __init__(self):
            bus.subscribe("ping", self.on_ping)

        def on_ping(self, sender, **kwargs):
            seen.append(kwargs["n"])

    Listener()
    bus.emit("ping", n=7)
    assert seen == [7]
