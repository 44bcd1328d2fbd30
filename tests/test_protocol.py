from bank_sim.mqtt_topics import events, status_updates, teller_status


def test_topic_helpers():
    ns = "demo/v0"
    assert events("teller", ns) == "demo/v0/events/teller"
    assert status_updates(ns) == "demo/v0/status/updates"
    assert teller_status(2, ns) == "demo/v0/tellers/status/2"


def test_default_namespace():
    assert status_updates() == "bank/v0/status/updates"
