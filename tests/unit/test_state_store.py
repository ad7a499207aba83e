"""Tests for the reactive state store."""

import pytest

from sdui.state import (
    REMOVED,
    BoolValue,
    IntValue,
    JsonValue,
    ListValue,
    StateChangeEvent,
    StateStore,
    StringValue,
)


@pytest.mark.unit
def test_set_infers_strings(store):
    """Plain strings are type-inferred."""
    store.set("flag", "true")
    store.set("count", "3")
    store.set("name", "Ada")

    assert store.get("flag") == BoolValue(True)
    assert store.get("count") == IntValue(3)
    assert store.get("name") == StringValue("Ada")
    assert store.as_string("flag") == "true"
    assert store.as_bool("flag") is True


@pytest.mark.unit
def test_set_plain_values(store):
    """Test non-string Python values."""
    store.set("tags", ["a", "b"])
    store.set("ready", False)
    store.set_json("payload", '{"a":1}')

    assert store.get("tags") == ListValue(("a", "b"))
    assert store.as_int("tags") == 2
    assert store.as_bool("ready") is False
    assert store.get("payload") == JsonValue('{"a":1}')


@pytest.mark.unit
def test_absent_keys(store):
    """Getters return None for absent keys."""
    assert store.get("missing") is None
    assert store.as_int("missing") is None
    assert store.as_map("missing") is None
    assert "missing" not in store
    assert not store.has("missing")


@pytest.mark.unit
def test_listener_receives_events(store):
    """Every mutation is delivered synchronously."""
    events: list[StateChangeEvent] = []
    store.add_listener(events.append)

    store.set("k", "1")
    store.set("k", "2")
    store.remove("k")

    assert [(e.key, e.old_value, e.new_value) for e in events] == [
        ("k", None, IntValue(1)),
        ("k", IntValue(1), IntValue(2)),
        ("k", IntValue(2), REMOVED),
    ]
    assert events[2].is_removal
    assert events[2].new_value == StringValue("")
    assert all(e.timestamp > 0 for e in events)


@pytest.mark.unit
def test_remove_absent_key_is_silent(store):
    """Removing a missing key emits nothing."""
    events = []
    store.add_listener(events.append)

    store.remove("ghost")

    assert events == []


@pytest.mark.unit
def test_clear_emits_one_event_per_key(store):
    """Test clear notifies for each held key."""
    store.set("a", "1")
    store.set("b", "x")
    events = []
    store.add_listener(events.append)

    store.clear()

    assert sorted(e.key for e in events) == ["a", "b"]
    assert all(e.new_value is REMOVED for e in events)
    assert len(store) == 0


@pytest.mark.unit
def test_failing_listener_is_isolated(store):
    """A throwing listener does not stop later listeners."""
    seen = []

    def broken(event):
        raise RuntimeError("listener bug")

    store.add_listener(broken)
    store.add_listener(lambda event: seen.append(event.key))

    store.set("k", "v")

    assert seen == ["k"]
    assert store.as_string("k") == "v"


@pytest.mark.unit
def test_remove_listener(store):
    """Test listener removal."""
    events = []
    store.add_listener(events.append)
    store.remove_listener(events.append)
    store.remove_listener(events.append)

    store.set("k", "v")

    assert events == []


@pytest.mark.unit
def test_listener_may_write_back(store):
    """Listeners can mutate the store re-entrantly."""

    def mirror(event):
        if event.key == "source":
            store.set("mirror", event.new_value)

    store.add_listener(mirror)
    store.set("source", "42")

    assert store.as_int("mirror") == 42


@pytest.mark.unit
def test_introspection(store):
    """Test keys, snapshot and string map."""
    store.set("a", "1")
    store.set("b", {"x": "y"})

    snapshot = store.snapshot()
    store.set("c", "later")

    assert store.keys() == {"a", "b", "c"}
    assert set(snapshot) == {"a", "b"}
    assert store.as_string_map() == {"a": "1", "b": "x=y", "c": "later"}
    assert sorted(store) == ["a", "b", "c"]


@pytest.mark.unit
def test_stores_are_independent():
    """Each session owns its own store."""
    first, second = StateStore(), StateStore()
    first.set("k", "v")

    assert "k" not in second
