import json
from datetime import datetime, timezone

import pytest

from database.kv_store import MemoryKeyValueStore
from models.notification import Notification, NotificationSettings
from services.notification_store import NotificationStore
from utils.constants import NOTIFICATION_SETTINGS_KEY, NOTIFICATIONS_KEY

from conftest import FIXED_NOW


def make_alert(alert_id, timestamp="2024-03-10T09:00:00", **kwargs):
    return Notification(
        id=alert_id, budget_id=1, category="Food",
        message="Food spending at 90% of budget limit",
        description="You've spent $450.00 of your $500.00 budget.",
        severity="warning", timestamp=timestamp, month="03", year=2024,
        **kwargs,
    )


def test_default_settings(store):
    assert store.get_settings() == NotificationSettings(
        budget_alerts=True, threshold=80,
        email_notifications=False, push_notifications=True,
    )


def test_get_all_is_newest_first(store):
    store.add([
        make_alert("a", "2024-03-01T08:00:00"),
        make_alert("b", "2024-03-12T08:00:00"),
        make_alert("c", "2024-03-05T08:00:00"),
    ])
    assert [a.id for a in store.get_all()] == ["b", "c", "a"]


def test_dismiss_stamps_time(store):
    store.add([make_alert("a")])
    assert store.dismiss("a") is True
    (alert,) = store.get_all()
    assert alert.dismissed
    assert alert.dismissed_at == FIXED_NOW.isoformat()
    assert store.get_active() == []


def test_dismiss_unknown_id_is_a_no_op(store, kv_store):
    store.add([make_alert("a")])
    before = kv_store.data[NOTIFICATIONS_KEY]
    assert store.dismiss("missing") is False
    assert kv_store.data[NOTIFICATIONS_KEY] == before
    assert len(store.get_active()) == 1


def test_dismiss_twice_keeps_first_timestamp(kv_store):
    times = iter([datetime(2024, 3, 15, 12, 0), datetime(2024, 3, 16, 12, 0)])
    store = NotificationStore(kv_store, clock=lambda: next(times)).load()
    store.add([make_alert("a")])
    store.dismiss("a")
    assert store.dismiss("a") is False
    assert store.get_all()[0].dismissed_at == "2024-03-15T12:00:00"


def test_clear_all(store):
    store.add([make_alert("a"), make_alert("b"), make_alert("c", dismissed=True)])
    assert store.clear_all() == 2
    assert store.get_active() == []
    assert len(store.get_all()) == 3
    assert store.clear_all() == 0


def test_prune_dismissed(store):
    store.add([
        make_alert("old", dismissed=True, dismissed_at="2024-01-01T00:00:00"),
        make_alert("recent", dismissed=True, dismissed_at="2024-03-14T00:00:00"),
        make_alert("active"),
    ])
    assert store.prune_dismissed(datetime(2024, 2, 1)) == 1
    assert sorted(a.id for a in store.get_all()) == ["active", "recent"]


def test_prune_dismissed_accepts_aware_cutoff(store):
    store.add([
        make_alert("old", dismissed=True, dismissed_at="2024-01-01T00:00:00"),
        make_alert("recent", dismissed=True, dismissed_at="2024-03-14T00:00:00"),
    ])
    assert store.prune_dismissed(datetime(2024, 2, 1, tzinfo=timezone.utc)) == 1
    assert [a.id for a in store.get_all()] == ["recent"]


def test_persistence_round_trip(store, kv_store, clock):
    store.add([make_alert("a"), make_alert("b")])
    store.dismiss("b")
    store.update_settings({"threshold": 70})

    reopened = NotificationStore(kv_store, clock=clock).load()
    assert [a.id for a in reopened.get_active()] == ["a"]
    assert {a.id for a in reopened.get_all()} == {"a", "b"}
    assert reopened.get_settings().threshold == 70
    assert json.loads(kv_store.data[NOTIFICATION_SETTINGS_KEY])["threshold"] == 70


def test_corrupt_data_falls_back_to_defaults(clock):
    kv = MemoryKeyValueStore({
        NOTIFICATIONS_KEY: "{not json",
        NOTIFICATION_SETTINGS_KEY: "[1, 2]",
    })
    store = NotificationStore(kv, clock=clock).load()
    assert store.get_all() == []
    assert store.get_settings() == NotificationSettings()


def test_unknown_stored_fields_are_ignored(clock):
    raw = make_alert("a").to_dict()
    raw["legacyField"] = "x"
    kv = MemoryKeyValueStore({NOTIFICATIONS_KEY: json.dumps([raw])})
    store = NotificationStore(kv, clock=clock).load()
    assert store.get_all()[0].id == "a"


def test_malformed_alert_records_are_skipped(clock):
    good = make_alert("good").to_dict()
    kv = MemoryKeyValueStore({
        NOTIFICATIONS_KEY: json.dumps([{"id": "partial", "message": "x"}, "junk", good]),
    })
    store = NotificationStore(kv, clock=clock).load()
    assert [a.id for a in store.get_all()] == ["good"]


def test_non_list_alert_log_is_discarded(clock):
    kv = MemoryKeyValueStore({NOTIFICATIONS_KEY: "42"})
    store = NotificationStore(kv, clock=clock).load()
    assert store.get_all() == []


def test_update_settings_merges(store):
    updated = store.update_settings({"email_notifications": True})
    assert updated.email_notifications is True
    assert updated.threshold == 80
    assert updated.budget_alerts is True


@pytest.mark.parametrize("partial", [
    {"threshold": 150},
    {"threshold": -1},
    {"threshold": "80"},
    {"threshold": True},
    {"budget_alerts": "yes"},
    {"sms_notifications": True},
])
def test_update_settings_rejects_bad_values(store, partial):
    with pytest.raises(ValueError):
        store.update_settings(partial)
    assert store.get_settings() == NotificationSettings()


def test_returned_settings_are_a_copy(store):
    settings = store.get_settings()
    settings.threshold = 5
    assert store.get_settings().threshold == 80


def test_closed_store_rejects_mutations(store):
    store.close()
    with pytest.raises(RuntimeError):
        store.add([make_alert("a")])


def test_operations_load_lazily(kv_store, clock):
    kv_store.set(NOTIFICATIONS_KEY, json.dumps([make_alert("a").to_dict()]))
    store = NotificationStore(kv_store, clock=clock)
    assert [a.id for a in store.get_active()] == ["a"]
