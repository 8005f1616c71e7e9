from core.audit import diff, log_action
from core.constants import AUDIT_LOG
from core.errors import PersistenceError


def test_entry_carries_actor_and_target(store, admin_session):
    log_action(store, admin_session, "update", "course", "c1", "Mestrado CC",
               diff({"name": "A"}, {"name": "B"}, ("name",)))

    [entry] = store.list(AUDIT_LOG)
    assert entry["user_id"] == "admin-1"
    assert entry["user_email"] == "admin@example.com"
    assert (entry["action"], entry["entity"], entry["entity_id"]) == ("update", "course", "c1")
    assert entry["entity_name"] == "Mestrado CC"
    assert entry["changes"] == {"name": {"before": "A", "after": "B"}}
    assert entry["timestamp"]


def test_changes_are_omitted_when_empty(store, admin_session):
    log_action(store, admin_session, "delete", "person", "p1", "Ana")

    assert "changes" not in store.list(AUDIT_LOG)[0]


def test_no_session_means_no_entry(store):
    log_action(store, None, "create", "course", "c1", "X")

    assert store.count(AUDIT_LOG) == 0


def test_write_failure_never_reaches_the_caller(store, admin_session, monkeypatch):
    def broken(collection, data):
        raise PersistenceError("read-only")

    monkeypatch.setattr(store, "add", broken)

    log_action(store, admin_session, "create", "course", "c1", "X")


def test_unknown_action_or_entity_is_not_recorded(store, admin_session):
    log_action(store, admin_session, "rename", "course", "c1", "X")
    log_action(store, admin_session, "create", "degree", "d1", "X")

    assert store.count(AUDIT_LOG) == 0
