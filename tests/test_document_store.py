import pytest

from core.db import get_engine
from core.document_store import DocumentStore
from core.errors import NotFoundError, PersistenceError
from core.schema_registry import registered_names


def test_documents_installer_is_registered(engine):
    assert "documents" in registered_names()


def test_add_then_get_returns_document_with_id(store):
    doc_id = store.add("courses", {"name": "Mestrado CC"})

    doc = store.get("courses", doc_id)
    assert doc == {"id": doc_id, "name": "Mestrado CC"}


def test_get_missing_returns_none(store):
    assert store.get("courses", "nope") is None


def test_list_keeps_insertion_order_and_separates_collections(store):
    a = store.add("courses", {"name": "B"})
    b = store.add("courses", {"name": "A"})
    store.add("people", {"login": "x"})

    assert [d["id"] for d in store.list("courses")] == [a, b]
    assert store.count("courses") == 2
    assert store.count("people") == 1


def test_update_merges_fields_and_returns_document(store):
    doc_id = store.add("disciplines", {"name": "IA", "month_1": 3})

    merged = store.update("disciplines", doc_id, {"month_1": 4, "professor_login": "carlos"})

    assert merged == {"id": doc_id, "name": "IA", "month_1": 4, "professor_login": "carlos"}
    assert store.get("disciplines", doc_id) == merged


def test_update_missing_document_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update("disciplines", "missing", {"name": "x"})


def test_id_in_payload_is_never_stored(store):
    doc_id = store.add("courses", {"id": "forged", "name": "X"})

    assert doc_id != "forged"
    assert store.get("courses", doc_id)["id"] == doc_id


def test_delete_and_find(store):
    keep = store.add("people", {"role": "Tutor", "login": "ana"})
    gone = store.add("people", {"role": "Professor", "login": "carlos"})

    store.delete("people", gone)

    assert store.get("people", gone) is None
    assert [d["id"] for d in store.find("people", role="Tutor")] == [keep]


def test_missing_table_surfaces_as_persistence_error():
    bare = DocumentStore(get_engine("sqlite://"))

    with pytest.raises(PersistenceError):
        bare.list("courses")
    with pytest.raises(PersistenceError):
        bare.add("courses", {"name": "X"})
