from types import SimpleNamespace

import pytest

import core.ui as ui


@pytest.fixture
def fake_state(monkeypatch):
    """Stand-in for st.session_state outside a Streamlit run"""
    state = {}
    monkeypatch.setattr(ui, "st", SimpleNamespace(session_state=state))
    return state


class TestClearImport:
    """Cancel and confirm both go through clear_import."""

    def test_parsed_rows_are_dropped(self, fake_state):
        fake_state.update({
            "p_rows": [{"A": "1"}],
            "p_file_name": "cursos.csv",
            "p_file_id": "f-1",
            "p_result": "kept",
        })

        ui.clear_import("p")

        assert "p_rows" not in fake_state
        assert "p_file_name" not in fake_state
        assert "p_file_id" not in fake_state
        assert fake_state["p_result"] == "kept"

    def test_uploader_gets_a_fresh_key(self, fake_state):
        first = ui.upload_key("p")
        ui.clear_import("p")
        second = ui.upload_key("p")
        ui.clear_import("p")

        assert first == "p_upload_0"
        assert second == "p_upload_1"
        assert ui.upload_key("p") == "p_upload_2"

    def test_prefixes_are_independent(self, fake_state):
        ui.clear_import("courses_import")
        assert ui.upload_key("people_import") == "people_import_upload_0"
