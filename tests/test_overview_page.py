"""Overview page driven through Streamlit's AppTest harness."""
import pytest
from streamlit.testing.v1 import AppTest

from core.constants import AUDIT_LOG, DISCIPLINES


def _overview_script():
    from screens.overview import page

    page.render()


@pytest.fixture
def overview(store, admin_session):
    def _open() -> AppTest:
        at = AppTest.from_function(_overview_script, default_timeout=30)
        at.session_state["store"] = store
        at.session_state["auth"] = admin_session
        return at.run()
    return _open


class TestInlineLoginEdit:
    """Each editor writes only when its own value is changed."""

    def test_edit_on_a_shared_discipline_is_kept(self, overview, store, make_course, make_discipline):
        a = make_course("Mestrado A")
        b = make_course("Mestrado B")
        d = make_discipline("IA", [a, b], professor_login="old")

        at = overview()
        assert not at.exception
        at.text_input(key=f"ov_{a['id']}_{d['id']}_professor_login").set_value("new").run()

        assert store.get(DISCIPLINES, d["id"])["professor_login"] == "new"
        entries = store.list(AUDIT_LOG)
        assert len(entries) == 1
        assert entries[0]["changes"]["professor_login"] == {"before": "old", "after": "new"}

    def test_edit_on_a_single_course_discipline(self, overview, store, make_course, make_discipline):
        a = make_course("Mestrado A")
        d = make_discipline("Redes", [a], tutor_login="")

        at = overview()
        at.text_input(key=f"ov_{a['id']}_{d['id']}_tutor_login").set_value(" ana.costa ").run()

        assert store.get(DISCIPLINES, d["id"])["tutor_login"] == "ana.costa"

    def test_opening_the_page_writes_nothing(self, overview, store, make_course, make_discipline):
        a = make_course("Mestrado A")
        b = make_course("Mestrado B")
        d = make_discipline("IA", [a, b], professor_login="old")

        overview().run()

        assert store.get(DISCIPLINES, d["id"])["updated_at"] == d["updated_at"]
        assert store.list(AUDIT_LOG) == []
