"""Discipline form driven through Streamlit's AppTest harness."""
import pytest
from streamlit.testing.v1 import AppTest

from core.constants import DISCIPLINES


def _disciplines_script():
    from screens.disciplines import page

    page.render()


@pytest.fixture
def disciplines_page(store, admin_session):
    def _open(**state) -> AppTest:
        at = AppTest.from_function(_disciplines_script, default_timeout=30)
        at.session_state["store"] = store
        at.session_state["auth"] = admin_session
        for k, v in state.items():
            at.session_state[k] = v
        return at.run()
    return _open


def _by_label(widgets, label):
    return next(w for w in widgets if w.label == label)


class TestMonthSelectors:
    """Months are picked from 1-12 or left blank."""

    def test_options_are_blank_plus_twelve_months(self, disciplines_page):
        at = disciplines_page()
        assert not at.exception

        month_1 = at.selectbox(key="disc_month_1_new")
        assert month_1.options == ["-"] + [f"{m:02d}" for m in range(1, 13)]
        assert month_1.value is None

    def test_editing_preselects_stored_months(self, disciplines_page, make_course, make_discipline):
        course = make_course("Mestrado CC")
        d = make_discipline("IA", [course], month_1=3, month_2=None)

        at = disciplines_page(disciplines_editing_id=d["id"])

        assert at.selectbox(key=f"disc_month_1_{d['id']}").value == 3
        assert at.selectbox(key=f"disc_month_2_{d['id']}").value is None

    def test_saving_stores_the_month_code(self, disciplines_page, store, make_course):
        course = make_course("Mestrado CC")

        at = disciplines_page()
        _by_label(at.text_input, "Discipline name *").input("Redes")
        at.multiselect[0].select(course["id"])
        at.selectbox(key="disc_month_1_new").select(5)
        _by_label(at.button, "💾 Save").click().run()

        assert not at.exception
        [saved] = store.list(DISCIPLINES)
        assert saved["name"] == "Redes"
        assert saved["month_1"] == 5
        assert saved["month_2"] is None
