# screens/coordinator/page.py
from __future__ import annotations

import streamlit as st

from core.policy import PAGE_COORDINATOR, require_page
from core.runtime import get_store
from core.session import current_session
from screens.disciplines.constants import SORT_OPTIONS
from screens.coordinator.db import coordinator_disciplines
from screens.disciplines.db import filter_disciplines, format_month


@require_page(PAGE_COORDINATOR)
def render():
    session = current_session()
    st.title("🎓 My Disciplines")
    st.caption(f"Signed in as {session.display_name}")
    store = get_store()

    courses, disciplines = coordinator_disciplines(store, session.user_id)
    if not courses:
        st.info("You are not the coordinator of any course yet.")
        return
    st.markdown("**Courses:** " + ", ".join(c.get("name") or "" for c in courses))

    c1, c2 = st.columns([3, 1])
    search = c1.text_input("Search", placeholder="Name, course or professor login", key="coord_search")
    sort = c2.selectbox("Sort", options=list(SORT_OPTIONS), format_func=lambda k: SORT_OPTIONS[k], key="coord_sort")

    shown = filter_disciplines(disciplines, search, sort)
    if not shown:
        st.info("No disciplines found.")
        return

    st.dataframe(
        [{
            "Discipline": d.get("name"),
            "Courses": ", ".join(d.get("course_names") or []),
            "Professor": d.get("professor_login") or "",
            "Tutor": d.get("tutor_login") or "",
            "Month 1": format_month(d.get("month_1")),
            "Month 2": format_month(d.get("month_2")),
        } for d in shown],
        use_container_width=True, hide_index=True,
    )
