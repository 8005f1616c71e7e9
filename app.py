# app.py
from __future__ import annotations
import logging

import streamlit as st

from core.auth import ensure_bootstrap_admin
from core.logging_setup import configure_logging
from core.navigation import navigate_to_logout
from core.policy import (
    PAGE_COORDINATOR,
    PAGE_COURSES,
    PAGE_DISCIPLINES,
    PAGE_OVERVIEW,
    PAGE_PEOPLE,
    PAGE_REPORTS,
    visible_pages_for,
)
from core.runtime import ensure_engine, get_settings, get_store
from core.session import refresh_session
from screens import login, logout
from screens.coordinator import page as coordinator_page
from screens.courses import page as courses_page
from screens.disciplines import page as disciplines_page
from screens.overview import page as overview_page
from screens.people import page as people_page
from screens.reports import page as reports_page

log = logging.getLogger(__name__)

# page name -> (render, icon title, url path)
PAGES = {
    PAGE_OVERVIEW: (overview_page.render, "🏠 Overview", "overview"),
    PAGE_COURSES: (courses_page.render, "📚 Courses", "courses"),
    PAGE_DISCIPLINES: (disciplines_page.render, "📘 Disciplines", "disciplines"),
    PAGE_PEOPLE: (people_page.render, "👥 People", "people"),
    PAGE_REPORTS: (reports_page.render, "📊 Reports", "reports"),
    PAGE_COORDINATOR: (coordinator_page.render, "🎓 My Disciplines", "my-disciplines"),
}


def _hide_sidebar():
    st.markdown("""
        <style>
            section[data-testid="stSidebar"] {
                display: none;
            }
        </style>
    """, unsafe_allow_html=True)


def _init_once():
    """Schema install and the bootstrap admin, once per browser session."""
    if "db_initialized" in st.session_state:
        return
    try:
        ensure_engine()
        ensure_bootstrap_admin(get_store(), get_settings().auth)
    except Exception as e:
        log.error("Database initialization failed", exc_info=True)
        st.error("Database initialization failed. See details below.")
        with st.expander("Diagnostics"):
            st.exception(e)
        st.stop()
    st.session_state["db_initialized"] = True


def main():
    settings = get_settings()
    configure_logging(settings)
    st.set_page_config(page_title=settings.app.name, layout="wide")
    _init_once()

    if st.session_state.pop("show_logout", False):
        logout.render()
        return

    session = refresh_session(settings.auth.session_idle_minutes)
    if session is None:
        _hide_sidebar()
        login.render()
        return

    left, right = st.columns([0.8, 0.2])
    with left:
        st.caption(f"Signed in as **{session.display_name}** · _{session.user_type}_")
    with right:
        if st.button("Logout", key="logout_top"):
            navigate_to_logout()

    pages = []
    for name in visible_pages_for(session):
        render, title, url_path = PAGES[name]
        pages.append(st.Page(render, title=title, url_path=url_path, default=not pages))
    if not pages:
        st.error("No pages available for your account.")
        return
    st.navigation(pages, position="sidebar").run()


if __name__ == "__main__":
    main()
