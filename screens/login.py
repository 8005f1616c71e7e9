# screens/login.py
from __future__ import annotations
import logging

import streamlit as st

from core.auth import authenticate
from core.forms import handle_error
from core.runtime import get_store
from core.session import start_session

log = logging.getLogger(__name__)


def render():
    st.title("🔐 Sign in")
    if st.session_state.pop("session_expired", False):
        st.warning("Your session expired after a period of inactivity. Please sign in again.")

    with st.form("login_form"):
        login = st.text_input("Login")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in", type="primary")

    if not submitted:
        return
    if not login.strip() or not password:
        st.error("Enter your login and password.")
        return

    try:
        session = authenticate(get_store(), login, password)
    except Exception as e:
        handle_error(e, "Could not sign in right now.")
        return
    if session is None:
        st.error("Invalid login or password.")
        return

    start_session(session)
    log.info("%s signed in as %s", session.login, session.user_type)
    st.rerun()
