# screens/logout.py
from __future__ import annotations
import streamlit as st

from core.session import end_session

# Page-local state cleared on logout along with the session itself
_KEYS_TO_CLEAR = [
    "courses_editing_id", "disciplines_editing_id", "people_editing_id",
    "courses_confirm_delete",
]


def render():
    end_session()
    for key in _KEYS_TO_CLEAR:
        if key in st.session_state:
            del st.session_state[key]
    st.rerun()
