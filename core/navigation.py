# core/navigation.py
import streamlit as st


def navigate_to_logout():
    """Clear the session on the next run"""
    st.session_state["show_logout"] = True
    st.rerun()
