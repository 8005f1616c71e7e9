# core/runtime.py
"""Per-session settings, engine and store, created once and kept in session_state."""
from __future__ import annotations
import streamlit as st

from core.db import get_engine, init_db
from core.document_store import DocumentStore
from core.settings import Settings, load_settings


def get_settings() -> Settings:
    if "settings" not in st.session_state:
        st.session_state["settings"] = load_settings()
    return st.session_state["settings"]


def ensure_engine():
    if "engine" not in st.session_state:
        engine = get_engine(get_settings().db.url)
        init_db(engine)
        st.session_state["engine"] = engine
    return st.session_state["engine"]


def get_store() -> DocumentStore:
    if "store" not in st.session_state:
        st.session_state["store"] = DocumentStore(ensure_engine())
    return st.session_state["store"]
