from __future__ import annotations
import logging
import streamlit as st

from core.settings import load_settings

logger = logging.getLogger(__name__)

def success(msg: str): st.success(msg)
def warn(msg: str): st.warning(msg)
def info(msg: str): st.info(msg)
def error(msg: str): st.error(msg)

def handle_error(e: Exception, user_message: str = "An error occurred."):
    """
    Log the full exception server-side and show a generic message,
    or the details as well when the debug setting is on.
    """
    logger.error(f"{user_message} {e}", exc_info=True)
    try:
        debug = load_settings().debug
    except Exception:
        debug = False

    if debug:
        st.error(f"{user_message}\n\n**Debug Info:**\n```\n{e}\n```")
    else:
        st.error(user_message)
