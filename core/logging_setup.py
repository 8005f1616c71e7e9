# core/logging_setup.py
from __future__ import annotations
import logging

from core.settings import Settings

_CONFIGURED = False

def configure_logging(settings: Settings) -> None:
    """Configure the root logger once per process (Streamlit reruns the script on every input)."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    level = getattr(logging, (settings.logging.level or "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=settings.logging.format)
    _CONFIGURED = True
