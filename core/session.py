# core/session.py
"""
The signed-in session: ``{user_type, user_data}`` plus the last time input
was seen. It lives in ``st.session_state["auth"]`` and is passed explicitly
to every operation that needs the actor (audit log, coordinator views).
"""
from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import streamlit as st

from core.constants import USER_TYPE_ADMIN, USER_TYPE_COORDINATOR

SESSION_KEY = "auth"


@dataclass
class Session:
    user_type: str
    user_data: Dict[str, Any]
    last_activity: float = field(default_factory=time.time)

    @property
    def user_id(self) -> str:
        return str(self.user_data.get("id") or "")

    @property
    def email(self) -> str:
        return self.user_data.get("email") or ""

    @property
    def login(self) -> str:
        return self.user_data.get("login") or ""

    @property
    def display_name(self) -> str:
        name = f"{self.user_data.get('first_name') or ''} {self.user_data.get('last_name') or ''}".strip()
        return name or self.login or "User"

    @property
    def is_admin(self) -> bool:
        return self.user_type == USER_TYPE_ADMIN

    @property
    def is_coordinator(self) -> bool:
        return self.user_type == USER_TYPE_COORDINATOR

    def touch(self, now: Optional[float] = None) -> None:
        self.last_activity = time.time() if now is None else now

    def is_expired(self, idle_minutes: int, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        return (now - self.last_activity) > idle_minutes * 60

    def to_dict(self) -> Dict[str, Any]:
        return {"userType": self.user_type, "userData": self.user_data}


def current_session() -> Optional[Session]:
    return st.session_state.get(SESSION_KEY)


def start_session(session: Session) -> None:
    st.session_state[SESSION_KEY] = session


def end_session() -> None:
    if SESSION_KEY in st.session_state:
        del st.session_state[SESSION_KEY]


def refresh_session(idle_minutes: int) -> Optional[Session]:
    """
    Called once per script run. Every rerun is caused by user input, so it
    counts as activity; a session idle for longer than ``idle_minutes`` is
    cleared instead.
    """
    session = current_session()
    if session is None:
        return None
    if session.is_expired(idle_minutes):
        end_session()
        st.session_state["session_expired"] = True
        return None
    session.touch()
    return session
