from types import SimpleNamespace

import pytest

import core.session as session_mod
from core.auth import authenticate, ensure_bootstrap_admin
from core.constants import ADMINS, ROLE_PROFESSOR, ROLE_TUTOR, USER_TYPE_ADMIN, USER_TYPE_COORDINATOR
from core.policy import PAGE_COORDINATOR, PAGE_COURSES, can_view_page, visible_pages_for
from core.session import Session
from core.settings import AuthConfig


@pytest.fixture
def auth_cfg():
    return AuthConfig(bootstrap_admin_login="admin", bootstrap_admin_password="admin",
                      bootstrap_admin_email="admin@example.com")


@pytest.fixture
def fake_state(monkeypatch):
    """Stand-in for st.session_state outside a Streamlit run"""
    state = {}
    monkeypatch.setattr(session_mod, "st", SimpleNamespace(session_state=state))
    return state


class TestAuthenticate:

    def test_bootstrap_admin_is_seeded_once(self, store, auth_cfg):
        assert ensure_bootstrap_admin(store, auth_cfg) is not None
        assert ensure_bootstrap_admin(store, auth_cfg) is None
        assert store.count(ADMINS) == 1

    def test_admin_signs_in(self, store, auth_cfg):
        ensure_bootstrap_admin(store, auth_cfg)

        session = authenticate(store, "admin", "admin")

        assert session.user_type == USER_TYPE_ADMIN
        assert session.email == "admin@example.com"
        assert authenticate(store, "admin", "wrong") is None

    def test_only_coordinators_sign_in_from_people(self, store, make_person):
        make_person("joao.silva", password="joao.silva")
        make_person("ana.costa", role=ROLE_TUTOR, password="ana.costa")
        make_person("carlos.souza", role=ROLE_PROFESSOR)

        session = authenticate(store, "joao.silva", "joao.silva")
        assert session.user_type == USER_TYPE_COORDINATOR
        assert session.display_name == "Joao Test"
        assert authenticate(store, "ana.costa", "ana.costa") is None
        assert authenticate(store, "carlos.souza", "") is None
        assert authenticate(store, "ghost", "x") is None
        assert authenticate(store, "  ", "x") is None


class TestSession:

    def test_idle_expiry(self):
        s = Session(USER_TYPE_ADMIN, {"id": "1"}, last_activity=1000.0)

        assert not s.is_expired(5, now=1000.0 + 5 * 60)
        assert s.is_expired(5, now=1000.0 + 5 * 60 + 1)
        s.touch(now=2000.0)
        assert not s.is_expired(5, now=2100.0)

    def test_refresh_clears_an_expired_session(self, fake_state):
        session_mod.start_session(Session(USER_TYPE_ADMIN, {"id": "1"}, last_activity=0.0))

        assert session_mod.refresh_session(5) is None
        assert session_mod.current_session() is None
        assert fake_state["session_expired"] is True

    def test_refresh_touches_an_active_session(self, fake_state):
        s = Session(USER_TYPE_ADMIN, {"id": "1"})
        session_mod.start_session(s)
        before = s.last_activity

        assert session_mod.refresh_session(5) is s
        assert s.last_activity >= before

    def test_end_session_without_session_is_harmless(self, fake_state):
        session_mod.end_session()
        assert session_mod.current_session() is None


def test_page_visibility_by_user_type():
    admin = Session(USER_TYPE_ADMIN, {})
    coordinator = Session(USER_TYPE_COORDINATOR, {})

    assert PAGE_COORDINATOR not in visible_pages_for(admin)
    assert visible_pages_for(coordinator) == [PAGE_COORDINATOR]
    assert can_view_page(PAGE_COURSES, admin)
    assert not can_view_page(PAGE_COURSES, coordinator)
    assert not can_view_page(PAGE_COURSES, None)
