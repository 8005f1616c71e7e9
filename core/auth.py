# core/auth.py
from __future__ import annotations
import logging
from typing import Optional

from core.constants import ADMINS, PEOPLE, ROLE_ADMIN, ROLE_COORDINATOR, USER_TYPE_ADMIN, USER_TYPE_COORDINATOR
from core.document_store import DocumentStore, now_iso
from core.session import Session
from core.settings import AuthConfig

__all__ = ["authenticate", "ensure_bootstrap_admin"]

log = logging.getLogger(__name__)


def _by_login(store: DocumentStore, collection: str, login: str) -> Optional[dict]:
    for doc in store.list(collection):
        if (doc.get("login") or "") == login:
            return doc
    return None


def authenticate(store: DocumentStore, login: str, password: str) -> Optional[Session]:
    """
    Administrators are looked up first, then people; only a Coordenador may
    sign in from the people collection. Passwords are compared as stored.
    """
    login = (login or "").strip()
    if not login:
        return None

    admin = _by_login(store, ADMINS, login)
    if admin is not None:
        if admin.get("password") != password:
            log.info("Wrong password for admin %s", login)
            return None
        return Session(USER_TYPE_ADMIN, admin)

    person = _by_login(store, PEOPLE, login)
    if person is None or person.get("password") != password:
        log.info("Login failed for %s", login)
        return None
    if person.get("role") != ROLE_COORDINATOR:
        log.info("%s is a %s and cannot sign in", login, person.get("role"))
        return None
    return Session(USER_TYPE_COORDINATOR, person)


def ensure_bootstrap_admin(store: DocumentStore, cfg: AuthConfig) -> Optional[str]:
    """Seed one administrator account when the admins collection is empty."""
    if store.count(ADMINS) > 0:
        return None
    doc_id = store.add(ADMINS, {
        "role": ROLE_ADMIN,
        "first_name": "Admin",
        "last_name": "",
        "login": cfg.bootstrap_admin_login,
        "email": cfg.bootstrap_admin_email,
        "password": cfg.bootstrap_admin_password,
        "created_at": now_iso(),
    })
    log.info("Seeded bootstrap admin %s", cfg.bootstrap_admin_login)
    return doc_id
