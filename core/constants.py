# core/constants.py
"""Collection names, role tags and fan-out limits shared by every screen."""
from __future__ import annotations

COURSES = "courses"
DISCIPLINES = "disciplines"
PEOPLE = "people"
ADMINS = "admins"
AUDIT_LOG = "audit_log"
UPLOAD_HISTORY = "upload_history"

ROLE_PROFESSOR = "Professor"
ROLE_COORDINATOR = "Coordenador"
ROLE_TUTOR = "Tutor"
ROLE_ADMIN = "Administrador"
PERSON_ROLES = [ROLE_PROFESSOR, ROLE_COORDINATOR, ROLE_TUTOR, ROLE_ADMIN]

USER_TYPE_ADMIN = "admin"
USER_TYPE_COORDINATOR = "coordinator"

MAX_COURSES_PER_COORDINATOR = 8
MAX_COURSES_PER_DISCIPLINE = 15
