# core/errors.py
from __future__ import annotations

__all__ = ["AdminError", "ValidationError", "CapacityError", "NotFoundError", "PersistenceError"]


class AdminError(Exception):
    """Base class for errors shown to the user as a notification."""


class ValidationError(AdminError, ValueError):
    """Missing required field, duplicate unique key or bad value. Raised before any write."""


class CapacityError(ValidationError):
    """A coordinator or discipline fan-out limit would be exceeded."""


class NotFoundError(AdminError, LookupError):
    """A referenced document (login, course name, id) could not be resolved."""


class PersistenceError(AdminError, RuntimeError):
    """A store read or write failed."""
