"""Reusable decorators for controllers/services."""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Iterable, TypeVar

from flask import jsonify
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from sqlalchemy.exc import SQLAlchemyError

from habitsync.core.errors import Infrastructure, ServiceError, ServiceResult
from habitsync.extensions import db

F = TypeVar("F", bound=Callable)

logger = logging.getLogger(__name__)


def require_roles(required_roles: Iterable[str]):
    """Enforce that the current JWT includes the given roles."""

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):  # type: ignore[misc]
            try:
                verify_jwt_in_request()
            except (JWTExtendedException, PyJWTError):
                return (
                    jsonify({"ok": False, "error": "unauthenticated", "message": "Authentication token required"}),
                    401,
                )
            claims = get_jwt() or {}
            roles = set(claims.get("roles") or [])
            if "admin" in roles:
                return fn(*args, **kwargs)
            if not set(required_roles).issubset(roles):
                return jsonify({"ok": False, "error": "forbidden", "message": "Insufficient role"}), 403
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def service_boundary(fn: F) -> F:
    """Return a ServiceResult instead of raising.

    ServiceError becomes a tagged failure; storage errors are logged and
    reported as ``infrastructure`` without the driver's message. The session is
    rolled back in both cases so nothing is partially applied.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        try:
            return ServiceResult.success(fn(*args, **kwargs))
        except ServiceError as exc:
            db.session.rollback()
            logger.info("%s rejected: %s (%s)", fn.__name__, exc.code, exc.kind.value)
            return ServiceResult.failure(exc)
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Storage failure in %s", fn.__name__)
            return ServiceResult.failure(
                Infrastructure("storage_unavailable", "Storage is temporarily unavailable")
            )

    return wrapper  # type: ignore[return-value]
