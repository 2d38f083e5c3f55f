"""Authentication service layer."""

from __future__ import annotations

import logging
from datetime import datetime

from flask import current_app
from flask_jwt_extended import create_access_token

from habitsync.core.auth.events import AUTH_USER_LOGGED_IN, AUTH_USER_REGISTERED
from habitsync.core.auth.password import hash_password, verify_password
from habitsync.core.errors import Conflict, DuplicateKey, InvalidArgument, Unauthenticated
from habitsync.core.events.event_bus import publish
from habitsync.core.identity.allocator import IdKind, insert_with_next_id
from habitsync.core.users.models import User
from habitsync.core.users.services import find_by_email, identity_taken, touch_last_sync
from habitsync.core.utils.decorators import service_boundary
from habitsync.extensions import db

logger = logging.getLogger(__name__)

DEFAULT_MIN_PASSWORD_LENGTH = 6


def roles_for(user: User) -> list[str]:
    roles = ["user"]
    if user.email.lower() in current_app.config.get("ADMIN_EMAILS", set()):
        roles.append("admin")
    return roles


def issue_access_token(user: User) -> str:
    """Signed access token; identity is the user id, roles travel as a claim."""
    return create_access_token(identity=str(user.user_id), additional_claims={"roles": roles_for(user)})


@service_boundary
def register_user(username: str, email: str, password: str) -> dict:
    """Create an account and return it with an access token."""
    username = (username or "").strip()
    email = (email or "").strip().lower()
    if not username or not email or not password:
        raise InvalidArgument("missing_fields", "All fields are required")
    min_length = current_app.config.get("MIN_PASSWORD_LENGTH", DEFAULT_MIN_PASSWORD_LENGTH)
    if len(password) < min_length:
        raise InvalidArgument(
            "password_too_short", f"Password must be at least {min_length} characters"
        )
    if identity_taken(email, username):
        raise Conflict("user_already_exists", "User with this email or username already exists")

    now = datetime.utcnow()
    password_hash = hash_password(password)
    try:
        user = insert_with_next_id(
            IdKind.USER,
            lambda new_id: User(
                user_id=new_id,
                username=username,
                email=email,
                password_hash=password_hash,
                created_at=now,
                last_sync_at=now,
            ),
            conflict_check=lambda: identity_taken(email, username),
        )
    except DuplicateKey:
        raise Conflict("user_already_exists", "User with this email or username already exists") from None
    db.session.commit()
    logger.info("Registered user %s", user.user_id)

    publish(
        AUTH_USER_REGISTERED,
        {
            "user_id": user.user_id,
            "username": user.username,
            "email": user.email,
            "created_at": user.created_at.isoformat(),
        },
        user_id=user.user_id,
    )
    return {"user": user, "access_token": issue_access_token(user)}


@service_boundary
def authenticate_user(email: str, password: str) -> dict:
    """Check credentials, stamp ``last_sync_at`` and return the user with a token."""
    if not email or not password:
        raise InvalidArgument("missing_fields", "Email and password are required")
    user = find_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise Unauthenticated("invalid_credentials", "Invalid email or password")

    touch_last_sync(user)
    db.session.commit()
    publish(
        AUTH_USER_LOGGED_IN,
        {"user_id": user.user_id, "last_sync_at": user.last_sync_at.isoformat()},
        user_id=user.user_id,
    )
    return {"user": user, "access_token": issue_access_token(user)}
