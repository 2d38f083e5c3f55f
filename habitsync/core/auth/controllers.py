"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, request
from pydantic import ValidationError

from habitsync.core.auth.auth_service import authenticate_user, register_user
from habitsync.core.auth.schemas import LoginRequest, RegisterRequest
from habitsync.core.users.schemas import serialize_user
from habitsync.core.utils.responses import failure_response, ok_response, validation_error_response
from habitsync.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    payload = request.get_json(silent=True) or {}
    try:
        data = RegisterRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    result = register_user(data.username, data.email, data.password)
    if not result.ok:
        return failure_response(result)
    return ok_response(
        201,
        user=serialize_user(result.value["user"]),
        access_token=result.value["access_token"],
    )


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    result = authenticate_user(data.email, data.password)
    if not result.ok:
        return failure_response(result)
    return ok_response(
        user=serialize_user(result.value["user"]),
        access_token=result.value["access_token"],
    )
