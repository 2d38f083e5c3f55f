"""Daily tracking JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from habitsync.core.utils.responses import failure_response, ok_response, validation_error_response
from habitsync.domains.habits import services as habit_services
from habitsync.domains.habits.schemas.habit_schemas import (
    TrackingCreate,
    serialize_tracking,
    serialize_tracking_view,
)

tracking_api_bp = Blueprint("tracking_api", __name__)


@tracking_api_bp.get("")
@jwt_required()
def list_tracking():
    raw_habit_id = request.args.get("habit_id")
    habit_id = None
    if raw_habit_id:
        try:
            habit_id = int(raw_habit_id)
        except ValueError:
            return jsonify({"ok": False, "error": "invalid_habit_id", "kind": "invalid_argument",
                            "message": "habit_id must be an integer"}), 400
    result = habit_services.list_tracking(
        int(get_jwt_identity()), date=request.args.get("date") or None, habit_id=habit_id
    )
    if not result.ok:
        return failure_response(result)
    return ok_response(tracking=[serialize_tracking_view(v) for v in result.value])


@tracking_api_bp.post("")
@jwt_required()
def record_tracking():
    payload = request.get_json(silent=True) or {}
    try:
        data = TrackingCreate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    result = habit_services.record_tracking(int(get_jwt_identity()), **data.model_dump())
    if not result.ok:
        return failure_response(result)
    recorded = result.value
    return ok_response(
        201 if recorded.created else 200,
        tracking=serialize_tracking(recorded.tracking),
        created=recorded.created,
    )
