"""Habit catalog JSON API (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from habitsync.core.utils.responses import failure_response, ok_response, validation_error_response
from habitsync.domains.habits import services as habit_services
from habitsync.domains.habits.schemas.habit_schemas import HabitCreate, serialize_habit

habit_api_bp = Blueprint("habit_api", __name__)


@habit_api_bp.get("")
@jwt_required()
def list_habits():
    result = habit_services.list_habits()
    if not result.ok:
        return failure_response(result)
    return ok_response(habits=[serialize_habit(h) for h in result.value])


@habit_api_bp.post("")
@jwt_required()
def create_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitCreate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    result = habit_services.create_custom_habit(**data.model_dump(), user_id=int(get_jwt_identity()))
    if not result.ok:
        return failure_response(result)
    return ok_response(201, habit=serialize_habit(result.value))
