"""Subscription JSON API."""

from __future__ import annotations

from flask import Blueprint, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from habitsync.core.utils.responses import failure_response, ok_response, validation_error_response
from habitsync.domains.habits import services as habit_services
from habitsync.domains.habits.schemas.habit_schemas import UserHabitCreate, serialize_user_habit

user_habit_api_bp = Blueprint("user_habit_api", __name__)


@user_habit_api_bp.get("")
@jwt_required()
def list_user_habits():
    result = habit_services.list_user_habits(int(get_jwt_identity()))
    if not result.ok:
        return failure_response(result)
    return ok_response(
        user_habits=[serialize_user_habit(item["user_habit"], item["habit"]) for item in result.value]
    )


@user_habit_api_bp.post("")
@jwt_required()
def subscribe():
    payload = request.get_json(silent=True) or {}
    try:
        data = UserHabitCreate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    result = habit_services.subscribe(int(get_jwt_identity()), data.habit_id)
    if not result.ok:
        return failure_response(result)
    return ok_response(201, user_habit=serialize_user_habit(result.value["user_habit"], result.value["habit"]))


@user_habit_api_bp.delete("")
@jwt_required()
def unsubscribe():
    # Clients send habit_id either in the JSON body or as a query parameter.
    payload = request.get_json(silent=True) or {}
    if "habit_id" not in payload and "habit_id" in request.args:
        payload = {"habit_id": request.args.get("habit_id", type=int)}
    try:
        data = UserHabitCreate.model_validate(payload)
    except ValidationError as exc:
        return validation_error_response(exc)
    result = habit_services.unsubscribe(int(get_jwt_identity()), data.habit_id)
    if not result.ok:
        return failure_response(result)
    return ok_response(habit_id=data.habit_id, tracking_deleted=result.value)
