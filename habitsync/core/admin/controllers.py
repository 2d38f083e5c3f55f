"""Admin endpoints."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import jwt_required

from habitsync.core.admin.services import compute_admin_stats
from habitsync.core.utils.decorators import require_roles
from habitsync.core.utils.responses import failure_response, ok_response

admin_bp = Blueprint("admin_api", __name__)


@admin_bp.get("/stats")
@jwt_required()
@require_roles({"admin"})
def admin_stats():
    """Aggregate usage figures for the admin dashboard."""
    result = compute_admin_stats()
    if not result.ok:
        return failure_response(result)
    return ok_response(stats=result.value.model_dump(mode="json"))
