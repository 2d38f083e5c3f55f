"""JSON envelopes for controllers."""

from __future__ import annotations

from typing import Any

from flask import jsonify
from pydantic import ValidationError

from habitsync.core.errors import ErrorKind, ServiceResult

STATUS_BY_KIND = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INFRASTRUCTURE: 503,
}


def jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err:
            err["input"] = str(err["input"])
    return errors


def validation_error_response(exc: ValidationError):
    return (
        jsonify(
            {
                "ok": False,
                "error": ErrorKind.INVALID_ARGUMENT.value,
                "message": "Request body failed validation",
                "details": jsonable_errors(exc),
            }
        ),
        400,
    )


def failure_response(result: ServiceResult):
    status = STATUS_BY_KIND.get(result.error, 500)
    return (
        jsonify({"ok": False, "error": result.code, "kind": result.error.value, "message": result.message}),
        status,
    )


def ok_response(status: int = 200, **payload: Any):
    return jsonify({"ok": True, **payload}), status
