"""Helpers shared by the JSON controllers."""
from __future__ import annotations

from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    PreconditionError,
    ValidationError,
)
from ..persistence.writes import Mutation

_STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (ValidationError, 400),
    (PreconditionError, 409),
    (PermissionDeniedError, 403),
    (AuthenticationError, 401),
)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"success": False, "message": "Sign in first"}), 401
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def domain_error_response(e: DomainError):
    status = next((code for kind, code in _STATUS_BY_ERROR if isinstance(e, kind)), 500)
    return jsonify({"success": False, "message": str(e)}), status


def to_payload(value):
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


def mutation_response(mutation: Mutation, status: int = 200):
    """Success payload plus whether every durable write went through."""
    return (
        jsonify(
            {
                "success": True,
                "data": to_payload(mutation.value),
                "persisted": mutation.ok,
                "failedWrites": [w.record_id for w in mutation.failed_writes],
            }
        ),
        status,
    )
