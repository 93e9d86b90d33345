from __future__ import annotations

import logging
from typing import Any

from flask import jsonify

from ..core.enums import FailureKind
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)

_STATUS_BY_KIND = {
    FailureKind.VALIDATION: 400,
    FailureKind.AUTHENTICATION: 401,
    FailureKind.NOT_FOUND: 404,
    FailureKind.CONFLICT: 409,
    FailureKind.INVALID_PRECONDITION: 400,
    FailureKind.STORAGE_UNAVAILABLE: 503,
}


def ok(data: Any, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def fail(exc: DomainError):
    status = _STATUS_BY_KIND.get(exc.kind, 400)
    logger.warning("Rejected with %s (%s): %s", status, exc.kind.value, exc)
    body = {"success": False, "error": str(exc), "kind": exc.kind.value}
    response = jsonify(body)
    if exc.retryable:
        response.headers["Retry-After"] = "1"
    return response, status


def internal_error(message: str):
    return jsonify({"success": False, "error": message, "kind": "internal"}), 500
