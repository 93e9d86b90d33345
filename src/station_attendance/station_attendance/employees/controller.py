from __future__ import annotations

import logging

from flask import Flask, request, session

from ..common.responses import fail, internal_error, ok
from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        return "Station attendance API is running"

    @app.route("/api/auth/employee/login", methods=["POST"], endpoint="employee_login")
    def employee_login():
        data = request.get_json(silent=True) or {}
        try:
            summary = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
            session.clear()
            session["employee_id"] = summary.employee_id
            return ok({"employee": summary.to_dict()})
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Employee login failed")
            return internal_error("System error during login")

    @app.route("/api/auth/employee/logout", methods=["POST"], endpoint="employee_logout")
    def employee_logout():
        session.clear()
        return ok({})

    @app.route("/api/auth/employee/me", methods=["GET"], endpoint="employee_me")
    def employee_me():
        if "employee_id" not in session:
            return fail(AuthenticationError("Not logged in"))
        try:
            summary = container.auth_service.current(int(session["employee_id"]))
            return ok({"employee": summary.to_dict()})
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Loading current employee failed")
            return internal_error("System error while loading employee")
