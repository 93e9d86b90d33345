from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import fail, internal_error, ok
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    ledger = container.attendance_ledger

    @app.route("/api/auth/employees/<int:employee_id>/check-in", methods=["POST"], endpoint="check_in")
    def check_in(employee_id: int):
        try:
            summary = ledger.check_in(employee_id)
            return ok(summary.to_dict())
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Check-in failed for employee %s", employee_id)
            return internal_error("System error during check-in")

    @app.route("/api/auth/employees/<int:employee_id>/check-out", methods=["POST"], endpoint="check_out")
    def check_out(employee_id: int):
        try:
            summary = ledger.check_out(employee_id)
            return ok(summary.to_dict())
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Check-out failed for employee %s", employee_id)
            return internal_error("System error during check-out")

    @app.route("/api/auth/attendance/<int:employee_id>", methods=["GET"], endpoint="list_attendance")
    def list_attendance(employee_id: int):
        try:
            start_s = request.args.get("startDate")
            end_s = request.args.get("endDate")
            start = parse_iso_date(start_s) if start_s else None
            end = parse_iso_date(end_s) if end_s else None

            records = ledger.list_attendance(employee_id, start_date=start, end_date=end)
            return ok([r.to_dict() for r in records])
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Listing attendance failed for employee %s", employee_id)
            return internal_error("System error while loading attendance")

    @app.route("/api/auth/attendance/<int:employee_id>/today", methods=["GET"], endpoint="today_attendance")
    def today_attendance(employee_id: int):
        """Today's record (or null) so the check-in screen can pick the right button."""
        try:
            record = ledger.get_today_record(employee_id)
            return ok(record.to_dict() if record else None)
        except DomainError as e:
            return fail(e)
        except Exception:
            logger.exception("Loading today's attendance failed for employee %s", employee_id)
            return internal_error("System error while loading attendance")
