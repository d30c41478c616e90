from __future__ import annotations

from flask import Flask, request

from ..common.responses import json_error, json_ok
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/months/<month>/groups/<group_id>/activate", methods=["POST"], endpoint="activate_group")
    def activate_group(month: str, group_id: str):
        try:
            inst = container.attendance_service.activate_group(month, group_id)
            return json_ok(inst, 201)
        except ValidationError as e:
            return json_error(str(e))

    @app.route("/api/attendance/cycle", methods=["POST"], endpoint="attendance_cycle")
    def attendance_cycle():
        data = _payload()
        try:
            result = container.attendance_service.cycle_attendance(
                month=str(data.get("month", "")),
                instance_id=str(data.get("instance_id", "")),
                date=str(data.get("date", "")),
                worker_id=str(data.get("worker_id", "")),
            )
            return json_ok(result)
        except ValidationError as e:
            return json_error(str(e))

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        data = _payload()
        try:
            result = container.attendance_service.set_attendance(
                month=str(data.get("month", "")),
                instance_id=str(data.get("instance_id", "")),
                date=str(data.get("date", "")),
                worker_id=str(data.get("worker_id", "")),
                status=data.get("status"),
            )
            return json_ok(result)
        except ValidationError as e:
            return json_error(str(e))

    @app.route("/api/attendance/tags", methods=["POST"], endpoint="attendance_tags")
    def attendance_tags():
        data = _payload()
        try:
            container.attendance_service.set_day_tags(
                month=str(data.get("month", "")),
                instance_id=str(data.get("instance_id", "")),
                date=str(data.get("date", "")),
                activity_code=data.get("activity_code"),
                area_code=data.get("area_code"),
            )
            return json_ok(None)
        except ValidationError as e:
            return json_error(str(e))

    @app.route("/api/attendance/<month>/exceeded", methods=["GET"], endpoint="attendance_exceeded")
    def attendance_exceeded(month: str):
        try:
            return json_ok(container.attendance_service.exceeded_marks(month))
        except ValidationError as e:
            return json_error(str(e))
