from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import format_clock
from ..common.web import current_staff_id, json_errors, login_required, manager_required
from ..container import Container
from .model import PunchLog


def punch_to_json(p: PunchLog) -> dict:
    return {
        "id": p.punch_id,
        "staffId": p.staff_id,
        "type": p.punch_type.value,
        "timestamp": p.timestamp,
        "isLocal": p.is_local,
    }


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service

    @app.route("/api/attendance/me", methods=["GET"], endpoint="attendance_me")
    @login_required
    @json_errors
    def attendance_me():
        s = attendance.summary(current_staff_id())
        return jsonify(
            {
                "staffId": s.staff_id,
                "dutyState": s.duty_state.value,
                "worked": {"hours": s.worked.hours, "minutes": s.worked.minutes},
                "workPercent": s.work_percent,
                "punches": [punch_to_json(p) for p in s.punches],
            }
        )

    @app.route("/api/attendance/punch", methods=["POST"], endpoint="attendance_punch")
    @login_required
    @json_errors
    def attendance_punch():
        punch = attendance.punch(current_staff_id())
        return jsonify({"success": True, "punch": punch_to_json(punch)}), 201

    @app.route("/api/attendance/roster", methods=["GET"], endpoint="attendance_roster")
    @manager_required
    @json_errors
    def attendance_roster():
        return jsonify(
            [
                {
                    "staffId": e.staff_id,
                    "name": e.name,
                    "role": e.role,
                    "dutyState": e.duty_state.value,
                    "lastPunch": format_clock(e.last_punch_at) if e.last_punch_at else None,
                    "hoursWorked": e.hours_worked,
                    "tasksCompleted": e.tasks_completed,
                }
                for e in attendance.roster()
            ]
        )
