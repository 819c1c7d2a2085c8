from __future__ import annotations

import base64
import binascii

from flask import Flask, jsonify, request

from ..common.web import current_role, current_staff_id, json_errors, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from .model import TaskLog


def task_log_to_json(log: TaskLog) -> dict:
    return {
        "id": log.log_id,
        "taskId": log.task_type,
        "staffId": log.staff_id,
        "timestamp": log.timestamp,
        "status": log.status.value,
        "imageUrl": log.image_url,
        "aiFeedback": log.ai_feedback,
        "aiRating": log.ai_rating,
        "block": log.block,
        "floor": log.floor,
        "flat": log.flat,
        "isLocal": log.is_local,
    }


def _decode_photo(value) -> bytes:
    if not isinstance(value, str):
        raise ValidationError("Photo must be a base64 string")
    # Accept both bare base64 and data URLs from the camera widget.
    if value.startswith("data:") and "," in value:
        value = value.split(",", 1)[1]
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Photo is not valid base64")


def _optional_int(value, field_name: str):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks/complete", methods=["POST"], endpoint="complete_task")
    @login_required
    @json_errors
    def complete_task():
        data = request.get_json(silent=True) or {}

        photo = data.get("photo")
        log = container.task_service.complete_task(
            staff_id=current_staff_id(),
            task_type=str(data.get("taskId") or ""),
            block=_optional_int(data.get("block"), "Block"),
            floor=_optional_int(data.get("floor"), "Floor"),
            flat=data.get("flat"),
            image_url=data.get("imageUrl"),
            ai_feedback=data.get("aiFeedback"),
            ai_rating=data.get("aiRating"),
            photo=_decode_photo(photo) if photo else None,
        )
        return jsonify({"success": True, "log": task_log_to_json(log)}), 201

    @app.route("/api/tasks/logs", methods=["GET"], endpoint="task_logs")
    @login_required
    @json_errors
    def task_logs():
        if current_role() == Role.MANAGER:
            staff_id = request.args.get("staffId", type=int)
        else:
            staff_id = current_staff_id()
        limit = request.args.get("limit", default=200, type=int)
        logs = container.task_service.history(staff_id=staff_id, limit=limit)
        return jsonify([task_log_to_json(log) for log in logs])
