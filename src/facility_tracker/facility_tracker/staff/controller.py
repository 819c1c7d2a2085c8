from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_role, json_errors, login_required, manager_required
from ..container import Container
from .model import StaffMember


def staff_to_json(s: StaffMember) -> dict:
    return {
        "id": s.staff_id,
        "name": s.name,
        "role": s.role,
        "avatar": s.avatar,
        "blockAssignment": s.block_assignment,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staff", methods=["GET"], endpoint="list_staff")
    @login_required
    def list_staff():
        return jsonify([staff_to_json(s) for s in container.staff_service.list_staff()])

    @app.route("/api/staff", methods=["POST"], endpoint="add_staff")
    @manager_required
    @json_errors
    def add_staff():
        data = request.get_json(silent=True) or {}
        member = container.staff_service.add_staff(
            current_role=current_role(),
            name=data.get("name", ""),
            role=data.get("role") or "Housekeeper",
            avatar=data.get("avatar") or "",
            block_assignment=data.get("blockAssignment") or "",
        )
        return jsonify({"success": True, "staff": staff_to_json(member)}), 201
