from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_enum
from ..common.web import current_role, current_staff_id, json_errors, login_required, manager_required
from ..container import Container
from ..core.enums import Role, SupplyStatus
from .model import SupplyRequest
from .service import PRESET_ITEMS


def supply_to_json(r: SupplyRequest) -> dict:
    return {
        "id": r.request_id,
        "item": r.item,
        "quantity": r.quantity,
        "urgency": r.urgency.value,
        "status": r.status.value,
        "requesterId": r.requester_id,
        "timestamp": r.timestamp,
        "isLocal": r.is_local,
    }


def register(app: Flask, container: Container) -> None:
    supplies = container.supply_service

    @app.route("/api/supplies", methods=["GET"], endpoint="list_supplies")
    @login_required
    @json_errors
    def list_supplies():
        status_arg = request.args.get("status")
        status = require_enum(status_arg, SupplyStatus, "Status") if status_arg else None
        requester_id = None if current_role() == Role.MANAGER else current_staff_id()
        rows = supplies.list_requests(status=status, requester_id=requester_id)
        return jsonify({"presets": list(PRESET_ITEMS), "requests": [supply_to_json(r) for r in rows]})

    @app.route("/api/supplies", methods=["POST"], endpoint="create_supply")
    @login_required
    @json_errors
    def create_supply():
        data = request.get_json(silent=True) or {}
        req = supplies.create_request(
            requester_id=current_staff_id(),
            item=data.get("item", ""),
            quantity=str(data.get("quantity") or ""),
            urgency=data.get("urgency") or "LOW",
        )
        return jsonify({"success": True, "request": supply_to_json(req)}), 201

    @app.route("/api/supplies/<request_id>/approve", methods=["POST"], endpoint="approve_supply")
    @manager_required
    @json_errors
    def approve_supply(request_id: str):
        req = supplies.approve(current_role=current_role(), request_id=request_id)
        return jsonify({"success": True, "request": supply_to_json(req)})

    @app.route("/api/supplies/<request_id>/reject", methods=["POST"], endpoint="reject_supply")
    @manager_required
    @json_errors
    def reject_supply(request_id: str):
        req = supplies.reject(current_role=current_role(), request_id=request_id)
        return jsonify({"success": True, "request": supply_to_json(req)})
