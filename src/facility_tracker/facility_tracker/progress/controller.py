from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_role, current_staff_id, json_errors, login_required
from ..container import Container
from ..core.enums import Role
from .model import CompletionCount


def _count(c: CompletionCount) -> dict:
    return {"done": c.done, "total": c.total, "percent": c.percent}


def register(app: Flask, container: Container) -> None:
    progress = container.progress_service

    @app.route("/api/progress/today", methods=["GET"], endpoint="progress_today")
    @login_required
    @json_errors
    def progress_today():
        p = progress.daily()
        return jsonify(
            {
                "totalExpected": p.total_expected,
                "totalCompleted": p.total_completed,
                "percent": p.percent,
                "categoryBreakdown": {
                    "garbage": _count(p.breakdown.garbage),
                    "brooming": _count(p.breakdown.brooming),
                },
                "paymentStatusLoaded": p.payment_status_loaded,
            }
        )

    @app.route("/api/progress/navigation", methods=["GET"], endpoint="progress_navigation")
    @login_required
    @json_errors
    def progress_navigation():
        nav = progress.navigation()
        return jsonify(
            {
                "blocks": [
                    {"block": b["block"], "label": b["label"], **_count(b["progress"])}
                    for b in nav["blocks"]
                ],
                "common": [
                    {"taskId": c["task_type"], "label": c["label"], "area": c["area"], "done": c["done"]}
                    for c in nav["common"]
                ],
                "completedToday": nav["completed_today"],
            }
        )

    @app.route("/api/progress/blocks/<int:block_id>", methods=["GET"], endpoint="progress_block")
    @login_required
    @json_errors
    def progress_block(block_id: int):
        floors = [
            {"floor": floor, **_count(progress.floor(block_id, floor))}
            for floor in container.topology.floors
        ]
        return jsonify({"block": block_id, **_count(progress.block(block_id)), "floors": floors})

    @app.route("/api/progress/blocks/<int:block_id>/floors/<int:floor>", methods=["GET"], endpoint="progress_floor")
    @login_required
    @json_errors
    def progress_floor(block_id: int, floor: int):
        block = container.topology.get_block(block_id)
        flats = block.flats(floor) if block else []
        return jsonify({"block": block_id, "floor": floor, "flats": flats, **_count(progress.floor(block_id, floor))})

    @app.route("/api/logs/stats", methods=["GET"], endpoint="log_stats")
    @login_required
    @json_errors
    def log_stats():
        # Managers see everybody unless they ask for one staff member.
        if current_role() == Role.MANAGER:
            staff_id = request.args.get("staffId", type=int)
        else:
            staff_id = current_staff_id()
        s = progress.log_stats(staff_id=staff_id)
        return jsonify(
            {
                "todayCount": s.today_count,
                "weekCount": s.week_count,
                "breakdown": {
                    "garbage": s.garbage,
                    "brooming": s.brooming,
                    "mopping": s.mopping,
                    "other": s.other,
                },
            }
        )

    @app.route("/api/topology", methods=["GET"], endpoint="topology")
    @login_required
    def topology():
        return jsonify(
            {
                "floors": list(container.topology.floors),
                "blocks": [{"block": b.block_id, "label": b.label} for b in container.topology.blocks],
                "tasks": [
                    {
                        "taskId": t.task_type,
                        "label": t.label,
                        "icon": t.icon,
                        "scope": t.scope.value,
                        "category": t.category.value,
                        "frequency": t.frequency.value,
                        "area": t.area,
                    }
                    for t in container.catalog.definitions
                ],
            }
        )
