from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import json_errors, login_required, manager_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    store = container.store

    @app.route("/api/store/refresh", methods=["POST"], endpoint="store_refresh")
    @login_required
    @json_errors
    def store_refresh():
        store.refresh()
        container.progress_service.reload_active_flats()
        return jsonify(
            {
                "success": True,
                "staff": len(store.staff),
                "taskLogs": len(store.task_logs),
                "punchLogs": len(store.punch_logs),
                "supplyRequests": len(store.supply_requests),
                "unsynced": store.local_record_count() + store.pending_status_count,
            }
        )

    @app.route("/api/store/reconcile", methods=["POST"], endpoint="store_reconcile")
    @manager_required
    @json_errors
    def store_reconcile():
        report = store.reconcile()
        return jsonify({"success": True, "synced": report.synced, "stillPending": report.still_pending})
