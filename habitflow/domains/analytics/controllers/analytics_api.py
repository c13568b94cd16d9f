"""Analytics JSON API controllers (read-only reports plus export)."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from habitflow.core.auth.csrf import csrf_protected
from habitflow.core.utils.validation import parse_positive_int
from habitflow.domains.analytics import services as analytics_services
from habitflow.domains.analytics.schemas.analytics_schemas import (
    DashboardResponse,
    ExportResponse,
    ProgressEntry,
    StreakEntry,
)
from habitflow.domains.analytics.services.export_service import export_habits

analytics_api_bp = Blueprint("analytics_api", __name__)


@analytics_api_bp.get("/dashboard")
@jwt_required()
def dashboard():
    user_id = int(get_jwt_identity())
    summary = analytics_services.get_dashboard(user_id)
    return jsonify({"ok": True, "dashboard": DashboardResponse(**summary).model_dump()})


@analytics_api_bp.get("/streaks")
@jwt_required()
def streaks():
    user_id = int(get_jwt_identity())
    payload = [StreakEntry(**row).model_dump() for row in analytics_services.get_streaks(user_id)]
    return jsonify({"ok": True, "streaks": payload})


@analytics_api_bp.get("/progress")
@jwt_required()
def progress():
    default_period = current_app.config.get("HABITS_PROGRESS_DEFAULT_PERIOD", 30)
    try:
        period = parse_positive_int(request.args.get("period"), default_period)
    except ValueError:
        return jsonify({"ok": False, "error": "validation_error", "details": "period must be a positive integer"}), 400
    user_id = int(get_jwt_identity())
    rows = analytics_services.get_progress(user_id, period)
    return jsonify(
        {
            "ok": True,
            "period": period,
            "progress": [ProgressEntry(**row).model_dump() for row in rows],
        }
    )


@analytics_api_bp.post("/export")
@jwt_required()
@csrf_protected
def export():
    user_id = int(get_jwt_identity())
    result = ExportResponse(**export_habits(user_id))
    return jsonify(
        {
            "ok": True,
            "message": "Data exported successfully",
            **result.model_dump(mode="json"),
        }
    )
