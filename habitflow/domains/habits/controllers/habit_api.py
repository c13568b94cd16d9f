"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from habitflow.core.auth.csrf import csrf_protected
from habitflow.core.utils.validation import jsonable_errors
from habitflow.domains.habits import services as habit_services
from habitflow.domains.habits.errors import ERROR_STATUS, HabitError
from habitflow.domains.habits.schemas.habit_schemas import (
    CompletionCreate,
    HabitCreate,
    HabitStatsResponse,
    HabitUpdate,
    serialize_habit,
)

habit_api_bp = Blueprint("habit_api", __name__)


def _validation_error(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


@habit_api_bp.get("")
@jwt_required()
def list_habits():
    user_id = int(get_jwt_identity())
    habits = habit_services.list_habits(user_id)
    return jsonify({"ok": True, "habits": [serialize_habit(habit) for habit in habits]})


@habit_api_bp.post("")
@jwt_required()
@csrf_protected
def create_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        habit = habit_services.create_habit(user_id, **data.model_dump())
    except ValueError as exc:
        code = str(exc)
        if code == "invalid_category":
            return jsonify({"ok": False, "error": code}), 400
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "habit": serialize_habit(habit)}), 201


@habit_api_bp.get("/<int:habit_id>")
@jwt_required()
def habit_detail(habit_id: int):
    user_id = int(get_jwt_identity())
    habit = habit_services.get_habit(user_id, habit_id)
    if not habit:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "habit": serialize_habit(habit)})


@habit_api_bp.put("/<int:habit_id>")
@jwt_required()
@csrf_protected
def update_habit(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitUpdate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        habit = habit_services.update_habit(
            user_id, habit_id, **data.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    if not habit:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "habit": serialize_habit(habit)})


@habit_api_bp.delete("/<int:habit_id>")
@jwt_required()
@csrf_protected
def delete_habit(habit_id: int):
    user_id = int(get_jwt_identity())
    deleted = habit_services.delete_habit(user_id, habit_id)
    if not deleted:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "message": "Habit removed"})


@habit_api_bp.post("/<int:habit_id>/complete")
@jwt_required()
@csrf_protected
def complete_habit(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = CompletionCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    user_id = int(get_jwt_identity())
    try:
        habit = habit_services.complete_habit(user_id, habit_id, **data.model_dump())
    except HabitError as exc:
        body = {"ok": False, "error": exc.code}
        if exc.code == "already_completed_today":
            body["message"] = "Habit already completed today"
        return jsonify(body), ERROR_STATUS.get(exc.code, 400)
    return jsonify({"ok": True, "habit": serialize_habit(habit)})


@habit_api_bp.get("/<int:habit_id>/stats")
@jwt_required()
def habit_stats(habit_id: int):
    user_id = int(get_jwt_identity())
    stats = habit_services.get_habit_stats(user_id, habit_id)
    if stats is None:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "stats": HabitStatsResponse(**stats).model_dump(mode="json")})
