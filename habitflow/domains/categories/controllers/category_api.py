"""Categories JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required
from pydantic import ValidationError

from habitflow.core.auth.csrf import csrf_protected
from habitflow.core.utils.validation import jsonable_errors
from habitflow.domains.categories import services as category_services
from habitflow.domains.categories.schemas.category_schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
)

category_api_bp = Blueprint("category_api", __name__)


@category_api_bp.get("")
def list_categories():
    payload = [
        CategoryResponse.model_validate(category).model_dump()
        for category in category_services.list_categories()
    ]
    return jsonify({"ok": True, "categories": payload})


@category_api_bp.post("")
@jwt_required()
@csrf_protected
def create_category():
    payload = request.get_json(silent=True) or {}
    try:
        data = CategoryCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    try:
        category = category_services.create_category(**data.model_dump())
    except ValueError as exc:
        if str(exc) == "duplicate":
            return jsonify({"ok": False, "error": "duplicate"}), 409
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "category": CategoryResponse.model_validate(category).model_dump()}), 201


@category_api_bp.put("/<int:category_id>")
@jwt_required()
@csrf_protected
def update_category(category_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = CategoryUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    try:
        category = category_services.update_category(
            category_id, **data.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        if str(exc) == "duplicate":
            return jsonify({"ok": False, "error": "duplicate"}), 409
        return jsonify({"ok": False, "error": "validation_error"}), 400
    if not category:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "category": CategoryResponse.model_validate(category).model_dump()})


@category_api_bp.delete("/<int:category_id>")
@jwt_required()
@csrf_protected
def delete_category(category_id: int):
    try:
        deleted = category_services.delete_category(category_id)
    except ValueError:
        return jsonify({"ok": False, "error": "in_use"}), 409
    if not deleted:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
