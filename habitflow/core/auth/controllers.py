"""Auth JSON endpoints: register, login, refresh and current user."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request, session
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from pydantic import ValidationError

from habitflow.core.auth.auth_service import authenticate_user, issue_tokens, register_user
from habitflow.core.auth.csrf import csrf_token_for_session
from habitflow.core.auth.schemas import LoginRequest, RegisterRequest
from habitflow.core.users.models import User
from habitflow.core.users.schemas import serialize_user
from habitflow.core.utils.validation import jsonable_errors
from habitflow.extensions import db, limiter

auth_bp = Blueprint("auth_api", __name__)


def _invalid(exc: ValidationError):
    return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    try:
        data = RegisterRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return _invalid(exc)

    try:
        result = register_user(
            data, auto_issue_tokens=current_app.config.get("AUTO_LOGIN_ON_REGISTER", False)
        )
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400

    body = {"ok": True, "user": serialize_user(result["user"])}
    if "access_token" in result:
        body["access_token"] = result["access_token"]
        body["refresh_token"] = result["refresh_token"]
        body["csrf_token"] = csrf_token_for_session()
    return jsonify(body), 201


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    # A stale cookie must not carry an old CSRF token into the new login.
    session.clear()
    try:
        data = LoginRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        return _invalid(exc)

    user = authenticate_user(data.email, data.password)
    if user is None:
        current_app.logger.info("Failed login for %s", data.email)
        return jsonify({"ok": False, "error": "invalid_credentials"}), 401

    return jsonify(
        {
            "ok": True,
            "user": serialize_user(user),
            "csrf_token": csrf_token_for_session(),
            **issue_tokens(user),
        }
    )


@auth_bp.post("/refresh")
@jwt_required(refresh=True)
def refresh():
    return jsonify({"ok": True, "access_token": create_access_token(identity=get_jwt_identity())})


@auth_bp.get("/me")
@jwt_required()
def me():
    user = db.session.get(User, int(get_jwt_identity()))
    if user is None or not user.is_active:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "user": serialize_user(user)})
