"""Session-bound CSRF tokens for the mutating JSON endpoints.

Clients fetch a token from ``/api/csrf`` (or from the login/register
response) and echo it back in the ``X-CSRF-Token`` header. Setting
``WTF_CSRF_ENABLED = False`` turns the check off, which the testing
config does.
"""

from __future__ import annotations

import secrets
from functools import wraps
from typing import Callable, TypeVar

from flask import current_app, jsonify, request, session

SESSION_KEY = "_csrf_token"
HEADER_NAME = "X-CSRF-Token"

F = TypeVar("F", bound=Callable)


def csrf_token_for_session() -> str:
    token = session.get(SESSION_KEY)
    if not token:
        token = secrets.token_hex(32)
        session[SESSION_KEY] = token
    return token


def csrf_token_valid(token: str | None) -> bool:
    expected = session.get(SESSION_KEY)
    if not token or not expected:
        return False
    return secrets.compare_digest(token, expected)


def csrf_protected(fn: F) -> F:
    """Reject the request with 403 unless the header matches the session token."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if current_app.config.get("WTF_CSRF_ENABLED", True) and not csrf_token_valid(
            request.headers.get(HEADER_NAME)
        ):
            current_app.logger.info("CSRF check failed for %s %s", request.method, request.path)
            return jsonify({"ok": False, "error": "csrf_failed"}), 403
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
