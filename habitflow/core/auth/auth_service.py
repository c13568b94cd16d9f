"""Account registration, credential checks and JWT issuance."""

from __future__ import annotations

import logging
from typing import Optional

from flask_jwt_extended import create_access_token, create_refresh_token
from sqlalchemy import func

from habitflow.core.auth.events import AUTH_USER_REGISTERED
from habitflow.core.auth.schemas import RegisterRequest
from habitflow.core.users.models import User
from habitflow.extensions import db
from habitflow.platform.outbox import enqueue as enqueue_outbox

logger = logging.getLogger(__name__)


def find_user_by_email(email: str) -> Optional[User]:
    return User.query.filter(func.lower(User.email) == (email or "").strip().lower()).first()


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the active user owning these credentials, else None."""
    user = find_user_by_email(email)
    if user is None or not user.is_active or not user.check_password(password):
        return None
    return user


def issue_tokens(user: User) -> dict[str, str]:
    # flask-jwt-extended wants a string subject
    identity = str(user.id)
    return {
        "access_token": create_access_token(identity=identity),
        "refresh_token": create_refresh_token(identity=identity),
    }


def register_user(payload: RegisterRequest, auto_issue_tokens: bool = False) -> dict:
    """Create the account and stage ``auth.user.registered`` in the same commit.

    Raises ``ValueError("email_already_exists")`` when the address is taken.
    """
    if find_user_by_email(payload.email):
        raise ValueError("email_already_exists")

    user = User(email=payload.email, name=payload.name)
    user.set_password(payload.password)
    db.session.add(user)
    db.session.flush()

    enqueue_outbox(
        AUTH_USER_REGISTERED,
        {"user_id": user.id, "email": user.email, "name": user.name},
        user_id=user.id,
    )
    db.session.commit()
    logger.info("Registered user %s", user.id)

    result: dict = {"user": user}
    if auto_issue_tokens:
        result.update(issue_tokens(user))
    return result
