"""Staging of outbox events."""

from __future__ import annotations

import logging
from typing import Optional

from habitflow.extensions import db
from habitflow.platform.outbox.models import OutboxMessage

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"


def enqueue(event_type: str, payload: dict, user_id: Optional[int] = None) -> OutboxMessage:
    """Add an event to the current session without committing.

    The caller commits it together with the change it describes, so a
    rollback drops both.
    """
    message = OutboxMessage(
        event_type=event_type,
        user_id=user_id,
        payload=dict(payload or {}),
        status=STATUS_PENDING,
    )
    db.session.add(message)
    logger.debug("Staged %s for user %s", event_type, user_id)
    return message
