from habitflow.platform.outbox.models import OutboxMessage
from habitflow.platform.outbox.services import STATUS_PENDING, enqueue

__all__ = ["OutboxMessage", "STATUS_PENDING", "enqueue"]
