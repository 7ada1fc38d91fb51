"""Realtime notification queue.

Messages are built with ``RealtimeQueue.create`` and only leave the process
when ``save()`` is called, which publishes them on a broker stream. Other
parts of the platform (websocket fan-out, notification workers) subscribe
to that stream.
"""

import os
from datetime import UTC, date, datetime
from uuid import uuid4

from protean.utils.globals import current_domain

from catalogue.exceptions import PublicationError
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_STREAM = "realtime"


def _json_safe(value):
    """Convert aggregates, datetimes and containers into JSON-compatible values."""
    if hasattr(value, "to_dict"):
        return _json_safe(value.to_dict())
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_json_safe(item) for item in value]
    if isinstance(value, datetime | date):
        return value.isoformat()
    return value


def _request_id(request):
    if request is None:
        return None
    if isinstance(request, dict):
        return request.get("request_id")
    return getattr(request, "request_id", None)


class QueueMessage:
    """An event waiting to be published on the queue."""

    def __init__(self, queue, event, payload, metadata):
        self.queue = queue
        self.event = event
        self.payload = payload
        self.metadata = metadata
        self.message_id = None

    def to_dict(self):
        return {
            "id": self.metadata["id"],
            "event": self.event,
            "payload": self.payload,
            "metadata": self.metadata,
        }

    def save(self):
        """Publish the message; raises ``PublicationError`` if the broker refuses it."""
        try:
            self.message_id = self.queue.broker.publish(self.queue.stream, self.to_dict())
        except Exception as exc:
            logger.error(
                "realtime_publish_failed",
                stream=self.queue.stream,
                event_name=self.event,
                error=str(exc),
            )
            raise PublicationError(f"Could not publish {self.event} to {self.queue.stream}: {exc}") from exc

        logger.info(
            "realtime_message_published",
            stream=self.queue.stream,
            event_name=self.event,
            message_id=self.message_id,
        )
        return self.message_id

    def __repr__(self):
        return f"<QueueMessage {self.event} on {self.queue.stream}>"


class RealtimeQueue:
    """Client for the realtime notification stream.

    Args:
        broker: Protean broker to publish through. Defaults to the active
            domain's ``default`` broker.
        stream: Stream name. Defaults to ``REALTIME_QUEUE_STREAM`` or ``realtime``.
        request: Caller context; its ``request_id`` is stamped into message metadata.
    """

    def __init__(self, broker=None, stream=None, request=None):
        self.broker = broker if broker is not None else current_domain.brokers["default"]
        self.stream = stream or os.getenv("REALTIME_QUEUE_STREAM", DEFAULT_STREAM)
        self.request = request

    def create(self, event, payload) -> QueueMessage:
        metadata = {
            "id": str(uuid4()),
            "created_at": datetime.now(UTC).isoformat(),
        }
        request_id = _request_id(self.request)
        if request_id is not None:
            metadata["request_id"] = str(request_id)

        return QueueMessage(self, event, _json_safe(payload), metadata)
