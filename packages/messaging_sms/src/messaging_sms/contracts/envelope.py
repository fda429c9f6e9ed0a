"""
SMS Event Envelope

Standard wrapper for requests handed off to the SMS Redis Stream.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


@dataclass
class SMSEnvelope:
    """
    Event envelope for SMS engine events.

    Attributes:
        event_id: Unique identifier for this event instance
        event_type: Type of event (SMSEventType value)
        application_id: Application that submitted the request
        occurred_at: When the event occurred (UTC)
        version: Event contract version
        payload: Request fields, exactly as received
        correlation_id: Optional correlation ID for tracing
        metadata: Additional metadata (priority, source, etc.)
    """

    event_id: UUID
    event_type: str
    application_id: str
    occurred_at: datetime
    payload: dict[str, Any]
    version: int = 1
    correlation_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        event_type: str,
        application_id: str,
        payload: dict[str, Any],
        correlation_id: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "SMSEnvelope":
        """Create a new envelope with auto-generated event_id and timestamp."""
        return cls(
            event_id=uuid4(),
            event_type=event_type,
            application_id=application_id,
            occurred_at=datetime.now(timezone.utc),
            payload=payload,
            correlation_id=correlation_id,
            metadata=metadata or {},
        )

    def to_stream_data(self) -> dict[str, str]:
        """Convert to dictionary suitable for Redis Stream (all string values)."""
        return {
            "event_id": str(self.event_id),
            "event_type": self.event_type,
            "application_id": self.application_id,
            "occurred_at": self.occurred_at.isoformat(),
            "version": str(self.version),
            "payload": json.dumps(self.payload),
            "correlation_id": self.correlation_id or "",
            "metadata": json.dumps(self.metadata),
        }
