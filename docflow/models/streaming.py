"""
Progress streaming event schemas.

Defines event types and payloads pushed to WebSocket subscribers while a
document is being processed.

Dependencies: pydantic
System role: Streaming protocol schemas
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class ProgressEventType(str, Enum):
    """Server-to-client event types for processing progress."""

    CONNECTED = "connected"
    PROCESSING_STARTING = "processingStarting"
    PROGRESS_UPDATE = "progressUpdate"
    FINALIZING = "finalizing"
    COMPLETED = "completed"
    ERROR = "error"


TERMINAL_EVENTS = frozenset({ProgressEventType.COMPLETED, ProgressEventType.ERROR})


class ClientEventType(str, Enum):
    """Client-to-server event types."""

    PING = "ping"


class ProgressEvent(BaseModel):
    """
    Progress event envelope.

    Attributes:
        event: Event type identifier
        data: Event-specific payload; always carries jobId for job events
    """

    event: ProgressEventType
    data: dict[str, Any]

    @property
    def job_id(self) -> str | None:
        return self.data.get("jobId")

    @property
    def is_terminal(self) -> bool:
        return self.event in TERMINAL_EVENTS

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {"event": self.event.value, "data": self.data}
