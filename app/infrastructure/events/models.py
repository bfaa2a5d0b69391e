"""Event record passed to registered handlers."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Event:
    """Something that happened to a visitor's preferences.

    ``event_type`` is a dotted name (``preferences.changed``); handlers read
    the payload from ``metadata``. ``user_id`` is set only for signed-in
    visitors.
    """

    event_type: str
    timestamp: datetime = field(default_factory=_utcnow)
    correlation_id: UUID = field(default_factory=uuid4)
    user_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view with the timestamp in ISO-8601."""
        return {
            "event_type": self.event_type,
            "timestamp": self.timestamp.isoformat(),
            "correlation_id": str(self.correlation_id),
            "user_id": self.user_id,
            "metadata": dict(self.metadata),
        }
