"""Progress events for in-flight board fetches, delivered as Server-Sent Events."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import uuid4

if TYPE_CHECKING:
    from boardtables.board import FetchProgress


class EventType(str, Enum):
    """Types of events that can be emitted."""

    FETCH_STARTED = "fetch_started"
    FETCH_PROGRESS = "fetch_progress"
    FETCH_COMPLETED = "fetch_completed"
    FETCH_FAILED = "fetch_failed"
    HEARTBEAT = "heartbeat"


def _now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@dataclass
class Event:
    """An event to be sent via SSE."""

    event_type: EventType
    data: dict[str, Any]
    request_id: str | None = None

    def to_sse(self) -> str:
        """Convert to SSE format."""
        return f"event: {self.event_type.value}\ndata: {json.dumps(self.data)}\n\n"


@dataclass
class Subscriber:
    """A subscriber to the event stream."""

    id: str
    queue: asyncio.Queue[Event]
    request_id: str | None = None  # None means every fetch

    @classmethod
    def create(cls, request_id: str | None = None) -> Subscriber:
        return cls(id=str(uuid4()), queue=asyncio.Queue(), request_id=request_id)


@dataclass
class EventManager:
    """Fans fetch progress out to SSE subscribers."""

    _subscribers: dict[str, Subscriber] = field(default_factory=dict)
    _heartbeat_interval: int = 30  # seconds

    @property
    def heartbeat_interval(self) -> int:
        """Seconds of silence before a subscriber is sent a heartbeat."""
        return self._heartbeat_interval

    def subscribe(self, request_id: str | None = None) -> Subscriber:
        """Subscribe a client to events.

        Args:
            request_id: Only receive events for this fetch. None means all fetches.

        Returns:
            Subscriber instance for receiving events.
        """
        subscriber = Subscriber.create(request_id)
        self._subscribers[subscriber.id] = subscriber
        return subscriber

    def unsubscribe(self, subscriber_id: str) -> None:
        self._subscribers.pop(subscriber_id, None)

    def emit(self, event: Event) -> None:
        """Queue ``event`` for every matching subscriber."""
        for subscriber in self._subscribers.values():
            if subscriber.request_id is None or subscriber.request_id == event.request_id:
                subscriber.queue.put_nowait(event)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def emit_fetch_started(self, request_id: str, organization: str, project_name: str) -> None:
        self.emit(
            Event(
                event_type=EventType.FETCH_STARTED,
                request_id=request_id,
                data={
                    "request_id": request_id,
                    "organization": organization,
                    "project_name": project_name,
                    "message": "Fetching data",
                },
            )
        )

    def emit_fetch_progress(self, request_id: str, progress: FetchProgress) -> None:
        self.emit(
            Event(
                event_type=EventType.FETCH_PROGRESS,
                request_id=request_id,
                data={
                    "request_id": request_id,
                    "column_number": progress.column_number,
                    "column_total": progress.column_total,
                    "cards_fetched": progress.cards_fetched,
                    "message": progress.message,
                },
            )
        )

    def emit_fetch_completed(self, request_id: str, columns: int, cards: int) -> None:
        self.emit(
            Event(
                event_type=EventType.FETCH_COMPLETED,
                request_id=request_id,
                data={"request_id": request_id, "columns": columns, "cards": cards},
            )
        )

    def emit_fetch_failed(self, request_id: str, error: str) -> None:
        self.emit(
            Event(
                event_type=EventType.FETCH_FAILED,
                request_id=request_id,
                data={"request_id": request_id, "error": error, "timestamp": _now()},
            )
        )

    def create_heartbeat_event(self) -> Event:
        return Event(
            event_type=EventType.HEARTBEAT,
            request_id=None,
            data={"timestamp": _now()},
        )
