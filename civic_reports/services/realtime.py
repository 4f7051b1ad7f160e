"""
In-process change broker for report inserts, updates and deletes.

Subscribers get the changed public record with every event, so a client
can patch its local list instead of re-fetching it.
"""
import asyncio
import enum
import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Set

from civic_reports.schemas import PublicReport

logger = logging.getLogger(__name__)

SUBSCRIBER_QUEUE_SIZE = 100


class ChangeKind(str, enum.Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    kind: ChangeKind
    report_id: int
    report: Optional[PublicReport] = None

    def to_sse(self) -> str:
        data = {
            "kind": self.kind.value,
            "report_id": self.report_id,
            "report": self.report.model_dump(mode="json") if self.report else None,
        }
        return f"event: {self.kind.value.lower()}\ndata: {json.dumps(data)}\n\n"


class ChangeBroker:
    """Fan-out of change events to any number of subscriber queues"""

    def __init__(self, queue_size: int = SUBSCRIBER_QUEUE_SIZE):
        self.queue_size = queue_size
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, event: ChangeEvent) -> None:
        for queue in list(self._subscribers):
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning("Dropping %s event for slow subscriber", event.kind.value)

    @asynccontextmanager
    async def subscribe(self) -> AsyncIterator[asyncio.Queue]:
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._subscribers.add(queue)
        logger.debug("Subscriber added (%d total)", len(self._subscribers))
        try:
            yield queue
        finally:
            self._subscribers.discard(queue)
            logger.debug("Subscriber removed (%d total)", len(self._subscribers))


broker = ChangeBroker()
