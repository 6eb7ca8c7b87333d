"""
Progress event broker.

In-process publish/subscribe channel keyed by job id. The pipeline receives a
per-job publisher; WebSocket handlers subscribe to a job (or to every job) and
drain their queue. Publishing never blocks and never waits for delivery.

Events of a running job are buffered so late subscribers see the whole job.
The buffer is released when the job publishes a terminal event.

Dependencies: asyncio (stdlib), docflow.models.streaming
System role: Push channel for processing progress
"""

import asyncio
import logging
from collections import defaultdict
from typing import Any, Protocol

from docflow.models.streaming import ProgressEvent, ProgressEventType

logger = logging.getLogger(__name__)

ALL_JOBS = None


def percent_complete(index: int, total: int) -> int:
    """Percentage of total reached at index, rounded half up."""
    if total <= 0:
        return 100
    return (200 * index + total) // (2 * total)


class ProgressPublisher(Protocol):
    """Publishing side of the progress channel for one job."""

    job_id: str

    def processing_starting(self, message: str = ...) -> None: ...

    def progress_update(
        self, chunk_index: int, total_chunks: int, page_number: int | None = None
    ) -> None: ...

    def finalizing(self, message: str = ...) -> None: ...

    def completed(self, result: Any) -> None: ...

    def error(self, message: str) -> None: ...


class JobProgressPublisher:
    """Publisher bound to a single job id."""

    def __init__(self, broker: "ProgressBroker", job_id: str) -> None:
        self._broker = broker
        self.job_id = job_id

    def _emit(self, event: ProgressEventType, **data: Any) -> None:
        payload = {"jobId": self.job_id, **data}
        self._broker.publish(self.job_id, ProgressEvent(event=event, data=payload))

    def processing_starting(self, message: str = "Processing started.") -> None:
        self._emit(ProgressEventType.PROCESSING_STARTING, message=message)

    def progress_update(
        self,
        chunk_index: int,
        total_chunks: int,
        page_number: int | None = None,
    ) -> None:
        """Report that chunk_index of total_chunks has been embedded."""
        data: dict[str, Any] = {
            "progress": percent_complete(chunk_index, total_chunks),
            "chunkIndex": chunk_index,
            "totalChunks": total_chunks,
        }
        if page_number is None:
            data["message"] = f"Processed chunk {chunk_index} of {total_chunks}"
        else:
            data["pageNumber"] = page_number
            data["message"] = (
                f"Page {page_number}: processed chunk {chunk_index} of {total_chunks}"
            )
        self._emit(ProgressEventType.PROGRESS_UPDATE, **data)

    def finalizing(self, message: str = "Finalizing processing.") -> None:
        self._emit(ProgressEventType.FINALIZING, message=message)

    def completed(self, result: Any) -> None:
        self._emit(ProgressEventType.COMPLETED, result=result)

    def error(self, message: str) -> None:
        self._emit(ProgressEventType.ERROR, message=message)


class ProgressBroker:
    """Fan out progress events to subscribers of a job or of all jobs."""

    def __init__(self, queue_size: int = 1000) -> None:
        """
        Initialize broker.

        Args:
            queue_size: Per-subscriber buffer; events beyond it are dropped for that subscriber
        """
        self._queue_size = queue_size
        self._subscribers: dict[str | None, set[asyncio.Queue]] = defaultdict(set)
        self._history: dict[str, list[ProgressEvent]] = {}

    def publisher_for(self, job_id: str) -> JobProgressPublisher:
        """Create the publisher handed to one job's pipeline run."""
        return JobProgressPublisher(self, job_id)

    def subscribe(self, job_id: str | None = ALL_JOBS) -> asyncio.Queue:
        """
        Register a subscriber queue.

        Buffered events of active jobs are replayed into the queue first.

        Args:
            job_id: Job to follow, or None for every job

        Returns:
            asyncio.Queue: Queue receiving ProgressEvent objects
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_size)
        if job_id is ALL_JOBS:
            replay = [event for events in self._history.values() for event in events]
        else:
            replay = list(self._history.get(job_id, ()))
        for event in replay:
            self._offer(queue, event)
        self._subscribers[job_id].add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue, job_id: str | None = ALL_JOBS) -> None:
        subscribers = self._subscribers.get(job_id)
        if subscribers is None:
            return
        subscribers.discard(queue)
        if not subscribers:
            del self._subscribers[job_id]

    def subscriber_count(self, job_id: str | None = ALL_JOBS) -> int:
        return len(self._subscribers.get(job_id, ()))

    def publish(self, job_id: str, event: ProgressEvent) -> None:
        """
        Deliver an event to the job's subscribers and to wildcard subscribers.

        Args:
            job_id: Job the event belongs to
            event: Event to deliver
        """
        if event.is_terminal:
            self._history.pop(job_id, None)
        else:
            self._history.setdefault(job_id, []).append(event)

        targets = list(self._subscribers.get(job_id, ())) + list(
            self._subscribers.get(ALL_JOBS, ())
        )
        for queue in targets:
            self._offer(queue, event)

        logger.debug(
            "Progress event published",
            extra={"job_id": job_id, "event": event.event.value, "subscribers": len(targets)},
        )

    def _offer(self, queue: asyncio.Queue, event: ProgressEvent) -> None:
        try:
            queue.put_nowait(event)
        except asyncio.QueueFull:
            logger.warning(
                "Progress subscriber queue full; dropping event",
                extra={"job_id": event.job_id, "event": event.event.value},
            )

    def is_active(self, job_id: str) -> bool:
        """True while a job has published events but no terminal event."""
        return job_id in self._history
