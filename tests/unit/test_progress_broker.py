"""
Unit tests for the progress broker and job publisher.

Dependencies: pytest, docflow.core.progress_broker
System role: Push channel validation
"""

import asyncio

import pytest

from docflow.core.progress_broker import ALL_JOBS, ProgressBroker, percent_complete
from docflow.models.streaming import ProgressEvent, ProgressEventType


def drain(queue: asyncio.Queue) -> list[ProgressEvent]:
    events = []
    while not queue.empty():
        events.append(queue.get_nowait())
    return events


class TestPercentComplete:
    """Test suite for percent_complete()."""

    @pytest.mark.parametrize(
        ("index", "total", "expected"),
        [(1, 4, 25), (2, 4, 50), (4, 4, 100), (1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1)],
    )
    def test_rounds_half_up(self, index: int, total: int, expected: int) -> None:
        assert percent_complete(index, total) == expected

    def test_zero_total_is_complete(self) -> None:
        assert percent_complete(0, 0) == 100


class TestJobProgressPublisher:
    """Test suite for JobProgressPublisher payloads."""

    async def test_every_event_carries_job_id(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe("job-1")
        publisher = broker.publisher_for("job-1")

        publisher.processing_starting()
        publisher.progress_update(1, 2)
        publisher.finalizing()
        publisher.completed({"chunks": []})

        events = drain(queue)
        assert [e.event for e in events] == [
            ProgressEventType.PROCESSING_STARTING,
            ProgressEventType.PROGRESS_UPDATE,
            ProgressEventType.FINALIZING,
            ProgressEventType.COMPLETED,
        ]
        assert all(e.data["jobId"] == "job-1" for e in events)

    async def test_progress_update_payload(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe("job-1")

        broker.publisher_for("job-1").progress_update(1, 3)

        (event,) = drain(queue)
        assert event.data == {
            "jobId": "job-1",
            "progress": 33,
            "chunkIndex": 1,
            "totalChunks": 3,
            "message": "Processed chunk 1 of 3",
        }

    async def test_progress_update_with_page_number(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe("job-1")

        broker.publisher_for("job-1").progress_update(2, 2, page_number=3)

        (event,) = drain(queue)
        assert event.data["pageNumber"] == 3
        assert event.data["progress"] == 100
        assert event.data["message"] == "Page 3: processed chunk 2 of 2"

    async def test_error_payload(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe("job-1")

        broker.publisher_for("job-1").error("Embedding request failed")

        (event,) = drain(queue)
        assert event.to_dict() == {
            "event": "error",
            "data": {"jobId": "job-1", "message": "Embedding request failed"},
        }


class TestProgressBroker:
    """Test suite for ProgressBroker routing and buffering."""

    async def test_job_subscriber_only_sees_its_job(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe("job-a")

        broker.publisher_for("job-a").processing_starting()
        broker.publisher_for("job-b").processing_starting()

        events = drain(queue)
        assert [e.job_id for e in events] == ["job-a"]

    async def test_wildcard_subscriber_sees_every_job(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe(ALL_JOBS)

        broker.publisher_for("job-a").processing_starting()
        broker.publisher_for("job-b").processing_starting()

        assert [e.job_id for e in drain(queue)] == ["job-a", "job-b"]

    async def test_late_subscriber_receives_buffered_events(self) -> None:
        broker = ProgressBroker()
        publisher = broker.publisher_for("job-1")
        publisher.processing_starting()
        publisher.progress_update(1, 2)

        queue = broker.subscribe("job-1")

        assert [e.event for e in drain(queue)] == [
            ProgressEventType.PROCESSING_STARTING,
            ProgressEventType.PROGRESS_UPDATE,
        ]

    async def test_terminal_event_releases_buffer(self) -> None:
        broker = ProgressBroker()
        publisher = broker.publisher_for("job-1")
        publisher.processing_starting()
        assert broker.is_active("job-1")

        publisher.completed([])

        assert not broker.is_active("job-1")
        assert drain(broker.subscribe("job-1")) == []

    async def test_publish_without_subscribers_does_not_fail(self) -> None:
        broker = ProgressBroker()

        broker.publisher_for("job-1").error("boom")

        assert broker.subscriber_count("job-1") == 0

    async def test_unsubscribe_stops_delivery(self) -> None:
        broker = ProgressBroker()
        queue = broker.subscribe("job-1")
        broker.unsubscribe(queue, "job-1")

        broker.publisher_for("job-1").processing_starting()

        assert queue.empty()
        assert broker.subscriber_count("job-1") == 0

    async def test_unsubscribe_unknown_queue_is_noop(self) -> None:
        broker = ProgressBroker()

        broker.unsubscribe(asyncio.Queue(), "missing")

    async def test_full_queue_drops_events_without_blocking(self) -> None:
        broker = ProgressBroker(queue_size=2)
        queue = broker.subscribe("job-1")
        publisher = broker.publisher_for("job-1")

        for index in range(1, 6):
            publisher.progress_update(index, 5)

        events = drain(queue)
        assert [e.data["chunkIndex"] for e in events] == [1, 2]
