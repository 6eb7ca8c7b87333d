"""
WebSocket tests for progress streaming.

Events are published before the client connects; the broker replays the
buffered events of active jobs to new subscribers.
Dependencies: pytest, fastapi.testclient
System role: Push channel validation
"""


class TestJobProgressStream:
    """Test suite for WS /ws/uploads/{job_id}."""

    def test_connected_then_replayed_events(self, api) -> None:
        publisher = api.broker.publisher_for("job-1")
        publisher.processing_starting()
        publisher.progress_update(1, 4)

        with api.client.websocket_connect("/ws/uploads/job-1") as websocket:
            assert websocket.receive_json() == {"event": "connected", "data": {"jobId": "job-1"}}
            assert websocket.receive_json() == {
                "event": "processingStarting",
                "data": {"jobId": "job-1", "message": "Processing started."},
            }
            update = websocket.receive_json()
            assert update["event"] == "progressUpdate"
            assert update["data"]["progress"] == 25

    def test_other_jobs_not_delivered(self, api) -> None:
        api.broker.publisher_for("job-2").processing_starting()
        api.broker.publisher_for("job-1").finalizing()

        with api.client.websocket_connect("/ws/uploads/job-1") as websocket:
            websocket.receive_json()
            assert websocket.receive_json()["event"] == "finalizing"
            websocket.send_json({"event": "ping"})
            assert websocket.receive_json() == {"event": "pong"}

    def test_ping_answered(self, api) -> None:
        with api.client.websocket_connect("/ws/uploads/job-9") as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "ping"})
            assert websocket.receive_json() == {"event": "pong"}

    def test_non_json_frames_ignored(self, api) -> None:
        with api.client.websocket_connect("/ws/uploads/job-9") as websocket:
            websocket.receive_json()
            websocket.send_text("not json")
            websocket.send_text("[1, 2")
            websocket.send_json({"event": "ping"})
            assert websocket.receive_json() == {"event": "pong"}

        assert api.broker.subscriber_count("job-9") == 0

    def test_subscription_released_on_disconnect(self, api) -> None:
        with api.client.websocket_connect("/ws/uploads/job-1") as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "ping"})
            websocket.receive_json()

        assert api.broker.subscriber_count("job-1") == 0


class TestAllJobsProgressStream:
    """Test suite for WS /ws/uploads."""

    def test_replays_every_active_job(self, api) -> None:
        api.broker.publisher_for("job-a").processing_starting()
        api.broker.publisher_for("job-b").processing_starting()

        with api.client.websocket_connect("/ws/uploads") as websocket:
            assert websocket.receive_json() == {"event": "connected", "data": {"jobId": None}}
            job_ids = {websocket.receive_json()["data"]["jobId"] for _ in range(2)}

        assert job_ids == {"job-a", "job-b"}
