"""Integration tests for the progress event stream over a running server."""

import threading
import time

import httpx
import pytest
import uvicorn
from helpers import FakeBoard, issue_card

from boardtables.api.app import create_app
from boardtables.api.dependencies import (
    get_default_token,
    get_event_manager,
    get_transport_factory,
)
from boardtables.api.events import EventManager

PORT = 8766


@pytest.fixture
def event_manager() -> EventManager:
    """Create an EventManager with a short heartbeat."""
    em = EventManager()
    em._heartbeat_interval = 1
    return em


@pytest.fixture
def app(event_manager: EventManager):
    """Create the app with a fake board behind the transport factory."""
    app = create_app()

    def factory(token: str):
        return FakeBoard(
            [
                ("Todo", [issue_card(n) for n in range(1, 4)]),
                ("Done", [issue_card(4)]),
            ],
            card_page_size=1,
        )

    def override_get_event_manager():
        yield event_manager

    app.dependency_overrides[get_transport_factory] = lambda: factory
    app.dependency_overrides[get_default_token] = lambda: "server-token"
    app.dependency_overrides[get_event_manager] = override_get_event_manager
    return app


@pytest.fixture
def server(app):
    """Start the app in a background thread."""
    config = uvicorn.Config(app, host="127.0.0.1", port=PORT, log_level="error")
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run)
    thread.daemon = True
    thread.start()

    time.sleep(0.5)
    yield f"http://127.0.0.1:{PORT}"

    server.should_exit = True
    thread.join(timeout=2)


@pytest.mark.integration
class TestProgressStream:
    """Tests for progress delivered over SSE."""

    def test_stream_opens(self, server: str) -> None:
        """Client can connect to /events/stream."""
        with (
            httpx.Client(timeout=5.0) as client,
            client.stream("GET", f"{server}/api/v1/events/stream") as response,
        ):
            assert response.status_code == 200
            assert response.headers["content-type"] == "text/event-stream; charset=utf-8"

    def test_receives_heartbeat(self, server: str) -> None:
        """Heartbeat arrives when nothing else happens."""
        received = False
        with (
            httpx.Client(timeout=5.0) as client,
            client.stream("GET", f"{server}/api/v1/events/stream") as response,
        ):
            for line in response.iter_lines():
                if "event: heartbeat" in line:
                    received = True
                    break

        assert received

    def test_fetch_progress_reaches_listener(self, server: str) -> None:
        """A table request streams its progress to a listener on the same request id."""
        lines: list[str] = []

        def request_tables():
            time.sleep(0.3)
            httpx.post(
                f"{server}/api/v1/tables",
                json={"organization": "acme", "project_name": "Roadmap", "request_id": "req-9"},
                timeout=5.0,
            )

        requester = threading.Thread(target=request_tables)
        requester.start()

        url = f"{server}/api/v1/events/stream?request_id=req-9"
        with (
            httpx.Client(timeout=5.0) as client,
            client.stream("GET", url) as response,
        ):
            for line in response.iter_lines():
                lines.append(line)
                if "event: fetch_completed" in line:
                    break

        requester.join()
        text = "\n".join(lines)
        assert "event: fetch_started" in text
        assert text.count("event: fetch_progress") == 4
        assert "Fetching data for column 2/2" in text
