"""
Shared test fixtures and helpers for the requestbag test suite.
"""

import json
import pytest
from typing import Any, Callable, Dict, List, Optional

from requestbag.di import Container
from requestbag.provider import register_bag


# ============================================================================
# Container Fixtures
# ============================================================================


@pytest.fixture
def app_container() -> Container:
    """App-scoped container with the RequestBag provider registered."""
    container = Container(scope="app")
    register_bag(container)
    return container


@pytest.fixture
def request_container(app_container: Container) -> Container:
    """A fresh request-scoped child of app_container."""
    return app_container.create_request_scope()


# ============================================================================
# ASGI Helpers
# ============================================================================


def make_scope(
    method: str = "GET",
    path: str = "/",
    scope_type: str = "http",
    state: Optional[Dict[str, Any]] = None,
) -> dict:
    """Build a minimal ASGI scope."""
    scope = {
        "type": scope_type,
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": b"",
        "headers": [],
        "scheme": "http",
        "server": ("127.0.0.1", 8000),
        "client": ("127.0.0.1", 12345),
        "root_path": "",
    }
    if state is not None:
        scope["state"] = state
    return scope


def make_receive(body: bytes = b""):
    """Create an ASGI receive callable yielding one body message."""
    messages = [{"type": "http.request", "body": body, "more_body": False}]

    async def receive():
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    return receive


class SendRecorder:
    """ASGI send callable that records every message."""

    def __init__(self):
        self.messages: List[dict] = []

    async def __call__(self, message: dict) -> None:
        self.messages.append(message)

    @property
    def body(self) -> bytes:
        return b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )


def json_app(handler: Callable[[dict], Any]):
    """
    Wrap handler(scope) -> JSON-serializable value into an ASGI app.
    """
    async def app(scope, receive, send):
        payload = json.dumps(handler(scope)).encode("utf-8")
        await send({
            "type": "http.response.start",
            "status": 200,
            "headers": [(b"content-type", b"application/json")],
        })
        await send({"type": "http.response.body", "body": payload})

    return app
