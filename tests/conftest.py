"""Shared pytest fixtures for the kitchen-mcp test suite."""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import pytest

from kitchen_mcp.config import HEBSettings
from payloads import LIST_ID


class FakeGraphQLClient:
    """Stands in for HEBGraphQLClient: replays canned `data` objects in order."""

    def __init__(self, *responses: Any):
        self._responses = list(responses)
        self.requests = []

    async def execute(self, request):
        self.requests.append(request)
        if not self._responses:
            raise AssertionError(f"unexpected request: {request.operation_name}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture()
def settings() -> HEBSettings:
    return HEBSettings(
        sat_cookie="test-sat",
        jsessionid="test-session",
        reese84="test-reese",
        store_id="123",
        default_list_id=LIST_ID,
    )


@pytest.fixture()
def settings_without_default_list() -> HEBSettings:
    return HEBSettings(
        sat_cookie="test-sat",
        jsessionid="test-session",
        reese84="test-reese",
        store_id="123",
    )


@pytest.fixture()
def fake_client() -> Callable[..., FakeGraphQLClient]:
    """Factory: `fake_client(data1, data2, ...)`."""
    return FakeGraphQLClient


@pytest.fixture()
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport answering with `handler`, optionally recording requests into `seen`."""

    def factory(handler: Callable[[httpx.Request], httpx.Response], seen: Optional[list] = None):
        def recording(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            return handler(request)

        return httpx.MockTransport(recording)

    return factory
