"""Pytest configuration and fixtures."""

import json
from collections.abc import AsyncIterator, Iterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
import respx

from anki_mcp.client import AnkiConnectClient

ANKI_URL = "http://localhost:8765"


class FakeAnkiConnect:
    """Answers AnkiConnect requests from canned results and records them."""

    def __init__(self) -> None:
        self.results: dict[str, Any] = {}
        self.errors: dict[str, str] = {}
        self.requests: list[dict[str, Any]] = []
        self.response: httpx.Response | None = None
        self.exception: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)

        if self.exception is not None:
            raise self.exception
        if self.response is not None:
            return self.response

        action = body["action"]
        if action in self.errors:
            return httpx.Response(200, json={"result": None, "error": self.errors[action]})
        if action not in self.results:
            return httpx.Response(200, json={"result": None, "error": "unsupported action"})
        return httpx.Response(200, json={"result": self.results[action], "error": None})

    @property
    def actions(self) -> list[str]:
        return [body["action"] for body in self.requests]


@pytest.fixture
def anki() -> Iterator[FakeAnkiConnect]:
    """Route every POST to the AnkiConnect URL through a fake backend."""
    fake = FakeAnkiConnect()
    with respx.mock(assert_all_called=False) as router:
        router.post(url__startswith=ANKI_URL).mock(side_effect=fake)
        yield fake


@pytest_asyncio.fixture
async def client() -> AsyncIterator[AnkiConnectClient]:
    """Create an AnkiConnect client pointed at the fake backend URL."""
    anki_client = AnkiConnectClient(ANKI_URL)
    try:
        yield anki_client
    finally:
        await anki_client.close()
