"""Pytest configuration and shared fixtures"""

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
import pytest_asyncio


class RecordingTransport:
    """Wraps a handler for httpx.MockTransport and keeps every request"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest_asyncio.fixture
async def mock_http():
    """Build an AsyncClient backed by a recording MockTransport

    Usage: ``client, transport = mock_http(handler)``
    """
    clients: List[httpx.AsyncClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        client = httpx.AsyncClient(transport=httpx.MockTransport(transport))
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        await client.aclose()


@pytest.fixture
def chat_messages() -> List[Dict[str, str]]:
    """Short tutoring transcript with a leading system prompt"""
    return [
        {"role": "system", "content": "You are a patient Japanese teacher."},
        {"role": "user", "content": "How do I say hello?"},
    ]
