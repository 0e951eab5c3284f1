"""
Shared fixtures for promoter client tests
"""

import json
import os
import sys
from typing import Callable, List

import httpx
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from promoter.client import PromoterClient


TEST_ENDPOINT = "https://api.test.local"
PROMOTER_TOKEN = "promoter-token"
CONSULTANT_TOKEN = "consultant-token"


class MockApi:
    """
    Mock Promoter API on top of httpx.MockTransport.

    Every request is recorded; the response is produced by the handler,
    which tests replace with `respond(...)` or `respond_with(...)`.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    def respond(self, status_code: int = 200, body=None, text: str = None) -> None:
        """Answer every request with the same response."""
        def handler(request: httpx.Request) -> httpx.Response:
            if text is not None:
                return httpx.Response(status_code, text=text)
            if body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=body)
        self._handler = handler

    def respond_with(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def mock_api():
    """Recorder/responder standing in for the Promoter API."""
    return MockApi()


@pytest.fixture
def http_client(mock_api):
    """httpx client wired to the mock API."""
    client = httpx.Client(transport=httpx.MockTransport(mock_api))
    yield client
    client.close()


@pytest.fixture
def client(http_client):
    """PromoterClient talking to the mock API."""
    return PromoterClient(
        token=PROMOTER_TOKEN,
        endpoint=TEST_ENDPOINT,
        http_client=http_client,
    )


@pytest.fixture
def sample_consultants():
    """Consultant records as the API returns them."""
    return [
        {"id": 1, "name": "Jane", "status": 1, "rate": 150},
        {"id": 2, "name": "Piet", "status": 0, "rate": 200, "premium": True},
    ]
