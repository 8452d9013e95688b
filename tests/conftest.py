# tests/conftest.py
import json

import httpx
import pytest

from propfeed.schemas import RequestConfig

BASE_URL = "https://reso.example.test/OData/test"
LISTING_KEY = "P_5dba1fb94aa4055b9f29696f"
TOKEN = "secret-token-123"


@pytest.fixture
def reso_record():
    return {
        "ListingKey": LISTING_KEY,
        "UnparsedAddress": "123 Main St",
        "YearBuilt": "1998",
        "LotSizeSquareFeet": "5000.9",
        "City": "Birmingham",
        "StateOrProvince": "MI",
    }


@pytest.fixture
def make_transport():
    """
    Build an httpx.MockTransport answering every request with one response.
    Requests are recorded on `transport.requests`.
    """

    def _make(*, status: int = 200, body=None, text: str | None = None, exc: Exception | None = None):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if exc is not None:
                raise exc
            if text is not None:
                return httpx.Response(status, text=text)
            return httpx.Response(status, content=json.dumps(body).encode(), headers={"content-type": "application/json"})

        transport = httpx.MockTransport(handler)
        transport.requests = seen
        return transport

    return _make


@pytest.fixture
def request_config():
    return RequestConfig(base_url=BASE_URL, listing_key=LISTING_KEY, access_token=TOKEN, timeout_s=2.0)
