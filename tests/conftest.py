"""Pytest configuration and shared fixtures."""

import httpx
import pytest

from core.config import API_BASE_URL, OCRConfig
from core.dispatcher import ToolDispatcher


class FakeOCRAPI:
    """In-process stand-in for the Handwriting OCR API.

    Routes are keyed by (method, path relative to the v3 base URL).  Every
    request that reaches the transport is recorded, so tests can assert on
    what was sent and on how many network calls happened.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[httpx.Response]] = {}

    def add(self, method: str, path: str, *responses: httpx.Response) -> None:
        self._routes.setdefault((method, path), []).extend(responses)

    def add_json(self, method: str, path: str, body, status_code: int = 200) -> None:
        self.add(method, path, httpx.Response(status_code, json=body))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(httpx.URL(API_BASE_URL).path)
        queue = self._routes.get((request.method, path))
        if not queue:
            return httpx.Response(404, json={"message": "Not found"})
        # The last response repeats once the queue is drained.
        return queue.pop(0) if len(queue) > 1 else queue[0]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


@pytest.fixture
def fake_api():
    return FakeOCRAPI()


@pytest.fixture
def config():
    return OCRConfig(api_token="test-token")


@pytest.fixture
def dispatcher(config, fake_api):
    return ToolDispatcher(config, transport=fake_api.transport)


@pytest.fixture
def unconfigured_dispatcher(fake_api):
    return ToolDispatcher(OCRConfig(api_token=None), transport=fake_api.transport)
