"""Shared fixtures: a fake IcePanel API behind httpx.MockTransport."""

from __future__ import annotations

import json

import httpx
import pytest

from core.config import Settings
from core.dispatch import ToolDispatcher
from core.icepanel import IcePanelClient

API_BASE_URL = "https://api.icepanel.test/v1"
ORGANIZATION_ID = "organization00000001"

LANDSCAPE_ID = "landscapeid000000001"
OBJECT_ID = "modelobject000000001"
PARENT_ID = "modelobject000000002"
CHILD_ID = "modelobject000000003"
OTHER_ID = "modelobject000000004"
TEAM_ID = "teamid00000000000001"

VERSION_PATH = f"/landscapes/{LANDSCAPE_ID}/versions/latest"


class FakeIcePanelApi:
    """Route table for httpx.MockTransport that records every request.

    Routes are keyed by method and path (without the /v1 prefix and without
    the query string).  Unknown routes answer 404.
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, object, str]] = {}
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    def on(self, method: str, path: str, json=None, status_code: int = 200, text: str = ""):
        self.routes[(method, path)] = (status_code, json, text)

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        path = request.url.path.removeprefix("/v1")
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, text=f"no route for {request.method} {path}")
        status_code, payload, text = route
        if payload is not None:
            return httpx.Response(status_code, json=payload)
        return httpx.Response(status_code, text=text)

    # -- inspection helpers ------------------------------------------------

    @property
    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path.removeprefix("/v1")) for r in self.requests]

    def query(self, index: int = -1) -> list[tuple[str, str]]:
        return self.requests[index].url.params.multi_items()

    def body(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_key="test-key",
        organization_id=ORGANIZATION_ID,
        api_base_url=API_BASE_URL,
        app_base_url="https://app.icepanel.test",
    )


@pytest.fixture
def fake_api() -> FakeIcePanelApi:
    return FakeIcePanelApi()


@pytest.fixture
def client(settings, fake_api):
    http_client = httpx.Client(base_url=settings.api_base_url, transport=httpx.MockTransport(fake_api))
    with IcePanelClient(settings, http_client=http_client) as icepanel:
        yield icepanel


@pytest.fixture
def dispatcher(client, settings) -> ToolDispatcher:
    return ToolDispatcher(client, settings)
