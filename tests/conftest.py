import json
from typing import Any, Callable

import httpx
import pytest

API_URL = "https://api.github.com/"

Handler = Callable[[httpx.Request], httpx.Response]


class MockAPI:
    """An AsyncClient backed by `httpx.MockTransport` that records every request."""

    def __init__(self, handler: Handler):
        self.requests: list[httpx.Request] = []
        self._handler = handler
        self.client = httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(self._handle))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def respond(status: int, payload: Any = None, content: bytes | None = None) -> Handler:
    """Handler answering every request with `status` and a JSON `payload` (or raw `content`)."""
    if content is None and payload is not None:
        content = json.dumps(payload).encode("utf-8")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=content or b"")

    return handler


def boom() -> Handler:
    return respond(500, content=b'{"message":"boom"}')


@pytest.fixture
async def mock_api():
    apis: list[MockAPI] = []

    def factory(handler: Handler) -> MockAPI:
        api = MockAPI(handler)
        apis.append(api)
        return api

    yield factory
    for api in apis:
        await api.client.aclose()


def user(login: str = "octocat", user_id: int = 1) -> dict[str, Any]:
    return {
        "login": login,
        "id": user_id,
        "node_id": "MDQ6VXNlcjE=",
        "html_url": f"https://github.com/{login}",
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}",
        "type": "User",
        "site_admin": False,
    }


def project(project_id: int = 1, number: int = 1, title: str = "Roadmap") -> dict[str, Any]:
    return {
        "id": project_id,
        "node_id": "PVT_kwDOA",
        "number": number,
        "title": title,
        "short_description": "Quarterly roadmap",
        "public": False,
        "owner": user("octo-org", 9),
        "creator": user(),
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-02-01T00:00:00Z",
        "state": "open",
        "latest_status_update": {"body": "on track"},
    }


def project_item(item_id: int = 42, fields: list | None = None) -> dict[str, Any]:
    item = {
        "id": item_id,
        "node_id": "PVTI_lADOA",
        "project_node_id": "PVT_kwDOA",
        "content_node_id": "I_kwDOA",
        "content_type": "Issue",
        "creator": user(),
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-02-01T00:00:00Z",
        "archived_at": None,
        "project_url": "https://api.github.com/orgs/octo-org/projectsV2/123",
        "item_url": "https://api.github.com/orgs/octo-org/projectsV2/123/items/42",
        "content": {"title": "Fix flaky test", "body": "long body"},
    }
    if fields is not None:
        item["fields"] = fields
    return item
