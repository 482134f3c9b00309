"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import json
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from monnify.clients.http import HttpClient
from monnify.clients.token_store import TokenStore
from monnify.core.config import MonnifySettings


def envelope(
    body: Any = None,
    *,
    successful: bool = True,
    message: str = "success",
    code: str = "0",
) -> Dict[str, Any]:
    return {
        "requestSuccessful": successful,
        "responseMessage": message,
        "responseCode": code,
        "responseBody": body,
    }


class StaticTokenStore(TokenStore):
    """Token store that never refreshes; records how often it was asked."""

    def __init__(self, token: str = "cached-token") -> None:
        super().__init__()
        self.token = token
        self.calls = 0

    def get_token(self, refresh):
        self.calls += 1
        return self.token


class FakeMonnifyApi:
    """Route table for ``httpx.MockTransport`` keyed on method and path."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status, content=content)
            return httpx.Response(status, json=json_body)

        self.routes[(method.upper(), path)] = respond

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text="<html>Not Found</html>")
        return handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> MonnifySettings:
    return MonnifySettings(
        secret_key="test-secret-key",
        api_key="MK_TEST_API_KEY",
        contract_code="1234567890",
        environment="sandbox",
        wallet_account_number="3934178936",
        storage_dir=tmp_path / "storage",
    )


@pytest.fixture
def fake_api() -> FakeMonnifyApi:
    return FakeMonnifyApi()


@pytest.fixture
def token_store() -> StaticTokenStore:
    return StaticTokenStore()


@pytest.fixture
def http_client(settings, fake_api, token_store) -> HttpClient:
    client = HttpClient(settings, token_store, transport=httpx.MockTransport(fake_api))
    yield client
    client.close()
