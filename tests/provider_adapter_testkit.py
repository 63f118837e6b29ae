"""Test utilities for provider adapter and strategy tests.

It provides a minimal async HTTP client fake matching the shape used via
`create_mcp_http_client()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class FakeResponse:
    status_code: int
    payload: Any
    text: str = ""

    def json(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class FakeResponseJsonError(FakeResponse):
    def json(self) -> Any:
        raise ValueError("invalid json")


class FakeAsyncHttpClient:
    """Minimal async context manager standing in for an httpx client.

    - `post()` returns `post_response`
    - `get()` returns `get_response`, or raises `get_error` when set
    - Every call is recorded as `(url, kwargs)` for assertions
    """

    def __init__(
        self,
        *,
        post_response: FakeResponse | None = None,
        get_response: FakeResponse | None = None,
        get_error: BaseException | None = None,
    ) -> None:
        self._post_response = post_response or FakeResponse(200, {})
        self._get_response = get_response or FakeResponse(200, {})
        self._get_error = get_error
        self.post_calls: list[tuple[str, dict[str, Any]]] = []
        self.get_calls: list[tuple[str, dict[str, Any]]] = []

    async def __aenter__(self) -> "FakeAsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: Any,
    ) -> bool:
        return False

    async def post(self, url: str, **kwargs: Any) -> FakeResponse:
        self.post_calls.append((url, kwargs))
        return self._post_response

    async def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.get_calls.append((url, kwargs))
        if self._get_error is not None:
            raise self._get_error
        return self._get_response


def patch_http_client(monkeypatch: Any, create_client_path: str, fake_client: Any) -> None:
    """Patch a module's `create_mcp_http_client`."""

    monkeypatch.setattr(create_client_path, lambda: fake_client)
