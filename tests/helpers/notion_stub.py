"""Test helper standing in for ``notion_client.AsyncClient``.

The stub records every ``pages.create`` call and returns a fake page. Tests
can make selected calls fail by passing ``fail_on``: a set of zero-based call
positions that raise instead of succeeding.
"""

from __future__ import annotations

from typing import Any


class NotionStub:
    """Minimal stub matching the ``AsyncClient`` surface used by the uploader.

    Parameters
    ----------
    fail_on:
        Call positions (0-based) at which ``pages.create`` raises.
    error:
        Factory for the exception raised at those positions.
    """

    def __init__(
        self,
        *,
        fail_on: set[int] | None = None,
        error: type[Exception] = RuntimeError,
        **client_kwargs: Any,
    ) -> None:
        self.client_kwargs = client_kwargs
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self._fail_on = fail_on or set()
        self._error = error

        class _Pages:
            async def create(inner_self, **kwargs: Any) -> dict[str, Any]:  # noqa: N805
                position = len(self.calls)
                self.calls.append(kwargs)
                if position in self._fail_on:
                    raise self._error(f"boom at {position}")
                return {"object": "page", "id": f"page-{position}"}

        self.pages = _Pages()

    async def __aenter__(self) -> NotionStub:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.closed = True


class NotionStubFactory:
    """Callable replacing ``AsyncClient``; remembers the clients it built."""

    def __init__(self, **stub_kwargs: Any) -> None:
        self._stub_kwargs = stub_kwargs
        self.clients: list[NotionStub] = []

    def __call__(self, **client_kwargs: Any) -> NotionStub:
        client = NotionStub(**self._stub_kwargs, **client_kwargs)
        self.clients.append(client)
        return client

    @property
    def calls(self) -> list[dict[str, Any]]:
        return [call for client in self.clients for call in client.calls]
