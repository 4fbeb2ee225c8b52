"""Shared pytest fixtures for registry, controller and session tests."""

from __future__ import annotations

import asyncio

import pytest

from pubdev_search.domain.models import SearchResult


def _make_result(name: str, base: str = "https://pub.dev") -> SearchResult:
    return SearchResult(
        id=f"id-{name}",
        name=name,
        url=f"{base}/api/packages/{name}",
        page_url=f"{base}/packages/{name}",
    )


class FakeRegistryClient:
    """Registry double; responses for a query can be held back with ``hold``."""

    def __init__(self) -> None:
        self.responses: dict[str, list[str]] = {}
        self.errors: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    def hold(self, query: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[query] = gate
        return gate

    async def perform_search(self, query: str) -> list[SearchResult]:
        self.calls.append(query)
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        if query in self.errors:
            raise self.errors[query]
        return [_make_result(name) for name in self.responses.get(query, [])]


@pytest.fixture
def make_result():
    return _make_result


@pytest.fixture
def fake_client() -> FakeRegistryClient:
    return FakeRegistryClient()
