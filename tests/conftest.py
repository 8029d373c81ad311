"""Shared test fixtures and factories."""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from hindsight_memory.client import HindsightClient
from hindsight_memory.types import RecallResponse, RecallResult, RetainResponse

BASE_URL = "http://memory.test"
BANK_ID = "test-bank"


@dataclass
class FakeMemoryService:
    """Scriptable stand-in for the remote memory API behind MockTransport."""

    requests: list[httpx.Request] = field(default_factory=list)
    recall_results: list[dict[str, Any]] = field(default_factory=list)
    status_code: int = 200
    error_body: str = ""
    fail_after: int | None = None

    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def retain_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/memories")]

    def recall_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/recall")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_after is not None and len(self.requests) > self.fail_after:
            return httpx.Response(500, text="db down")
        if self.status_code >= 400:
            return httpx.Response(self.status_code, text=self.error_body)
        if request.url.path.endswith("/recall"):
            return httpx.Response(200, json={"results": self.recall_results})
        return httpx.Response(
            200,
            json={"success": True, "items_count": 1, "memory_ids": ["mem-1"]},
        )

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def service() -> FakeMemoryService:
    return FakeMemoryService()


@pytest.fixture
def client(service: FakeMemoryService) -> HindsightClient:
    return HindsightClient(BASE_URL, BANK_ID, transport=service.transport())


class StubMemoryClient:
    """In-process client double recording calls without HTTP."""

    def __init__(
        self,
        results: list[RecallResult] | None = None,
        *,
        fail_with: Exception | None = None,
        fail_on_call: int | None = None,
    ) -> None:
        self.results = results or []
        self.fail_with = fail_with
        self.fail_on_call = fail_on_call
        self.retain_calls: list[tuple[str, dict[str, Any]]] = []
        self.recall_calls: list[tuple[str, dict[str, Any]]] = []

    def _maybe_fail(self, call_number: int) -> None:
        if self.fail_with is None:
            return
        if self.fail_on_call is None or call_number == self.fail_on_call:
            raise self.fail_with

    async def retain(self, content, *, context=None, tags=None) -> RetainResponse:
        self._maybe_fail(len(self.retain_calls) + 1)
        self.retain_calls.append((content, {"context": context, "tags": tags}))
        return RetainResponse(success=True, items_count=1, memory_ids=["mem-1"])

    async def recall(self, query, *, max_tokens=None, tags=None) -> RecallResponse:
        self._maybe_fail(len(self.recall_calls) + 1)
        self.recall_calls.append((query, {"max_tokens": max_tokens, "tags": tags}))
        return RecallResponse(results=list(self.results))


@pytest.fixture
def stub_client_factory() -> Callable[..., StubMemoryClient]:
    return StubMemoryClient


def make_result(content: str, score: float, memory_id: str = "") -> RecallResult:
    return RecallResult(
        memory_id=memory_id or f"id-{content[:8]}",
        content=content,
        score=score,
    )


def user(content: Any) -> dict[str, Any]:
    return {"role": "user", "content": content}


def assistant(content: Any) -> dict[str, Any]:
    return {"role": "assistant", "content": content}
