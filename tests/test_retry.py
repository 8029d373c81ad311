"""Tests for opt-in retry utilities."""

import pytest

from hindsight_memory.errors import RemoteServiceError, TransportError
from hindsight_memory.retry import (
    RetryConfig,
    RetryingClient,
    calculate_delay,
    is_retryable_error,
    with_retry,
)

FAST = RetryConfig(max_attempts=3, base_delay=0.001, jitter=0)


class TestIsRetryableError:
    def test_transport_errors(self):
        assert is_retryable_error(TransportError("timeout"), RetryConfig())

    def test_server_errors(self):
        config = RetryConfig()
        for status in (429, 500, 502, 503, 504):
            assert is_retryable_error(RemoteServiceError(status, ""), config)

    def test_client_errors(self):
        config = RetryConfig()
        for status in (400, 401, 403, 404):
            assert not is_retryable_error(RemoteServiceError(status, ""), config)

    def test_other_errors(self):
        assert not is_retryable_error(ValueError("bad"), RetryConfig())


class TestCalculateDelay:
    def test_exponential_and_capped(self):
        config = RetryConfig(base_delay=1.0, max_delay=5.0, jitter=0)
        assert calculate_delay(1, config) == 1.0
        assert calculate_delay(2, config) == 2.0
        assert calculate_delay(3, config) == 4.0
        assert calculate_delay(4, config) == 5.0


class TestWithRetry:
    @pytest.mark.asyncio
    async def test_retries_transient_then_succeeds(self):
        call_count = 0

        async def func():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise RemoteServiceError(503, "busy")
            return "ok"

        assert await with_retry(func, FAST) == "ok"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_attempts(self):
        call_count = 0

        async def func():
            nonlocal call_count
            call_count += 1
            raise TransportError("down")

        with pytest.raises(TransportError):
            await with_retry(func, FAST)
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_raises_immediately(self):
        call_count = 0

        async def func():
            nonlocal call_count
            call_count += 1
            raise RemoteServiceError(401, "unauthorized")

        with pytest.raises(RemoteServiceError):
            await with_retry(func, FAST)
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_on_retry_callback(self):
        attempts: list[int] = []
        calls = 0

        async def func():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise TransportError("flaky")
            return calls

        await with_retry(func, FAST, on_retry=lambda a, e, d: attempts.append(a))
        assert attempts == [1]


class TestRetryingClient:
    @pytest.mark.asyncio
    async def test_retries_through_wrapped_client(self, client, service):
        service.fail_after = 0
        retrying = RetryingClient(client, FAST)

        with pytest.raises(RemoteServiceError):
            await retrying.retain("content to keep")

        assert len(service.requests) == 3

    @pytest.mark.asyncio
    async def test_base_client_does_not_retry(self, client, service):
        service.fail_after = 0

        with pytest.raises(RemoteServiceError):
            await client.recall("query")

        assert len(service.requests) == 1

    @pytest.mark.asyncio
    async def test_passes_arguments(self, stub_client_factory):
        stub = stub_client_factory()
        retrying = RetryingClient(stub, FAST)

        await retrying.recall("theme", max_tokens=10, tags=["t"])

        assert stub.recall_calls == [("theme", {"max_tokens": 10, "tags": ["t"]})]
