"""Opt-in retry with exponential backoff for transient memory service errors.

HindsightClient never retries. Callers that want a retry policy wrap
the client in RetryingClient (or a single call in with_retry).
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from hindsight_memory.errors import RemoteServiceError, TransportError

if TYPE_CHECKING:
    from hindsight_memory.client import HindsightClient
    from hindsight_memory.types import RecallResponse, RetainResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


# HTTP status codes that indicate transient errors worth retrying
RETRYABLE_STATUS_CODES = {
    429,  # Rate limit exceeded
    500,  # Internal server error
    502,  # Bad gateway
    503,  # Service unavailable
    504,  # Gateway timeout
}


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: float = 0.1
    retryable_status_codes: set[int] = field(
        default_factory=lambda: RETRYABLE_STATUS_CODES.copy()
    )


def is_retryable_error(error: Exception, config: RetryConfig) -> bool:
    """Check if an error should trigger a retry."""
    if isinstance(error, TransportError):
        return True
    if isinstance(error, RemoteServiceError):
        return error.status_code in config.retryable_status_codes
    return False


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay before next retry with exponential backoff and jitter.

    Args:
        attempt: Current attempt number (1-indexed).
        config: Retry configuration.

    Returns:
        Delay in seconds.
    """
    delay = config.base_delay * (config.exponential_base ** (attempt - 1))
    delay = min(delay, config.max_delay)

    jitter_range = delay * config.jitter
    delay += random.uniform(-jitter_range, jitter_range)  # noqa: S311

    return max(0, delay)


async def with_retry(
    func: Callable[[], Awaitable[T]],
    config: RetryConfig | None = None,
    on_retry: Callable[[int, Exception, float], None] | None = None,
) -> T:
    """Execute async function with exponential backoff retry.

    Args:
        func: Async function to execute (takes no arguments).
        config: Retry configuration.
        on_retry: Optional callback called before each retry with
                  (attempt, exception, delay).

    Returns:
        Result from successful function execution.

    Raises:
        Exception: The last exception if all retries fail.
    """
    if config is None:
        config = RetryConfig()

    attempt = 1
    while True:
        try:
            return await func()
        except Exception as e:
            if not is_retryable_error(e, config):
                logger.debug("Non-retryable error on attempt %d: %s", attempt, e)
                raise

            if attempt >= config.max_attempts:
                logger.warning("Max retries (%d) exceeded: %s", config.max_attempts, e)
                raise

            delay = calculate_delay(attempt, config)
            logger.info(
                "Attempt %d/%d failed: %s. Retrying in %.2fs...",
                attempt,
                config.max_attempts,
                e,
                delay,
            )

            if on_retry:
                on_retry(attempt, e, delay)

            await asyncio.sleep(delay)
            attempt += 1


class RetryingClient:
    """Wraps a HindsightClient so every call goes through with_retry."""

    def __init__(self, client: HindsightClient, config: RetryConfig | None = None):
        self._client = client
        self._config = config or RetryConfig()

    @property
    def bank_id(self) -> str:
        return self._client.bank_id

    @property
    def base_url(self) -> str:
        return self._client.base_url

    async def retain(
        self,
        content: str,
        *,
        context: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> RetainResponse:
        return await with_retry(
            lambda: self._client.retain(content, context=context, tags=tags),
            self._config,
        )

    async def recall(
        self,
        query: str,
        *,
        max_tokens: int | None = None,
        tags: Sequence[str] | None = None,
    ) -> RecallResponse:
        return await with_retry(
            lambda: self._client.recall(query, max_tokens=max_tokens, tags=tags),
            self._config,
        )
