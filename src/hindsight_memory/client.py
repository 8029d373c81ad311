"""HTTP client for the Hindsight memory service.

The client is a stateless protocol adapter: one request per call, no
retries, no caching. Failures surface as TransportError or
RemoteServiceError; retry policy belongs to the caller (see retry.py).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from hindsight_memory.errors import RemoteServiceError, TransportError
from hindsight_memory.types import (
    DEFAULT_RECALL_MAX_TOKENS,
    MemoryItem,
    RecallQuery,
    RecallResponse,
    RetainResponse,
)

if TYPE_CHECKING:
    from hindsight_memory.config import PluginConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HindsightClient:
    """Typed wrapper around the memories API of a single bank."""

    def __init__(
        self,
        base_url: str,
        bank_id: str,
        api_key: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.bank_id = bank_id
        self._api_key = api_key
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: PluginConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> HindsightClient:
        return cls(
            config.base_url,
            config.bank_id,
            config.resolve_api_key(),
            transport=transport,
        )

    @property
    def memories_path(self) -> str:
        return f"/v1/default/banks/{self.bank_id}/memories"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Any,
        parse: Callable[[dict[str, Any]], T],
    ) -> T:
        """Send one request and parse its JSON object body with ``parse``.

        A 2xx body that is not a JSON object, or that ``parse`` rejects,
        is reported as a RemoteServiceError like any other bad response.
        """
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.request(
                    method,
                    url,
                    headers=self._headers(),
                    json=body,
                )
        except httpx.HTTPError as e:
            raise TransportError(f"Hindsight request to {url} failed: {e}") from e

        if not response.is_success:
            raise RemoteServiceError(response.status_code, response.text)

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise TypeError(f"expected a JSON object, got {type(data).__name__}")
            return parse(data)
        except (TypeError, ValueError, OverflowError) as e:
            # json.JSONDecodeError is a ValueError
            raise RemoteServiceError(response.status_code, response.text) from e

    async def retain(
        self,
        content: str,
        *,
        context: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> RetainResponse:
        """Store one memory.

        Args:
            content: Text to store, sent unmodified.
            context: Optional note about when/why this was stored.
            tags: Optional categorization tags.

        Raises:
            TransportError: If the service could not be reached.
            RemoteServiceError: If the service returned a non-2xx status or a
                malformed body.
        """
        item = MemoryItem(
            content=content,
            context=context,
            tags=tuple(tags) if tags is not None else None,
        )
        return await self._request(
            "POST",
            self.memories_path,
            {"items": [item.to_payload()]},
            RetainResponse.from_dict,
        )

    async def recall(
        self,
        query: str,
        *,
        max_tokens: int | None = None,
        tags: Sequence[str] | None = None,
    ) -> RecallResponse:
        """Search the bank for memories relevant to ``query``.

        Args:
            query: Free-text query.
            max_tokens: Token ceiling for the returned memories (default 2000).
            tags: Optional tag filter.

        Raises:
            TransportError: If the service could not be reached.
            RemoteServiceError: If the service returned a non-2xx status or a
                malformed body.
        """
        recall_query = RecallQuery(
            text=query,
            max_tokens=max_tokens if max_tokens is not None else DEFAULT_RECALL_MAX_TOKENS,
            tags=tuple(tags) if tags is not None else None,
        )
        return await self._request(
            "POST",
            f"{self.memories_path}/recall",
            recall_query.to_payload(),
            RecallResponse.from_dict,
        )
