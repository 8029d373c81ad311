"""Errors raised by the memory service client.

Callers treat every MemoryClientError the same way: recall/retain is
unavailable. The client itself never recovers from them.
"""


class MemoryClientError(Exception):
    """Base class for memory service failures."""


class TransportError(MemoryClientError):
    """The request never produced a response (connect, DNS, timeout)."""


class RemoteServiceError(MemoryClientError):
    """The memory service answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Hindsight API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body
