"""Coordinator protocols: endpoint registration and the transport used to reach endpoints."""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Coordinator(Protocol):
    """Accepts endpoint registrations; may reject one with RegistrationError."""

    def add_url(self, service: str, url: str) -> Coordinator:
        """Register service -> url. Returns the coordinator for chaining."""
        ...


@runtime_checkable
class Transport(Protocol):
    """Send an encoded request to an endpoint URL, get the response body. User may supply their own."""

    async def send(self, url: str, payload: bytes) -> bytes:
        ...
