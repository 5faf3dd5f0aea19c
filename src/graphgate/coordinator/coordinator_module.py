"""
Coordinator assembly and dispatch.
create_coordinator registers a discovered address map into a fresh coordinator (fail-fast).
CoordinatorImpl routes GraphQL requests to registered services by name.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Mapping
from urllib.parse import urlsplit

import httpx

from graphgate.coordinator.protocol import Coordinator, Transport
from graphgate.core.logging import get_logger
from graphgate.errors import DispatchError, RegistrationError

logger = get_logger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


class HttpTransport:
    """GraphQL over HTTP: POST the JSON body to the service URL."""

    def __init__(
        self,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport

    async def send(self, url: str, payload: bytes) -> bytes:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            r = await client.post(url, content=payload, headers={"content-type": "application/json"})
            r.raise_for_status()
            return r.content


class CoordinatorImpl:
    """
    Routing table of service name -> URL plus a transport.
    add_url validates and registers; execute(service, query) dispatches one GraphQL request.
    """

    def __init__(self, transport: Transport | None = None) -> None:
        self._urls: dict[str, str] = {}
        self._transport: Transport = transport or HttpTransport()

    def add_url(self, service: str, url: str) -> CoordinatorImpl:
        if service in self._urls:
            raise RegistrationError(service, url, f"already registered at {self._urls[service]!r}")
        try:
            parsed = urlsplit(url)
            port = parsed.port
        except ValueError as e:
            raise RegistrationError(service, url, f"malformed url ({e})") from e
        if parsed.scheme not in SUPPORTED_SCHEMES:
            raise RegistrationError(service, url, f"unsupported protocol {parsed.scheme!r}")
        if not parsed.hostname:
            raise RegistrationError(service, url, "missing host")
        if port is None:
            raise RegistrationError(service, url, "missing port")
        self._urls[service] = url
        return self

    def services(self) -> dict[str, str]:
        return dict(self._urls)

    def resolve(self, service_name: str) -> list[str]:
        url = self._urls.get(service_name)
        return [url] if url else []

    def __len__(self) -> int:
        return len(self._urls)

    def __contains__(self, service: object) -> bool:
        return service in self._urls

    async def execute(
        self,
        service: str,
        query: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> dict[str, Any]:
        """Send one GraphQL request to service. Returns the decoded response object."""
        urls = self.resolve(service)
        if not urls:
            raise DispatchError(f"Service {service!r} not found", code="SERVICE_UNAVAILABLE")
        body = {"query": query, "variables": variables or {}, "operationName": operation_name}
        logger.debug("dispatch", service=service, url=urls[0], operation_name=operation_name)
        try:
            result = await self._transport.send(urls[0], json.dumps(body).encode())
        except httpx.HTTPError as e:
            raise DispatchError(f"Request to {service!r} failed: {e}", code="TRANSPORT_ERROR") from e
        try:
            data = json.loads(result.decode()) if result else None
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DispatchError(f"Service {service!r} returned invalid JSON", code="INVALID_RESPONSE") from e
        if not isinstance(data, dict):
            raise DispatchError(f"Service {service!r} returned a non-object response", code="INVALID_RESPONSE")
        return data


def create_coordinator(
    services: Mapping[str, str],
    factory: Callable[[], Coordinator] = CoordinatorImpl,
) -> Coordinator:
    """
    Register every service -> url pair into a fresh coordinator.
    The first RegistrationError aborts assembly; no partially built coordinator is returned.
    """
    logger.debug("create coordinator", services=dict(services))
    coordinator = factory()
    for service, url in services.items():
        coordinator = coordinator.add_url(service, url)
        logger.debug("registered service", service=service, url=url)
    return coordinator
