"""Errors raised by discovery, assembly and dispatch. Each carries a code and a message."""
from __future__ import annotations


class GraphgateError(Exception):
    """Base error: machine-readable code plus human-readable message."""

    code = "GRAPHGATE_ERROR"

    def __init__(self, message: str, code: str | None = None) -> None:
        if code is not None:
            self.code = code
        self.message = message
        super().__init__(f"[{self.code}] {message}")


class DiscoveryError(GraphgateError):
    """Discovery cycle failed."""

    code = "DISCOVERY"


class ClientCreationError(DiscoveryError):
    """No session to the cluster control plane could be established (no in-cluster or kubeconfig credentials)."""

    code = "CLIENT_CREATION"


class RegistryQueryError(DiscoveryError):
    """The list call against the cluster service registry failed."""

    code = "REGISTRY_QUERY"


class RegistrationError(GraphgateError):
    """Coordinator rejected an endpoint."""

    code = "REGISTRATION"

    def __init__(self, service: str, url: str, reason: str) -> None:
        self.service = service
        self.url = url
        super().__init__(f"Cannot register service {service!r} at {url!r}: {reason}")


class DispatchError(GraphgateError):
    """Request could not be dispatched to a registered service."""

    code = "DISPATCH"
