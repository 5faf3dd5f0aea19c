"""Service Discovery protocols: list labeled service resources; resolve(service_name) -> URL(s)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class ServiceResource:
    """Read-only view of a cluster service: name, labels and declared ports."""

    name: str | None
    labels: dict[str, str] = field(default_factory=dict)
    ports: list[int] = field(default_factory=list)

    def label(self, key: str) -> str | None:
        """Label value, or None when the label is absent. An empty value is still a value."""
        return self.labels.get(key)


@runtime_checkable
class ServiceRegistry(Protocol):
    """
    Cluster service registry. Kubernetes in production, a fake in tests.
    label_selector is a label key: only resources carrying it are returned.
    """

    async def list_services(self, namespace: str, label_selector: str) -> list[ServiceResource]:
        ...


@runtime_checkable
class ServiceDiscovery(Protocol):
    """How to resolve services by name."""

    def resolve(self, service_name: str) -> list[str]:
        """Return list of URLs (empty when unknown)."""
        ...
