"""
Discovery of GraphQL services labeled for the routing mesh.
Two filter stages: a remote label-key selector, then a local check for name + both labels.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from graphgate.core.config import DiscoveryConfig
from graphgate.core.logging import get_logger
from graphgate.discovery.protocol import ServiceRegistry, ServiceResource

logger = get_logger(__name__)


@dataclass(frozen=True)
class GraphQLService:
    """Resource that passed the local filter."""

    host: str
    service_name: str
    protocol: str
    ports: tuple[int, ...]

    def url(self, port: int) -> str:
        return f"{self.protocol}://{self.host}:{port}"


def read_namespace(path: str | Path, default: str) -> str:
    """Namespace from the service-account file; any read failure or empty content gives default."""
    try:
        namespace = Path(path).read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return default
    return namespace or default


def select_graphql_services(
    resources: Iterable[ServiceResource],
    config: DiscoveryConfig | None = None,
) -> list[GraphQLService]:
    """
    Keep resources with a name, a service label and a protocol label. Others are skipped, not errors.
    Presence is what counts: an empty label value passes and surfaces later as an unroutable address.
    """
    config = config or DiscoveryConfig()
    selected: list[GraphQLService] = []
    for resource in resources:
        service_name = resource.label(config.service_label)
        protocol = resource.label(config.protocol_label)
        if resource.name is None or service_name is None or protocol is None:
            logger.debug(
                "skip service",
                resource=resource.name,
                service_name=service_name,
                protocol=protocol,
            )
            continue
        selected.append(
            GraphQLService(
                host=resource.name,
                service_name=service_name,
                protocol=protocol,
                ports=tuple(resource.ports),
            )
        )
    return selected


def build_address_map(services: Iterable[GraphQLService]) -> dict[str, str]:
    """
    Service name -> URL. Every port is inserted under the same name, so the last
    port (and the last resource) seen for a name wins.
    """
    addresses: dict[str, str] = {}
    for service in services:
        for port in service.ports:
            addresses[service.service_name] = service.url(port)
    return addresses


async def find_graphql_services(
    registry: ServiceRegistry | None = None,
    config: DiscoveryConfig | None = None,
) -> dict[str, str]:
    """
    One discovery cycle: resolve namespace, list labeled services, filter, expand ports.
    Without a registry, a Kubernetes client is created for this cycle only and closed afterwards
    (ClientCreationError on failure).
    List failures raise RegistryQueryError. Nothing is cached between calls.
    """
    logger.debug("find graphql services")
    config = config or DiscoveryConfig()
    if registry is None:
        from graphgate.discovery.k8s import KubernetesServiceRegistry

        owned = KubernetesServiceRegistry.from_environment()
        try:
            return await find_graphql_services(owned, config)
        finally:
            owned.close()

    namespace = read_namespace(config.namespace_path, config.default_namespace)
    logger.debug("get current namespace", namespace=namespace)

    resources = await registry.list_services(namespace, config.service_label)
    services = select_graphql_services(resources, config)
    addresses = build_address_map(services)
    logger.info(
        "graphql services discovered",
        namespace=namespace,
        listed=len(resources),
        services=addresses,
    )
    return addresses
