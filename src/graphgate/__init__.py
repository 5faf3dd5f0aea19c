"""
Graphgate discovery — find GraphQL services labeled in the current Kubernetes namespace
and assemble a coordinator that routes requests to them.
"""
from graphgate.coordinator import Coordinator, CoordinatorImpl, HttpTransport, Transport, create_coordinator
from graphgate.core import Config, DiscoveryConfig, LoggingConfig
from graphgate.discovery import (
    ServiceDiscovery,
    ServiceRegistry,
    ServiceResource,
    find_graphql_services,
)
from graphgate.errors import (
    ClientCreationError,
    DiscoveryError,
    DispatchError,
    GraphgateError,
    RegistrationError,
    RegistryQueryError,
)

__all__ = [
    "Config",
    "DiscoveryConfig",
    "LoggingConfig",
    "Coordinator",
    "CoordinatorImpl",
    "HttpTransport",
    "Transport",
    "create_coordinator",
    "ServiceDiscovery",
    "ServiceRegistry",
    "ServiceResource",
    "find_graphql_services",
    "GraphgateError",
    "DiscoveryError",
    "ClientCreationError",
    "RegistryQueryError",
    "RegistrationError",
    "DispatchError",
]
