from graphgate.discovery.discovery_module import (
    GraphQLService,
    build_address_map,
    find_graphql_services,
    read_namespace,
    select_graphql_services,
)
from graphgate.discovery.protocol import ServiceDiscovery, ServiceRegistry, ServiceResource

__all__ = [
    "GraphQLService",
    "ServiceDiscovery",
    "ServiceRegistry",
    "ServiceResource",
    "build_address_map",
    "find_graphql_services",
    "read_namespace",
    "select_graphql_services",
]
