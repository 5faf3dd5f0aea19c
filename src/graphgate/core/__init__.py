from graphgate.core.config import (
    DEFAULT_NAMESPACE,
    LABEL_GRAPHQL_PROTOCOL,
    LABEL_GRAPHQL_SERVICE,
    NAMESPACE_PATH,
    Config,
    DiscoveryConfig,
    LoggingConfig,
)
from graphgate.core.logging import get_logger, setup_logging

__all__ = [
    "Config",
    "DiscoveryConfig",
    "LoggingConfig",
    "NAMESPACE_PATH",
    "DEFAULT_NAMESPACE",
    "LABEL_GRAPHQL_SERVICE",
    "LABEL_GRAPHQL_PROTOCOL",
    "get_logger",
    "setup_logging",
]
