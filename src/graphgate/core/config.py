"""Label keys, well-known paths and env-driven settings for discovery and logging."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

NAMESPACE_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/namespace"
DEFAULT_NAMESPACE = "default"
LABEL_GRAPHQL_SERVICE = "graphgate.org/service"
LABEL_GRAPHQL_PROTOCOL = "graphgate.org/protocol"

ENV_PREFIX = "GRAPHGATE_"


class Config:
    """Helpers for reading prefixed settings from the environment."""

    @classmethod
    def load_from_env(cls, prefix: str = ENV_PREFIX, **defaults: Any) -> dict[str, Any]:
        """
        Load from os.environ with prefix and defaults.
        GRAPHGATE_NAMESPACE_PATH=/x -> {"namespace_path": "/x"}. Empty values are ignored.
        """
        result = dict(defaults)
        for key, value in os.environ.items():
            if key.startswith(prefix) and value:
                name = key[len(prefix):].lower()
                result[name] = value
        return result


def _known(cls: type, values: dict[str, Any]) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in values.items() if k in names}


@dataclass(frozen=True)
class DiscoveryConfig:
    """Where to read the namespace from and which labels mark a GraphQL service."""

    namespace_path: str = NAMESPACE_PATH
    default_namespace: str = DEFAULT_NAMESPACE
    service_label: str = LABEL_GRAPHQL_SERVICE
    protocol_label: str = LABEL_GRAPHQL_PROTOCOL

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides: Any) -> DiscoveryConfig:
        """Environment first, then explicit overrides (None values are skipped)."""
        values = Config.load_from_env(prefix)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**_known(cls, values))


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "console"

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, **overrides: Any) -> LoggingConfig:
        values = Config.load_from_env(prefix)
        values = {k[len("log_"):]: v for k, v in values.items() if k.startswith("log_")}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**_known(cls, values))
