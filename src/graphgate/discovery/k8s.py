"""Kubernetes-backed ServiceRegistry built on the official kubernetes client."""
from __future__ import annotations

import asyncio
from typing import Any

from kubernetes import client
from kubernetes import config as k8s_config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError

from graphgate.core.logging import get_logger
from graphgate.discovery.protocol import ServiceResource
from graphgate.errors import ClientCreationError, RegistryQueryError

logger = get_logger(__name__)


def create_core_api() -> client.CoreV1Api:
    """
    CoreV1Api on a fresh configuration: in-cluster service account first, then local kubeconfig.
    Raises ClientCreationError when neither is usable.
    """
    configuration = client.Configuration()
    try:
        k8s_config.load_incluster_config(client_configuration=configuration)
        source = "incluster"
    except ConfigException:
        try:
            k8s_config.load_kube_config(client_configuration=configuration, persist_config=False)
            source = "kubeconfig"
        except (ConfigException, OSError) as e:
            raise ClientCreationError(f"Failed to create kube client: {e}") from e
    logger.debug("kube client created", source=source, host=configuration.host)
    return client.CoreV1Api(api_client=client.ApiClient(configuration))


def service_resource_from_v1(service: Any) -> ServiceResource:
    """Convert a V1Service into a ServiceResource; absent metadata/spec parts become empty."""
    metadata = service.metadata
    spec = service.spec
    return ServiceResource(
        name=metadata.name if metadata is not None else None,
        labels=dict(metadata.labels or {}) if metadata is not None else {},
        ports=[p.port for p in (spec.ports or [])] if spec is not None else [],
    )


class KubernetesServiceRegistry:
    """ServiceRegistry over CoreV1Api.list_namespaced_service. One list call per invocation, no retry."""

    def __init__(self, api: client.CoreV1Api) -> None:
        self._api = api

    @classmethod
    def from_environment(cls) -> KubernetesServiceRegistry:
        return cls(create_core_api())

    def close(self) -> None:
        """Release the connection pool of the underlying ApiClient."""
        self._api.api_client.close()

    async def list_services(self, namespace: str, label_selector: str) -> list[ServiceResource]:
        logger.debug("list services", namespace=namespace, label_selector=label_selector)
        try:
            # the kubernetes client is blocking; keep the event loop free while it runs
            result = await asyncio.to_thread(
                self._api.list_namespaced_service,
                namespace,
                label_selector=label_selector,
            )
        except ApiException as e:
            raise RegistryQueryError(
                f"Failed to call list services api in namespace {namespace!r}: {e.status} {e.reason}"
            ) from e
        except HTTPError as e:
            raise RegistryQueryError(
                f"Failed to call list services api in namespace {namespace!r}: {e}"
            ) from e
        return [service_resource_from_v1(item) for item in result.items or []]
