"""Shared fixtures: fake service registry and fake coordinator, no cluster needed."""
from __future__ import annotations

import pytest

from graphgate.core.config import DiscoveryConfig, LABEL_GRAPHQL_PROTOCOL, LABEL_GRAPHQL_SERVICE
from graphgate.discovery import ServiceResource
from graphgate.errors import RegistrationError


def graphql_resource(name, service=None, protocol=None, ports=(), **extra_labels):
    labels = dict(extra_labels)
    if service is not None:
        labels[LABEL_GRAPHQL_SERVICE] = service
    if protocol is not None:
        labels[LABEL_GRAPHQL_PROTOCOL] = protocol
    return ServiceResource(name=name, labels=labels, ports=list(ports))


class FakeServiceRegistry:
    """Returns canned resources; applies the label-key selector like the API server does."""

    def __init__(self, resources=None, error=None):
        self.resources = list(resources or [])
        self.error = error
        self.calls = []
        self.closed = False

    def close(self):
        self.closed = True

    async def list_services(self, namespace, label_selector):
        self.calls.append((namespace, label_selector))
        if self.error is not None:
            raise self.error
        return [r for r in self.resources if label_selector in r.labels]


class FakeCoordinator:
    """Records registrations; rejects the services named in reject."""

    def __init__(self, reject=()):
        self.reject = set(reject)
        self.registered = []
        self.attempts = []

    def add_url(self, service, url):
        self.attempts.append(service)
        if service in self.reject:
            raise RegistrationError(service, url, "rejected by fake")
        self.registered.append((service, url))
        return self


@pytest.fixture
def registry():
    return FakeServiceRegistry()


@pytest.fixture
def namespace_file(tmp_path):
    path = tmp_path / "namespace"
    path.write_text("mesh")
    return path


@pytest.fixture
def config(namespace_file):
    return DiscoveryConfig(namespace_path=str(namespace_file))


@pytest.fixture
def missing_namespace_config(tmp_path):
    return DiscoveryConfig(namespace_path=str(tmp_path / "does-not-exist"))
