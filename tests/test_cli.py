"""Tests for the graphgate CLI with the Kubernetes registry replaced by a fake."""
import json

import httpx
import pytest
from typer.testing import CliRunner

from graphgate.cli import main as cli
from graphgate.coordinator import CoordinatorImpl, HttpTransport
from graphgate.discovery.k8s import KubernetesServiceRegistry
from graphgate.errors import ClientCreationError, RegistryQueryError

from conftest import FakeServiceRegistry, graphql_resource

runner = CliRunner()


@pytest.fixture
def use_registry(monkeypatch):
    def install(registry):
        monkeypatch.setattr(KubernetesServiceRegistry, "from_environment", classmethod(lambda cls: registry))
        return registry

    return install


def invoke(*args, namespace_path):
    return runner.invoke(
        cli.app,
        [*args, "--namespace-path", str(namespace_path), "--log-level", "WARNING"],
    )


def test_discover_prints_map(use_registry, namespace_file):
    registry = use_registry(
        FakeServiceRegistry(
            [
                graphql_resource("users-svc", service="users", protocol="http", ports=[4000]),
                graphql_resource("orders-svc", service="orders", ports=[4000]),
            ]
        )
    )
    result = invoke("discover", namespace_path=namespace_file)
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"users": "http://users-svc:4000"}
    assert registry.calls[0][0] == "mesh"
    assert registry.closed


def test_discover_default_namespace_option(use_registry, tmp_path):
    registry = use_registry(FakeServiceRegistry())
    result = runner.invoke(
        cli.app,
        [
            "discover",
            "--namespace-path",
            str(tmp_path / "missing"),
            "--default-namespace",
            "fallback",
            "--log-level",
            "WARNING",
        ],
    )
    assert result.exit_code == 0, result.output
    assert registry.calls[0][0] == "fallback"


def test_discover_registry_failure_exits_1(use_registry, namespace_file):
    use_registry(FakeServiceRegistry(error=RegistryQueryError("forbidden")))
    result = invoke("discover", namespace_path=namespace_file)
    assert result.exit_code == 1
    assert "REGISTRY_QUERY" in result.output


def test_discover_client_failure_exits_1(monkeypatch, namespace_file):
    def fail(cls):
        raise ClientCreationError("no kubeconfig")

    monkeypatch.setattr(KubernetesServiceRegistry, "from_environment", classmethod(fail))
    result = invoke("discover", namespace_path=namespace_file)
    assert result.exit_code == 1
    assert "CLIENT_CREATION" in result.output


def test_check_lists_services(use_registry, namespace_file):
    use_registry(
        FakeServiceRegistry(
            [
                graphql_resource("users-svc", service="users", protocol="http", ports=[4000]),
                graphql_resource("products-svc", service="products", protocol="https", ports=[443]),
            ]
        )
    )
    result = invoke("check", namespace_path=namespace_file)
    assert result.exit_code == 0, result.output
    assert "Coordinator ready: 2 service(s)" in result.output
    assert "users -> http://users-svc:4000" in result.output


def test_check_registration_failure_exits_1(use_registry, namespace_file):
    use_registry(
        FakeServiceRegistry(
            [graphql_resource("users-svc", service="users", protocol="grpc", ports=[4000])]
        )
    )
    result = invoke("check", namespace_path=namespace_file)
    assert result.exit_code == 1
    assert "REGISTRATION" in result.output


def test_query_dispatches(use_registry, namespace_file, monkeypatch):
    use_registry(
        FakeServiceRegistry(
            [graphql_resource("users-svc", service="users", protocol="http", ports=[4000])]
        )
    )

    def handler(request):
        body = json.loads(request.content)
        return httpx.Response(200, json={"data": {"echo": body["variables"]["name"]}})

    transport = HttpTransport(transport=httpx.MockTransport(handler))
    monkeypatch.setattr(cli, "CoordinatorImpl", lambda: CoordinatorImpl(transport))
    result = invoke(
        "query",
        "users",
        "query($name: String) { echo(name: $name) }",
        "--variables",
        '{"name": "ada"}',
        namespace_path=namespace_file,
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"data": {"echo": "ada"}}


def test_query_unknown_service(use_registry, namespace_file):
    use_registry(FakeServiceRegistry())
    result = invoke("query", "users", "{ me { id } }", namespace_path=namespace_file)
    assert result.exit_code == 1
    assert "SERVICE_UNAVAILABLE" in result.output


def test_query_rejects_bad_variables(use_registry, namespace_file):
    use_registry(FakeServiceRegistry())
    result = invoke("query", "users", "{ me { id } }", "--variables", "[1]", namespace_path=namespace_file)
    assert result.exit_code == 2
