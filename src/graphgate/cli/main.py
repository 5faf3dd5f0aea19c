"""
CLI: one-shot discovery, coordinator check and a single GraphQL query against a discovered service.
Each command runs a full discovery cycle; nothing is cached between runs.
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, NoReturn, Optional

import typer

from graphgate.coordinator import CoordinatorImpl, create_coordinator
from graphgate.core.config import DiscoveryConfig, LoggingConfig
from graphgate.core.logging import get_logger, setup_logging
from graphgate.discovery import find_graphql_services
from graphgate.errors import GraphgateError

app = typer.Typer(help="Graphgate: discover GraphQL services in Kubernetes and route to them.")

logger = get_logger(__name__)

_NAMESPACE_PATH = typer.Option(None, "--namespace-path", help="File holding the current namespace")
_DEFAULT_NAMESPACE = typer.Option(None, "--default-namespace", help="Namespace when the file is unreadable")
_LOG_LEVEL = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR")
_LOG_FORMAT = typer.Option(None, "--log-format", help="console or json")


def _configure(
    namespace_path: str | None,
    default_namespace: str | None,
    log_level: str | None,
    log_format: str | None,
) -> DiscoveryConfig:
    logging_config = LoggingConfig.from_env(level=log_level, format=log_format)
    try:
        setup_logging(logging_config.level, logging_config.format)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    return DiscoveryConfig.from_env(namespace_path=namespace_path, default_namespace=default_namespace)


def _fail(error: GraphgateError) -> NoReturn:
    logger.error("command failed", code=error.code, error=error.message)
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def _dump(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, sort_keys=True))


@app.command()
def discover(
    namespace_path: Optional[str] = _NAMESPACE_PATH,
    default_namespace: Optional[str] = _DEFAULT_NAMESPACE,
    log_level: Optional[str] = _LOG_LEVEL,
    log_format: Optional[str] = _LOG_FORMAT,
) -> None:
    """Run one discovery cycle and print the service -> URL map as JSON."""
    config = _configure(namespace_path, default_namespace, log_level, log_format)
    try:
        services = asyncio.run(find_graphql_services(config=config))
    except GraphgateError as e:
        _fail(e)
    _dump(services)


@app.command()
def check(
    namespace_path: Optional[str] = _NAMESPACE_PATH,
    default_namespace: Optional[str] = _DEFAULT_NAMESPACE,
    log_level: Optional[str] = _LOG_LEVEL,
    log_format: Optional[str] = _LOG_FORMAT,
) -> None:
    """Discover services and assemble a coordinator; exit 1 when either step fails."""
    config = _configure(namespace_path, default_namespace, log_level, log_format)
    try:
        services = asyncio.run(find_graphql_services(config=config))
        coordinator = create_coordinator(services, CoordinatorImpl)
    except GraphgateError as e:
        _fail(e)
    typer.echo(f"Coordinator ready: {len(coordinator)} service(s)")
    for name, url in sorted(coordinator.services().items()):
        typer.echo(f"  {name} -> {url}")


async def _discover_and_execute(
    config: DiscoveryConfig,
    service: str,
    query: str,
    variables: dict[str, Any],
    operation_name: str | None,
) -> dict[str, Any]:
    services = await find_graphql_services(config=config)
    coordinator = create_coordinator(services, CoordinatorImpl)
    return await coordinator.execute(service, query, variables, operation_name)


@app.command()
def query(
    service: str = typer.Argument(..., help="Logical service name (graphgate.org/service label)"),
    document: str = typer.Argument(..., help="GraphQL query document"),
    variables: Optional[str] = typer.Option(None, "--variables", "-v", help="Variables as a JSON object"),
    operation_name: Optional[str] = typer.Option(None, "--operation-name", "-o"),
    namespace_path: Optional[str] = _NAMESPACE_PATH,
    default_namespace: Optional[str] = _DEFAULT_NAMESPACE,
    log_level: Optional[str] = _LOG_LEVEL,
    log_format: Optional[str] = _LOG_FORMAT,
) -> None:
    """Discover services, then send one GraphQL request to SERVICE and print the response."""
    try:
        parsed_variables = json.loads(variables) if variables else {}
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--variables is not valid JSON: {e}")
    if not isinstance(parsed_variables, dict):
        raise typer.BadParameter("--variables must be a JSON object")
    config = _configure(namespace_path, default_namespace, log_level, log_format)
    try:
        result = asyncio.run(
            _discover_and_execute(config, service, document, parsed_variables, operation_name)
        )
    except GraphgateError as e:
        _fail(e)
    _dump(result)


def main() -> None:
    """Entry point for the graphgate console command."""
    app()


if __name__ == "__main__":
    main()
