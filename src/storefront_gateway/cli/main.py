"""
Main CLI entry point for the storefront gateway.

Provides commands for reading backend paths, browsing the catalog and
checking admin credentials.
"""

import asyncio
import dataclasses
import sys
from typing import Optional

import click

from storefront_gateway import __version__
from storefront_gateway.api import build_client
from storefront_gateway.cli.output import (
    print_catalog,
    print_error,
    print_info,
    print_payload,
    print_products,
    print_success,
)
from storefront_gateway.client.catalog import CatalogService
from storefront_gateway.client.gateway import GatewayClient
from storefront_gateway.core.config import GatewaySettings
from storefront_gateway.core.exceptions import GatewayError
from storefront_gateway.core.logging import configure_logging
from storefront_gateway.core.models import SessionToken


def run_async(coro):
    """Run an async coroutine in a fresh event loop."""
    return asyncio.run(coro)


@click.group()
@click.version_option(version=__version__, prog_name="storefront-gateway")
@click.option(
    "--base-url",
    envvar="API_BASE_URL",
    help="Backend API base URL.",
)
@click.option(
    "--token",
    envvar="ADMIN_TOKEN",
    help="Admin bearer token to attach to requests.",
)
@click.option(
    "--timeout",
    type=int,
    envvar="REQUEST_TIMEOUT",
    help="Request timeout in seconds.",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    envvar="LOG_LEVEL",
    default="warning",
    help="Minimum log level.",
)
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON.")
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: Optional[str],
    token: Optional[str],
    timeout: Optional[int],
    log_level: str,
    json_logs: bool,
) -> None:
    """Storefront Gateway - talk to the storefront backend API.

    Reads are cached for five minutes and retried once when the backend
    rate limits them.
    """
    configure_logging(log_level, json_logs)
    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url
    ctx.obj["token"] = token
    ctx.obj["timeout"] = timeout
    ctx.obj["log_level"] = log_level.lower()


def _settings(ctx: click.Context) -> GatewaySettings:
    """Resolve settings from the environment, overridden by CLI options."""
    try:
        settings = GatewaySettings.from_env(base_url=ctx.obj.get("base_url"))
    except GatewayError as e:
        print_error(str(e))
        sys.exit(2)

    overrides = {"log_level": ctx.obj["log_level"]}
    if ctx.obj.get("timeout") is not None:
        overrides["timeout"] = ctx.obj["timeout"]
    return dataclasses.replace(settings, **overrides)


def _client(ctx: click.Context) -> GatewayClient:
    return build_client(_settings(ctx))


def _session(ctx: click.Context) -> SessionToken:
    return SessionToken(value=ctx.obj.get("token"))


@cli.command()
@click.argument("path")
@click.pass_context
def get(ctx: click.Context, path: str) -> None:
    """Print the JSON body of a backend path.

    \b
    Examples:
        storefront-gateway get /products
        storefront-gateway get /brands/42
    """
    client = _client(ctx)
    token = _session(ctx)

    async def _run():
        async with client:
            return await client.fetch(path, token)

    result = run_async(_run())
    if not result.ok:
        print_error(f"GET {path} failed: {result.error}")
        sys.exit(1)

    print_payload(result.value)


@cli.command()
@click.pass_context
def catalog(ctx: click.Context) -> None:
    """Load products, categories and brands together.

    Resources that fail to load are shown empty and reported after
    the tables.
    """
    client = _client(ctx)
    token = _session(ctx)

    async def _run():
        async with client:
            return await CatalogService(client).load_catalog(token)

    loaded = run_async(_run())
    print_catalog(loaded)

    if len(loaded.failures) == 3:
        print_error("Backend unavailable.")
        sys.exit(1)


@cli.command()
@click.argument("query")
@click.pass_context
def search(ctx: click.Context, query: str) -> None:
    """Search products by QUERY.

    \b
    Examples:
        storefront-gateway search "running shoes"
    """
    client = _client(ctx)
    token = _session(ctx)

    async def _run():
        async with client:
            return await CatalogService(client).search_products(query, token)

    results = run_async(_run())
    if not results:
        print_info(f"No products match '{query}'.")
        return

    print_products(results, title=f'Search results for "{query}"')


@cli.command()
@click.option("--username", "-u", prompt=True, help="Admin username.")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Admin password.")
@click.option("--show-token", is_flag=True, help="Print the issued bearer token.")
@click.pass_context
def login(ctx: click.Context, username: str, password: str, show_token: bool) -> None:
    """Check admin credentials against the backend.

    \b
    Examples:
        storefront-gateway login -u admin
        export ADMIN_TOKEN=$(storefront-gateway login -u admin -p ... --show-token)
    """
    client = _client(ctx)

    async def _run():
        async with client:
            return await client.login(username, password)

    try:
        session = run_async(_run())
    except GatewayError as e:
        print_error(f"Login failed: {e}")
        sys.exit(1)

    if show_token:
        click.echo(session.value)
        return

    print_success(f"Logged in as {session.username}.")


if __name__ == "__main__":
    cli()
