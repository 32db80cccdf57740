"""
High-level programmatic API for the storefront gateway.

This module provides simple, async-friendly functions for one-off reads.
Long-running web processes should construct a GatewayClient once and
reuse it, so the response cache is shared between requests.

Example:
    import asyncio
    from storefront_gateway import load_catalog

    async def main():
        catalog = await load_catalog("https://api.example.com/api")
        for product in catalog.featured_products:
            print(product["name"])

    asyncio.run(main())
"""

import asyncio
from typing import Any

from storefront_gateway.cache.memory import NullCache, TTLCache
from storefront_gateway.client.catalog import CatalogService
from storefront_gateway.client.gateway import GatewayClient
from storefront_gateway.core.config import GatewaySettings
from storefront_gateway.core.models import Catalog, FetchResult, SessionToken


def build_client(settings: GatewaySettings, use_cache: bool = True) -> GatewayClient:
    """Create a GatewayClient configured from ``settings``."""
    cache = TTLCache(ttl=settings.cache_ttl) if use_cache else NullCache()
    return GatewayClient(
        settings.base_url,
        timeout=settings.timeout,
        cache=cache,
        backoff=settings.rate_limit_backoff,
    )


async def fetch(
    path: str,
    base_url: str | None = None,
    *,
    token: SessionToken | None = None,
) -> FetchResult:
    """Read a single backend path.

    Args:
        path: Backend path, e.g. "/products".
        base_url: Backend base URL. Read from API_BASE_URL when omitted;
            other settings always come from the environment.
        token: Optional admin session.

    Returns:
        FetchResult with the payload or the error.

    Example:
        >>> import asyncio
        >>> from storefront_gateway import fetch
        >>> result = asyncio.run(fetch("/brands", "https://api.example.com"))
        >>> result.ok
        True
    """
    async with build_client(GatewaySettings.from_env(base_url=base_url)) as client:
        return await client.fetch(path, token)


async def load_catalog(
    base_url: str | None = None,
    *,
    token: SessionToken | None = None,
) -> Catalog:
    """Load products, categories and brands concurrently.

    Args:
        base_url: Backend base URL. Read from API_BASE_URL when omitted;
            other settings always come from the environment.
        token: Optional admin session.

    Returns:
        Catalog; resources that failed to load are empty and listed in
        ``Catalog.failures``.
    """
    async with build_client(GatewaySettings.from_env(base_url=base_url)) as client:
        return await CatalogService(client).load_catalog(token)


def fetch_sync(path: str, base_url: str | None = None, **kwargs: Any) -> FetchResult:
    """Synchronous wrapper for fetch()."""
    return asyncio.run(fetch(path, base_url, **kwargs))


def load_catalog_sync(base_url: str | None = None, **kwargs: Any) -> Catalog:
    """Synchronous wrapper for load_catalog().

    For use in non-async contexts. Runs a fresh event loop.

    Example:
        >>> from storefront_gateway import load_catalog_sync
        >>> catalog = load_catalog_sync("https://api.example.com")
        >>> print(catalog.counts)
    """
    return asyncio.run(load_catalog(base_url, **kwargs))
