"""
Storefront Gateway

Async client for a storefront's backend REST API. Attaches admin bearer
tokens, caches reads for five minutes, retries rate-limited reads once,
and normalizes catalog responses for server-rendered pages.

Quick Start:
    >>> import asyncio
    >>> from storefront_gateway import GatewayClient, CatalogService
    >>> async def home():
    ...     async with GatewayClient("https://api.example.com/api") as client:
    ...         catalog = await CatalogService(client).load_catalog()
    ...         return catalog.featured_products
    >>> featured = asyncio.run(home())

    # Or for a one-off read:
    >>> from storefront_gateway import fetch_sync
    >>> result = fetch_sync("/products", "https://api.example.com/api")
    >>> products = result.value_or([])
"""

__version__ = "0.1.0"

# High-level API
from storefront_gateway.api import (
    build_client,
    fetch,
    fetch_sync,
    load_catalog,
    load_catalog_sync,
)

# Cache
from storefront_gateway.cache.memory import Cache, NullCache, TTLCache

# Clients
from storefront_gateway.client.catalog import CatalogService
from storefront_gateway.client.gateway import GatewayClient

# Settings
from storefront_gateway.core.config import GatewaySettings

# Exceptions
from storefront_gateway.core.exceptions import (
    AuthenticationError,
    BackendError,
    ConfigurationError,
    GatewayError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)

# Data models
from storefront_gateway.core.models import (
    CacheEntry,
    Catalog,
    FetchResult,
    ResourceKind,
    SessionToken,
)

__all__ = [
    # Version
    "__version__",
    # High-level API
    "build_client",
    "fetch",
    "fetch_sync",
    "load_catalog",
    "load_catalog_sync",
    # Clients
    "GatewayClient",
    "CatalogService",
    # Cache
    "Cache",
    "TTLCache",
    "NullCache",
    # Models
    "CacheEntry",
    "Catalog",
    "FetchResult",
    "ResourceKind",
    "SessionToken",
    "GatewaySettings",
    # Exceptions
    "GatewayError",
    "NetworkError",
    "BackendError",
    "NotFoundError",
    "RateLimitError",
    "AuthenticationError",
    "ValidationError",
    "ConfigurationError",
]
