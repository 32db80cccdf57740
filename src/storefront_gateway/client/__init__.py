"""
Clients for the storefront backend API.

This module provides the async gateway client and the catalog service
built on top of it.
"""

from storefront_gateway.client.base import BackendClient
from storefront_gateway.client.catalog import CatalogService
from storefront_gateway.client.gateway import GatewayClient

__all__ = [
    "BackendClient",
    "CatalogService",
    "GatewayClient",
]
