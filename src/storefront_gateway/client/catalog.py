"""
Catalog service for storefront and admin pages.

Wraps the gateway client with resource-level operations. Reads normalize
the backend's list envelopes and degrade to empty results; admin writes
require a logged-in session and propagate failures.
"""

import asyncio
from typing import Any, Optional

from storefront_gateway.client.gateway import GatewayClient
from storefront_gateway.core.models import Catalog, FetchResult, ResourceKind, SessionToken
from storefront_gateway.core.normalize import (
    extract_list,
    extract_record,
    group_products_by_brand,
)
from storefront_gateway.core.validation import encode_query, validate_identifier


class CatalogService:
    """Product, category and brand operations over a GatewayClient."""

    CONTACT_PATH = "/contact"

    def __init__(self, client: GatewayClient):
        self.client = client

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_all(
        self,
        kind: ResourceKind,
        token: Optional[SessionToken] = None,
    ) -> list[dict[str, Any]]:
        """List all records of ``kind``; empty if the read fails."""
        payload = await self.client.get(kind.path, token)
        return extract_list(payload, kind.collection)

    async def get_one(
        self,
        kind: ResourceKind,
        identifier: str | int,
        token: Optional[SessionToken] = None,
    ) -> Optional[dict[str, Any]]:
        """Get a single record, or None if it is missing or the read fails."""
        path = f"{kind.path}/{validate_identifier(identifier)}"
        payload = await self.client.get(path, token)
        return extract_record(payload, kind.value)

    async def list_products(self, token: Optional[SessionToken] = None) -> list[dict[str, Any]]:
        return await self.list_all(ResourceKind.PRODUCT, token)

    async def list_categories(self, token: Optional[SessionToken] = None) -> list[dict[str, Any]]:
        return await self.list_all(ResourceKind.CATEGORY, token)

    async def list_brands(self, token: Optional[SessionToken] = None) -> list[dict[str, Any]]:
        return await self.list_all(ResourceKind.BRAND, token)

    async def get_product(
        self,
        product_id: str | int,
        token: Optional[SessionToken] = None,
    ) -> Optional[dict[str, Any]]:
        return await self.get_one(ResourceKind.PRODUCT, product_id, token)

    async def get_category(
        self,
        category_id: str | int,
        token: Optional[SessionToken] = None,
    ) -> Optional[dict[str, Any]]:
        return await self.get_one(ResourceKind.CATEGORY, category_id, token)

    async def get_brand(
        self,
        brand_id: str | int,
        token: Optional[SessionToken] = None,
    ) -> Optional[dict[str, Any]]:
        return await self.get_one(ResourceKind.BRAND, brand_id, token)

    async def search_products(
        self,
        query: str,
        token: Optional[SessionToken] = None,
    ) -> list[dict[str, Any]]:
        """Search products by free text.

        An empty query lists every product.
        """
        if not query or not query.strip():
            return await self.list_products(token)
        payload = await self.client.get(f"/products?search={encode_query(query)}", token)
        return extract_list(payload, "products")

    async def products_in_category(
        self,
        category_id: str | int,
        token: Optional[SessionToken] = None,
    ) -> list[dict[str, Any]]:
        path = f"/products/category/{validate_identifier(category_id, 'category_id')}"
        payload = await self.client.get(path, token)
        return extract_list(payload, "products")

    async def load_catalog(self, token: Optional[SessionToken] = None) -> Catalog:
        """Fetch products, categories and brands concurrently.

        A resource whose read fails becomes an empty list and its error is
        recorded in ``Catalog.failures``.
        """
        kinds = (ResourceKind.PRODUCT, ResourceKind.CATEGORY, ResourceKind.BRAND)
        results: list[FetchResult] = await asyncio.gather(
            *(self.client.fetch(kind.path, token) for kind in kinds)
        )

        catalog = Catalog()
        for kind, result in zip(kinds, results):
            setattr(catalog, kind.collection, extract_list(result.value, kind.collection))
            if result.error is not None:
                catalog.failures[kind.collection] = result.error
        return catalog

    async def brand_showcase(
        self,
        token: Optional[SessionToken] = None,
    ) -> tuple[list[dict[str, Any]], dict[str, list[dict[str, Any]]]]:
        """Return brands and their products, keyed by brand id and name."""
        brands, products = await asyncio.gather(
            self.list_brands(token),
            self.list_products(token),
        )
        return brands, group_products_by_brand(brands, products)

    # -------------------------------------------------------------------------
    # Admin writes
    # -------------------------------------------------------------------------

    async def create(
        self,
        kind: ResourceKind,
        data: dict[str, Any],
        token: SessionToken,
    ) -> Any:
        """Create a record. Requires an authenticated session."""
        token.require()
        return await self.client.post(kind.path, data, token)

    async def update(
        self,
        kind: ResourceKind,
        identifier: str | int,
        data: dict[str, Any],
        token: SessionToken,
    ) -> Any:
        """Replace a record. Requires an authenticated session."""
        token.require()
        path = f"{kind.path}/{validate_identifier(identifier)}"
        return await self.client.put(path, data, token)

    async def remove(
        self,
        kind: ResourceKind,
        identifier: str | int,
        token: SessionToken,
    ) -> Any:
        """Delete a record. Requires an authenticated session."""
        token.require()
        path = f"{kind.path}/{validate_identifier(identifier)}"
        return await self.client.delete(path, token)

    async def submit_contact(
        self,
        message: dict[str, Any],
        token: Optional[SessionToken] = None,
    ) -> Any:
        """Forward a contact form submission to the backend."""
        return await self.client.post(self.CONTACT_PATH, message, token)
