"""
Core data models for the storefront gateway.

This module defines the structures passed between the gateway client,
the catalog service and their callers: session capabilities, cache
entries, read outcomes and the normalized catalog.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from storefront_gateway.core.exceptions import AuthenticationError, GatewayError

# Number of featured products shown on the storefront home page
FEATURED_LIMIT = 6


class ResourceKind(Enum):
    """Catalog resources exposed by the backend."""

    PRODUCT = "product"
    CATEGORY = "category"
    BRAND = "brand"

    def __str__(self) -> str:
        return self.value

    @property
    def collection(self) -> str:
        """Return the plural name used in paths and list envelopes."""
        plurals = {
            ResourceKind.PRODUCT: "products",
            ResourceKind.CATEGORY: "categories",
            ResourceKind.BRAND: "brands",
        }
        return plurals[self]

    @property
    def path(self) -> str:
        """Return the collection path on the backend (e.g. ``/products``)."""
        return f"/{self.collection}"


@dataclass
class SessionToken:
    """Bearer credential for one admin session.

    Passed explicitly into every gateway call. The gateway clears it when
    the backend answers 401, which makes later admin-only operations fail
    until the user logs in again.
    """

    value: str | None = None
    username: str | None = None
    on_invalidate: Callable[[], None] | None = field(default=None, repr=False, compare=False)

    def __repr__(self) -> str:
        # Never leak the bearer value into logs or tracebacks
        state = "authenticated" if self.is_authenticated else "anonymous"
        return f"SessionToken(username={self.username!r}, {state})"

    @property
    def is_authenticated(self) -> bool:
        """Return True while the session holds a token."""
        return bool(self.value)

    @property
    def authorization_header(self) -> str | None:
        """Return the ``Authorization`` header value, if any."""
        if not self.is_authenticated:
            return None
        return f"Bearer {self.value}"

    def require(self) -> None:
        """Raise AuthenticationError unless the session is logged in."""
        if not self.is_authenticated:
            raise AuthenticationError("Admin login required")

    def invalidate(self) -> None:
        """Destroy the token and notify the owner of the session."""
        was_authenticated = self.is_authenticated
        self.value = None
        self.username = None
        if was_authenticated and self.on_invalidate is not None:
            self.on_invalidate()


@dataclass
class CacheEntry:
    """A cached backend payload keyed by request path."""

    key: str
    value: Any
    stored_at: float

    def is_fresh(self, ttl: float, now: float) -> bool:
        """Return True if the entry is younger than ``ttl`` seconds."""
        return now - self.stored_at < ttl


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a gateway read.

    Either ``error`` is None and ``value`` holds the decoded payload, or
    ``error`` holds the failure and ``value`` is None.
    """

    path: str
    value: Any = None
    error: GatewayError | None = None
    from_cache: bool = False

    @classmethod
    def success(cls, path: str, value: Any, from_cache: bool = False) -> "FetchResult":
        return cls(path=path, value=value, from_cache=from_cache)

    @classmethod
    def failure(cls, path: str, error: GatewayError) -> "FetchResult":
        return cls(path=path, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: Any) -> Any:
        """Return the payload, or ``default`` if the read failed or was empty."""
        if not self.ok or self.value is None:
            return default
        return self.value

    def unwrap(self) -> Any:
        """Return the payload or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.value


@dataclass
class Catalog:
    """Products, categories and brands loaded together."""

    products: list[dict[str, Any]] = field(default_factory=list)
    categories: list[dict[str, Any]] = field(default_factory=list)
    brands: list[dict[str, Any]] = field(default_factory=list)
    failures: dict[str, GatewayError] = field(default_factory=dict)

    @property
    def featured_products(self) -> list[dict[str, Any]]:
        """Return up to six products flagged as featured."""
        featured = [p for p in self.products if isinstance(p, dict) and p.get("featured")]
        return featured[:FEATURED_LIMIT]

    @property
    def counts(self) -> dict[str, int]:
        """Return per-resource totals for the admin dashboard."""
        return {
            "products": len(self.products),
            "categories": len(self.categories),
            "brands": len(self.brands),
        }

    @property
    def degraded(self) -> bool:
        """Return True if any resource fell back to an empty list."""
        return bool(self.failures)
