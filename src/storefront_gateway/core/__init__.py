"""
Core module for the storefront gateway.

Contains data models, exceptions, settings, validation and response
normalization helpers.
"""

from storefront_gateway.core.config import GatewaySettings
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
from storefront_gateway.core.models import (
    CacheEntry,
    Catalog,
    FetchResult,
    ResourceKind,
    SessionToken,
)

__all__ = [
    # Models
    "CacheEntry",
    "Catalog",
    "FetchResult",
    "ResourceKind",
    "SessionToken",
    # Settings
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
