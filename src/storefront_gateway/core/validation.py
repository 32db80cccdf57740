"""
Input validation utilities for the storefront gateway.

Checks request paths, backend URLs and resource identifiers before they
are joined into outbound URLs.
"""

import re
from urllib.parse import quote, urlsplit

from storefront_gateway.core.exceptions import ValidationError

# Absolute URLs must never be passed where a backend path is expected
_SCHEME_PATTERN = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)

MAX_PATH_LENGTH = 2048


def _has_control_characters(value: str) -> bool:
    return any(ord(c) < 32 or ord(c) == 127 for c in value)


def validate_path(path: str) -> str:
    """Validate a backend resource path such as ``/products/42``.

    Args:
        path: Path relative to the backend base URL.

    Returns:
        The path unchanged.

    Raises:
        ValidationError: If the path is empty, relative, absolute-URL shaped
            or contains control characters.
    """
    if not path:
        raise ValidationError("path", path or "", "Path cannot be empty")

    if len(path) > MAX_PATH_LENGTH:
        raise ValidationError(
            "path", path[:50] + "...", f"Path exceeds {MAX_PATH_LENGTH} characters"
        )

    if _has_control_characters(path):
        raise ValidationError("path", repr(path), "Path contains control characters")

    if _SCHEME_PATTERN.match(path) or path.startswith("//"):
        raise ValidationError("path", path, "Path must not include a scheme or host")

    if not path.startswith("/"):
        raise ValidationError("path", path, "Path must start with '/'")

    return path


def validate_base_url(url: str) -> str:
    """Validate the backend base URL.

    Args:
        url: Base URL, e.g. ``https://api.example.com/api``.

    Returns:
        The URL with any trailing slash removed.

    Raises:
        ValidationError: If the URL is not an http(s) URL with a host.
    """
    if not url:
        raise ValidationError("base_url", url or "", "Base URL cannot be empty")

    parts = urlsplit(url)
    if parts.scheme not in ("http", "https"):
        raise ValidationError("base_url", url, "Scheme must be http or https")
    if not parts.netloc:
        raise ValidationError("base_url", url, "Base URL must include a host")

    return url.rstrip("/")


def validate_identifier(identifier: str | int, field: str = "id") -> str:
    """Validate a resource identifier and encode it for use in a path.

    Args:
        identifier: Product, category or brand id.
        field: Field name reported on failure.

    Returns:
        URL-encoded identifier.
    """
    value = str(identifier).strip() if identifier is not None else ""
    if not value:
        raise ValidationError(field, value, "Identifier cannot be empty")
    if "/" in value or _has_control_characters(value):
        raise ValidationError(field, repr(value), "Identifier contains invalid characters")
    return quote(value, safe="")


def encode_query(term: str) -> str:
    """URL-encode a free-text search term."""
    return quote(term.strip(), safe="")
