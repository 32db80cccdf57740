"""
Abstract base class for backend clients.

Owns the aiohttp session and builds URLs and headers shared by every
call to the backend API.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import aiohttp

from storefront_gateway import __version__
from storefront_gateway.core.models import SessionToken
from storefront_gateway.core.validation import validate_base_url, validate_path


class BackendClient(ABC):
    """Abstract base class for clients of the backend REST API.

    Handles session ownership and header construction. Subclasses
    implement the request methods.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: int = 30,
    ):
        """Initialize the client.

        Args:
            base_url: Backend base URL, e.g. ``https://api.example.com/api``.
            session: Optional aiohttp session. If not provided, one will
                     be created when needed.
            timeout: Request timeout in seconds.
        """
        self.base_url = validate_base_url(base_url)
        self._session = session
        self._owns_session = session is None
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if we own it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "BackendClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    @abstractmethod
    async def fetch(self, path: str, token: Optional[SessionToken] = None) -> Any:
        """Read the resource at ``path``.

        Args:
            path: Backend path, e.g. ``/products``.
            token: Session whose bearer token is attached, if logged in.
        """

    def _build_url(self, path: str) -> str:
        """Join a validated path onto the base URL."""
        return f"{self.base_url}{validate_path(path)}"

    def _build_headers(self, token: Optional[SessionToken] = None) -> dict[str, str]:
        """Build request headers, adding the bearer token when present."""
        headers = {
            "User-Agent": f"StorefrontGateway/{__version__}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if token is not None and token.authorization_header:
            headers["Authorization"] = token.authorization_header
        return headers
