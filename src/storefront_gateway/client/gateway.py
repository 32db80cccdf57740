"""
Gateway client for the storefront backend API.

Issues authenticated JSON calls on behalf of incoming requests. Reads go
through a TTL cache and are retried once when rate limited; writes are
never cached or retried and propagate their errors.
"""

import asyncio
import copy
from typing import Any, Awaitable, Callable, Optional

import aiohttp

from storefront_gateway.cache.memory import Cache, TTLCache
from storefront_gateway.client.base import BackendClient
from storefront_gateway.core.exceptions import (
    AuthenticationError,
    BackendError,
    GatewayError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)
from storefront_gateway.core.logging import get_logger
from storefront_gateway.core.models import FetchResult, SessionToken

logger = get_logger(__name__)


class GatewayClient(BackendClient):
    """Async client for the storefront backend.

    The cache is keyed by request path only and is shared by every caller,
    authenticated or not. Writes do not invalidate it, so a read may be up
    to one TTL stale after a mutation.
    """

    # Delay before the single retry of a rate-limited read
    RATE_LIMIT_BACKOFF = 2.0
    RATE_LIMIT_RETRIES = 1

    LOGIN_PATH = "/admin/login"

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: int = 30,
        cache: Optional[Cache] = None,
        backoff: float = RATE_LIMIT_BACKOFF,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """Initialize the gateway client.

        Args:
            base_url: Backend base URL.
            session: Optional aiohttp session.
            timeout: Request timeout in seconds.
            cache: Response cache for GETs. Defaults to a 5 minute TTLCache.
            backoff: Seconds to wait before retrying a rate-limited read.
            sleep: Coroutine used for the backoff wait.
        """
        super().__init__(base_url, session, timeout)
        self.cache = cache if cache is not None else TTLCache()
        self.backoff = backoff
        self._sleep = sleep

    async def fetch(self, path: str, token: Optional[SessionToken] = None) -> FetchResult:
        """Read ``path``, serving it from cache while fresh.

        Never raises for backend or network failures; they are logged and
        returned as a failed FetchResult.

        The payload is a shallow copy of the cached one, so callers may
        reorder or extend it. Records inside it are still shared and must
        not be modified in place.

        Args:
            path: Backend path, e.g. ``/products``.
            token: Caller's session. Cleared if the backend answers 401.

        Returns:
            FetchResult holding either the payload or the error.
        """
        cached = self.cache.get(path)
        if cached is not None:
            logger.debug("cache_hit", path=path)
            return FetchResult.success(path, copy.copy(cached), from_cache=True)

        logger.debug("cache_miss", path=path)
        return await self._fetch_with_retry(path, token, self.RATE_LIMIT_RETRIES)

    async def _fetch_with_retry(
        self,
        path: str,
        token: Optional[SessionToken],
        retries_left: int,
    ) -> FetchResult:
        try:
            data = await self._request("GET", path, token)
        except RateLimitError as e:
            if retries_left > 0:
                logger.warning("rate_limited_retrying", path=path, backoff=self.backoff)
                await self._sleep(self.backoff)
                return await self._fetch_with_retry(path, token, retries_left - 1)
            logger.error("get_failed", path=path, error=str(e))
            return FetchResult.failure(path, e)
        except GatewayError as e:
            logger.error("get_failed", path=path, error=str(e))
            return FetchResult.failure(path, e)

        self.cache.set(path, data)
        return FetchResult.success(path, copy.copy(data))

    async def get(self, path: str, token: Optional[SessionToken] = None) -> Any:
        """Read ``path`` and return its payload, or None on any failure."""
        result = await self.fetch(path, token)
        return result.value

    async def post(
        self,
        path: str,
        data: Any,
        token: Optional[SessionToken] = None,
    ) -> Any:
        """POST ``data`` as JSON.

        Raises:
            GatewayError: On any failure. The call is not retried.
        """
        return await self._write("POST", path, token, data)

    async def put(
        self,
        path: str,
        data: Any,
        token: Optional[SessionToken] = None,
    ) -> Any:
        """PUT ``data`` as JSON.

        Raises:
            GatewayError: On any failure. The call is not retried.
        """
        return await self._write("PUT", path, token, data)

    async def delete(self, path: str, token: Optional[SessionToken] = None) -> Any:
        """DELETE the resource at ``path``.

        Raises:
            GatewayError: On any failure. The call is not retried.
        """
        return await self._write("DELETE", path, token)

    async def _write(
        self,
        method: str,
        path: str,
        token: Optional[SessionToken],
        data: Any = None,
    ) -> Any:
        try:
            return await self._request(method, path, token, data)
        except GatewayError as e:
            logger.error("write_failed", method=method, path=path, error=str(e))
            raise

    async def login(self, username: str, password: str) -> SessionToken:
        """Authenticate an admin against the backend.

        Args:
            username: Admin username.
            password: Admin password.

        Returns:
            A SessionToken holding the issued bearer token.

        Raises:
            AuthenticationError: If credentials are missing or rejected.
            GatewayError: If the backend cannot be reached.
        """
        if not username or not password:
            raise AuthenticationError("Please enter both username and password")

        try:
            data = await self._request(
                "POST",
                self.LOGIN_PATH,
                None,
                {"username": username, "password": password},
            )
        except AuthenticationError as e:
            logger.info("login_rejected", username=username)
            raise AuthenticationError(e.backend_message or "Invalid username or password")

        issued = data.get("token") if isinstance(data, dict) else None
        if not issued:
            raise AuthenticationError("Login response did not include a token")

        logger.info("login_succeeded", username=username)
        return SessionToken(value=issued, username=username)

    def logout(self, token: SessionToken) -> None:
        """End an admin session."""
        if token.is_authenticated:
            logger.info("logout", username=token.username)
        token.invalidate()

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[SessionToken],
        data: Any = None,
    ) -> Any:
        """Perform one HTTP call and decode its JSON body.

        Raises:
            AuthenticationError: On 401, after invalidating ``token``.
            RateLimitError: On 429.
            NotFoundError: On 404.
            BackendError: On other error statuses or an unreadable body.
            NetworkError: If the backend cannot be reached.
        """
        url = self._build_url(path)
        kwargs: dict[str, Any] = {"headers": self._build_headers(token)}
        if data is not None:
            kwargs["json"] = data

        try:
            async with self.session.request(method, url, **kwargs) as resp:
                if resp.status == 401:
                    self._invalidate(token, path)
                    raise AuthenticationError(url=url, backend_message=await _error_detail(resp))
                if resp.status == 429:
                    raise RateLimitError(url, _parse_retry_after(resp.headers.get("Retry-After")))
                if resp.status == 404:
                    raise NotFoundError(url)
                if resp.status >= 400:
                    raise BackendError(url, resp.status, details=await _error_detail(resp))
                if resp.status == 204:
                    return None

                try:
                    return await resp.json(content_type=None)
                except ValueError as e:
                    raise BackendError(url, resp.status, details=f"Invalid JSON body: {e}")

        except aiohttp.ClientError as e:
            raise NetworkError(url, details=str(e))
        except asyncio.TimeoutError:
            raise NetworkError(url, details="Request timed out")

    def _invalidate(self, token: Optional[SessionToken], path: str) -> None:
        if token is not None and token.is_authenticated:
            logger.info("session_invalidated", path=path, username=token.username)
            token.invalidate()


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if value and value.strip().isdigit():
        return int(value.strip())
    return None


async def _error_detail(resp: aiohttp.ClientResponse) -> Optional[str]:
    """Extract the backend's error message, if it sent one."""
    try:
        body = await resp.json(content_type=None)
    except (ValueError, aiohttp.ClientError):
        return None
    if isinstance(body, dict):
        message = body.get("message") or body.get("error")
        return str(message) if message else None
    return None
