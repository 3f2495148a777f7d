"""FreeAgent API client.

This module provides the FreeAgentClient class, the entry point for all
resource wrappers. It owns:
- the HTTP client with bearer token authentication
- mapping of error responses to FreeAgentError subclasses
- the cache store shared by every resource wrapper
"""

from datetime import timedelta
from typing import Any, Optional

import httpx

from freeagent import __version__
from freeagent.cache import CacheStore, InMemoryCacheStore, ResourceCache, create_cache_store
from freeagent.core.config import PRODUCTION_API_BASE_URL, FreeAgentSettings
from freeagent.core.errors import (
    FreeAgentAuthenticationError,
    FreeAgentConnectionError,
    FreeAgentError,
    FreeAgentForbiddenError,
    FreeAgentNotFoundError,
    FreeAgentRateLimitError,
    FreeAgentServerError,
    FreeAgentValidationError,
)
from freeagent.core.logging import get_logger
from freeagent.services.bank_transactions import BankTransactions
from freeagent.services.contacts import Contacts
from freeagent.services.invoices import Invoices
from freeagent.services.projects import Projects
from freeagent.services.tasks import Tasks
from freeagent.services.timeslips import Timeslips

logger = get_logger(__name__)


class FreeAgentClient:
    """Client for the FreeAgent accounting API.

    Each resource is exposed as an attribute (``client.timeslips``,
    ``client.invoices``, ...). All wrappers share the cache store passed in
    here, so a mutation through one wrapper is seen by later reads through
    the same client.

    Example:
        ```python
        async with FreeAgentClient(access_token="token") as client:
            slips = await client.timeslips.get_all(from_date=date(2024, 1, 1))
            await client.timeslips.delete(slips[0].url)
        ```
    """

    DEFAULT_CACHE_TTL = 300  # 5 minutes
    REQUEST_TIMEOUT = 30.0  # seconds
    USER_AGENT = f"freeagent-client/{__version__}"

    def __init__(
        self,
        access_token: str,
        base_url: str = PRODUCTION_API_BASE_URL,
        cache: Optional[CacheStore] = None,
        cache_ttl: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize FreeAgentClient.

        Args:
            access_token: OAuth2 access token sent as a bearer token
            base_url: API base URL (production or sandbox)
            cache: Cache store shared by the resource wrappers. Defaults to a
                new in-memory store owned by this client.
            cache_ttl: Cache TTL in seconds. Defaults to 300 (5 minutes).
            timeout: HTTP timeout in seconds. Defaults to 30.
        """
        if not access_token:
            raise ValueError("An access token is required")

        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.cache = cache if cache is not None else InMemoryCacheStore()
        self.cache_ttl = cache_ttl if cache_ttl is not None else self.DEFAULT_CACHE_TTL
        self.timeout = timeout if timeout is not None else self.REQUEST_TIMEOUT

        # HTTP client will be created lazily
        self._client: Optional[httpx.AsyncClient] = None

        self.bank_transactions = BankTransactions(self, self._resource_cache("bank_transactions"))
        self.contacts = Contacts(self, self._resource_cache("contacts"))
        self.invoices = Invoices(self, self._resource_cache("invoices"))
        self.projects = Projects(self, self._resource_cache("projects"))
        self.tasks = Tasks(self, self._resource_cache("tasks"))
        self.timeslips = Timeslips(self, self._resource_cache("timeslips"))

    @classmethod
    def from_settings(
        cls,
        settings: FreeAgentSettings,
        cache: Optional[CacheStore] = None,
    ) -> "FreeAgentClient":
        """Build a client from settings, creating the cache store if needed."""
        return cls(
            access_token=settings.access_token,
            base_url=settings.base_url,
            cache=cache if cache is not None else create_cache_store(settings),
            cache_ttl=settings.cache_ttl,
            timeout=settings.request_timeout,
        )

    def _resource_cache(self, resource: str) -> ResourceCache:
        return ResourceCache(self.cache, resource, ttl=timedelta(seconds=self.cache_ttl))

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client.

        Returns:
            Configured httpx.AsyncClient instance
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Authorization": f"Bearer {self.access_token}",
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                    "User-Agent": self.USER_AGENT,
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FreeAgentClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def resource_url(self, endpoint: str, entity_id: str) -> str:
        """Absolute URL of an entity, as FreeAgent uses in references."""
        return f"{self.base_url}/{endpoint.strip('/')}/{entity_id}"

    # =========================================================================
    # HTTP Request Methods
    # =========================================================================

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract a readable message from a FreeAgent error body.

        FreeAgent reports errors as ``{"errors": {"error": {"message": ...}}}``
        or ``{"errors": [{"message": ...}, ...]}``.
        """
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"

        errors = body.get("errors") if isinstance(body, dict) else None
        if isinstance(errors, dict):
            errors = [errors.get("error", errors)]
        if isinstance(errors, list):
            messages = [
                str(e.get("message")) for e in errors
                if isinstance(e, dict) and e.get("message")
            ]
            if messages:
                return "; ".join(messages)
        return response.text or f"HTTP {response.status_code}"

    def _handle_response_error(self, response: httpx.Response) -> None:
        """Handle HTTP error responses.

        Args:
            response: HTTP response to check

        Raises:
            FreeAgentAuthenticationError: For 401 responses
            FreeAgentForbiddenError: For 403 responses
            FreeAgentNotFoundError: For 404 responses
            FreeAgentValidationError: For 422 responses
            FreeAgentRateLimitError: For 429 responses
            FreeAgentServerError: For 5xx responses
            FreeAgentError: For other error responses
        """
        if response.is_success:
            return

        status = response.status_code
        message = self._error_message(response)

        if status == 401:
            raise FreeAgentAuthenticationError(
                f"Authentication failed: {message}. Check your access token.",
                status_code=status,
            )
        elif status == 403:
            raise FreeAgentForbiddenError(
                f"Access forbidden: {message}. The user may lack the required access level.",
                status_code=status,
            )
        elif status == 404:
            raise FreeAgentNotFoundError(f"Resource not found: {message}", status_code=status)
        elif status == 422:
            raise FreeAgentValidationError(f"Validation error: {message}", status_code=status)
        elif status == 429:
            retry_after = response.headers.get("Retry-After")
            raise FreeAgentRateLimitError(
                f"Rate limited: {message}",
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        elif status >= 500:
            raise FreeAgentServerError(f"Server error ({status}): {message}", status_code=status)
        else:
            raise FreeAgentError(f"API error ({status}): {message}", status_code=status)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict] = None,
        json_data: Optional[Any] = None,
    ) -> Any:
        """Make one HTTP request and decode the JSON body.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint path, e.g. "v2/timeslips/12"
            params: Optional query parameters
            json_data: Optional JSON body data

        Returns:
            Decoded JSON, or None for an empty body

        Raises:
            FreeAgentConnectionError: If FreeAgent cannot be reached
            FreeAgentError: If FreeAgent returns an error status
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        client = await self._get_client()

        logger.debug(f"{method} {url}")
        try:
            response = await client.request(
                method=method,
                url=url,
                params=params,
                json=json_data,
            )
        except httpx.TimeoutException as e:
            raise FreeAgentConnectionError(f"Request to FreeAgent timed out: {e}") from e
        except httpx.TransportError as e:
            raise FreeAgentConnectionError(
                f"Cannot connect to FreeAgent at {self.base_url}: {e}"
            ) from e

        self._handle_response_error(response)

        if not response.content:
            return None
        return response.json()

    async def _get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return await self._request("GET", endpoint, params=params)

    async def _post(
        self,
        endpoint: str,
        data: Any,
        params: Optional[dict] = None,
    ) -> Any:
        return await self._request("POST", endpoint, params=params, json_data=data)

    async def _put(self, endpoint: str, data: Optional[Any] = None) -> Any:
        return await self._request("PUT", endpoint, json_data=data)

    async def _delete(self, endpoint: str) -> Any:
        return await self._request("DELETE", endpoint)
