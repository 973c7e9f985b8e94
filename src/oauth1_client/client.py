"""OAuth 1 client with connection pooling and signed requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from oauth1_client.auth import FlowCoordinator, OAuth1Auth, RequestBuilder, TokenFile
from oauth1_client.config import ProviderConfig
from oauth1_client.exceptions import NetworkError, ProviderError, ValidationError
from oauth1_client.models.auth import OAuthToken

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)


class OAuth1Client:
    """OAuth 1 provider client.

    Bundles the flow coordinator with access-token signing of API calls.

    Usage (context manager - recommended for connection pooling):
        async with OAuth1Client(config) as client:
            request_token = await client.flow.fetch_new_request_token()
            ...
            response = await client.get("https://api.example.com/me")

    Usage (external HTTP client - shared across integrations):
        http_client = httpx.AsyncClient(timeout=30.0)  # Timeouts are the caller's choice
        client = OAuth1Client(config, http_client=http_client)
        # Client uses shared pool, doesn't close it

    Usage (no pooling - creates connection per request):
        client = OAuth1Client(config)
        response = await client.get(url)  # Per-request connection
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        token_file: TokenFile | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Provider configuration with consumer credentials
            token_file: Optional token storage (uses default if not provided)
            http_client: Optional httpx.AsyncClient for connection pooling.
                        If provided, the client will use this pool and NOT close it.
                        If not provided, use open()/close() or context manager to
                        enable pooling, or each request creates its own connection.
        """
        self.config = config
        self.token_file = token_file or TokenFile()
        self.builder = RequestBuilder(config)
        self.flow = FlowCoordinator(config, http_client=http_client, builder=self.builder)
        self._access_token: OAuthToken | None = None

        # HTTP client management
        self._http_client = http_client
        self._owns_http_client = http_client is None  # We manage lifecycle if not provided

    def _set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Update HTTP client on the flow coordinator."""
        self._http_client = http_client
        self.flow.set_http_client(http_client)

    async def open(self, *, timeout: float | None = None) -> None:
        """Open connection pool for HTTP requests.

        Creates a shared httpx.AsyncClient for connection pooling, with no
        timeout unless one is given. Only needed if not using context manager
        or external http_client.
        """
        if self._http_client is None and self._owns_http_client:
            http_client = httpx.AsyncClient(timeout=timeout)
            self._set_http_client(http_client)

    async def close(self) -> None:
        """Close connection pool.

        Only closes the pool if this client owns it (not external).
        """
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._set_http_client(None)

    async def __aenter__(self) -> OAuth1Client:
        """Async context manager entry - opens connection pool."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Async context manager exit - closes connection pool."""
        await self.close()

    @classmethod
    def from_env(cls, *, prefix: str = "OAUTH1_") -> OAuth1Client:
        """Create client from environment variables (see ProviderConfig.from_env)."""
        return cls(ProviderConfig.from_env(prefix=prefix))

    @property
    def is_authenticated(self) -> bool:
        """Check if an access token is set."""
        return self._access_token is not None

    @property
    def access_token(self) -> OAuthToken | None:
        """Get current access token if authenticated."""
        return self._access_token

    def set_access_token(self, token: OAuthToken | str, token_secret: str | None = None) -> None:
        """Set access token directly.

        Accepts an OAuthToken, or a token value and secret obtained elsewhere.
        """
        if isinstance(token, str):
            if token_secret is None:
                raise ValidationError("A token secret is required", field="token_secret")
            token = OAuthToken(value=token, secret=token_secret)
        self._access_token = token

    def load_token(self) -> bool:
        """Load saved access token.

        Returns:
            True if token was loaded, False if no token saved
        """
        token = self.token_file.load()
        if token:
            self._access_token = token
            return True
        return False

    def save_token(self) -> None:
        """Save current access token."""
        if self._access_token:
            self.token_file.save(self._access_token)

    def clear_token(self) -> None:
        """Forget the access token and remove the saved copy."""
        self._access_token = None
        self.token_file.clear()

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Send a request signed with the current access token.

        Keyword arguments are passed to httpx (params, data, json, headers...).

        Raises:
            ValidationError: If no access token is set
            ProviderError: On a response with status >= 400
            NetworkError: On transport failure
        """
        if not self._access_token:
            raise ValidationError(
                "Not authenticated. Complete the OAuth flow first.",
                field="access_token",
            )

        auth = OAuth1Auth(self.builder, self._access_token)
        logger.debug("Request: %s %s", method, url)

        try:
            if self._http_client is not None:
                response = await self._http_client.request(method, url, auth=auth, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    response = await client.request(method, url, auth=auth, **kwargs)
        except httpx.TransportError as e:
            raise NetworkError(f"{method} {url} failed: {e}", stage="resource") from e

        if response.status_code >= 400:
            raise ProviderError(
                f"API error: {response.status_code}",
                stage="resource",
                status_code=response.status_code,
                response_body=response.text,
            )
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a signed GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a signed POST request."""
        return await self.request("POST", url, **kwargs)
