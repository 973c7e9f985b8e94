"""The three-legged OAuth 1.0/1.0a flow ("OAuth dance")."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable
from urllib.parse import parse_qsl

import httpx

from oauth1_client.auth.builder import RequestBuilder, RequestKind
from oauth1_client.auth.signature import percent_encode
from oauth1_client.exceptions import NetworkError, ProviderError, ValidationError
from oauth1_client.models.auth import AuthorizedRequestToken, OAuthToken

if TYPE_CHECKING:
    from oauth1_client.config import ProviderConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class OAuth1Operations(Protocol):
    """Conducts the OAuth dance with a provider on behalf of a user."""

    async def fetch_new_request_token(
        self,
        callback_url: str | None = None,
        additional_params: Mapping[str, str] | None = None,
    ) -> OAuthToken:
        """Begin the connection by fetching a new request token.

        Keep the token in the user's session until the authorization
        callback arrives. The callback URL is ignored for 1.0 providers.
        """
        ...

    def build_authorize_url(
        self,
        request_token: str,
        callback_url: str | None = None,
        additional_params: Mapping[str, str] | None = None,
    ) -> str:
        """Absolute URL to redirect the user to for authorization.

        The callback URL is ignored for 1.0a providers.
        """
        ...

    async def exchange_for_access_token(
        self,
        request_token: AuthorizedRequestToken,
        additional_params: Mapping[str, str] | None = None,
    ) -> OAuthToken:
        """Exchange an authorized request token for an access token.

        The verifier is ignored for 1.0 providers.
        """
        ...


class FlowCoordinator:
    """OAuth1Operations backed by an httpx transport.

    Keeps no per-user state: the request token returned by
    fetch_new_request_token is the caller's to hold until the exchange.

    Usage:
        flow = FlowCoordinator(config, http_client=httpx.AsyncClient(timeout=30.0))
        request_token = await flow.fetch_new_request_token("https://app/callback")
        redirect_to = flow.build_authorize_url(request_token.value)
        # ... user authorizes, provider redirects back with oauth_verifier ...
        access_token = await flow.exchange_for_access_token(
            AuthorizedRequestToken.from_token(request_token, verifier)
        )
    """

    def __init__(
        self,
        config: ProviderConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        builder: RequestBuilder | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            config: Provider endpoints and consumer credentials
            http_client: Optional httpx.AsyncClient to send requests with.
                        It is never closed here. Without one, each call opens
                        a short-lived client with no timeout.
            builder: Optional pre-configured RequestBuilder
        """
        self.config = config
        self.builder = builder or RequestBuilder(config)
        self._http_client = http_client

    def set_http_client(self, http_client: httpx.AsyncClient | None) -> None:
        """Set the shared HTTP client for connection pooling."""
        self._http_client = http_client

    async def fetch_new_request_token(
        self,
        callback_url: str | None = None,
        additional_params: Mapping[str, str] | None = None,
    ) -> OAuthToken:
        """Step 1: Get a request token to start the OAuth flow.

        Args:
            callback_url: Where the provider redirects after authorization.
                          Defaults to "oob" for 1.0a, ignored for 1.0.
            additional_params: Extra provider-specific parameters (e.g. scope),
                               sent form-encoded and signed

        Returns:
            The unauthorized request token

        Raises:
            ProviderError: On a non-2xx response or a malformed body
            NetworkError: On transport failure
        """
        url = self.config.request_token_url
        body = dict(additional_params or {})

        headers = self.builder.sign_headers(
            RequestKind.REQUEST_TOKEN,
            "POST",
            url,
            callback_url=callback_url,
            request_params=body,
        )

        response = await self._post(url, headers, body, stage="request_token")
        token = self._parse_token(response, stage="request_token")

        if (
            self.config.is_revision_a
            and token.additional_parameters.get("oauth_callback_confirmed") != "true"
        ):
            logger.warning("Provider did not confirm the callback for request token")

        return token

    def build_authorize_url(
        self,
        request_token: str,
        callback_url: str | None = None,
        additional_params: Mapping[str, str] | None = None,
    ) -> str:
        """Step 2: URL the user visits to authorize the request token.

        Args:
            request_token: The request token value
            callback_url: Redirect target for 1.0 providers (ignored for 1.0a,
                          which received it with the request token)
            additional_params: Extra query parameters for the provider

        Returns:
            Absolute authorize URL
        """
        return self._build_user_url(
            self.config.authorize_url, request_token, callback_url, additional_params
        )

    def build_authenticate_url(
        self,
        request_token: str,
        callback_url: str | None = None,
        additional_params: Mapping[str, str] | None = None,
    ) -> str:
        """Like build_authorize_url, for "sign in with" providers.

        Uses the configured authenticate URL, falling back to the authorize URL.
        """
        base_url = self.config.authenticate_url or self.config.authorize_url
        return self._build_user_url(base_url, request_token, callback_url, additional_params)

    async def exchange_for_access_token(
        self,
        request_token: AuthorizedRequestToken,
        additional_params: Mapping[str, str] | None = None,
    ) -> OAuthToken:
        """Step 3: Exchange the authorized request token for an access token.

        Args:
            request_token: Request token plus the verifier from the callback
            additional_params: Extra provider-specific parameters

        Returns:
            The access token

        Raises:
            ValidationError: Missing token, or missing verifier for 1.0a
            ProviderError: If the provider rejects the exchange (reused or
                           expired request token, invalid verifier)
            NetworkError: On transport failure
        """
        url = self.config.access_token_url
        body = dict(additional_params or {})

        headers = self.builder.sign_headers(
            RequestKind.ACCESS_TOKEN,
            "POST",
            url,
            token=request_token.value,
            token_secret=request_token.secret,
            verifier=request_token.verifier,
            request_params=body,
        )

        response = await self._post(url, headers, body, stage="access_token")
        return self._parse_token(response, stage="access_token")

    def _build_user_url(
        self,
        base_url: str,
        request_token: str,
        callback_url: str | None,
        additional_params: Mapping[str, str] | None,
    ) -> str:
        if not request_token:
            raise ValidationError("Request token must not be empty", field="request_token")

        query = [("oauth_token", request_token)]
        if callback_url and not self.config.is_revision_a:
            query.append(("oauth_callback", callback_url))
        if additional_params:
            query.extend(additional_params.items())

        separator = "&" if "?" in base_url else "?"
        encoded = "&".join(f"{percent_encode(k)}={percent_encode(v)}" for k, v in query)
        return f"{base_url}{separator}{encoded}"

    async def _post(
        self,
        url: str,
        headers: dict[str, str],
        body: dict[str, str],
        *,
        stage: str,
    ) -> httpx.Response:
        logger.debug("Request: POST %s (%s)", url, stage)

        try:
            if self._http_client is not None:
                # Use shared connection pool
                return await self._http_client.post(url, headers=headers, data=body or None)

            # Fallback: per-request client, timeouts are the caller's concern
            async with httpx.AsyncClient(timeout=None) as client:
                return await client.post(url, headers=headers, data=body or None)
        except httpx.TransportError as e:
            raise NetworkError(f"{stage} request to {url} failed: {e}", stage=stage) from e

    def _parse_token(self, response: httpx.Response, *, stage: str) -> OAuthToken:
        """Parse a form-encoded token response."""
        if not response.is_success:
            logger.warning("Provider rejected %s request: %s", stage, response.status_code)
            raise ProviderError(
                f"Failed to get {stage.replace('_', ' ')}: {response.status_code} {response.text}",
                stage=stage,
                status_code=response.status_code,
                response_body=response.text,
            )

        data = dict(parse_qsl(response.text.strip(), keep_blank_values=True))
        token = data.pop("oauth_token", "")
        token_secret = data.pop("oauth_token_secret", "")

        if not token or not token_secret:
            raise ProviderError(
                f"Invalid {stage.replace('_', ' ')} response",
                stage=stage,
                status_code=response.status_code,
                response_body=response.text,
            )

        return OAuthToken(value=token, secret=token_secret, additional_parameters=data)
