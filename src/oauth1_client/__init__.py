"""OAuth 1.0/1.0a client library.

A typed, async Python implementation of the consumer side of the OAuth 1
"dance": request token, user authorization, access token exchange.

Example:
    from oauth1_client import (
        AuthorizedRequestToken,
        FlowCoordinator,
        OAuth1Client,
        ProviderConfig,
    )

    config = ProviderConfig(
        consumer_key="your_key",
        consumer_secret="your_secret",
        request_token_url="https://provider.example/oauth/request_token",
        authorize_url="https://provider.example/oauth/authorize",
        access_token_url="https://provider.example/oauth/access_token",
    )
    flow = FlowCoordinator(config)

    # Step 1 - keep the request token in the user's session
    request_token = await flow.fetch_new_request_token("https://app.example/callback")

    # Step 2 - redirect the user
    redirect_to = flow.build_authorize_url(request_token.value)

    # Step 3 - in the callback handler
    access_token = await flow.exchange_for_access_token(
        AuthorizedRequestToken.from_token(request_token, verifier=oauth_verifier)
    )

    # Signed API calls
    async with OAuth1Client(config) as client:
        client.set_access_token(access_token)
        response = await client.get("https://provider.example/api/me")
"""

from oauth1_client.auth import (
    FlowCoordinator,
    FlowSession,
    FlowState,
    OAuth1Auth,
    OAuth1Operations,
    RequestBuilder,
    RequestKind,
    SignatureEngine,
    TokenFile,
)
from oauth1_client.client import OAuth1Client
from oauth1_client.config import OAuthVersion, ProviderConfig, SignatureMethod
from oauth1_client.exceptions import (
    ConfigurationError,
    CryptoError,
    FlowStateError,
    NetworkError,
    OAuth1Error,
    ProviderError,
    ValidationError,
)
from oauth1_client.models import AuthorizedRequestToken, ConsumerCredentials, OAuthToken

__version__ = "0.1.0"

__all__ = [
    # Flow
    "FlowCoordinator",
    "FlowSession",
    "FlowState",
    "OAuth1Operations",
    # Signing
    "OAuth1Auth",
    "RequestBuilder",
    "RequestKind",
    "SignatureEngine",
    # Main client
    "OAuth1Client",
    "TokenFile",
    # Configuration
    "OAuthVersion",
    "ProviderConfig",
    "SignatureMethod",
    # Models
    "AuthorizedRequestToken",
    "ConsumerCredentials",
    "OAuthToken",
    # Exceptions
    "ConfigurationError",
    "CryptoError",
    "FlowStateError",
    "NetworkError",
    "OAuth1Error",
    "ProviderError",
    "ValidationError",
]
