"""Assembly of signed OAuth protocol parameters."""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Mapping
from enum import StrEnum
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlsplit

from oauth1_client.auth.signature import Params, SignatureEngine, param_pairs, percent_encode
from oauth1_client.exceptions import ValidationError

if TYPE_CHECKING:
    from oauth1_client.config import ProviderConfig

logger = logging.getLogger(__name__)

OOB_CALLBACK = "oob"


class RequestKind(StrEnum):
    """Which leg of the protocol a request belongs to."""

    REQUEST_TOKEN = "request_token"
    ACCESS_TOKEN = "access_token"
    PROTECTED_RESOURCE = "resource"


class RequestBuilder:
    """Builds the oauth_* parameter set for a request and signs it.

    Holds only immutable configuration; the nonce and timestamp are fresh
    for every call, so a builder can be shared across concurrent requests.
    """

    def __init__(self, config: ProviderConfig, engine: SignatureEngine | None = None) -> None:
        self.config = config
        self.engine = engine or SignatureEngine(
            signature_method=config.signature_method,
            consumer_secret=config.consumer_secret,
            rsa_private_key=config.rsa_private_key,
        )

    def build_parameters(
        self,
        kind: RequestKind,
        method: str,
        url: str,
        *,
        token: str | None = None,
        token_secret: str = "",
        verifier: str | None = None,
        callback_url: str | None = None,
        request_params: Params | None = None,
        nonce: str | None = None,
        timestamp: str | int | None = None,
    ) -> dict[str, str]:
        """Build the signed OAuth protocol parameters for one request.

        Args:
            kind: Protocol leg (request token, access token, protected resource)
            method: HTTP method of the request
            url: Full request URL; its query parameters are signed too
            token: Request token (access token leg) or access token (resources)
            token_secret: Secret matching ``token``, used in the signing key
            verifier: oauth_verifier for the access token leg (1.0a)
            callback_url: Callback for the request token leg (1.0a)
            request_params: Query or form body parameters sent with the request
            nonce: Override the random nonce (tests, replaying a signature)
            timestamp: Override the current Unix time

        Returns:
            oauth_* parameters including oauth_signature
        """
        oauth_params = self._base_params(nonce=nonce, timestamp=timestamp)

        if kind == RequestKind.REQUEST_TOKEN:
            # 1.0 providers take the callback on the authorize URL instead
            if self.config.is_revision_a:
                oauth_params["oauth_callback"] = callback_url or OOB_CALLBACK
        else:
            if not token:
                raise ValidationError(f"A token is required for {kind} requests", field="token")
            oauth_params["oauth_token"] = token

        if kind == RequestKind.ACCESS_TOKEN and self.config.is_revision_a:
            if not verifier:
                raise ValidationError(
                    "OAuth 1.0a providers require a verifier to exchange the request token",
                    field="verifier",
                )
            oauth_params["oauth_verifier"] = verifier

        # Combine OAuth params with query and body params for signature
        all_params = list(oauth_params.items())
        all_params.extend(parse_qsl(urlsplit(url).query, keep_blank_values=True))
        if request_params:
            all_params.extend(param_pairs(request_params))

        oauth_params["oauth_signature"] = self.engine.sign(
            method,
            url,
            all_params,
            token_secret=token_secret,
        )

        logger.debug("Signed %s %s request to %s", kind, method.upper(), url)
        return oauth_params

    def authorization_header(self, oauth_params: Mapping[str, str]) -> str:
        """Build OAuth Authorization header."""
        auth_parts = []
        if self.config.realm is not None:
            auth_parts.append(f'realm="{self.config.realm}"')
        auth_parts.extend(
            f'{percent_encode(k)}="{percent_encode(v)}"' for k, v in sorted(oauth_params.items())
        )
        return "OAuth " + ", ".join(auth_parts)

    def sign_headers(
        self,
        kind: RequestKind,
        method: str,
        url: str,
        **kwargs: object,
    ) -> dict[str, str]:
        """Generate the Authorization header for a request.

        Accepts the same keyword arguments as build_parameters.
        """
        oauth_params = self.build_parameters(kind, method, url, **kwargs)  # type: ignore[arg-type]
        return {"Authorization": self.authorization_header(oauth_params)}

    def _base_params(
        self,
        *,
        nonce: str | None,
        timestamp: str | int | None,
    ) -> dict[str, str]:
        """Build base OAuth parameters."""
        return {
            "oauth_consumer_key": self.config.consumer_key,
            "oauth_nonce": nonce or secrets.token_hex(16),
            "oauth_signature_method": str(self.engine.signature_method),
            "oauth_timestamp": str(timestamp if timestamp is not None else int(time.time())),
            "oauth_version": "1.0",
        }
