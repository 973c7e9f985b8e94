"""httpx authentication that signs protected resource requests."""

from __future__ import annotations

from collections.abc import Generator
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl

import httpx

from oauth1_client.auth.builder import RequestBuilder, RequestKind

if TYPE_CHECKING:
    from oauth1_client.models.auth import OAuthToken

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class OAuth1Auth(httpx.Auth):
    """Adds an OAuth Authorization header signed with an access token.

    Usage:
        auth = OAuth1Auth(RequestBuilder(config), access_token)
        async with httpx.AsyncClient(auth=auth) as client:
            response = await client.get("https://api.example.com/me")
    """

    requires_request_body = True

    def __init__(self, builder: RequestBuilder, token: OAuthToken) -> None:
        self.builder = builder
        self.token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response]:
        # Form body parameters are part of the signature, other bodies are not
        body_params: list[tuple[str, str]] = []
        content_type = request.headers.get("Content-Type", "")
        if content_type.split(";")[0].strip() == FORM_CONTENT_TYPE and request.content:
            body_params = parse_qsl(request.content.decode("utf-8"), keep_blank_values=True)

        headers = self.builder.sign_headers(
            RequestKind.PROTECTED_RESOURCE,
            request.method,
            str(request.url),
            token=self.token.value,
            token_secret=self.token.secret,
            request_params=body_params,
        )
        request.headers.update(headers)
        yield request
