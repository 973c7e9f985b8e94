"""Pydantic models for OAuth tokens and credentials."""

from oauth1_client.models.auth import AuthorizedRequestToken, ConsumerCredentials, OAuthToken

__all__ = [
    "AuthorizedRequestToken",
    "ConsumerCredentials",
    "OAuthToken",
]
