"""OAuth token and credential models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class OAuthToken(BaseModel):
    """Token issued by the provider (request token or access token)."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(description="Token value (oauth_token)")
    secret: str = Field(description="Token secret (oauth_token_secret)")
    additional_parameters: dict[str, str] = Field(
        default_factory=dict,
        description="Other parameters returned alongside the token",
    )


class AuthorizedRequestToken(BaseModel):
    """Request token the user has authorized, ready to be exchanged."""

    model_config = ConfigDict(frozen=True)

    value: str = Field(description="Request token value")
    secret: str = Field(description="Request token secret")
    verifier: str | None = Field(
        default=None,
        description="oauth_verifier from the callback (OAuth 1.0a only)",
    )

    @classmethod
    def from_token(cls, token: OAuthToken, verifier: str | None = None) -> AuthorizedRequestToken:
        """Pair a fetched request token with the verifier from the callback."""
        return cls(value=token.value, secret=token.secret, verifier=verifier)


class ConsumerCredentials(BaseModel):
    """The registered application's identity with the provider."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(description="Consumer key")
    secret: str = Field(default="", description="Consumer secret", repr=False)
