"""Configuration management for OAuth 1.0/1.0a providers."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from oauth1_client.exceptions import ConfigurationError
from oauth1_client.models.auth import ConsumerCredentials


class OAuthVersion(StrEnum):
    """Protocol revision spoken by the provider."""

    CORE_10 = "1.0"
    CORE_10_REVISION_A = "1.0a"


class SignatureMethod(StrEnum):
    """Supported oauth_signature_method values."""

    HMAC_SHA1 = "HMAC-SHA1"
    RSA_SHA1 = "RSA-SHA1"
    PLAINTEXT = "PLAINTEXT"


def _get_config_dir() -> Path:
    """Get XDG-compliant config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "oauth1-client"
    return Path.home() / ".config" / "oauth1-client"


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Consumer credentials and endpoints of one OAuth 1 provider.

    Immutable for the lifetime of the client. The ``version`` flag decides
    where the callback URL travels (request token step for 1.0a, authorize
    URL for 1.0) and whether a verifier is required for the exchange.
    """

    consumer_key: str
    request_token_url: str
    authorize_url: str
    access_token_url: str
    consumer_secret: str = field(default="", repr=False)
    authenticate_url: str | None = None
    version: OAuthVersion = OAuthVersion.CORE_10_REVISION_A
    signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1
    rsa_private_key: str | None = field(default=None, repr=False)
    realm: str | None = None

    def __post_init__(self) -> None:
        for name in ("consumer_key", "request_token_url", "authorize_url", "access_token_url"):
            if not getattr(self, name):
                raise ConfigurationError(f"Missing required setting: {name}", field=name)
        # Accept plain strings from JSON or env
        for name, enum_type in (("version", OAuthVersion), ("signature_method", SignatureMethod)):
            try:
                object.__setattr__(self, name, enum_type(getattr(self, name)))
            except ValueError:
                raise ConfigurationError(
                    f"Unsupported {name}: {getattr(self, name)}",
                    field=name,
                ) from None
        if self.realm is not None and any(c in self.realm for c in "\"\\"):
            raise ConfigurationError("realm must not contain quotes or backslashes", field="realm")

    @property
    def credentials(self) -> ConsumerCredentials:
        """Consumer key and secret as a value object."""
        return ConsumerCredentials(key=self.consumer_key, secret=self.consumer_secret)

    @property
    def is_revision_a(self) -> bool:
        """True for OAuth 1.0a providers (callback confirmed, verifier required)."""
        return self.version is OAuthVersion.CORE_10_REVISION_A

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> ProviderConfig:
        """Build config from a plain mapping (JSON file contents).

        ``rsa_private_key_file`` may be given instead of an inline PEM key.
        """
        data = dict(data)
        key_file = data.pop("rsa_private_key_file", None)
        if key_file and not data.get("rsa_private_key"):
            try:
                data["rsa_private_key"] = Path(key_file).expanduser().read_text()
            except OSError as e:
                raise ConfigurationError(
                    f"Cannot read RSA private key file {key_file}: {e}",
                    field="rsa_private_key_file",
                ) from e

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(unknown)}", field=unknown[0])

        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid provider configuration: {e}") from e

    @classmethod
    def from_env(cls, *, prefix: str = "OAUTH1_") -> ProviderConfig:
        """Create config from environment variables.

        Expected env vars (with the default prefix):
        - OAUTH1_CONSUMER_KEY
        - OAUTH1_CONSUMER_SECRET
        - OAUTH1_REQUEST_TOKEN_URL
        - OAUTH1_AUTHORIZE_URL
        - OAUTH1_ACCESS_TOKEN_URL

        Optional: OAUTH1_AUTHENTICATE_URL, OAUTH1_VERSION,
        OAUTH1_SIGNATURE_METHOD, OAUTH1_RSA_PRIVATE_KEY_FILE, OAUTH1_REALM.
        """
        required = (
            "consumer_key",
            "request_token_url",
            "authorize_url",
            "access_token_url",
        )
        optional = (
            "consumer_secret",
            "authenticate_url",
            "version",
            "signature_method",
            "rsa_private_key_file",
            "realm",
        )

        missing = [
            f"{prefix}{name.upper()}"
            for name in required
            if not os.environ.get(f"{prefix}{name.upper()}")
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                field=missing[0],
            )

        data = {
            name: value
            for name in (*required, *optional)
            if (value := os.environ.get(f"{prefix}{name.upper()}"))
        }
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Path | None = None) -> ProviderConfig:
        """Load config from JSON file.

        Default path: ~/.config/oauth1-client/config.json

        Expected format:
        {
            "consumer_key": "...",
            "consumer_secret": "...",
            "request_token_url": "https://provider/oauth/request_token",
            "authorize_url": "https://provider/oauth/authorize",
            "access_token_url": "https://provider/oauth/access_token",
            "version": "1.0a"
        }
        """
        if path is None:
            path = _get_config_dir() / "config.json"

        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)

        try:
            with path.open() as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

        return cls.from_dict(data)

    @classmethod
    def load(cls, *, prefix: str = "OAUTH1_") -> ProviderConfig:
        """Load config from environment or file (env takes precedence)."""
        try:
            return cls.from_env(prefix=prefix)
        except ConfigurationError:
            return cls.from_file()
