"""OAuth 1.0 signature base string and signing (RFC 5849 section 3.4)."""

import base64
import hashlib
import hmac
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TypeAlias
from urllib.parse import quote, unquote, urlsplit, urlunsplit

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from oauth1_client.config import SignatureMethod
from oauth1_client.exceptions import ConfigurationError, CryptoError, ValidationError

Params: TypeAlias = Mapping[str, str] | Iterable[tuple[str, str]]

_DEFAULT_PORTS = {"http": 80, "https": 443}


def percent_encode(value: str) -> str:
    """Encode per RFC 3986, leaving only unreserved characters as is."""
    # quote() keeps A-Z a-z 0-9 _ . - ~ when safe is empty
    return quote(value.encode("utf-8"), safe="")


def percent_decode(value: str) -> str:
    """Inverse of percent_encode ("+" is not treated as a space)."""
    return unquote(value, encoding="utf-8", errors="strict")


def param_pairs(params: Params) -> list[tuple[str, str]]:
    """Flatten a mapping or pair sequence into (name, value) string pairs."""
    items = params.items() if isinstance(params, Mapping) else params
    return [(str(name), str(value)) for name, value in items]


def normalize_base_url(url: str) -> str:
    """Base string URI: lower-case scheme and host, no default port, no query."""
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if not scheme or not host:
        raise ValidationError(f"Not an absolute URL: {url!r}", field="url")

    try:
        port = parts.port
    except ValueError as e:
        raise ValidationError(f"Invalid port in URL {url!r}: {e}", field="url") from e

    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"

    return urlunsplit((scheme, netloc, parts.path or "/", "", ""))


def normalize_parameters(params: Params) -> str:
    """Encode, sort by name then value, and join as name=value&... ."""
    encoded = sorted(
        (percent_encode(name), percent_encode(value))
        for name, value in param_pairs(params)
        if name != "oauth_signature"
    )
    return "&".join(f"{name}={value}" for name, value in encoded)


def signature_base_string(method: str, url: str, params: Params) -> str:
    """METHOD&encoded-base-url&encoded-parameter-string."""
    return "&".join(
        [
            method.upper(),
            percent_encode(normalize_base_url(url)),
            percent_encode(normalize_parameters(params)),
        ]
    )


@lru_cache(maxsize=16)
def _load_rsa_key(pem: str) -> rsa.RSAPrivateKey:
    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except UnsupportedAlgorithm as e:
        raise CryptoError(
            f"RSA keys are not supported by the crypto backend: {e}",
            signature_method=SignatureMethod.RSA_SHA1,
        ) from e
    except (ValueError, TypeError) as e:
        raise CryptoError(
            f"Could not load RSA private key: {e}",
            signature_method=SignatureMethod.RSA_SHA1,
        ) from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise CryptoError(
            f"Expected an RSA private key, got {type(key).__name__}",
            signature_method=SignatureMethod.RSA_SHA1,
        )
    return key


@dataclass(frozen=True, slots=True)
class SignatureEngine:
    """Computes oauth_signature values.

    Immutable, so one instance can be shared by every request, task and
    thread of a process.
    """

    signature_method: SignatureMethod = SignatureMethod.HMAC_SHA1
    consumer_secret: str | None = field(default=None, repr=False)
    rsa_private_key: str | None = field(default=None, repr=False)

    def signing_key(self, token_secret: str = "") -> str:
        """percent-encoded consumer secret & percent-encoded token secret."""
        if not self.consumer_secret:
            raise ConfigurationError(
                f"{self.signature_method} signing requires a consumer secret",
                field="consumer_secret",
            )
        return f"{percent_encode(self.consumer_secret)}&{percent_encode(token_secret or '')}"

    def base_string(self, method: str, url: str, params: Params) -> str:
        """Signature base string for the request."""
        return signature_base_string(method, url, params)

    def sign(
        self,
        method: str,
        url: str,
        params: Params,
        token_secret: str = "",
    ) -> str:
        """Sign the request described by method, URL and all its parameters.

        Args:
            method: HTTP method
            url: Request URL (query parameters must also be in ``params``)
            params: Protocol, query and form body parameters, duplicates allowed
            token_secret: Secret of the request or access token, if any

        Returns:
            The oauth_signature value
        """
        match self.signature_method:
            case SignatureMethod.PLAINTEXT:
                return self.signing_key(token_secret)
            case SignatureMethod.HMAC_SHA1:
                key = self.signing_key(token_secret)
                digest = hmac.new(
                    key.encode("utf-8"),
                    self.base_string(method, url, params).encode("utf-8"),
                    hashlib.sha1,
                ).digest()
                return base64.b64encode(digest).decode("ascii")
            case SignatureMethod.RSA_SHA1:
                return self._sign_rsa(self.base_string(method, url, params))
            case _:
                raise CryptoError(
                    f"Unsupported signature method: {self.signature_method}",
                    signature_method=str(self.signature_method),
                )

    def _sign_rsa(self, base_string: str) -> str:
        if not self.rsa_private_key:
            raise ConfigurationError(
                "RSA-SHA1 signing requires an RSA private key",
                field="rsa_private_key",
            )
        key = _load_rsa_key(self.rsa_private_key)
        try:
            signature = key.sign(base_string.encode("utf-8"), padding.PKCS1v15(), hashes.SHA1())
        except UnsupportedAlgorithm as e:
            raise CryptoError(
                f"RSA-SHA1 is not available: {e}",
                signature_method=SignatureMethod.RSA_SHA1,
            ) from e
        return base64.b64encode(signature).decode("ascii")
