"""Typed exceptions for the OAuth 1.0/1.0a client."""

from urllib.parse import parse_qs


class OAuth1Error(Exception):
    """Base exception for all OAuth client errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(OAuth1Error):
    """Missing or invalid consumer credentials or provider configuration."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class ValidationError(OAuth1Error):
    """Malformed caller input, rejected before anything is sent."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class FlowStateError(ValidationError):
    """A flow operation was invoked out of order."""

    def __init__(self, message: str, *, state: str) -> None:
        self.state = state
        super().__init__(message, field="state")


class CryptoError(OAuth1Error):
    """Signature computation failed."""

    def __init__(self, message: str, *, signature_method: str | None = None) -> None:
        self.signature_method = signature_method
        super().__init__(message)


class ProviderError(OAuth1Error):
    """Non-success status or unparseable response from the provider."""

    def __init__(
        self,
        message: str,
        *,
        stage: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        self.stage = stage  # e.g., "request_token", "access_token", "resource"
        self.status_code = status_code
        self.response_body = response_body
        self.oauth_problem = _parse_oauth_problem(response_body)
        super().__init__(message)


class NetworkError(OAuth1Error):
    """Transport-level failure; the transport's exception is the __cause__."""

    def __init__(self, message: str, *, stage: str) -> None:
        self.stage = stage
        super().__init__(message)


def _parse_oauth_problem(body: str | None) -> str | None:
    """Extract ``oauth_problem`` from a form-encoded problem report."""
    if not body or "oauth_problem=" not in body:
        return None
    values = parse_qs(body.strip()).get("oauth_problem")
    return values[0] if values else None
