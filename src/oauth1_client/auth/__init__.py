"""OAuth 1.0/1.0a signing and the three-legged flow."""

from oauth1_client.auth.builder import RequestBuilder, RequestKind
from oauth1_client.auth.flow import FlowCoordinator, OAuth1Operations
from oauth1_client.auth.httpx_auth import OAuth1Auth
from oauth1_client.auth.session import FlowSession, FlowState
from oauth1_client.auth.signature import (
    SignatureEngine,
    normalize_base_url,
    normalize_parameters,
    percent_decode,
    percent_encode,
    signature_base_string,
)
from oauth1_client.auth.tokens import TokenFile

__all__ = [
    "FlowCoordinator",
    "FlowSession",
    "FlowState",
    "OAuth1Auth",
    "OAuth1Operations",
    "RequestBuilder",
    "RequestKind",
    "SignatureEngine",
    "TokenFile",
    "normalize_base_url",
    "normalize_parameters",
    "percent_decode",
    "percent_encode",
    "signature_base_string",
]
