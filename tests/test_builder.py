"""Tests for OAuth protocol parameter assembly."""

import pytest

from oauth1_client.auth.builder import OOB_CALLBACK, RequestBuilder, RequestKind
from oauth1_client.auth.signature import SignatureEngine
from oauth1_client.config import ProviderConfig, SignatureMethod
from oauth1_client.exceptions import ValidationError
from tests.fakes import CONSUMER_KEY, CONSUMER_SECRET, make_config, parse_authorization_header

URL = "https://provider.test/oauth/request_token"


class TestCommonParameters:
    """Tests for parameters present on every request."""

    def test_protocol_parameters(self, config: ProviderConfig) -> None:
        """Every request carries the base protocol parameters."""
        params = RequestBuilder(config).build_parameters(RequestKind.REQUEST_TOKEN, "POST", URL)

        assert params["oauth_consumer_key"] == CONSUMER_KEY
        assert params["oauth_signature_method"] == "HMAC-SHA1"
        assert params["oauth_version"] == "1.0"
        assert params["oauth_timestamp"].isdigit()
        assert len(params["oauth_nonce"]) == 32
        assert params["oauth_signature"]

    def test_nonce_unique_per_request(self, config: ProviderConfig) -> None:
        """Two requests never share a nonce or a signature."""
        builder = RequestBuilder(config)

        first = builder.build_parameters(RequestKind.REQUEST_TOKEN, "POST", URL)
        second = builder.build_parameters(RequestKind.REQUEST_TOKEN, "POST", URL)

        assert first["oauth_nonce"] != second["oauth_nonce"]
        assert first["oauth_signature"] != second["oauth_signature"]

    def test_fixed_nonce_and_timestamp_are_deterministic(self, config: ProviderConfig) -> None:
        """Replaying the same nonce and timestamp reproduces the signature."""
        builder = RequestBuilder(config)

        first = builder.build_parameters(
            RequestKind.REQUEST_TOKEN, "POST", URL, nonce="abc", timestamp=1700000000
        )
        second = builder.build_parameters(
            RequestKind.REQUEST_TOKEN, "POST", URL, nonce="abc", timestamp="1700000000"
        )

        assert first == second

    def test_signature_covers_all_parameters(self, config: ProviderConfig) -> None:
        """oauth_signature is computed over protocol, query and body parameters."""
        builder = RequestBuilder(config)
        url = "https://provider.test/api/items?page=2"

        params = builder.build_parameters(
            RequestKind.PROTECTED_RESOURCE,
            "POST",
            url,
            token="tok",
            token_secret="toksecret",
            request_params={"title": "a b"},
        )

        signed = {k: v for k, v in params.items() if k != "oauth_signature"}
        expected = SignatureEngine(consumer_secret=CONSUMER_SECRET).sign(
            "POST",
            url,
            [*signed.items(), ("page", "2"), ("title", "a b")],
            "toksecret",
        )
        assert params["oauth_signature"] == expected

    def test_query_parameters_change_signature(self, config: ProviderConfig) -> None:
        """Query parameters on the URL are part of the signature."""
        builder = RequestBuilder(config)
        kwargs = {"token": "tok", "nonce": "n", "timestamp": 1}

        plain = builder.build_parameters(
            RequestKind.PROTECTED_RESOURCE, "GET", "https://provider.test/api", **kwargs
        )
        with_query = builder.build_parameters(
            RequestKind.PROTECTED_RESOURCE, "GET", "https://provider.test/api?a=1", **kwargs
        )

        assert plain["oauth_signature"] != with_query["oauth_signature"]

    def test_uses_engine_signature_method(self, config: ProviderConfig) -> None:
        """oauth_signature_method follows the engine actually signing."""
        engine = SignatureEngine(SignatureMethod.PLAINTEXT, consumer_secret="s")
        params = RequestBuilder(config, engine).build_parameters(RequestKind.REQUEST_TOKEN, "POST", URL)

        assert params["oauth_signature_method"] == "PLAINTEXT"
        assert params["oauth_signature"] == "s&"


class TestRequestTokenParameters:
    """Tests for the request token leg."""

    def test_callback_included_for_revision_a(self, config: ProviderConfig) -> None:
        """1.0a providers receive the callback with the request token request."""
        params = RequestBuilder(config).build_parameters(
            RequestKind.REQUEST_TOKEN, "POST", URL, callback_url="https://app.test/cb"
        )

        assert params["oauth_callback"] == "https://app.test/cb"
        assert "oauth_token" not in params

    def test_callback_defaults_to_oob(self, config: ProviderConfig) -> None:
        """Without a callback URL, 1.0a requests use out-of-band."""
        params = RequestBuilder(config).build_parameters(RequestKind.REQUEST_TOKEN, "POST", URL)

        assert params["oauth_callback"] == OOB_CALLBACK

    def test_callback_omitted_for_core_10(self, config_10: ProviderConfig) -> None:
        """1.0 providers never see oauth_callback here, not even empty."""
        params = RequestBuilder(config_10).build_parameters(
            RequestKind.REQUEST_TOKEN, "POST", URL, callback_url="https://app.test/cb"
        )

        assert "oauth_callback" not in params


class TestAccessTokenParameters:
    """Tests for the access token leg."""

    def test_token_and_verifier(self, config: ProviderConfig) -> None:
        """1.0a exchange carries the request token and the verifier."""
        params = RequestBuilder(config).build_parameters(
            RequestKind.ACCESS_TOKEN,
            "POST",
            URL,
            token="req",
            token_secret="reqsecret",
            verifier="1234",
        )

        assert params["oauth_token"] == "req"
        assert params["oauth_verifier"] == "1234"
        assert "oauth_callback" not in params

    def test_verifier_required_for_revision_a(self, config: ProviderConfig) -> None:
        """A 1.0a exchange without verifier fails before signing."""
        with pytest.raises(ValidationError) as exc_info:
            RequestBuilder(config).build_parameters(RequestKind.ACCESS_TOKEN, "POST", URL, token="req")

        assert exc_info.value.field == "verifier"

    def test_verifier_ignored_for_core_10(self, config_10: ProviderConfig) -> None:
        """1.0 providers know nothing about verifiers."""
        params = RequestBuilder(config_10).build_parameters(
            RequestKind.ACCESS_TOKEN, "POST", URL, token="req", verifier="1234"
        )

        assert "oauth_verifier" not in params

    def test_token_required(self, config: ProviderConfig) -> None:
        """The access token leg needs the request token."""
        with pytest.raises(ValidationError) as exc_info:
            RequestBuilder(config).build_parameters(RequestKind.ACCESS_TOKEN, "POST", URL, verifier="v")

        assert exc_info.value.field == "token"


class TestAuthorizationHeader:
    """Tests for the Authorization header."""

    def test_header_format(self, config: ProviderConfig) -> None:
        """Header lists encoded parameters in quotes, sorted by name."""
        header = RequestBuilder(config).authorization_header(
            {"oauth_nonce": "n", "oauth_callback": "https://app.test/cb?x=1"}
        )

        assert header == 'OAuth oauth_callback="https%3A%2F%2Fapp.test%2Fcb%3Fx%3D1", oauth_nonce="n"'

    def test_realm_first(self) -> None:
        """A configured realm leads the header."""
        builder = RequestBuilder(make_config(realm="Photos"))

        header = builder.authorization_header({"oauth_nonce": "n"})

        assert header == 'OAuth realm="Photos", oauth_nonce="n"'

    def test_sign_headers_round_trip(self, config: ProviderConfig) -> None:
        """sign_headers returns a parseable header with every parameter."""
        headers = RequestBuilder(config).sign_headers(
            RequestKind.REQUEST_TOKEN, "POST", URL, callback_url="https://app.test/cb"
        )

        parsed = parse_authorization_header(headers["Authorization"])
        assert parsed["oauth_callback"] == "https://app.test/cb"
        assert parsed["oauth_consumer_key"] == CONSUMER_KEY
        assert "oauth_signature" in parsed
