"""Tests for token models and token file storage."""

import json
import stat
from pathlib import Path

import pytest
from pydantic import ValidationError as ModelValidationError

from oauth1_client.auth import TokenFile
from oauth1_client.models.auth import AuthorizedRequestToken, ConsumerCredentials, OAuthToken


class TestModels:
    """Tests for token and credential models."""

    def test_token_is_immutable(self) -> None:
        """Tokens are value objects."""
        token = OAuthToken(value="tok", secret="sec")

        with pytest.raises(ModelValidationError):
            token.value = "other"  # type: ignore[misc]

    def test_tokens_compare_by_value(self) -> None:
        """Equal fields mean equal tokens."""
        assert OAuthToken(value="tok", secret="sec") == OAuthToken(value="tok", secret="sec")

    def test_additional_parameters_default_empty(self) -> None:
        """Tokens without extra parameters get an empty dict."""
        assert OAuthToken(value="tok", secret="sec").additional_parameters == {}

    def test_authorized_request_token_from_token(self) -> None:
        """A fetched request token is paired with the verifier."""
        request_token = OAuthToken(value="req", secret="reqsecret")

        authorized = AuthorizedRequestToken.from_token(request_token, "1234")

        assert authorized == AuthorizedRequestToken(value="req", secret="reqsecret", verifier="1234")

    def test_verifier_optional(self) -> None:
        """OAuth 1.0 request tokens have no verifier."""
        authorized = AuthorizedRequestToken.from_token(OAuthToken(value="req", secret="s"))

        assert authorized.verifier is None

    def test_consumer_secret_hidden(self) -> None:
        """repr() never shows the consumer secret."""
        assert "hunter2" not in repr(ConsumerCredentials(key="key", secret="hunter2"))


class TestTokenFile:
    """Tests for TokenFile."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """A saved token loads back unchanged."""
        storage = TokenFile(tmp_path / "token.json")
        token = OAuthToken(value="acc", secret="accsecret", additional_parameters={"user_id": "42"})

        storage.save(token)

        assert storage.load() == token
        assert storage.has_token()

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        """Missing directories are created on save."""
        storage = TokenFile(tmp_path / "a" / "b" / "token.json")

        storage.save(OAuthToken(value="acc", secret="s"))

        assert storage.path.exists()

    def test_owner_only_permissions(self, tmp_path: Path) -> None:
        """The token file is readable by its owner only."""
        storage = TokenFile(tmp_path / "token.json")

        storage.save(OAuthToken(value="acc", secret="s"))

        assert stat.S_IMODE(storage.path.stat().st_mode) == 0o600

    def test_load_missing(self, tmp_path: Path) -> None:
        """No file, no token."""
        storage = TokenFile(tmp_path / "token.json")

        assert storage.load() is None
        assert not storage.has_token()

    @pytest.mark.parametrize("content", ["{broken", json.dumps({"value": "only"})])
    def test_load_unreadable(self, tmp_path: Path, content: str) -> None:
        """Corrupt files are ignored rather than crashing."""
        path = tmp_path / "token.json"
        path.write_text(content)

        assert TokenFile(path).load() is None

    def test_clear(self, tmp_path: Path) -> None:
        """clear removes the file and tolerates a missing one."""
        storage = TokenFile(tmp_path / "token.json")
        storage.save(OAuthToken(value="acc", secret="s"))

        storage.clear()
        storage.clear()

        assert not storage.has_token()

    def test_default_path_follows_xdg(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """The default location is under XDG_DATA_HOME."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

        assert TokenFile().path == tmp_path / "oauth1-client" / "token.json"
