"""Access token persistence for command-line use."""

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError as ModelValidationError

from oauth1_client.models.auth import OAuthToken

logger = logging.getLogger(__name__)


def _get_token_path() -> Path:
    """Get default token storage path."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg_data) if xdg_data else Path.home() / ".local" / "share"
    return base / "oauth1-client" / "token.json"


class TokenFile:
    """JSON file holding one access token.

    The library core never persists tokens; this is for the CLI and for
    scripts that want to keep a token between runs. For production use,
    consider encrypting the file or using a secrets manager.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or _get_token_path()

    def save(self, token: OAuthToken) -> None:
        """Save access token to storage."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        with self.path.open("w") as f:
            f.write(token.model_dump_json(indent=2))

        # Set restrictive permissions (owner read/write only)
        self.path.chmod(0o600)

    def load(self) -> OAuthToken | None:
        """Load access token from storage.

        Returns None if no token is stored or the file is unreadable.
        """
        if not self.path.exists():
            return None

        try:
            with self.path.open() as f:
                return OAuthToken.model_validate(json.load(f))
        except (json.JSONDecodeError, ModelValidationError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, e)
            return None

    def clear(self) -> None:
        """Remove stored token."""
        if self.path.exists():
            self.path.unlink()

    def has_token(self) -> bool:
        """Check if a token is stored."""
        return self.path.exists()
