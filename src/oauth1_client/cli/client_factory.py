"""Client factory for CLI commands."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from oauth1_client.auth import TokenFile
from oauth1_client.client import OAuth1Client

if TYPE_CHECKING:
    from oauth1_client.cli.config import CLIConfig


@asynccontextmanager
async def get_client(config: CLIConfig) -> AsyncGenerator[OAuth1Client]:
    """Create and configure an OAuth1Client for CLI use.

    This context manager:
    1. Loads the provider profile with env var overrides
    2. Uses profile-specific token storage (XDG_DATA_HOME)
    3. Manages connection pooling lifecycle

    Usage:
        async with get_client(cli_config) as client:
            response = await client.get(url)
    """
    provider = config.load_provider_config()

    token_file = TokenFile(path=config.token_path)
    client = OAuth1Client(provider, token_file=token_file)

    # Load any saved token
    client.load_token()

    async with client:
        yield client
