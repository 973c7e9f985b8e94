"""Async command support for Typer."""

import asyncio
from collections.abc import Callable, Coroutine
from functools import wraps
from typing import Any, TypeVar

import typer

from oauth1_client.cli.formatters import print_error, print_info
from oauth1_client.exceptions import NetworkError, OAuth1Error, ProviderError

_TOKEN_PROBLEMS = ("token_expired", "token_rejected", "token_revoked", "token_used")


def _is_token_invalid_error(e: ProviderError) -> bool:
    """Check if the provider rejected the token (expired, revoked, reused)."""
    problem = (e.oauth_problem or "").lower()
    if problem:
        return problem in _TOKEN_PROBLEMS
    msg = str(e.message).lower()
    return any(p in msg for p in _TOKEN_PROBLEMS)


def report_error(e: OAuth1Error) -> None:
    """Print an OAuth error with a hint on what to do next."""
    print_error(e.message)

    if isinstance(e, ProviderError) and _is_token_invalid_error(e):
        print_info("The token is no longer valid. Run 'oauth1-cli auth login' to get a new one.")
    elif isinstance(e, ProviderError) and e.oauth_problem:
        print_info(f"Provider reported oauth_problem={e.oauth_problem}")
    elif isinstance(e, NetworkError) and e.__cause__ is not None:
        print_info(f"Transport error: {e.__cause__!r}")


T = TypeVar("T")


def async_command(f: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """Decorator to run async Typer commands.

    OAuth errors are reported and turned into exit code 1.

    Usage:
        @app.command()
        @async_command
        async def my_command(ctx: typer.Context):
            async with get_client(ctx.obj) as client:
                response = await client.get(url)
                ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return asyncio.run(f(*args, **kwargs))
        except OAuth1Error as e:
            report_error(e)
            raise typer.Exit(1) from None

    return wrapper
