"""Signed request commands."""

import typer

from oauth1_client.auth import RequestKind
from oauth1_client.cli.async_runner import async_command
from oauth1_client.cli.client_factory import get_client
from oauth1_client.cli.config import CLIConfig
from oauth1_client.cli.formatters import console, print_error
from oauth1_client.exceptions import ValidationError

app = typer.Typer(no_args_is_help=True)


def _parse_pairs(values: list[str] | None, option: str) -> list[tuple[str, str]]:
    """Parse repeated name=value options."""
    pairs = []
    for item in values or []:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise ValidationError(f"Expected name=value for {option}, got {item!r}", field=option)
        pairs.append((name, value))
    return pairs


@app.command("sign")
@async_command
async def sign(
    ctx: typer.Context,
    method: str = typer.Argument(..., help="HTTP method."),
    url: str = typer.Argument(..., help="Request URL, including any query string."),
    data: list[str] | None = typer.Option(
        None,
        "--data",
        "-d",
        help="Form body parameter name=value (repeatable).",
    ),
) -> None:
    """Print the Authorization header for a request signed with the saved token."""
    config: CLIConfig = ctx.obj
    body = _parse_pairs(data, "--data")

    async with get_client(config) as client:
        token = client.access_token
        if token is None:
            print_error("Not authenticated. Run 'oauth1-cli auth login' first.")
            raise typer.Exit(1)

        headers = client.builder.sign_headers(
            RequestKind.PROTECTED_RESOURCE,
            method,
            url,
            token=token.value,
            token_secret=token.secret,
            request_params=body,
        )

    console.print(f"Authorization: {headers['Authorization']}", soft_wrap=True, markup=False)


@app.command("get")
@async_command
async def get(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Protected resource URL."),
    query: list[str] | None = typer.Option(
        None,
        "--query",
        "-q",
        help="Query parameter name=value (repeatable).",
    ),
) -> None:
    """Fetch a protected resource with the saved access token."""
    config: CLIConfig = ctx.obj
    params = _parse_pairs(query, "--query")

    async with get_client(config) as client:
        if not client.is_authenticated:
            print_error("Not authenticated. Run 'oauth1-cli auth login' first.")
            raise typer.Exit(1)

        response = await client.get(url, params=params or None)

    if "json" in response.headers.get("Content-Type", ""):
        console.print_json(response.text)
    else:
        console.print(response.text, markup=False)
