"""Authentication commands."""

import webbrowser

import typer

from oauth1_client.auth import FlowCoordinator, FlowSession, TokenFile
from oauth1_client.cli.async_runner import async_command, report_error
from oauth1_client.cli.client_factory import get_client
from oauth1_client.cli.config import CLIConfig, OutputFormat
from oauth1_client.cli.formatters import (
    console,
    format_output,
    masked,
    print_info,
    print_success,
    print_warning,
)
from oauth1_client.exceptions import OAuth1Error
from oauth1_client.models.auth import AuthorizedRequestToken

app = typer.Typer(no_args_is_help=True)


@app.command("login")
@async_command
async def login(
    ctx: typer.Context,
    callback: str | None = typer.Option(
        None,
        "--callback",
        help="Callback URL (default: out-of-band 'oob').",
    ),
    no_browser: bool = typer.Option(
        False,
        "--no-browser",
        help="Don't open browser automatically.",
    ),
) -> None:
    """Run the whole OAuth flow and save the access token.

    1. Fetches a request token
    2. Opens the browser for authorization
    3. Prompts for the verification code
    4. Saves the access token for future use
    """
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        session = FlowSession()

        print_info(f"Starting OAuth flow for profile '{config.profile}'...")
        request_token = await session.start(client.flow, callback)
        confirmed = request_token.additional_parameters.get("oauth_callback_confirmed") == "true"
        if client.config.is_revision_a and not confirmed:
            print_warning("Provider did not confirm the callback URL")
        url = session.authorization_url(client.flow)

        if no_browser:
            console.print("\nOpen this URL in your browser:")
        else:
            print_info("Opening browser for authorization...")
            webbrowser.open(url)
            console.print("\n[dim]If browser didn't open, visit:[/dim]")
        console.print(url, soft_wrap=True, markup=False)

        console.print()
        if client.config.is_revision_a:
            verifier: str | None = typer.prompt("Enter the verification code").strip()
        else:
            typer.prompt("Press enter once you have authorized access", default="", show_default=False)
            verifier = None

        print_info("Exchanging request token for access token...")
        access_token = await session.complete(client.flow, verifier)

        client.set_access_token(access_token)
        client.save_token()

    print_success(f"Authenticated successfully! Token saved to {config.token_path}")


@app.command("request-token")
@async_command
async def request_token(
    ctx: typer.Context,
    callback: str | None = typer.Option(None, "--callback", help="Callback URL (1.0a)."),
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--output", "-o", help="Output format."),
) -> None:
    """Fetch a request token (step 1) and print it."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        token = await client.flow.fetch_new_request_token(callback)

    format_output(token, output, title="Request Token")


@app.command("authorize-url")
def authorize_url(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="Request token value."),
    callback: str | None = typer.Option(None, "--callback", help="Callback URL (1.0)."),
    authenticate: bool = typer.Option(
        False,
        "--authenticate",
        help="Use the provider's authenticate URL instead of authorize.",
    ),
) -> None:
    """Print the URL the user must visit (step 2)."""
    config: CLIConfig = ctx.obj

    try:
        flow = FlowCoordinator(config.load_provider_config())
        build = flow.build_authenticate_url if authenticate else flow.build_authorize_url
        url = build(token, callback)
    except OAuth1Error as e:
        report_error(e)
        raise typer.Exit(1) from None

    console.print(url, soft_wrap=True)


@app.command("exchange")
@async_command
async def exchange(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="Request token value."),
    secret: str = typer.Argument(..., help="Request token secret."),
    verifier: str | None = typer.Option(None, "--verifier", help="oauth_verifier (1.0a)."),
    save: bool = typer.Option(True, "--save/--no-save", help="Save the access token."),
    output: OutputFormat = typer.Option(OutputFormat.JSON, "--output", "-o", help="Output format."),
) -> None:
    """Exchange an authorized request token for an access token (step 3)."""
    config: CLIConfig = ctx.obj

    async with get_client(config) as client:
        access_token = await client.flow.exchange_for_access_token(
            AuthorizedRequestToken(value=token, secret=secret, verifier=verifier)
        )
        if save:
            client.set_access_token(access_token)
            client.save_token()

    format_output(access_token, output, title="Access Token")
    if save:
        print_success(f"Token saved to {config.token_path}")


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Check authentication status."""
    config: CLIConfig = ctx.obj

    token_file = TokenFile(path=config.token_path)

    console.print(f"Profile: [bold]{config.profile}[/bold]")
    console.print(f"Token path: {config.token_path}")

    token = token_file.load()
    if token:
        print_success("Token found - you are authenticated")
        format_output(masked(token.model_dump(exclude={"additional_parameters"})), OutputFormat.TABLE)
    else:
        print_info("Not authenticated - run 'oauth1-cli auth login' to authenticate")


@app.command("logout")
def logout(ctx: typer.Context) -> None:
    """Clear the saved access token."""
    config: CLIConfig = ctx.obj

    token_file = TokenFile(path=config.token_path)

    if not token_file.has_token():
        print_info("No token to clear.")
        return

    token_file.clear()
    print_success(f"Logged out from profile '{config.profile}'.")
