"""Provider profile commands."""

from typing import Any

import typer

from oauth1_client.cli.async_runner import report_error
from oauth1_client.cli.config import CLIConfig, OutputFormat
from oauth1_client.cli.formatters import (
    format_output,
    masked,
    print_info,
    print_success,
)
from oauth1_client.config import OAuthVersion, ProviderConfig, SignatureMethod
from oauth1_client.exceptions import OAuth1Error

app = typer.Typer(no_args_is_help=True)


@app.command("save")
def save(
    ctx: typer.Context,
    consumer_key: str = typer.Option(..., "--consumer-key", prompt=True, help="Consumer key."),
    consumer_secret: str = typer.Option(
        "",
        "--consumer-secret",
        prompt=True,
        hide_input=True,
        help="Consumer secret (may be empty for RSA-SHA1).",
    ),
    request_token_url: str = typer.Option(..., "--request-token-url", prompt=True),
    authorize_url: str = typer.Option(..., "--authorize-url", prompt=True),
    access_token_url: str = typer.Option(..., "--access-token-url", prompt=True),
    authenticate_url: str | None = typer.Option(None, "--authenticate-url"),
    version: OAuthVersion = typer.Option(
        OAuthVersion.CORE_10_REVISION_A,
        "--version",
        help="OAuth protocol revision of the provider.",
    ),
    signature_method: SignatureMethod = typer.Option(
        SignatureMethod.HMAC_SHA1,
        "--signature-method",
    ),
    rsa_private_key_file: str | None = typer.Option(
        None,
        "--rsa-private-key-file",
        help="PEM private key for RSA-SHA1.",
    ),
    realm: str | None = typer.Option(None, "--realm"),
) -> None:
    """Save a provider profile."""
    config: CLIConfig = ctx.obj

    data: dict[str, Any] = {
        "consumer_key": consumer_key,
        "consumer_secret": consumer_secret,
        "request_token_url": request_token_url,
        "authorize_url": authorize_url,
        "access_token_url": access_token_url,
        "authenticate_url": authenticate_url,
        "version": str(version),
        "signature_method": str(signature_method),
        "rsa_private_key_file": rsa_private_key_file,
        "realm": realm,
    }
    data = {key: value for key, value in data.items() if value is not None}

    # Validate before writing
    try:
        ProviderConfig.from_dict(data)
    except OAuth1Error as e:
        report_error(e)
        raise typer.Exit(1) from None

    config.save_provider_data(data)
    print_success(f"Saved profile '{config.profile}' to {config.provider_path}")


@app.command("show")
def show(
    ctx: typer.Context,
    output: OutputFormat = typer.Option(OutputFormat.TABLE, "--output", "-o", help="Output format."),
) -> None:
    """Show the provider profile (secrets masked)."""
    config: CLIConfig = ctx.obj

    try:
        data = config.load_provider_data()
    except OAuth1Error as e:
        report_error(e)
        raise typer.Exit(1) from None

    if not data:
        print_info(f"No profile '{config.profile}' at {config.provider_path}")
        raise typer.Exit(1)

    format_output(masked(data), output, title=f"Profile: {config.profile}")
