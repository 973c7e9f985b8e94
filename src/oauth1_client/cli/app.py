"""Main Typer application."""

import logging
from pathlib import Path

import typer

from oauth1_client.cli.config import CLIConfig, _default_config_dir, _default_data_dir

# Create main app
app = typer.Typer(
    name="oauth1-cli",
    help="OAuth 1.0/1.0a command-line client.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    profile: str = typer.Option(
        "default",
        "--profile",
        "-P",
        help="Provider profile to use.",
        envvar="OAUTH1_PROFILE",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output.",
    ),
    config_dir: Path | None = typer.Option(
        None,
        "--config-dir",
        "-c",
        help="Config directory (default: ~/.config/oauth1-cli).",
        envvar="OAUTH1_CLI_CONFIG_DIR",
    ),
    data_dir: Path | None = typer.Option(
        None,
        "--data-dir",
        help="Token directory (default: ~/.local/share/oauth1-cli).",
        envvar="OAUTH1_CLI_DATA_DIR",
    ),
) -> None:
    """OAuth 1.0/1.0a command-line client.

    Configure a provider with 'provider save', then run 'auth login'.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    ctx.obj = CLIConfig(
        profile=profile,
        verbose=verbose,
        config_dir=config_dir or _default_config_dir(),
        data_dir=data_dir or _default_data_dir(),
    )
