"""OAuth 1 CLI - Command-line interface for the OAuth 1.0/1.0a client."""

from oauth1_client.cli.app import app

# Import command modules to register them with the app
from oauth1_client.cli.commands import auth, provider, request

# Register sub-apps
app.add_typer(provider.app, name="provider", help="Provider profiles.")
app.add_typer(auth.app, name="auth", help="Authentication commands.")
app.add_typer(request.app, name="request", help="Signed requests.")


def main() -> None:
    """Entry point for the CLI."""
    app()


__all__ = ["app", "main"]
