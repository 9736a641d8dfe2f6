"""
Main CLI application for managing the ACL store.
"""

import functools
import sys

import click
from rich.panel import Panel

from aclstore.core.config import BackendType, get_config
from aclstore.core.logging import setup_logging

from .utils import console


class CLIContext:
    """Context object to hold CLI state and configuration."""

    def __init__(self, debug=False, verbose=False):
        self.debug = debug
        self.verbose = verbose
        self.config = None
        self._load_config()

    def _load_config(self):
        """Load configuration and set up logging."""
        try:
            self.config = get_config()
            if self.debug:
                self.config.debug = True
                self.config.logging.level = "DEBUG"
            setup_logging(self.config.logging)
        except (ValueError, OSError) as e:
            console.print(f"[red]Error loading configuration: {e}[/red]")
            sys.exit(1)

    def log(self, message, level="info"):
        """Log a message based on verbosity settings."""
        if level == "debug" and not self.debug:
            return
        if level == "verbose" and not self.verbose:
            return

        if level == "error":
            console.print(f"[red]{message}[/red]")
        elif level == "warning":
            console.print(f"[yellow]{message}[/yellow]")
        elif level == "success":
            console.print(f"[green]{message}[/green]")
        elif level == "debug":
            console.print(f"[dim]{message}[/dim]")
        else:
            console.print(message)


pass_cli_context = click.make_pass_decorator(CLIContext, ensure=True)


def handle_exceptions(f):
    """Decorator to handle common CLI exceptions."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except click.ClickException:
            raise
        except KeyboardInterrupt:
            console.print("\n[yellow]Operation cancelled by user[/yellow]")
            sys.exit(1)
        except Exception as e:
            console.print(f"[red]Unexpected error: {e}[/red]")
            ctx = click.get_current_context(silent=True)
            if ctx and getattr(ctx.obj, 'debug', False):
                import traceback
                console.print(traceback.format_exc())
            sys.exit(1)
    return wrapper


@click.group(context_settings={
    'help_option_names': ['-h', '--help'],
    'auto_envvar_prefix': 'ACLSTORE_CLI'
})
@click.option('--debug/--no-debug', default=False, envvar='ACLSTORE_CLI_DEBUG',
              help='Enable debug mode with verbose logging and error traces.')
@click.option('--verbose/--no-verbose', default=False, envvar='ACLSTORE_CLI_VERBOSE',
              help='Enable verbose output.')
@click.version_option(version="0.1.0", prog_name="ACL Store CLI")
@click.pass_context
def cli(ctx, debug, verbose):
    """ACL Store CLI - Management interface for the ACL store.

    Serves the ACL administration API and administers ACLs directly in
    the configured backend.

    Environment Variables:
        ACLSTORE_CLI_DEBUG: Enable debug mode (true/false)
        ACLSTORE_CLI_VERBOSE: Enable verbose output (true/false)

    Examples:
        aclstore serve --port 8080          # Start the HTTP server
        aclstore acl create docs alice      # Create an ACL
        aclstore show-config                # Show effective settings
    """
    ctx.obj = CLIContext(debug=debug, verbose=verbose)

    if debug:
        console.print("[dim]Debug mode enabled[/dim]")
    if verbose:
        console.print("[dim]Verbose mode enabled[/dim]")


@click.command(name='show-config')
@click.option('--show-sensitive/--hide-sensitive', default=False,
              help='Show which users have access tokens configured.')
@pass_cli_context
@handle_exceptions
def show_config(ctx, show_sensitive):
    """Show current configuration.

    Token values are never printed.
    """
    config = ctx.config

    config_text = "[bold]Configuration[/bold]\n"
    config_text += f"Environment: {config.environment}\n"
    config_text += f"Debug: {config.debug}\n"
    config_text += f"Backend: {config.store.backend.value}\n"
    if config.store.backend == BackendType.SQL:
        config_text += f"Database URL: {config.store.database_url}\n"
        config_text += f"Table: {config.store.table_name}\n"
    config_text += f"Max update attempts: {config.store.max_attempts}\n"
    config_text += f"Initial admins: {', '.join(config.manager.initial_admin_users) or '(none)'}\n"
    config_text += f"API: {config.api.host}:{config.api.port} (root path '{config.api.root_path}')\n"
    config_text += f"Access tokens: {len(config.auth.tokens)} configured"

    if show_sensitive:
        users = sorted(set(config.auth.tokens.values()))
        config_text += "\n\n[bold red]Token holders:[/bold red]\n"
        config_text += ", ".join(users) or "(none)"
        ctx.log("Showing token holders", "debug")

    console.print(Panel.fit(config_text, title="ACL Store Configuration"))


@click.command()
@click.option('--host', default=None, help='Host to bind to (default from config)')
@click.option('--port', default=None, type=int, help='Port to bind to (default from config)')
@pass_cli_context
@handle_exceptions
def serve(ctx, host, port):
    """Start the ACL server.

    Serves the ACL administration API with uvicorn.
    """
    config = ctx.config
    host = host or config.api.host
    port = port or config.api.port
    console.print(f"[green]Starting ACL server on {host}:{port}[/green]")

    from aclstore.core.app import run_server
    run_server(host=host, port=port)


from .commands.acl import acl_group

cli.add_command(acl_group, name='acl')
cli.add_command(show_config)
cli.add_command(serve)


if __name__ == "__main__":
    cli()
