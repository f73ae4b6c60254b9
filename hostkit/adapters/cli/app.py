"""
Main CLI application
"""
import sys
from pathlib import Path
from typing import List, Optional

import click
import typer

from ...core.exceptions import ConfigError
from ...core.logging import get_stderr_console
from .hostname import hostname_run, register_hostname_command
from .keys import keys_run, register_keys_command
from .runtime import CONTEXT_SETTINGS, load_settings

stderr_console = get_stderr_console()

# Create main app
app = typer.Typer(
    name="hostkit",
    add_completion=False,
    help="Idempotent host provisioning: hostname and SSH key access",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings=CONTEXT_SETTINGS,
)

register_hostname_command(app)
register_keys_command(app)

# Standalone single-command apps
hostname_app = typer.Typer(add_completion=False, context_settings=CONTEXT_SETTINGS)
hostname_app.command()(hostname_run)

keys_app = typer.Typer(add_completion=False, context_settings=CONTEXT_SETTINGS)
keys_app.command()(keys_run)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
):
    """
    hostkit - idempotent host provisioning
    
    Use subcommands to perform different operations:
    - hostname: Set the hostname and reconcile /etc/hosts
    - ssh-keys: Provision SSH public-key access
    """
    try:
        ctx.obj = load_settings(config, log_level, log_file)
    except ConfigError as e:
        stderr_console.print(f"[red]Config Error:[/red] {e}")
        raise typer.Exit(1)


def invoke(typer_app: typer.Typer, args: Optional[List[str]] = None) -> int:
    """
    Run an app and return its exit status.
    
    Usage errors (unknown option, extra argument) exit with 1 rather
    than click's 2.
    """
    try:
        result = typer_app(args=args, standalone_mode=False)
    except click.UsageError as e:
        e.show()
        return 1
    except click.Abort:
        stderr_console.print("[red]Aborted[/red]")
        return 1
    return result if isinstance(result, int) else 0


def run():
    """CLI entry point"""
    sys.exit(invoke(app))


def run_set_hostname():
    """set-hostname entry point"""
    sys.exit(invoke(hostname_app))


def run_provision_keys():
    """provision-ssh-keys entry point"""
    sys.exit(invoke(keys_app))


if __name__ == "__main__":
    run()
