"""
Per-command runtime wiring: settings, logging and execution context
"""
from pathlib import Path
from typing import Optional

import typer

from ...core.context import ExecutionContext
from ...core.logging import setup_logging
from ...infrastructure.system import SubprocessRunner, detect_platform
from ..config.loader import ConfigLoader, Settings

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def load_settings(
    config_path: Optional[Path] = None,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> Settings:
    """Load settings and configure logging from them"""
    settings = ConfigLoader().load(
        toml_path=config_path,
        cli_overrides={
            "log_level": log_level,
            "log_file": str(log_file) if log_file else None,
        },
    )
    setup_logging(
        level=settings.log_level,
        log_file=Path(settings.log_file) if settings.log_file else None,
    )
    return settings


def settings_for(ctx: typer.Context) -> Settings:
    """Settings from the root callback, or defaults for standalone entry points"""
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    ctx.obj = load_settings()
    return ctx.obj


def create_context(settings: Settings, dry_run: bool = False) -> ExecutionContext:
    """Probe the platform once and build the execution context"""
    runner = SubprocessRunner()
    return ExecutionContext(
        root=Path(settings.root),
        runner=runner,
        platform=detect_platform(runner),
        dry_run=dry_run,
    )
