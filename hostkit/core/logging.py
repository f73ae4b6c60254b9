"""
Rich-based logging for provisioning runs

Log records go to stderr through a RichHandler so stdout stays free for the
command's own report. An optional log file keeps a timestamped trail of every
file rewritten and command run on the host.
"""
import logging
from typing import Optional
from pathlib import Path

from rich.logging import RichHandler
from rich.console import Console

from .exceptions import ConfigError

# Resolve sys.stdout / sys.stderr at write time so redirected streams are honored
_stdout_console = Console()
_stderr_console = Console(stderr=True)

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Libraries that log every connection at INFO
NOISY_LOGGERS = ("paramiko", "urllib3")

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def parse_level(level: str) -> int:
    """Map a level name to its logging constant, rejecting unknown names"""
    name = level.strip().upper()
    if name not in LEVELS:
        raise ConfigError(f"Unknown log level: {level} (expected one of {', '.join(LEVELS)})")
    return getattr(logging, name)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    rich_tracebacks: bool = True,
) -> None:
    """
    Configure the root logger for one CLI invocation.

    Args:
        level: Logging level name
        log_file: Optional file that receives the same records, with timestamps
        rich_tracebacks: Render `logger.exception` tracebacks with rich

    Raises:
        ConfigError: Unknown level name or unwritable log file
    """
    log_level = parse_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    rich_handler = RichHandler(
        console=_stderr_console,
        show_time=False,
        show_path=False,
        rich_tracebacks=rich_tracebacks,
        markup=False,
        show_level=True,
    )
    rich_handler.setLevel(log_level)
    root_logger.addHandler(rich_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Cannot open log file {log_file}: {e}") from e
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for the command's report"""
    return _stdout_console


def get_stderr_console() -> Console:
    """Console for errors and log records"""
    return _stderr_console
