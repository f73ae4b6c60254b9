"""
Core infrastructure layer
"""
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import CommandRunner, PlatformAdapter, KeySource
from .context import ExecutionContext, has_privilege
from .utils import backup_file, backup_path_for, read_lines, join_lines

__all__ = [
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "CommandRunner",
    "PlatformAdapter",
    "KeySource",
    "ExecutionContext",
    "has_privilege",
    "backup_file",
    "backup_path_for",
    "read_lines",
    "join_lines",
]
