"""
Core utility functions
"""
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .constants import BACKUP_SUFFIX, BACKUP_TIMESTAMP_FORMAT, TEXT_ENCODING, TEXT_ERRORS
from .logging import get_logger

logger = get_logger(__name__)


# ============================================================
# Line I/O
# ============================================================

def read_lines(path: Path) -> List[str]:
    """Read a text file as a list of lines without line terminators"""
    return path.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS).splitlines()


def join_lines(lines: List[str]) -> str:
    """Render lines back to file content, one terminator per line"""
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


# ============================================================
# Backups
# ============================================================

def backup_path_for(path: Path, now: Optional[datetime] = None) -> Path:
    """Return `<path>.bak.<YYYYMMDDHHMMSS>`"""
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.name}{BACKUP_SUFFIX}{stamp}")


def backup_file(path: Path, now: Optional[datetime] = None) -> Optional[Path]:
    """
    Copy a file to its timestamped sibling before it is modified.
    
    Backups are never removed. A backup taken earlier in the same second
    already holds the pre-run content and is left as is.
    
    Args:
        path: File about to be modified
        now: Timestamp override
    
    Returns:
        Backup path, or None when the file does not exist
    """
    if not path.is_file():
        return None
    
    target = backup_path_for(path, now)
    if target.exists():
        logger.debug(f"Backup already present: {target}")
        return target
    
    shutil.copy2(path, target)
    logger.info(f"Backup: {path} -> {target}")
    return target


# ============================================================
# Atomic Replace
# ============================================================

def replace_file(staged: Path, dest: Path) -> None:
    """Move a staged file over its destination in one rename"""
    os.replace(staged, dest)


def discard_file(path: Path) -> None:
    """Remove a staged file that was never committed"""
    try:
        path.unlink()
    except FileNotFoundError:
        pass
