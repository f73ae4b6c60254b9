"""
Execution context threaded through every operation
"""
import os
import tempfile
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import TEXT_ENCODING, TEXT_ERRORS
from .exceptions import PrivilegeError
from .interfaces import CommandRunner, PlatformAdapter
from .logging import get_logger
from .utils import discard_file, replace_file

logger = get_logger(__name__)


def has_privilege() -> bool:
    """True when running with an effective uid of 0"""
    return os.geteuid() == 0


@dataclass
class ExecutionContext:
    """
    Per-run state: resolved paths, flags, and the probed platform.
    
    Used as a context manager. Files staged through `stage()` live next to
    their destination and are removed on exit unless `commit()` moved them
    into place, so an error at any point leaves no temp files behind.
    """
    root: Path
    runner: CommandRunner
    platform: PlatformAdapter
    dry_run: bool = False
    privileged: Optional[bool] = None
    _stack: ExitStack = field(default_factory=ExitStack, init=False, repr=False)
    
    def __post_init__(self):
        self.root = Path(self.root)
        if self.privileged is None:
            self.privileged = has_privilege()
    
    def __enter__(self) -> "ExecutionContext":
        self._stack.__enter__()
        return self
    
    def __exit__(self, *exc_info) -> bool:
        return self._stack.__exit__(*exc_info)
    
    def path(self, system_path: str) -> Path:
        """Resolve an absolute system path against the context root"""
        return self.root / system_path.lstrip("/")
    
    def require_privilege(self) -> None:
        if not self.privileged:
            raise PrivilegeError("root privilege is required (run with sudo)")
    
    def stage(self, dest: Path, content: str, mode: Optional[int] = None) -> Path:
        """
        Write content to a temp file in the destination's directory.
        
        The temp file inherits the destination's permission bits when it
        exists, otherwise `mode` (if given).
        """
        fd, name = tempfile.mkstemp(prefix=f".{dest.name}.", dir=str(dest.parent))
        staged = Path(name)
        self._stack.callback(discard_file, staged)
        with os.fdopen(fd, "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS) as f:
            f.write(content)
        
        if dest.exists():
            os.chmod(staged, dest.stat().st_mode & 0o7777)
        elif mode is not None:
            os.chmod(staged, mode)
        return staged
    
    def commit(self, staged: Path, dest: Path) -> None:
        replace_file(staged, dest)
        logger.debug(f"Replaced {dest}")
    
    def write_file(self, dest: Path, content: str, mode: Optional[int] = None) -> None:
        """Atomically replace dest with content"""
        self.commit(self.stage(dest, content, mode), dest)
