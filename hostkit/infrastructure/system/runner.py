"""
Subprocess-backed command runner
"""
import shutil
import subprocess
from typing import List, Optional

from ...core.interfaces import CommandRunner
from ...core.logging import get_logger

logger = get_logger(__name__)


class SubprocessRunner(CommandRunner):
    """Runs commands on the local host"""
    
    def run(self, cmd: List[str], check: bool = False) -> subprocess.CompletedProcess:
        logger.debug(f"[exec] {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                check=check,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            if check:
                raise
            return subprocess.CompletedProcess(cmd, 127, "", f"{cmd[0]}: command not found")
    
    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)
