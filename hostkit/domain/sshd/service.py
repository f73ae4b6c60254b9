"""
sshd hardening and daemon presence
"""
from pathlib import Path
from typing import Iterable, Optional, Tuple

from ...core.constants import SSHD_CONFIG_PATH
from ...core.context import ExecutionContext
from ...core.exceptions import MissingFileError, SshdConfigError
from ...core.logging import get_logger
from ...core.utils import backup_file, join_lines, read_lines
from .patcher import HARDENING_OPTIONS, set_global_options

logger = get_logger(__name__)

SSHD_BINARY_CANDIDATES = ("/usr/sbin/sshd", "/usr/bin/sshd")


def find_sshd(ctx: ExecutionContext) -> Optional[str]:
    """Locate the sshd binary, None if no SSH daemon is installed"""
    found = ctx.runner.which("sshd")
    if found:
        return found
    for candidate in SSHD_BINARY_CANDIDATES:
        path = ctx.path(candidate)
        if path.is_file():
            return str(path)
    return None


class SshdService:
    """Installs, starts and hardens the SSH daemon"""
    
    def __init__(self, ctx: ExecutionContext, service_name: str = "sshd"):
        self.ctx = ctx
        self.service_name = service_name
    
    def ensure_daemon(self, package: Optional[str] = None) -> bool:
        """
        Install the SSH server when absent, then enable and start it.
        
        Enabling and starting are best effort.
        
        Returns:
            True when a package was installed
        """
        installed = False
        if find_sshd(self.ctx) is None:
            logger.info("No SSH daemon found, installing one")
            self.ctx.platform.install_package(package or "openssh-server")
            installed = True
        
        self.ctx.platform.enable_service(self.service_name)
        self.ctx.platform.start_service(self.service_name)
        return installed
    
    def harden(
        self,
        options: Iterable[Tuple[str, str]] = HARDENING_OPTIONS,
        config_path: Optional[Path] = None,
    ) -> bool:
        """
        Disable password logins in the global segment of sshd_config.
        
        The candidate file is checked with `sshd -t` before it replaces
        the original; a rejected candidate leaves the original in place.
        
        Returns:
            True when the file changed
        
        Raises:
            MissingFileError: sshd_config is absent
            SshdConfigError: sshd rejected the patched file
        """
        config = config_path or self.ctx.path(SSHD_CONFIG_PATH)
        if not config.is_file():
            raise MissingFileError(f"{config} does not exist")
        
        lines = read_lines(config)
        patched = set_global_options(lines, options)
        if patched == lines:
            logger.info(f"{config} already hardened")
            return False
        
        backup_file(config)
        staged = self.ctx.stage(config, join_lines(patched))
        self._validate(staged)
        self.ctx.commit(staged, config)
        logger.info(f"Hardened {config}: password authentication disabled")
        
        self.ctx.platform.reload_service(self.service_name)
        return True
    
    def _validate(self, candidate: Path) -> None:
        sshd = find_sshd(self.ctx)
        if sshd is None:
            logger.warning("sshd not found, skipping configuration test")
            return
        
        result = self.ctx.runner.run([sshd, "-t", "-f", str(candidate)])
        if result.returncode != 0:
            raise SshdConfigError(
                f"sshd rejected the patched configuration: {result.stderr.strip()}"
            )
