"""
Key provisioning domain service - business logic
"""
import os
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ...core.constants import AUTHORIZED_KEYS_MODE, AUTHORIZED_KEYS_NAME, SSH_DIR_MODE
from ...core.context import ExecutionContext
from ...core.logging import get_logger
from ...core.utils import backup_file, join_lines, read_lines
from ...infrastructure.system.accounts import Account, lookup_account
from ..sshd.service import SshdService
from .filter import filter_keys
from .merge import merge_keys
from .models import KeyProvisionReport, KeyProvisionRequest, PublicKey

logger = get_logger(__name__)


class KeyProvisioningService:
    """
    Key provisioning service - installs public keys for an account.
    
    Handles key acquisition, the SSH daemon, authorized_keys and optional
    sshd hardening. No direct dependency on CLI or Typer.
    """
    
    def __init__(
        self,
        ctx: ExecutionContext,
        sshd: SshdService,
        ssh_server_package: Optional[str] = None,
        account_lookup: Callable[[str], Account] = lookup_account,
        on_keys_loaded: Optional[Callable[[int, str], None]] = None,
        on_key_added: Optional[Callable[[PublicKey], None]] = None,
        on_daemon_installed: Optional[Callable[[], None]] = None,
        on_hardened: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize key provisioning service.
        
        Args:
            ctx: Execution context
            sshd: SSH daemon service
            ssh_server_package: Package providing sshd on this platform
            account_lookup: Resolves a user name to an Account
            on_keys_loaded: Callback when keys are read (count, source)
            on_key_added: Callback per appended key
            on_daemon_installed: Callback when sshd was installed
            on_hardened: Callback when sshd_config was hardened
        """
        self.ctx = ctx
        self.sshd = sshd
        self.ssh_server_package = ssh_server_package
        self.account_lookup = account_lookup
        self.on_keys_loaded = on_keys_loaded
        self.on_key_added = on_key_added
        self.on_daemon_installed = on_daemon_installed
        self.on_hardened = on_hardened
    
    def provision(self, request: KeyProvisionRequest) -> KeyProvisionReport:
        """
        Execute a provisioning request.
        
        Process:
        1. Privilege check
        2. Resolve target account
        3. Read and filter keys
        4. Ensure the SSH daemon
        5. Merge into authorized_keys
        6. Harden sshd_config (optional)
        
        Raises:
            PrivilegeError: Not running as root
            UnknownUserError: Target account missing
            KeyFetchError: Source unreadable
            EmptyKeySetError: Source has no valid key
        """
        self.ctx.require_privilege()
        
        account = self.account_lookup(request.target_user)
        keys = filter_keys(request.source.read())
        logger.info(f"Loaded {len(keys)} key(s) from {request.source.describe()}")
        if self.on_keys_loaded:
            self.on_keys_loaded(len(keys), request.source.describe())
        
        report = KeyProvisionReport(
            user=account.name,
            authorized_keys=self._ssh_dir(account) / AUTHORIZED_KEYS_NAME,
            keys=keys,
        )
        
        if self.ctx.dry_run:
            logger.info(f"[dry-run] Would install keys into {report.authorized_keys}")
            return report
        
        report.daemon_installed = self.sshd.ensure_daemon(self.ssh_server_package)
        if report.daemon_installed and self.on_daemon_installed:
            self.on_daemon_installed()
        
        report.added, report.backup = self.install_keys(account, keys, request.overwrite)
        
        if request.disable_password:
            report.hardened = self.sshd.harden()
            if report.hardened and self.on_hardened:
                self.on_hardened()
        
        return report
    
    def _ssh_dir(self, account: Account) -> Path:
        return self.ctx.path(str(account.home)) / ".ssh"
    
    def install_keys(
        self, account: Account, keys: List[PublicKey], overwrite: bool = False
    ) -> Tuple[int, Optional[Path]]:
        """
        Merge keys into the account's authorized_keys.
        
        Returns:
            (added_count, backup_path)
        """
        ssh_dir = self._ssh_dir(account)
        ssh_dir.mkdir(mode=SSH_DIR_MODE, parents=True, exist_ok=True)
        os.chmod(ssh_dir, SSH_DIR_MODE)
        
        authorized = ssh_dir / AUTHORIZED_KEYS_NAME
        existing = read_lines(authorized) if authorized.is_file() else []
        
        result = merge_keys(keys, existing, overwrite=overwrite)
        if not overwrite and result.added == 0:
            logger.info(f"All keys already present in {authorized}")
            self._fix_ownership(account, ssh_dir, authorized)
            return 0, None
        
        backup = backup_file(authorized)
        self.ctx.write_file(authorized, join_lines(result.lines), mode=AUTHORIZED_KEYS_MODE)
        os.chmod(authorized, AUTHORIZED_KEYS_MODE)
        
        if self.on_key_added:
            for line in result.lines[len(result.lines) - result.added:]:
                self.on_key_added(PublicKey(line))
        
        mode = "rebuilt" if overwrite else "updated"
        logger.info(f"{authorized} {mode}: {result.added} key(s) added")
        self._fix_ownership(account, ssh_dir, authorized)
        return result.added, backup
    
    def _fix_ownership(self, account: Account, ssh_dir: Path, authorized: Path) -> None:
        """chown and SELinux relabel, both best effort"""
        for path in (ssh_dir, authorized):
            if not path.exists():
                continue
            try:
                os.chown(path, account.uid, account.gid)
            except OSError as e:
                logger.warning(f"Ignored chown failure on {path}: {e}")
        
        if self.ctx.runner.which("restorecon"):
            result = self.ctx.runner.run(["restorecon", "-R", str(ssh_dir)])
            if result.returncode != 0:
                logger.warning(f"Ignored restorecon failure on {ssh_dir}")
