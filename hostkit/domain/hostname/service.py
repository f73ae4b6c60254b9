"""
Hostname domain service - business logic
"""
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from ...core.constants import HOSTNAME_PATH, HOSTS_PATH, VERIFY_HOSTS_PATTERN
from ...core.context import ExecutionContext
from ...core.exceptions import MissingFileError, UnsupportedPlatformError
from ...core.logging import get_logger
from ...core.utils import backup_file, join_lines, read_lines
from ...infrastructure.system.os_family import is_debian_family, kernel_name
from .cloud_init import cloud_init_present, patch_hosts_templates, set_preserve_hostname
from .hosts_file import reconcile_lines
from .models import HostnameRequest, HostnameTarget, ReconcileAction

logger = get_logger(__name__)


@dataclass
class HostnameReport:
    """What a hostname run changed"""
    previous: str = ""
    hostname_file_written: bool = False
    hosts_action: Optional[ReconcileAction] = None
    preserve_written: bool = False
    templates_patched: List[Path] = field(default_factory=list)
    dry_run: bool = False


class HostnameService:
    """
    Hostname service - sets the hostname and reconciles /etc/hosts.
    
    No direct dependency on CLI or Typer; progress is reported through
    optional callbacks.
    """
    
    def __init__(
        self,
        ctx: ExecutionContext,
        system_name: Callable[[], str] = kernel_name,
        on_plan: Optional[Callable[[str], None]] = None,
        on_hosts_updated: Optional[Callable[[ReconcileAction, str], None]] = None,
        on_hosts_skipped: Optional[Callable[[str], None]] = None,
    ):
        self.ctx = ctx
        self.system_name = system_name
        self.on_plan = on_plan
        self.on_hosts_updated = on_hosts_updated
        self.on_hosts_skipped = on_hosts_skipped
    
    def apply(self, request: HostnameRequest) -> HostnameReport:
        """
        Apply a hostname request.
        
        Process:
        1. Privilege check
        2. Dry run: report the plan and stop
        3. Set hostname and /etc/hostname
        4. Reconcile /etc/hosts
        5. cloud-init preserve flag and templates
        
        Raises:
            PrivilegeError: Not running as root
            UnsupportedPlatformError: Not Linux
            MissingFileError: /etc/hosts is absent
        """
        self.ctx.require_privilege()
        target = request.target
        logger.info(f"Target hostname: {target.describe()}")
        
        if self.ctx.dry_run:
            self._report_plan(request)
            return HostnameReport(dry_run=True)
        
        system = self.system_name()
        if system != "Linux":
            raise UnsupportedPlatformError(f"Only Linux is supported, detected: {system}")
        
        report = HostnameReport()
        report.previous = self.ctx.platform.current_hostname().lower()
        
        report.hostname_file_written = self.set_hostname(target)
        
        if request.update_hosts:
            report.hosts_action = self.update_hosts(target, report.previous, request.force_hosts)
        
        if request.cloud_init:
            if cloud_init_present(self.ctx):
                report.preserve_written = set_preserve_hostname(self.ctx)
                report.templates_patched = patch_hosts_templates(self.ctx, target)
            else:
                logger.info("cloud-init not present, skipping")
        
        return report
    
    def _report_plan(self, request: HostnameRequest) -> None:
        plan = ["[dry-run] Would set the Linux hostname and write /etc/hostname (if present)"]
        if request.update_hosts:
            plan.append("[dry-run] Would update /etc/hosts")
        else:
            plan.append("[dry-run] Skipping /etc/hosts")
        if request.cloud_init:
            plan.append("[dry-run] Would handle cloud-init")
        for line in plan:
            logger.info(line)
            if self.on_plan:
                self.on_plan(line)
    
    def set_hostname(self, target: HostnameTarget) -> bool:
        """
        Set the running hostname and persist it.
        
        Returns:
            True when /etc/hostname was rewritten
        """
        self.ctx.platform.set_hostname(target.short)
        
        hostname_file = self.ctx.path(HOSTNAME_PATH)
        if not hostname_file.exists():
            return False
        
        backup_file(hostname_file)
        self.ctx.write_file(hostname_file, f"{target.short}\n")
        logger.info(f"Wrote {hostname_file}: {target.short}")
        return True
    
    def update_hosts(
        self, target: HostnameTarget, previous: str, force: bool = False
    ) -> ReconcileAction:
        """
        Reconcile the loopback alias line of /etc/hosts.
        
        Insertion of a new line happens only on the Debian family or when
        forced; elsewhere the file is left alone if neither the alias line
        nor the previous hostname is present.
        """
        hosts = self.ctx.path(HOSTS_PATH)
        if not hosts.is_file():
            raise MissingFileError(f"{HOSTS_PATH} does not exist")
        
        lines = read_lines(hosts)
        # A previous name of "localhost" is left in place instead of being renamed,
        # so the loopback line keeps resolving localhost
        old_token = previous if previous and previous != "localhost" else None
        
        result = reconcile_lines(
            lines,
            target.hosts_line(),
            old_token=old_token,
            new_token=target.short,
            allow_insert=force or is_debian_family(self.ctx),
        )
        
        if result.action is ReconcileAction.PRESENT:
            logger.info(f"{HOSTS_PATH} already maps {target.short}; leaving it unchanged")
            return result.action
        
        if not result.changed:
            hint = (
                "Not a Debian-family system and the previous hostname is not in "
                f"{HOSTS_PATH}; leaving it unchanged (use --force-hosts to write it)"
            )
            logger.info(hint)
            if self.on_hosts_skipped:
                self.on_hosts_skipped(hint)
            return result.action
        
        backup_file(hosts)
        self.ctx.write_file(hosts, join_lines(result.lines))
        
        if result.action is ReconcileAction.TOKEN_REPLACED:
            detail = f"{previous} -> {target.short}"
        else:
            detail = target.hosts_line()
        logger.info(f"Updated {hosts} ({result.action.value}): {detail}")
        if self.on_hosts_updated:
            self.on_hosts_updated(result.action, detail)
        return result.action
    
    def verify(self) -> List[str]:
        """Summary lines: current hostname and loopback mappings"""
        summary = [f"hostname: {self.ctx.platform.current_hostname() or '(unknown)'}"]
        hosts = self.ctx.path(HOSTS_PATH)
        if hosts.is_file():
            pattern = re.compile(VERIFY_HOSTS_PATTERN)
            summary.extend(line for line in read_lines(hosts) if pattern.search(line))
        return summary
