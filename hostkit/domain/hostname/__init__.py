"""
Hostname domain module
"""
from .models import HostnameRequest, HostnameTarget, ReconcileAction, ReconcileResult
from .validator import normalize_hostname, short_name, validate_hostname
from .hosts_file import reconcile_lines, replace_anchor_line, replace_token
from .service import HostnameReport, HostnameService

__all__ = [
    "HostnameRequest",
    "HostnameTarget",
    "ReconcileAction",
    "ReconcileResult",
    "normalize_hostname",
    "short_name",
    "validate_hostname",
    "reconcile_lines",
    "replace_anchor_line",
    "replace_token",
    "HostnameReport",
    "HostnameService",
]
