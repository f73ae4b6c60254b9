"""
hostkit - idempotent host provisioning tools

Provides two commands built on anchored, single-pass line rewriting with
backup-before-mutate and atomic replacement:
- hostname: set the hostname, reconcile /etc/hosts and cloud-init templates
- ssh-keys: install public keys for an account, optionally harden sshd
"""

__version__ = "0.1.0"

# Export core components
from .core import (
    ExecutionContext,
    HostkitError,
    backup_file,
)

# Export domain models
from .domain.hostname import (
    HostnameTarget,
    reconcile_lines,
    validate_hostname,
)

from .domain.keys import (
    PublicKey,
    filter_keys,
    merge_keys,
)

from .domain.sshd import (
    set_global_option,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "ExecutionContext",
    "HostkitError",
    "backup_file",
    # Hostname
    "HostnameTarget",
    "reconcile_lines",
    "validate_hostname",
    # Keys
    "PublicKey",
    "filter_keys",
    "merge_keys",
    # sshd
    "set_global_option",
]
