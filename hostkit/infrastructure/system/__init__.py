"""
Local system access
"""
from .runner import SubprocessRunner
from .platform import (
    PACKAGE_MANAGERS,
    PackageManager,
    ServiceManager,
    SystemPlatform,
    detect_platform,
)
from .os_family import is_debian_family, kernel_name, parse_os_release
from .accounts import Account, default_target_user, lookup_account

__all__ = [
    "SubprocessRunner",
    "PACKAGE_MANAGERS",
    "PackageManager",
    "ServiceManager",
    "SystemPlatform",
    "detect_platform",
    "is_debian_family",
    "kernel_name",
    "parse_os_release",
    "Account",
    "default_target_user",
    "lookup_account",
]
