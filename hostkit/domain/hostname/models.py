"""
Hostname domain models
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ...core.constants import LOOPBACK_ALIAS_IP
from ...core.exceptions import InvalidHostnameError
from .validator import normalize_hostname, short_name, validate_hostname


@dataclass(frozen=True)
class HostnameTarget:
    """
    Desired hostname.
    
    Attributes:
        short: First label of the requested name, written to /etc/hostname
        fqdn: Optional fully qualified name for the hosts mapping
    """
    short: str
    fqdn: Optional[str] = None
    
    @classmethod
    def parse(cls, new_hostname: str, fqdn: Optional[str] = None) -> "HostnameTarget":
        name = normalize_hostname(new_hostname)
        if not validate_hostname(name):
            raise InvalidHostnameError(f"Invalid hostname: {name}")
        
        full = None
        if fqdn:
            full = normalize_hostname(fqdn)
            if not validate_hostname(full):
                raise InvalidHostnameError(f"Invalid FQDN: {full}")
        
        return cls(short=short_name(name), fqdn=full)
    
    def hosts_line(self) -> str:
        """Loopback alias mapping line: `127.0.1.1 [fqdn] short`"""
        if self.fqdn:
            return f"{LOOPBACK_ALIAS_IP} {self.fqdn} {self.short}"
        return f"{LOOPBACK_ALIAS_IP} {self.short}"
    
    def describe(self) -> str:
        if self.fqdn:
            return f"short={self.short}, fqdn={self.fqdn}"
        return f"short={self.short}"


class ReconcileAction(str, Enum):
    """How the hosts mapping line ended up in the file"""
    REPLACED = "replaced"
    TOKEN_REPLACED = "token_replaced"
    INSERTED = "inserted"
    APPENDED = "appended"
    PRESENT = "present"
    SKIPPED = "skipped"


@dataclass
class ReconcileResult:
    lines: List[str]
    action: ReconcileAction
    
    @property
    def changed(self) -> bool:
        return self.action not in (ReconcileAction.PRESENT, ReconcileAction.SKIPPED)


@dataclass
class HostnameRequest:
    """Options for one hostname run"""
    target: HostnameTarget
    update_hosts: bool = True
    cloud_init: bool = False
    force_hosts: bool = False
