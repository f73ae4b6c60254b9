"""
Public key domain models
"""
import base64
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from paramiko import PKey

from ...core.interfaces import KeySource


@dataclass(frozen=True)
class PublicKey:
    """
    One authorized_keys line: `<algorithm> <base64-blob> [comment]`.
    
    Identity is the full line text; two keys differing only in comment
    are distinct.
    """
    line: str
    
    @property
    def algorithm(self) -> str:
        return self.line.split(None, 1)[0]
    
    @property
    def blob(self) -> str:
        parts = self.line.split(None, 2)
        return parts[1] if len(parts) > 1 else ""
    
    @property
    def comment(self) -> str:
        parts = self.line.split(None, 2)
        return parts[2] if len(parts) > 2 else ""
    
    def fingerprint(self) -> Optional[str]:
        """SHA256 fingerprint, None for key types paramiko cannot load"""
        try:
            key = PKey.from_type_string(self.algorithm, base64.b64decode(self.blob))
        except Exception:
            return None
        return key.fingerprint
    
    def describe(self) -> str:
        label = self.comment or self.algorithm
        return f"{label} ({self.fingerprint() or self.algorithm})"


@dataclass
class MergeResult:
    """Merged authorized_keys lines and the number of keys appended"""
    lines: List[str]
    added: int


@dataclass
class KeyProvisionRequest:
    """Options for one key provisioning run"""
    source: KeySource
    target_user: str
    overwrite: bool = False
    disable_password: bool = False


@dataclass
class KeyProvisionReport:
    """What a key provisioning run changed"""
    user: str
    authorized_keys: Path
    keys: List[PublicKey] = field(default_factory=list)
    added: int = 0
    backup: Optional[Path] = None
    daemon_installed: bool = False
    hardened: bool = False
