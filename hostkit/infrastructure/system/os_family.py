"""
OS family detection
"""
import platform
import shlex
from pathlib import Path
from typing import Dict

from ...core.constants import DEBIAN_FAMILY_IDS, DEBIAN_VERSION_PATH, OS_RELEASE_PATH
from ...core.context import ExecutionContext


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse KEY=value lines of an os-release file"""
    fields: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            values = shlex.split(raw)
        except ValueError:
            continue
        fields[key.strip()] = values[0] if values else ""
    return fields


def read_os_release(path: Path) -> Dict[str, str]:
    if not path.is_file():
        return {}
    return parse_os_release(path.read_text(encoding="utf-8", errors="replace"))


def is_debian_family(ctx: ExecutionContext) -> bool:
    """Debian, Ubuntu, Mint or Pop!_OS"""
    if ctx.path(DEBIAN_VERSION_PATH).is_file():
        return True
    release = read_os_release(ctx.path(OS_RELEASE_PATH))
    return release.get("ID", "") in DEBIAN_FAMILY_IDS


def kernel_name() -> str:
    return platform.system() or "unknown"
