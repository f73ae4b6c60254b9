"""
sshd_config global-segment option patcher

Only the global segment (everything before the first `Match` line) is
inspected. Each option is removed from the global segment, commented or
not, and written back once just before the first `Match` line, or at the
end of the file when there is no Match block.
"""
from typing import Iterable, List, Tuple

HARDENING_OPTIONS: Tuple[Tuple[str, str], ...] = (
    ("PubkeyAuthentication", "yes"),
    ("PasswordAuthentication", "no"),
    ("ChallengeResponseAuthentication", "no"),
    ("KbdInteractiveAuthentication", "no"),
)


def _first_token(text: str) -> str:
    parts = text.split(None, 1)
    return parts[0].lower() if parts else ""


def _option_name(line: str) -> str:
    """Keyword of a line, looking through at most one leading '#'"""
    stripped = line.lstrip()
    if stripped.startswith("#"):
        stripped = stripped[1:].lstrip()
    return _first_token(stripped)


def set_global_option(lines: List[str], key: str, value: str) -> List[str]:
    """
    Ensure exactly one `<key> <value>` line in the global segment.
    
    Args:
        lines: sshd_config lines
        key: Option keyword, matched case-insensitively
        value: Option value
    
    Returns:
        Patched lines; content in and after the first Match block is
        returned unchanged
    """
    wanted = key.lower()
    setting = f"{key} {value}"
    result: List[str] = []
    in_match = False
    inserted = False
    
    for line in lines:
        if in_match:
            result.append(line)
            continue
        
        if _first_token(line) == "match":
            in_match = True
            if not inserted:
                result.append(setting)
                inserted = True
            result.append(line)
            continue
        
        if _option_name(line) == wanted:
            continue
        result.append(line)
    
    if not inserted:
        result.append(setting)
    return result


def set_global_options(lines: List[str], options: Iterable[Tuple[str, str]]) -> List[str]:
    """Apply several options in order, each over the previous result"""
    for key, value in options:
        lines = set_global_option(lines, key, value)
    return lines
