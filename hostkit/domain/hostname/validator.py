"""
Hostname validation
"""
import re

MAX_HOSTNAME_LENGTH = 253
MAX_LABEL_LENGTH = 63

HOSTNAME_PATTERN = re.compile(
    r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)*$"
)


def normalize_hostname(candidate: str) -> str:
    return candidate.strip().lower()


def validate_hostname(candidate: str) -> bool:
    """
    Check a short hostname or FQDN.
    
    Labels are lowercase alphanumerics with inner hyphens, at most 63
    characters each, joined by dots; the whole name is at most 253
    characters. Input is lowercased before checking.
    """
    name = candidate.lower()
    if not name or len(name) > MAX_HOSTNAME_LENGTH:
        return False
    if not HOSTNAME_PATTERN.match(name):
        return False
    return all(len(label) <= MAX_LABEL_LENGTH for label in name.split("."))


def short_name(hostname: str) -> str:
    """First label of a hostname"""
    return hostname.split(".", 1)[0]
