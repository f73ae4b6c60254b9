"""
Public key filtering
"""
from typing import List

from ...core.constants import KEY_ALGORITHM_PREFIXES
from ...core.exceptions import EmptyKeySetError
from .models import PublicKey


def is_key_line(line: str) -> bool:
    """Starts with a known algorithm prefix and has a blob after a space"""
    return line.startswith(KEY_ALGORITHM_PREFIXES) and " " in line.strip()


def filter_keys(raw_text: str) -> List[PublicKey]:
    """
    Extract public keys from raw text.
    
    Carriage returns are dropped, blank and non-key lines skipped, and
    exact duplicates removed keeping the first occurrence.
    
    Raises:
        EmptyKeySetError: No valid key line in the input
    """
    seen = set()
    keys: List[PublicKey] = []
    
    for line in raw_text.replace("\r", "").split("\n"):
        if not line.strip() or not is_key_line(line):
            continue
        if line in seen:
            continue
        seen.add(line)
        keys.append(PublicKey(line))
    
    if not keys:
        raise EmptyKeySetError("No valid public keys found in source")
    return keys
