"""
authorized_keys merge
"""
from typing import List, Sequence

from .models import MergeResult, PublicKey


def merge_keys(
    new_keys: Sequence[PublicKey], existing_lines: Sequence[str], overwrite: bool = False
) -> MergeResult:
    """
    Append keys not already present byte for byte.
    
    In overwrite mode the existing lines are discarded first; the caller
    is expected to have backed them up.
    
    Returns:
        Merged lines and the count of appended keys
    """
    lines: List[str] = [] if overwrite else list(existing_lines)
    present = set(lines)
    added = 0
    
    for key in new_keys:
        if key.line in present:
            continue
        lines.append(key.line)
        present.add(key.line)
        added += 1
    
    return MergeResult(lines=lines, added=added)
