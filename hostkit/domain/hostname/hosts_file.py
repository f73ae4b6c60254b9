"""
Hosts-mapping line reconciliation

All functions work on an in-memory list of lines and return a new list;
callers own reading, backing up and atomically replacing the file.
"""
import re
from typing import List, Optional, Pattern, Union

from ...core.constants import LOOPBACK_ALIAS_ANCHOR, LOOPBACK_ANCHOR
from .models import ReconcileAction, ReconcileResult

PatternLike = Union[str, Pattern[str]]

_WHITESPACE_SPLIT = re.compile(r"(\s+)")


def _compile(pattern: PatternLike) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


def _first_match(lines: List[str], pattern: Pattern[str]) -> Optional[int]:
    for index, line in enumerate(lines):
        if pattern.search(line):
            return index
    return None


def has_token(lines: List[str], token: str) -> bool:
    """True when token appears as a whitespace-delimited field on any line"""
    return any(token in line.split() for line in lines)


def replace_token(line: str, old: str, new: str) -> str:
    """Swap every field equal to `old`, leaving the whitespace as it was"""
    parts = _WHITESPACE_SPLIT.split(line)
    return "".join(new if part == old else part for part in parts)


def _maps_token(
    lines: List[str], token: str, anchor: PatternLike, fallback_anchor: Optional[PatternLike]
) -> bool:
    patterns = [_compile(p) for p in (anchor, fallback_anchor) if p is not None]
    return any(
        token in line.split() for line in lines if any(p.search(line) for p in patterns)
    )


def replace_anchor_line(
    lines: List[str], replacement: str, anchor: PatternLike = LOOPBACK_ALIAS_ANCHOR
) -> Optional[List[str]]:
    """
    Replace the first line matching anchor.
    
    Returns:
        New lines, or None when no line matches
    """
    index = _first_match(lines, _compile(anchor))
    if index is None:
        return None
    result = list(lines)
    result[index] = replacement
    return result


def reconcile_lines(
    lines: List[str],
    replacement: str,
    anchor: PatternLike = LOOPBACK_ALIAS_ANCHOR,
    fallback_anchor: Optional[PatternLike] = LOOPBACK_ANCHOR,
    old_token: Optional[str] = None,
    new_token: Optional[str] = None,
    allow_insert: bool = True,
) -> ReconcileResult:
    """
    Make `replacement` the authoritative anchor line of a hosts file.
    
    Order of preference:
    1. Replace the first line matching `anchor`. Later matches stay.
    2. If `old_token` differs from `new_token` and appears as a field,
       replace every such field with `new_token`. No line is added.
    3. If a line matching `anchor` or `fallback_anchor` already carries
       `new_token` as a field, leave the file as it is.
    4. If insertion is allowed, insert after the first `fallback_anchor`
       match, or
    5. append at the end.
    
    Lines not touched keep their text and order.
    """
    replaced = replace_anchor_line(lines, replacement, anchor)
    if replaced is not None:
        return ReconcileResult(replaced, ReconcileAction.REPLACED)
    
    if old_token and new_token and old_token != new_token and has_token(lines, old_token):
        updated = [replace_token(line, old_token, new_token) for line in lines]
        return ReconcileResult(updated, ReconcileAction.TOKEN_REPLACED)
    
    if new_token and _maps_token(lines, new_token, anchor, fallback_anchor):
        return ReconcileResult(list(lines), ReconcileAction.PRESENT)
    
    if not allow_insert:
        return ReconcileResult(list(lines), ReconcileAction.SKIPPED)
    
    if fallback_anchor is not None:
        index = _first_match(lines, _compile(fallback_anchor))
        if index is not None:
            result = list(lines)
            result.insert(index + 1, replacement)
            return ReconcileResult(result, ReconcileAction.INSERTED)
    
    return ReconcileResult(list(lines) + [replacement], ReconcileAction.APPENDED)
