"""
Public key sources

Exactly one source category is active per run: a GitHub account, a URL,
a local file, or inline key lines (repeatable, counted as one category).
"""
from pathlib import Path
from typing import List, Optional, Sequence

import requests

from ...core.constants import DEFAULT_GITHUB_KEYS_URL, TEXT_ENCODING, TEXT_ERRORS
from ...core.exceptions import KeyFetchError, KeySourceConflictError
from ...core.interfaces import KeySource
from ...core.logging import get_logger

logger = get_logger(__name__)


class UrlKeySource(KeySource):
    """Key list served over HTTP(S)"""
    
    def __init__(self, url: str, timeout: Optional[float] = None):
        self.url = url
        self.timeout = timeout
    
    def describe(self) -> str:
        return self.url
    
    def read(self) -> str:
        logger.info(f"Fetching keys from {self.url}")
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise KeyFetchError(f"Failed to fetch {self.url}: {e}") from e
        return response.text


class GitHubKeySource(UrlKeySource):
    """Public keys of a GitHub account"""
    
    def __init__(
        self,
        user: str,
        url_template: str = DEFAULT_GITHUB_KEYS_URL,
        timeout: Optional[float] = None,
    ):
        super().__init__(url_template.format(user=user), timeout=timeout)
        self.user = user
    
    def describe(self) -> str:
        return f"github:{self.user}"


class FileKeySource(KeySource):
    """Keys read from a local file"""
    
    def __init__(self, path: Path):
        self.path = Path(path).expanduser()
    
    def describe(self) -> str:
        return str(self.path)
    
    def read(self) -> str:
        try:
            return self.path.read_text(encoding=TEXT_ENCODING, errors=TEXT_ERRORS)
        except OSError as e:
            raise KeyFetchError(f"Cannot read key file {self.path}: {e}") from e


class InlineKeySource(KeySource):
    """Key lines given on the command line"""
    
    def __init__(self, keys: Sequence[str]):
        self.keys = list(keys)
    
    def describe(self) -> str:
        return f"{len(self.keys)} inline key(s)"
    
    def read(self) -> str:
        return "\n".join(self.keys)


def select_source(
    github: Optional[str] = None,
    url: Optional[str] = None,
    file: Optional[Path] = None,
    keys: Optional[Sequence[str]] = None,
    default_url: Optional[str] = None,
    github_url_template: str = DEFAULT_GITHUB_KEYS_URL,
    timeout: Optional[float] = None,
) -> KeySource:
    """
    Pick the single active key source.
    
    With no source given, the configured default URL is used.
    
    Raises:
        KeySourceConflictError: More than one category selected, or none
            selected and no default URL configured
    """
    chosen: List[str] = [
        name
        for name, value in (("-g", github), ("-u", url), ("-f", file), ("-k", keys))
        if value
    ]
    if len(chosen) > 1:
        raise KeySourceConflictError(
            f"Key sources are mutually exclusive, got: {', '.join(chosen)}"
        )
    
    if github:
        return GitHubKeySource(github, github_url_template, timeout=timeout)
    if url:
        return UrlKeySource(url, timeout=timeout)
    if file:
        return FileKeySource(file)
    if keys:
        return InlineKeySource(keys)
    if not default_url:
        raise KeySourceConflictError("No key source given and no default URL configured")
    return UrlKeySource(default_url, timeout=timeout)
