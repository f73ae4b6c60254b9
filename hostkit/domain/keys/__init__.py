"""
Key provisioning domain module
"""
from .models import KeyProvisionReport, KeyProvisionRequest, MergeResult, PublicKey
from .filter import filter_keys, is_key_line
from .merge import merge_keys
from .sources import (
    FileKeySource,
    GitHubKeySource,
    InlineKeySource,
    UrlKeySource,
    select_source,
)
from .service import KeyProvisioningService

__all__ = [
    "KeyProvisionReport",
    "KeyProvisionRequest",
    "MergeResult",
    "PublicKey",
    "filter_keys",
    "is_key_line",
    "merge_keys",
    "FileKeySource",
    "GitHubKeySource",
    "InlineKeySource",
    "UrlKeySource",
    "select_source",
    "KeyProvisioningService",
]
