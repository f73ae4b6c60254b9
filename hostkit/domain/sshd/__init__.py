"""
sshd domain module
"""
from .patcher import HARDENING_OPTIONS, set_global_option, set_global_options
from .service import SshdService, find_sshd

__all__ = [
    "HARDENING_OPTIONS",
    "set_global_option",
    "set_global_options",
    "SshdService",
    "find_sshd",
]
