"""
Local account lookup
"""
import getpass
import os
import pwd
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ...core.exceptions import UnknownUserError


@dataclass(frozen=True)
class Account:
    name: str
    uid: int
    gid: int
    home: Path


def lookup_account(name: str) -> Account:
    try:
        entry = pwd.getpwnam(name)
    except KeyError:
        raise UnknownUserError(f"User does not exist: {name}") from None
    return Account(name=entry.pw_name, uid=entry.pw_uid, gid=entry.pw_gid, home=Path(entry.pw_dir))


def default_target_user(environ: Optional[Mapping[str, str]] = None) -> str:
    """`$SUDO_USER` when escalated from a non-root account, else the invoking user"""
    env = os.environ if environ is None else environ
    sudo_user = env.get("SUDO_USER", "")
    if sudo_user and sudo_user != "root":
        return sudo_user
    return getpass.getuser()
