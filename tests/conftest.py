"""Shared fixtures: fake command runner and a scratch root filesystem."""

import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from hostkit.core.context import ExecutionContext
from hostkit.core.interfaces import CommandRunner
from hostkit.infrastructure.system.platform import detect_platform


class FakeRunner(CommandRunner):
    """Records commands instead of running them."""

    def __init__(
        self,
        available: Iterable[str] = (),
        outputs: Optional[Dict[Tuple[str, ...], str]] = None,
        failing: Iterable[str] = (),
    ) -> None:
        self.available = set(available)
        self.outputs = outputs or {}
        self.failing = set(failing)
        self.calls: List[List[str]] = []

    def run(self, cmd: List[str], check: bool = False) -> subprocess.CompletedProcess:
        self.calls.append(list(cmd))
        failed = cmd[0] in self.failing or " ".join(cmd) in self.failing
        return subprocess.CompletedProcess(
            list(cmd),
            1 if failed else 0,
            self.outputs.get(tuple(cmd), ""),
            "simulated failure" if failed else "",
        )

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.available else None

    def ran(self, *cmd: str) -> bool:
        return list(cmd) in self.calls


@pytest.fixture
def rootfs(tmp_path: Path) -> Path:
    """Empty root filesystem with /etc."""
    root = tmp_path / "root"
    (root / "etc").mkdir(parents=True)
    return root


@pytest.fixture
def debian_runner() -> FakeRunner:
    """Runner for a systemd Debian-like host whose hostname is `oldhost`."""
    return FakeRunner(
        available={"hostnamectl", "hostname", "systemctl", "apt-get"},
        outputs={("hostnamectl", "--static"): "oldhost\n", ("hostname",): "oldhost\n"},
    )


@pytest.fixture
def make_ctx(rootfs: Path):
    """Build an ExecutionContext rooted at rootfs."""

    def _make(runner: FakeRunner, dry_run: bool = False, privileged: bool = True) -> ExecutionContext:
        return ExecutionContext(
            root=rootfs,
            runner=runner,
            platform=detect_platform(runner),
            dry_run=dry_run,
            privileged=privileged,
        )

    return _make
