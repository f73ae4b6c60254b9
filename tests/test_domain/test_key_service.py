"""Tests for key provisioning and sshd hardening services."""

import os
from pathlib import Path

import pytest

from hostkit.core.exceptions import (
    EmptyKeySetError,
    MissingFileError,
    PrivilegeError,
    SshdConfigError,
    UnsupportedPlatformError,
)
from hostkit.domain.keys import InlineKeySource, KeyProvisioningService, KeyProvisionRequest
from hostkit.domain.sshd import SshdService
from hostkit.infrastructure.system import Account

from conftest import FakeRunner

A = "ssh-ed25519 AAAA a"
B = "ssh-ed25519 BBBB b"
C = "ssh-ed25519 CCCC c"


def _account(name: str) -> Account:
    return Account(name=name, uid=os.getuid(), gid=os.getgid(), home=Path("/home") / name)


def _service(ctx, **callbacks) -> KeyProvisioningService:
    return KeyProvisioningService(
        ctx,
        SshdService(ctx, service_name=ctx.platform.ssh_service_name),
        ssh_server_package=ctx.platform.ssh_server_package,
        account_lookup=_account,
        **callbacks,
    )


def _request(*keys: str, **options) -> KeyProvisionRequest:
    return KeyProvisionRequest(source=InlineKeySource(list(keys)), target_user="alice", **options)


@pytest.fixture
def ssh_runner() -> FakeRunner:
    """systemd host with sshd already installed."""
    return FakeRunner(available={"apt-get", "systemctl", "sshd"})


@pytest.fixture
def authorized(rootfs: Path) -> Path:
    return rootfs / "home" / "alice" / ".ssh" / "authorized_keys"


def test_provision_creates_files_with_modes(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    added = []

    with make_ctx(ssh_runner) as ctx:
        report = _service(ctx, on_key_added=added.append).provision(_request(A, B))

    assert report.added == 2
    assert report.authorized_keys == authorized
    assert authorized.read_text() == f"{A}\n{B}\n"
    assert authorized.stat().st_mode & 0o777 == 0o600
    assert authorized.parent.stat().st_mode & 0o777 == 0o700
    assert [k.line for k in added] == [A, B]
    assert report.backup is None


def test_provision_appends_only_new_keys(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    authorized.parent.mkdir(parents=True)
    authorized.write_text(f"# team keys\n{A}\n")

    with make_ctx(ssh_runner) as ctx:
        report = _service(ctx).provision(_request(A, C))

    assert report.added == 1
    assert authorized.read_text() == f"# team keys\n{A}\n{C}\n"
    assert report.backup is not None
    assert report.backup.read_text() == f"# team keys\n{A}\n"


def test_provision_existing_key_is_noop(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    authorized.parent.mkdir(parents=True)
    authorized.write_text(f"{A}\n")

    with make_ctx(ssh_runner) as ctx:
        report = _service(ctx).provision(_request(A))

    assert report.added == 0
    assert authorized.read_text() == f"{A}\n"
    assert list(authorized.parent.glob("*.bak.*")) == []


def test_overwrite_backs_up_and_rebuilds(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    authorized.parent.mkdir(parents=True)
    authorized.write_text(f"{A}\n{B}\n")

    with make_ctx(ssh_runner) as ctx:
        report = _service(ctx).provision(_request(B, C, overwrite=True))

    assert report.added == 2
    assert authorized.read_text() == f"{B}\n{C}\n"
    assert report.backup.read_text() == f"{A}\n{B}\n"


def test_empty_source_fails_before_changes(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    with make_ctx(ssh_runner) as ctx, pytest.raises(EmptyKeySetError):
        _service(ctx).provision(_request("not a key"))

    assert not authorized.parent.exists()
    assert ssh_runner.calls == []


def test_requires_privilege(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    with make_ctx(ssh_runner, privileged=False) as ctx, pytest.raises(PrivilegeError):
        _service(ctx).provision(_request(A))

    assert not authorized.parent.exists()


def test_dry_run_reads_keys_only(make_ctx, ssh_runner: FakeRunner, authorized: Path) -> None:
    with make_ctx(ssh_runner, dry_run=True) as ctx:
        report = _service(ctx).provision(_request(A, B))

    assert len(report.keys) == 2
    assert report.added == 0
    assert not authorized.parent.exists()
    assert ssh_runner.calls == []


def test_daemon_started_when_present(make_ctx, ssh_runner: FakeRunner) -> None:
    with make_ctx(ssh_runner) as ctx:
        report = _service(ctx).provision(_request(A))

    assert report.daemon_installed is False
    assert ssh_runner.ran("systemctl", "enable", "ssh")
    assert ssh_runner.ran("systemctl", "start", "ssh")
    assert not any(call[0] == "env" for call in ssh_runner.calls)


def test_daemon_installed_when_missing(make_ctx) -> None:
    runner = FakeRunner(available={"dnf", "systemctl"})
    installed = []

    with make_ctx(runner) as ctx:
        report = _service(ctx, on_daemon_installed=lambda: installed.append(True)).provision(_request(A))

    assert report.daemon_installed is True
    assert installed == [True]
    assert runner.ran("dnf", "install", "-y", "openssh-server")
    assert runner.ran("systemctl", "start", "sshd")


def test_daemon_missing_without_package_manager(make_ctx) -> None:
    with make_ctx(FakeRunner(available={"systemctl"})) as ctx, pytest.raises(UnsupportedPlatformError):
        _service(ctx).provision(_request(A))


def test_service_failures_do_not_abort(make_ctx, authorized: Path) -> None:
    runner = FakeRunner(available={"apt-get", "systemctl", "sshd", "restorecon"}, failing={"systemctl", "restorecon"})

    with make_ctx(runner) as ctx:
        report = _service(ctx).provision(_request(A))

    assert report.added == 1
    assert runner.ran("restorecon", "-R", str(authorized.parent))


SSHD_CONFIG = """\
Include /etc/ssh/sshd_config.d/*.conf
#PasswordAuthentication yes
PasswordAuthentication yes
UsePAM yes
Match User deploy
    PasswordAuthentication yes
"""


@pytest.fixture
def sshd_config(rootfs: Path) -> Path:
    path = rootfs / "etc" / "ssh" / "sshd_config"
    path.parent.mkdir(parents=True)
    path.write_text(SSHD_CONFIG)
    return path


def test_disable_password_hardens_sshd(make_ctx, ssh_runner: FakeRunner, sshd_config: Path) -> None:
    with make_ctx(ssh_runner) as ctx:
        report = _service(ctx).provision(_request(A, disable_password=True))

    assert report.hardened is True
    assert sshd_config.read_text() == (
        "Include /etc/ssh/sshd_config.d/*.conf\n"
        "UsePAM yes\n"
        "PubkeyAuthentication yes\n"
        "PasswordAuthentication no\n"
        "ChallengeResponseAuthentication no\n"
        "KbdInteractiveAuthentication no\n"
        "Match User deploy\n"
        "    PasswordAuthentication yes\n"
    )
    assert [b.read_text() for b in sshd_config.parent.glob("sshd_config.bak.*")] == [SSHD_CONFIG]
    assert any(call[:2] == ["/usr/bin/sshd", "-t"] for call in ssh_runner.calls)
    assert ssh_runner.ran("systemctl", "try-reload-or-restart", "ssh")


def test_harden_is_idempotent(make_ctx, ssh_runner: FakeRunner, sshd_config: Path) -> None:
    with make_ctx(ssh_runner) as ctx:
        sshd = SshdService(ctx)
        assert sshd.harden() is True
        first = sshd_config.read_text()
        assert sshd.harden() is False

    assert sshd_config.read_text() == first


def test_rejected_config_keeps_original(make_ctx, sshd_config: Path) -> None:
    runner = FakeRunner(available={"systemctl", "sshd"}, failing={"/usr/bin/sshd"})

    with pytest.raises(SshdConfigError):
        with make_ctx(runner) as ctx:
            SshdService(ctx).harden()

    assert sshd_config.read_text() == SSHD_CONFIG
    assert [p.name for p in sshd_config.parent.iterdir() if not p.name.startswith("sshd_config.bak.")] == [
        "sshd_config"
    ]
    assert not any(call[0] == "systemctl" for call in runner.calls)


def test_harden_missing_config(make_ctx, ssh_runner: FakeRunner) -> None:
    with make_ctx(ssh_runner) as ctx, pytest.raises(MissingFileError):
        SshdService(ctx).harden()
