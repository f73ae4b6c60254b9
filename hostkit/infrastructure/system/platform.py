"""
Platform adapter: package manager, service manager and hostname API

The host is probed once by `detect_platform()`; call sites use the
returned adapter instead of probing commands themselves.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ...core.exceptions import HostEnvironmentError, UnsupportedPlatformError
from ...core.interfaces import CommandRunner, PlatformAdapter
from ...core.logging import get_logger

logger = get_logger(__name__)


# ============================================================
# Package Managers
# ============================================================

@dataclass(frozen=True)
class PackageManager:
    name: str
    install: Tuple[str, ...]
    ssh_server_package: str
    refresh: Optional[Tuple[str, ...]] = None
    
    def install_argv(self, package: str) -> List[str]:
        return list(self.install) + [package]


PACKAGE_MANAGERS: Tuple[PackageManager, ...] = (
    PackageManager(
        name="apt-get",
        install=("env", "DEBIAN_FRONTEND=noninteractive", "apt-get", "install", "-y"),
        ssh_server_package="openssh-server",
        refresh=("apt-get", "update"),
    ),
    PackageManager(name="dnf", install=("dnf", "install", "-y"), ssh_server_package="openssh-server"),
    PackageManager(name="yum", install=("yum", "install", "-y"), ssh_server_package="openssh-server"),
    PackageManager(
        name="zypper",
        install=("zypper", "--non-interactive", "install"),
        ssh_server_package="openssh",
    ),
    PackageManager(name="pacman", install=("pacman", "-Sy", "--noconfirm"), ssh_server_package="openssh"),
    PackageManager(name="apk", install=("apk", "add"), ssh_server_package="openssh"),
)


# ============================================================
# Service Managers
# ============================================================

@dataclass(frozen=True)
class ServiceManager:
    name: str
    
    def enable_argv(self, service: str) -> List[str]:
        if self.name == "systemctl":
            return ["systemctl", "enable", service]
        if self.name == "rc-service":
            return ["rc-update", "add", service, "default"]
        return ["update-rc.d", service, "defaults"]
    
    def action_argv(self, service: str, action: str) -> List[str]:
        if self.name == "systemctl":
            if action == "reload":
                return ["systemctl", "try-reload-or-restart", service]
            return ["systemctl", action, service]
        if self.name == "rc-service":
            return ["rc-service", service, action]
        return ["service", service, action]


SERVICE_MANAGERS: Tuple[str, ...] = ("systemctl", "rc-service", "service")


# ============================================================
# Adapter
# ============================================================

class SystemPlatform(PlatformAdapter):
    """PlatformAdapter over the probed package and service managers"""
    
    def __init__(
        self,
        runner: CommandRunner,
        package_manager: Optional[PackageManager] = None,
        service_manager: Optional[ServiceManager] = None,
        hostname_tool: Optional[str] = None,
    ):
        self.runner = runner
        self.package_manager = package_manager
        self.service_manager = service_manager
        self.hostname_tool = hostname_tool
    
    @property
    def ssh_service_name(self) -> str:
        if self.package_manager and self.package_manager.name == "apt-get":
            return "ssh"
        return "sshd"
    
    @property
    def ssh_server_package(self) -> Optional[str]:
        if not self.package_manager:
            return None
        return self.package_manager.ssh_server_package
    
    def install_package(self, package: str) -> None:
        pm = self.package_manager
        if pm is None:
            raise UnsupportedPlatformError("No supported package manager found")
        
        if pm.refresh:
            self.runner.run(list(pm.refresh))
        
        logger.info(f"Installing {package} with {pm.name}")
        result = self.runner.run(pm.install_argv(package))
        if result.returncode != 0:
            raise HostEnvironmentError(
                f"{pm.name} failed to install {package}: {result.stderr.strip()}"
            )
    
    def _service_call(self, argv: List[str]) -> bool:
        result = self.runner.run(argv)
        if result.returncode != 0:
            logger.warning(f"Ignored failure: {' '.join(argv)} (exit {result.returncode})")
            return False
        return True
    
    def enable_service(self, name: str) -> bool:
        if not self.service_manager:
            return False
        return self._service_call(self.service_manager.enable_argv(name))
    
    def start_service(self, name: str) -> bool:
        if not self.service_manager:
            return False
        return self._service_call(self.service_manager.action_argv(name, "start"))
    
    def restart_service(self, name: str) -> bool:
        if not self.service_manager:
            return False
        return self._service_call(self.service_manager.action_argv(name, "restart"))
    
    def reload_service(self, name: str) -> bool:
        if not self.service_manager:
            return False
        if self._service_call(self.service_manager.action_argv(name, "reload")):
            return True
        return self.restart_service(name)
    
    def set_hostname(self, name: str) -> None:
        if self.hostname_tool == "hostnamectl":
            result = self.runner.run(["hostnamectl", "set-hostname", name])
            if result.returncode != 0:
                raise HostEnvironmentError(
                    f"hostnamectl set-hostname failed: {result.stderr.strip()}"
                )
        elif self.hostname_tool == "hostname":
            self._service_call(["hostname", name])
        else:
            logger.warning("Neither hostnamectl nor hostname found, running hostname unchanged")
    
    def current_hostname(self) -> str:
        candidates = []
        if self.hostname_tool == "hostnamectl":
            candidates.append(["hostnamectl", "--static"])
        if self.hostname_tool or self.runner.which("hostname"):
            candidates.append(["hostname"])
        
        for argv in candidates:
            result = self.runner.run(argv)
            if result.returncode == 0 and result.stdout.strip():
                return result.stdout.strip().splitlines()[0].strip()
        return ""


def detect_platform(runner: CommandRunner) -> SystemPlatform:
    """Probe package manager, service manager and hostname tool once"""
    package_manager = next(
        (pm for pm in PACKAGE_MANAGERS if runner.which(pm.name)), None
    )
    service_manager = next(
        (ServiceManager(name) for name in SERVICE_MANAGERS if runner.which(name)), None
    )
    hostname_tool = next(
        (tool for tool in ("hostnamectl", "hostname") if runner.which(tool)), None
    )
    
    logger.debug(
        f"Platform: package={package_manager.name if package_manager else None} "
        f"service={service_manager.name if service_manager else None} "
        f"hostname={hostname_tool}"
    )
    return SystemPlatform(runner, package_manager, service_manager, hostname_tool)
