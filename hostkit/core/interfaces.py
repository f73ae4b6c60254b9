"""
Core interfaces for dependency injection
"""
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional


class CommandRunner(ABC):
    """Local command execution interface"""
    
    @abstractmethod
    def run(self, cmd: List[str], check: bool = False) -> subprocess.CompletedProcess:
        """Run a command and capture its output"""
        pass
    
    @abstractmethod
    def which(self, name: str) -> Optional[str]:
        """Locate an executable on PATH, None if absent"""
        pass


class PlatformAdapter(ABC):
    """Package, service and hostname capabilities of the running OS"""
    
    @property
    @abstractmethod
    def ssh_service_name(self) -> str:
        """Service unit name of the SSH daemon"""
        pass
    
    @property
    @abstractmethod
    def ssh_server_package(self) -> Optional[str]:
        """Package providing the SSH daemon, None if unknown"""
        pass
    
    @abstractmethod
    def install_package(self, package: str) -> None:
        """Install a package, raise on failure"""
        pass
    
    @abstractmethod
    def enable_service(self, name: str) -> bool:
        """Enable a service at boot (best effort)"""
        pass
    
    @abstractmethod
    def start_service(self, name: str) -> bool:
        """Start a service (best effort)"""
        pass
    
    @abstractmethod
    def restart_service(self, name: str) -> bool:
        """Restart a service (best effort)"""
        pass
    
    @abstractmethod
    def reload_service(self, name: str) -> bool:
        """Reload a service, falling back to restart (best effort)"""
        pass
    
    @abstractmethod
    def set_hostname(self, name: str) -> None:
        """Set the running system hostname"""
        pass
    
    @abstractmethod
    def current_hostname(self) -> str:
        """Return the static hostname, empty string if unknown"""
        pass


class KeySource(ABC):
    """Origin of public key material"""
    
    @abstractmethod
    def describe(self) -> str:
        """Human readable source description"""
        pass
    
    @abstractmethod
    def read(self) -> str:
        """Return the raw key text"""
        pass
