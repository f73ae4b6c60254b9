"""
Configuration loader with priority: CLI > env > TOML > defaults
"""
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.constants import (
    DEFAULT_GITHUB_KEYS_URL,
    DEFAULT_KEYS_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ROOT,
    ENV_PREFIX,
)
from ...core.exceptions import ConfigError


@dataclass
class Settings:
    """
    Effective configuration.
    
    Attributes:
        root: Filesystem prefix every managed path is resolved against
        keys_url: Key list fetched when no key source flag is given
        github_keys_url: GitHub key URL template, `{user}` is substituted
        fetch_timeout: Seconds to wait for key downloads, None blocks
        log_level: Logging level name
        log_file: Optional log file
    """
    root: str = DEFAULT_ROOT
    keys_url: str = DEFAULT_KEYS_URL
    github_keys_url: str = DEFAULT_GITHUB_KEYS_URL
    fetch_timeout: Optional[float] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        
        settings = cls(**data)
        if settings.fetch_timeout is not None:
            try:
                settings.fetch_timeout = float(settings.fetch_timeout)
            except (TypeError, ValueError):
                raise ConfigError(f"fetch_timeout must be a number: {settings.fetch_timeout!r}")
        if "{user}" not in settings.github_keys_url:
            raise ConfigError("github_keys_url must contain '{user}'")
        return settings


class ConfigLoader:
    """Configuration loader with priority support"""
    
    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._env_prefix = ENV_PREFIX
        self._environ = os.environ if environ is None else environ
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file"""
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        
        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e
        
        # Settings may sit at top level or under [hostkit]
        return data.get("hostkit", data)
    
    def load_env(self) -> Dict[str, Any]:
        """Load configuration from HOSTKIT_* environment variables"""
        config = {}
        for field in fields(Settings):
            value = self._environ.get(self._env_prefix + field.name.upper())
            if value:
                config[field.name] = value
        return config
    
    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones.
        """
        result: Dict[str, Any] = {}
        for config in configs:
            result.update({k: v for k, v in config.items() if v is not None})
        return result
    
    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Settings:
        """
        Load settings with priority: CLI > env > TOML > defaults
        
        Args:
            toml_path: Path to TOML configuration file
            cli_overrides: CLI parameter overrides
            use_env: Whether to load from environment variables
        
        Returns:
            Settings instance
        """
        configs = []
        
        # 1. Load TOML if provided
        if toml_path:
            configs.append(self.load_toml(toml_path))
        
        # 2. Load environment variables
        if use_env:
            configs.append(self.load_env())
        
        # 3. Apply CLI overrides (highest priority)
        if cli_overrides:
            configs.append(cli_overrides)
        
        return Settings.from_dict(self.merge_configs(*configs))
