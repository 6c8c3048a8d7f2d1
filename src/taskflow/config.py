"""Configuration management for TaskFlow."""

import json
from pathlib import Path
from typing import Any, Literal, Optional

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel, Field, ValidationError

from taskflow.utils.logger import get_logger

APP_NAME = "taskflow"


class BackendConfig(BaseModel):
    """Storage backend configuration."""

    type: Literal["local", "remote"] = Field(default="local")
    endpoint: str = Field(default="https://api.taskflow.app/v1")
    client_id: str = Field(default="")
    collection: str = Field(default="Tasks")
    timeout: int = Field(default=30)


class StorageConfig(BaseModel):
    """Local state file configuration."""

    path: Optional[str] = Field(default=None)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = Field(default="pretty")


class Config(BaseModel):
    """Main configuration."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class ConfigManager:
    """Manages TaskFlow configuration and stored session credentials."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.data_dir = Path(user_data_dir(APP_NAME))
        self.config_file = self.config_dir / f"{profile}.json"
        self.credentials_file = self.data_dir / f"{profile}.credentials.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def state_path(self) -> Path:
        """Path of the local state file holding tasks and preferences."""
        if self.config.storage.path:
            return Path(self.config.storage.path).expanduser()
        return self.data_dir / "state.json"

    @property
    def is_remote(self) -> bool:
        return self.config.backend.type == "remote"

    def load_config(self) -> Config:
        """Load configuration from file; a corrupt file falls back to defaults."""
        if not self.config_file.exists():
            return Config()
        try:
            return Config.model_validate_json(self.config_file.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            get_logger("config").warning(
                "Ignoring unreadable config %s: %s", self.config_file, e
            )
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        """Write the configuration to the profile file."""
        config = config or self.config
        self.config_file.write_text(config.model_dump_json(indent=2), encoding="utf-8")

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name an existing setting
            pydantic.ValidationError: If the value is not valid for the setting
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = Config()
            self.save_config()
            return

        default_config = Config()
        if not self.has_key(default_config, key):
            raise KeyError(key)
        self.set(key, self.get_from_config(default_config, key))

    def get_from_config(self, config: Config, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value

    @staticmethod
    def has_key(config: Config, key: str) -> bool:
        value: Any = config
        for k in key.split("."):
            if not isinstance(value, BaseModel) or k not in type(value).model_fields:
                return False
            value = getattr(value, k)
        return True

    def save_credentials(self, token: str, user: Optional[dict[str, Any]] = None) -> None:
        """Store the session token and signed-in user, readable by the owner only."""
        credentials: dict[str, Any] = {"token": token}
        if user:
            credentials["user"] = user
        self.credentials_file.write_text(json.dumps(credentials, indent=2), encoding="utf-8")
        self.credentials_file.chmod(0o600)

    def load_credentials(self) -> Optional[dict[str, Any]]:
        """Return the stored session, or None when signed out."""
        if not self.credentials_file.exists():
            return None
        try:
            credentials = json.loads(self.credentials_file.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            get_logger("config").warning("Ignoring unreadable credentials: %s", e)
            return None
        return credentials if isinstance(credentials, dict) else None

    def clear_credentials(self) -> None:
        """Forget the stored session."""
        self.credentials_file.unlink(missing_ok=True)


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager


def reset_config_manager() -> None:
    """Drop the cached config manager so the next call re-reads from disk."""
    global _config_manager
    _config_manager = None
