"""Configuration management for the Harvest client."""

import copy
from pathlib import Path
from typing import Any, Optional

import yaml  # type: ignore[import-untyped]
from jsonschema import ValidationError, validate  # type: ignore[import-untyped]

from harvest_client.core.errors import ConfigurationError


class ConfigManager:
    """Manage client configuration."""

    DEFAULT_CONFIG = {
        "version": "1.0",
        "harvest": {
            "account": None,
            "access_token": None,
            "oauth": {
                "client_id": None,
                "redirect_uri": None,
            },
        },
        "http": {
            "timeout": 30,
            "user_agent": None,
        },
        "logging": {
            "level": "WARNING",
            "file": None,
        },
        "display": {
            "date_format": "%Y-%m-%d",
            "show_ids": True,
        },
    }

    CONFIG_SCHEMA = {
        "type": "object",
        "properties": {
            "version": {"type": "string"},
            "harvest": {
                "type": "object",
                "properties": {
                    "account": {"type": ["string", "null"], "pattern": "^[A-Za-z0-9-]+$"},
                    "access_token": {"type": ["string", "null"]},
                    "oauth": {
                        "type": "object",
                        "properties": {
                            "client_id": {"type": ["string", "null"]},
                            "redirect_uri": {"type": ["string", "null"]},
                        },
                    },
                },
            },
            "http": {
                "type": "object",
                "properties": {
                    "timeout": {"type": "number", "exclusiveMinimum": 0, "maximum": 600},
                    "user_agent": {"type": ["string", "null"]},
                },
            },
            "logging": {
                "type": "object",
                "properties": {
                    "level": {
                        "type": "string",
                        "enum": ["DEBUG", "INFO", "WARNING", "ERROR"],
                    },
                    "file": {"type": ["string", "null"]},
                },
            },
            "display": {
                "type": "object",
                "properties": {
                    "date_format": {"type": "string"},
                    "show_ids": {"type": "boolean"},
                },
            },
        },
        "required": ["version"],
    }

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to config file. Defaults to ~/.harvest-client/config.yml
        """
        if config_path is None:
            config_path = Path.home() / ".harvest-client" / "config.yml"
        self.config_path = config_path
        self._config: dict[str, Any] = {}
        self._load_or_create()

    def _load_or_create(self) -> None:
        """Load existing config or create default."""
        if self.config_path.exists():
            with open(self.config_path, encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f) or {}
            self._config = self._merge_with_defaults(loaded_config)
            try:
                self.validate()
            except ConfigurationError as e:
                # Keep the broken file around and carry on with defaults
                backup_path = self.config_path.with_suffix(".yml.backup")
                self.config_path.rename(backup_path)
                self._config = copy.deepcopy(self.DEFAULT_CONFIG)
                self.save()
                raise ConfigurationError(
                    f"Config validation failed, backed up to {backup_path}. "
                    f"Using defaults. Error: {e}"
                )
        else:
            self._config = copy.deepcopy(self.DEFAULT_CONFIG)
            self.save()

    def _merge_with_defaults(self, config: dict[str, Any]) -> dict[str, Any]:
        """Merge config with defaults to ensure all keys exist."""
        result = copy.deepcopy(self.DEFAULT_CONFIG)
        self._deep_merge(result, config)
        return result

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> None:
        """Deep merge override into base dictionary (in-place)."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., 'harvest.account')
            default: Default value if key not found or unset

        Returns:
            Configuration value or default

        Example:
            >>> config.get('http.timeout')
            30
            >>> config.get('nonexistent.key', 'default')
            'default'
        """
        keys = key.split(".")
        value: Any = self._config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
            if value is None:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value using dot notation and persist it.

        Raises:
            ConfigurationError: If configuration is invalid after setting
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if not isinstance(config.get(k), dict):
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
        self.validate()
        self.save()

    def validate(self) -> bool:
        """Validate configuration against schema.

        Returns:
            True if valid

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            validate(instance=self._config, schema=self.CONFIG_SCHEMA)
            return True
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e.message}")

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            yaml.dump(
                self._config, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )

    def reset(self) -> None:
        """Reset to default configuration."""
        self._config = copy.deepcopy(self.DEFAULT_CONFIG)
        self.save()

    def to_dict(self, redact: bool = False) -> dict[str, Any]:
        """Get full configuration as dictionary.

        Args:
            redact: Mask the stored access token

        Returns:
            Copy of configuration dictionary
        """
        result = copy.deepcopy(self._config)
        if redact and result.get("harvest", {}).get("access_token"):
            result["harvest"]["access_token"] = "***"
        return result

    def get_all_keys(self, prefix: str = "") -> list[str]:
        """Get all configuration keys in dot notation.

        Example:
            >>> config.get_all_keys()
            ['version', 'harvest.account', 'harvest.access_token', ...]
        """
        keys = []
        config = self._config if not prefix else self.get(prefix, {})

        if isinstance(config, dict):
            for key, value in config.items():
                full_key = f"{prefix}.{key}" if prefix else key
                if isinstance(value, dict):
                    keys.extend(self.get_all_keys(full_key))
                else:
                    keys.append(full_key)
        return keys

    def credentials(self) -> tuple[str, str]:
        """Return the configured account subdomain and access token.

        Raises:
            ConfigurationError: If either value is missing
        """
        account: Optional[str] = self.get("harvest.account")
        token: Optional[str] = self.get("harvest.access_token")
        if not account or not token:
            raise ConfigurationError(
                "Harvest credentials not configured. Set harvest.account and "
                "harvest.access_token (see 'harvest auth url')."
            )
        return account, token
