"""Tests for configuration manager."""

from pathlib import Path

import pytest  # type: ignore[import-not-found]
import yaml  # type: ignore[import-untyped]

from harvest_client.core.config import ConfigManager
from harvest_client.core.errors import ConfigurationError


class TestConfigManager:
    """Test ConfigManager."""

    def test_initialization_creates_default_config(self, temp_config_path: Path) -> None:
        """Test that initialization creates default configuration."""
        assert not temp_config_path.exists()

        config = ConfigManager(temp_config_path)

        assert temp_config_path.exists()
        assert config.get("version") == "1.0"
        assert config.get("harvest.account") is None
        assert config.get("http.timeout") == 30
        assert config.get("logging.level") == "WARNING"

    def test_load_existing_config(self, temp_config_path: Path) -> None:
        """Test loading existing configuration."""
        config_data = {
            "version": "1.0",
            "harvest": {"account": "acme", "access_token": "abc"},
            "http": {"timeout": 5},
        }

        with open(temp_config_path, "w") as f:
            yaml.dump(config_data, f)

        config = ConfigManager(temp_config_path)

        assert config.get("harvest.account") == "acme"
        assert config.get("harvest.access_token") == "abc"
        assert config.get("http.timeout") == 5

    def test_merge_with_defaults(self, temp_config_path: Path) -> None:
        """Test that partial config is merged with defaults."""
        with open(temp_config_path, "w") as f:
            yaml.dump({"version": "1.0", "harvest": {"account": "acme"}}, f)

        config = ConfigManager(temp_config_path)

        assert config.get("harvest.account") == "acme"

        # Default values should still be present
        assert config.get("http.timeout") == 30
        assert config.get("display.show_ids") is True
        assert config.get("display.date_format") == "%Y-%m-%d"

    def test_get_nonexistent_key_returns_default(self, temp_config_path: Path) -> None:
        """Test getting nonexistent key returns default."""
        config = ConfigManager(temp_config_path)

        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "default") == "default"
        assert config.get("harvest.account", "fallback") == "fallback"

    def test_set_value_persists(self, temp_config_path: Path) -> None:
        """Test setting configuration values."""
        config = ConfigManager(temp_config_path)

        config.set("http.timeout", 10)

        assert config.get("http.timeout") == 10
        assert ConfigManager(temp_config_path).get("http.timeout") == 10

    def test_set_nested_value(self, temp_config_path: Path) -> None:
        """Test setting nested values."""
        config = ConfigManager(temp_config_path)

        config.set("harvest.oauth.client_id", "client123")

        assert config.get("harvest.oauth.client_id") == "client123"

    def test_set_creates_missing_keys(self, temp_config_path: Path) -> None:
        """Test that set creates missing intermediate keys."""
        config = ConfigManager(temp_config_path)

        config.set("custom.nested.value", "test")

        assert config.get("custom.nested.value") == "test"

    def test_validate_valid_config(self, temp_config_path: Path) -> None:
        """Test validation of valid configuration."""
        config = ConfigManager(temp_config_path)

        assert config.validate() is True

    def test_invalid_account_rejected(self, temp_config_path: Path) -> None:
        """Test that an account with URL characters is rejected."""
        config = ConfigManager(temp_config_path)

        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            config.set("harvest.account", "acme.harvestapp.com/")

    def test_configuration_error_is_value_error(self, temp_config_path: Path) -> None:
        """Test that configuration errors can be caught as ValueError."""
        config = ConfigManager(temp_config_path)

        with pytest.raises(ValueError):
            config.set("logging.level", "TRACE")

    def test_timeout_range(self, temp_config_path: Path) -> None:
        """Test HTTP timeout range validation."""
        config = ConfigManager(temp_config_path)

        config.set("http.timeout", 0.5)
        config.set("http.timeout", 600)

        with pytest.raises(ConfigurationError):
            config.set("http.timeout", 0)

        with pytest.raises(ConfigurationError):
            config.set("http.timeout", 601)

    def test_reset_to_defaults(self, temp_config_path: Path) -> None:
        """Test resetting configuration to defaults."""
        config = ConfigManager(temp_config_path)
        config.set("harvest.account", "acme")

        config.reset()

        assert config.get("harvest.account") is None

    def test_to_dict_is_copy(self, temp_config_path: Path) -> None:
        """Test converting config to dictionary."""
        config = ConfigManager(temp_config_path)

        config_dict = config.to_dict()
        config_dict["version"] = "9.9"

        assert config.get("version") == "1.0"

    def test_to_dict_redacts_token(self, configured: ConfigManager) -> None:
        """Test that the access token is masked on request."""
        assert configured.to_dict()["harvest"]["access_token"] == "secret-token"
        assert configured.to_dict(redact=True)["harvest"]["access_token"] == "***"

    def test_get_all_keys(self, temp_config_path: Path) -> None:
        """Test getting all configuration keys."""
        keys = ConfigManager(temp_config_path).get_all_keys()

        assert "version" in keys
        assert "harvest.account" in keys
        assert "harvest.oauth.redirect_uri" in keys
        assert "http.timeout" in keys
        assert "logging.file" in keys

    def test_corrupted_config_creates_backup(self, temp_config_path: Path) -> None:
        """Test that corrupted config is backed up and defaults used."""
        with open(temp_config_path, "w") as f:
            yaml.dump({"version": "1.0", "http": {"timeout": -1}}, f)

        backup_path = temp_config_path.with_suffix(".yml.backup")

        with pytest.raises(ConfigurationError, match="Config validation failed"):
            ConfigManager(temp_config_path)

        assert backup_path.exists()
        with open(temp_config_path) as f:
            assert yaml.safe_load(f)["http"]["timeout"] == 30

    def test_credentials(self, configured: ConfigManager) -> None:
        """Test reading account and token together."""
        assert configured.credentials() == ("acme", "secret-token")

    def test_credentials_missing(self, temp_config_path: Path) -> None:
        """Test that missing credentials raise ConfigurationError."""
        config = ConfigManager(temp_config_path)
        config.set("harvest.account", "acme")

        with pytest.raises(ConfigurationError, match="credentials not configured"):
            config.credentials()

    def test_config_file_format(self, temp_config_path: Path) -> None:
        """Test that config file is saved in block-style YAML."""
        config = ConfigManager(temp_config_path)
        config.set("display.show_ids", False)

        content = temp_config_path.read_text()

        assert yaml.safe_load(content)["display"]["show_ids"] is False
        assert "show_ids: false" in content
