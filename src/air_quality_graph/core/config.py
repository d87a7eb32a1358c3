"""
Configuration module for the air quality graph service.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, List, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # API configuration
        if os.getenv("API_BASE_URL"):
            self.config.setdefault("api", {})["base_url"] = os.getenv("API_BASE_URL")

        # Storage
        if os.getenv("STORAGE_PATH"):
            self.config.setdefault("storage", {})["path"] = os.getenv("STORAGE_PATH")

        # Devices (comma-separated serial numbers)
        if os.getenv("DEVICES"):
            self.config["devices"] = [
                sn.strip() for sn in os.getenv("DEVICES", "").split(",") if sn.strip()
            ]

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "api": ["base_url", "timeout", "max_retries"],
            "storage": ["path"],
        }

        missing_sections = []
        for section in required_config.keys():
            if section not in self.config:
                missing_sections.append(section)

        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if key not in self.config[section]:
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        devices = self.config.get("devices")
        if not isinstance(devices, list) or not devices:
            raise ValueError("Configuration must include a non-empty 'devices' list")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_base_url(self) -> str:
        """Get API base URL."""
        return self.get("api.base_url", constants.DEFAULT_BASE_URL)

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", 30)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("api.max_retries", 3)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def api_limit(self) -> int:
        """Get the default 'limit' query parameter."""
        return self.get("api.limit", constants.DEFAULT_LIMIT)

    @property
    def api_key_env(self) -> str:
        """Get name of the environment variable holding the API key."""
        return self.get("authentication.api_key_env", constants.DEFAULT_API_KEY_ENV)

    @property
    def api_key(self) -> Optional[str]:
        """Get API key from the environment, falling back to the config file."""
        return os.getenv(self.api_key_env) or self.get("authentication.api_key")

    @property
    def auth_password(self) -> str:
        """Get basic auth password (the device API currently takes none)."""
        return self.get("authentication.password", "")

    @property
    def storage_path(self) -> str:
        """Get path of the JSON state store."""
        return self.get("storage.path", constants.DEFAULT_STORAGE_PATH)

    @property
    def devices(self) -> List[str]:
        """Get device serial numbers to process."""
        return list(self.get("devices", []))

    @property
    def max_workers(self) -> int:
        """Get number of devices processed concurrently."""
        return self.get("processing.max_workers", constants.DEFAULT_MAX_WORKERS)

    @property
    def archive_data(self) -> bool:
        """Check if fetched data points should be archived under {sn}/data."""
        return self.get("processing.archive_data", True)

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
