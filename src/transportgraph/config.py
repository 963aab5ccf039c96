"""Configuration management for TransportGraph."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigError


@dataclass
class InventoryConfig:
    """Where the NE inventory comes from and how its columns are named."""

    source: str = "inventory.csv"  # file path or http(s) URL
    timeout: float = 15.0
    ne_name_column: str = "NE Name"
    site_id_column: str = "Site ID"
    site_deps_column: str = "Site DEPS"
    lldp_column: str = "LLDP List"


@dataclass
class ApiConfig:
    """REST API server configuration."""

    host: str = "127.0.0.1"
    port: int = 5000


@dataclass
class Config:
    """Main configuration for TransportGraph."""

    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    verbose: bool = False

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from JSON file."""
        if not path.exists():
            return cls()

        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}", str(e)) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must hold a JSON object")

        config = cls()
        if "verbose" in data:
            config.verbose = bool(data["verbose"])

        for section in ("inventory", "api"):
            values = data.get(section, {})
            if not isinstance(values, dict):
                raise ConfigError(f"Config section '{section}' must be a JSON object")
            for key, value in values.items():
                target = getattr(config, section)
                if hasattr(target, key):
                    setattr(target, key, value)

        return config

    def save(self, path: Path) -> None:
        """Save configuration to JSON file."""
        data = {
            "verbose": self.verbose,
            "inventory": {
                "source": self.inventory.source,
                "timeout": self.inventory.timeout,
                "ne_name_column": self.inventory.ne_name_column,
                "site_id_column": self.inventory.site_id_column,
                "site_deps_column": self.inventory.site_deps_column,
                "lldp_column": self.inventory.lldp_column,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
            },
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)


_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config_path = Path(os.environ.get("TRANSPORTGRAPH_CONFIG", ".transportgraph.json"))
        _config = Config.from_file(config_path)
        source = os.environ.get("TRANSPORTGRAPH_INVENTORY")
        if source:
            _config.inventory.source = source
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (None re-reads on next access)."""
    global _config
    _config = config
