"""
Generator settings.

Settings come from built-in defaults, an optional JSON file and CLI
overrides, merged in that order.
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """A configuration file is missing, unreadable or malformed."""

    pass


@dataclass
class GeneratorConfig:
    """Configuration for a generation run."""

    # Output settings
    output_file: Optional[str] = None

    # Import root of the runtime package used by generated clients
    runtime_package: str = "shapegen.runtime"

    # Emit shape and member documentation as doc strings
    add_comments: bool = True

    # Append the generated test section to the module
    generate_tests: bool = True


DEFAULT_CONFIG: Dict[str, Any] = {
    "runtime_package": "shapegen.runtime",
    "add_comments": True,
    "generate_tests": True,
}


class ConfigManager:
    """Merges defaults, config files and overrides into a GeneratorConfig."""

    def __init__(self, defaults: Optional[Dict[str, Any]] = None):
        self._defaults = dict(defaults or DEFAULT_CONFIG)

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Build a configuration from defaults, a JSON file and overrides.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Read a JSON object of settings."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {str(e)}")
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {str(e)}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Reject keys GeneratorConfig does not define."""
        known_fields = {f.name for f in fields(GeneratorConfig)}
        unknown = sorted(set(config_dict) - known_fields)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return GeneratorConfig(**config_dict)

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        parts = config.runtime_package.split(".")
        if not all(part.isidentifier() for part in parts):
            warnings.append(f"Invalid runtime_package: {config.runtime_package}")

        if config.output_file and not config.output_file.endswith(".py"):
            warnings.append(f"Output file is not a Python module: {config.output_file}")

        return warnings


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Build a GeneratorConfig with the default manager.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return ConfigManager().get_config(custom_config, config_file)
