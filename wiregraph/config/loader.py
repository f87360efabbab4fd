"""Settings loading utilities.

Sources, lowest priority first:
- built-in defaults
- a YAML file
- ``WIREGRAPH_*`` environment variables
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

try:
    from yaml import CSafeLoader as YamlLoader
except ImportError:
    from yaml import SafeLoader as YamlLoader

ENV_PREFIX = "WIREGRAPH_"


class ConfigurationLoader:
    """Utility class for loading settings from files and the environment."""

    def load_yaml(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Load settings from a YAML file.

        Args:
            path: Path to YAML file

        Returns:
            Settings dictionary

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If YAML is invalid or not a mapping
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.load(f, Loader=YamlLoader) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(content, dict):
            raise ValueError(f"Configuration file must contain a dictionary: {path}")

        return content

    def merge_configs(self, base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
        """Deep-merge ``override`` into a copy of ``base``."""
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self.merge_configs(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Collect ``WIREGRAPH_*`` variables as lower-cased setting names.

        ``WIREGRAPH_LOG_LEVEL=DEBUG`` becomes ``{"log_level": "DEBUG"}``.
        """
        environ = os.environ if environ is None else environ
        overrides = {}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            overrides[key[len(ENV_PREFIX):].lower()] = self.convert_env_value(value)

        return overrides

    @staticmethod
    def convert_env_value(value: str) -> Union[str, int, float, bool]:
        """Convert an environment variable string to the closest scalar type."""
        if value.lower() in ("true", "false"):
            return value.lower() == "true"

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value
