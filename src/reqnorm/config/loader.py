"""Configuration loading from YAML/JSON files.

Values may reference environment variables:

- ``${VAR}``: required, fails when unset
- ``${VAR:-default}``: falls back to ``default``

Substitution runs on the parsed string values, so placeholders in comments
are ignored and substituted values stay strings.
"""

from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml

from reqnorm.config.models import FilterConfig
from reqnorm.config.validator import ConfigValidator
from reqnorm.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    EnvironmentVariableError,
)

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


class ConfigLoader:
    def __init__(self, env_vars: dict[str, str] | None = None):
        self.env_vars = env_vars if env_vars is not None else dict(os.environ)

    def _substitute_env_vars(self, text: str) -> str:
        def replace(match: re.Match[str]) -> str:
            name, default = match.group(1), match.group(2)
            if name in self.env_vars:
                return self.env_vars[name]
            if default is not None:
                return default
            raise EnvironmentVariableError(name)

        return ENV_VAR_PATTERN.sub(replace, text)

    def _substitute_values(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._substitute_env_vars(value)
        if isinstance(value, dict):
            return {k: self._substitute_values(v) for k, v in value.items()}
        if isinstance(value, list):
            return [self._substitute_values(v) for v in value]
        return value

    def load_file(self, path: str | Path) -> dict[str, Any]:
        """Read a config file into a dict, after variable substitution.

        The settings may sit at the top level or under a ``reqnorm`` key.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigFileNotFoundError(str(path))

        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ConfigurationError(
                f"Unsupported file format: {suffix}",
                context={"file_path": str(path)},
            )

        text = path.read_text(encoding="utf-8")
        try:
            if suffix == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Could not parse configuration file: {path}",
                context={"file_path": str(path)},
                cause=e,
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration root must be a mapping",
                context={"file_path": str(path)},
            )
        if isinstance(data.get("reqnorm"), dict):
            data = data["reqnorm"]
        data = self._substitute_values(data)
        logger.debug("Loaded configuration from %s", path)
        return data

    def load_from_file(self, path: str | Path, validate: bool = True) -> FilterConfig:
        config = FilterConfig.from_dict(self.load_file(path))
        if validate:
            ConfigValidator().validate_or_raise(config)
        return config


def load_config(path: str | Path, env_vars: dict[str, str] | None = None) -> FilterConfig:
    """Load and validate a FilterConfig from a file."""
    return ConfigLoader(env_vars=env_vars).load_from_file(path)
