"""Tests for configuration loader."""

from __future__ import annotations

import json

import pytest
import yaml

from reqnorm.config.loader import ConfigLoader, load_config
from reqnorm.config.models import FilterConfig
from reqnorm.exceptions import (
    ConfigFileNotFoundError,
    ConfigurationError,
    ConfigValidationError,
    EnvironmentVariableError,
)


def test_config_loader_initialization():
    """Test ConfigLoader initialization."""
    loader = ConfigLoader()
    assert loader.env_vars is not None


def test_config_loader_with_custom_env():
    """Test ConfigLoader with custom environment variables."""
    env_vars = {"TEST_VAR": "test_value"}
    loader = ConfigLoader(env_vars=env_vars)
    assert loader.env_vars == env_vars


def test_substitute_env_vars_with_defaults():
    """Test environment variable substitution with default values."""
    loader = ConfigLoader(env_vars={})

    result = loader._substitute_env_vars("format: ${MISSING_VAR:-json}")
    assert result == "format: json"

    result = loader._substitute_env_vars("${A:-json}, ${B:-xml}")
    assert result == "json, xml"


def test_substitute_env_vars_from_environment():
    """Test environment variable substitution from the given environment."""
    loader = ConfigLoader(env_vars={"MY_VAR": "my_value", "OTHER": "other"})

    assert loader._substitute_env_vars("value: ${MY_VAR}") == "value: my_value"
    assert loader._substitute_env_vars("${MY_VAR}-${OTHER}") == "my_value-other"


def test_substitute_env_vars_override_default():
    """Test that an environment variable overrides the default value."""
    loader = ConfigLoader(env_vars={"MY_VAR": "actual"})
    assert loader._substitute_env_vars("${MY_VAR:-default}") == "actual"


def test_substitute_env_vars_empty_default():
    loader = ConfigLoader(env_vars={})
    assert loader._substitute_env_vars("x${MISSING:-}y") == "xy"


def test_substitute_env_vars_missing_required():
    """Test that a missing required variable raises."""
    loader = ConfigLoader(env_vars={})

    with pytest.raises(EnvironmentVariableError) as exc_info:
        loader._substitute_env_vars("value: ${REQUIRED_VAR}")

    assert exc_info.value.context["variable"] == "REQUIRED_VAR"


def test_load_from_yaml_file(tmp_path):
    """Test loading configuration from a YAML file."""
    path = tmp_path / "reqnorm.yaml"
    path.write_text(
        yaml.dump(
            {
                "detect_format": False,
                "default_format": "json",
                "formats": {"json": "json", "form": "form"},
            }
        )
    )

    config = ConfigLoader().load_from_file(path)

    assert isinstance(config, FilterConfig)
    assert config.detect_format is False
    assert config.default_format == "json"
    assert config.formats == {"json": "json", "form": "form"}


def test_load_from_json_file(tmp_path):
    """Test loading configuration from a JSON file."""
    path = tmp_path / "reqnorm.json"
    path.write_text(json.dumps({"decode_body": False}))

    config = ConfigLoader().load_from_file(path)

    assert config.decode_body is False


def test_load_from_yaml_with_reqnorm_key(tmp_path):
    """Test loading from YAML with a nested 'reqnorm' key."""
    path = tmp_path / "app.yml"
    path.write_text(yaml.dump({"reqnorm": {"default_format": "xml"}, "other": 1}))

    config = ConfigLoader().load_from_file(path)

    assert config.default_format == "xml"


def test_load_from_file_with_env_vars(tmp_path):
    """Test loading from file with environment variable substitution."""
    path = tmp_path / "reqnorm.yaml"
    path.write_text('default_format: "${DEFAULT_FORMAT:-json}"\n')

    assert ConfigLoader(env_vars={}).load_from_file(path).default_format == "json"
    config = ConfigLoader(env_vars={"DEFAULT_FORMAT": "xml"}).load_from_file(path)
    assert config.default_format == "xml"


def test_load_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    assert ConfigLoader().load_from_file(path) == FilterConfig()


def test_load_from_file_not_found():
    """Test loading from a non-existent file raises."""
    with pytest.raises(ConfigFileNotFoundError):
        ConfigLoader().load_from_file("/nonexistent/config.yaml")


def test_load_from_file_unsupported_format(tmp_path):
    """Test loading from an unsupported file format raises."""
    path = tmp_path / "config.txt"
    path.write_text("some content")

    with pytest.raises(ConfigurationError, match="Unsupported file format"):
        ConfigLoader().load_from_file(path)


def test_load_from_file_invalid_yaml(tmp_path):
    """Test loading invalid YAML raises."""
    path = tmp_path / "broken.yaml"
    path.write_text("invalid: yaml: content: [unclosed")

    with pytest.raises(ConfigurationError) as exc_info:
        ConfigLoader().load_from_file(path)

    assert isinstance(exc_info.value.cause, yaml.YAMLError)


def test_load_from_file_non_mapping_root(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- json\n- xml\n")

    with pytest.raises(ConfigurationError, match="must be a mapping"):
        ConfigLoader().load_from_file(path)


def test_load_validates_by_default(tmp_path):
    path = tmp_path / "invalid.yaml"
    path.write_text("decode_methods: [FETCH]\n")

    with pytest.raises(ConfigValidationError):
        ConfigLoader().load_from_file(path)

    config = ConfigLoader().load_from_file(path, validate=False)
    assert config.decode_methods == ["FETCH"]


def test_load_config_helper(tmp_path):
    path = tmp_path / "reqnorm.yaml"
    path.write_text("default_format: ${FMT}\n")

    assert load_config(path, env_vars={"FMT": "json"}).default_format == "json"


def test_placeholders_in_comments_are_ignored(tmp_path):
    path = tmp_path / "reqnorm.yaml"
    path.write_text("# default_format: ${UNSET_VAR}\ndefault_format: json\n")

    config = ConfigLoader(env_vars={}).load_from_file(path)

    assert config.default_format == "json"


def test_substitution_in_nested_values(tmp_path):
    path = tmp_path / "reqnorm.yaml"
    path.write_text(
        "formats:\n  json: ${JSON_CODEC:-json}\n"
        "negotiation_priorities: [\"${FIRST}\", xml]\n"
    )

    config = ConfigLoader(env_vars={"FIRST": "json"}).load_from_file(path)

    assert config.formats == {"json": "json"}
    assert config.negotiation_priorities == ["json", "xml"]


def test_substituted_values_stay_strings(tmp_path):
    path = tmp_path / "reqnorm.yaml"
    path.write_text('default_format: "${FMT}"\n')

    config = ConfigLoader(env_vars={"FMT": "123"}).load_from_file(
        path, validate=False
    )

    assert config.default_format == "123"
