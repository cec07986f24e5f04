"""Configuration validation."""

from __future__ import annotations

from reqnorm.config.models import FilterConfig
from reqnorm.exceptions import ConfigValidationError
from reqnorm.formats import FormatTable

KNOWN_METHODS = {"GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"}


class ConfigValidator:
    """Check a FilterConfig for inconsistencies."""

    def validate(self, config: FilterConfig) -> list[str]:
        """Return a list of problems, empty when the config is valid."""
        errors: list[str] = []

        table = FormatTable()
        for format, mime_types in config.mime_types.items():
            table.set_format(format, mime_types)
            for mime_type in mime_types:
                if "/" not in mime_type:
                    errors.append(f"Invalid MIME type for format '{format}': {mime_type}")

        if config.default_format is not None and not config.default_format:
            errors.append("default_format must not be empty")

        for format, locator in config.formats.items():
            if format not in table:
                errors.append(f"Format '{format}' has no MIME types")
            if not locator:
                errors.append(f"Format '{format}' has no codec locator")

        for method in config.decode_methods:
            if method.upper() not in KNOWN_METHODS:
                errors.append(f"Unknown HTTP method in decode_methods: {method}")

        for format in config.negotiation_priorities:
            if format not in table:
                errors.append(f"Unknown format in negotiation_priorities: {format}")

        return errors

    def validate_or_raise(self, config: FilterConfig) -> None:
        errors = self.validate(config)
        if errors:
            raise ConfigValidationError(
                f"Invalid configuration: {len(errors)} error(s)", errors=errors
            )
