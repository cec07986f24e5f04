"""Configuration for the request filter."""

from __future__ import annotations

from reqnorm.config.loader import ConfigLoader, load_config
from reqnorm.config.models import FilterConfig
from reqnorm.config.validator import ConfigValidator

__all__ = ["ConfigLoader", "ConfigValidator", "FilterConfig", "load_config"]
