"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from cart_api.configs.base import EnvironmentConfig
from cart_api.configs.environment import get_config
from cart_api.configs.constants import (
    DEFAULT_TAGS,
    TABLE_DEFAULTS,
    API_DEFAULTS,
    JSON_CONTENT_TYPE,
)

__all__ = [
    "EnvironmentConfig",
    "get_config",
    "DEFAULT_TAGS",
    "TABLE_DEFAULTS",
    "API_DEFAULTS",
    "JSON_CONTENT_TYPE",
]
