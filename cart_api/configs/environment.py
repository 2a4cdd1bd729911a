"""
Environment configuration loader.

Loads and validates configuration from Pulumi stack config files.
"""

import pulumi

from cart_api.configs.base import EnvironmentConfig
from cart_api.configs.constants import (
    API_DEFAULTS,
    DEFAULT_API_DESCRIPTION,
    DEFAULT_MODEL_NAME,
    TABLE_DEFAULTS,
)


def _get_bool(config: pulumi.Config, key: str, default: bool) -> bool:
    value = config.get_bool(key)
    return default if value is None else value


def _get_int(config: pulumi.Config, key: str, default: int) -> int:
    value = config.get_int(key)
    return default if value is None else value


def get_config() -> EnvironmentConfig:
    """
    Load environment configuration from Pulumi stack config.

    Returns:
        EnvironmentConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
        ValueError: If table capacity values are not positive
    """
    config = pulumi.Config()

    return EnvironmentConfig(
        environment=config.require("environment"),
        model_name=config.get("model_name") or DEFAULT_MODEL_NAME,
        read_capacity=_get_int(config, "read_capacity", TABLE_DEFAULTS["read_capacity"]),
        write_capacity=_get_int(config, "write_capacity", TABLE_DEFAULTS["write_capacity"]),
        api_description=config.get("api_description") or DEFAULT_API_DESCRIPTION,
        stage_name=config.get("stage_name") or API_DEFAULTS["stage_name"],
        retain_table=_get_bool(config, "retain_table", True),
        validate_request_body=_get_bool(config, "validate_request_body", False),
        enable_cloudwatch_role=_get_bool(config, "enable_cloudwatch_role", True),
    )
