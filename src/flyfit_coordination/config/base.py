"""Shared configuration utilities and constants.

This module provides the foundation for consistent configuration handling
across all commands.
"""

import os
from typing import Any, Optional, TypeVar

# Type variable for config values
T = TypeVar("T")

# === Environment Variable Prefix ===

ENV_PREFIX_FLYFIT = "FLYFIT_"


class EnvVars:
    """Centralized environment variable names for consistent access."""

    # === Debouncer ===
    DEBOUNCE_DELAY_SECONDS = f"{ENV_PREFIX_FLYFIT}DEBOUNCE_DELAY_SECONDS"

    # === Exclusion Guard ===
    GUARD_MODE = f"{ENV_PREFIX_FLYFIT}GUARD_MODE"

    # === Demo Runner ===
    DEMO_OPERATIONS = f"{ENV_PREFIX_FLYFIT}DEMO_OPERATIONS"
    DEMO_DELAY_SECONDS = f"{ENV_PREFIX_FLYFIT}DEMO_DELAY_SECONDS"

    # === Metrics ===
    METRICS_ENABLED = f"{ENV_PREFIX_FLYFIT}METRICS_ENABLED"

    # === Logging ===
    LOG_LEVEL = f"{ENV_PREFIX_FLYFIT}LOG_LEVEL"
    LOG_FORMAT = f"{ENV_PREFIX_FLYFIT}LOG_FORMAT"


def get_env_value(
    env_var: str,
    default: T,
    type_converter: type = str,
) -> T:
    """
    Get a value from an environment variable with type conversion.

    Args:
        env_var: Primary environment variable name
        default: Default value if not found
        type_converter: Type to convert to (str, int, float, bool)

    Returns:
        The environment value converted to the specified type, or the default
    """
    env_value = os.getenv(env_var)

    if env_value is not None:
        if type_converter == bool:
            return env_value.lower() in ("true", "1", "yes", "on")  # type: ignore
        return type_converter(env_value)

    return default


def get_config_value(
    cli_arg: Optional[Any],
    env_var: str,
    default: T,
    type_converter: type = str,
) -> T:
    """
    Get a configuration value with priority: CLI > Environment > Default.

    Args:
        cli_arg: CLI argument value (highest priority)
        env_var: Primary environment variable name
        default: Default value (lowest priority)
        type_converter: Type to convert to (str, int, float, bool)

    Returns:
        The resolved configuration value
    """
    if cli_arg is not None:
        return cli_arg

    return get_env_value(env_var, default, type_converter)


def get_bool_config_value(
    cli_flag: Optional[bool],
    env_var: str,
    default: bool,
) -> bool:
    """
    Get a boolean configuration value from a --feature/--no-feature flag.

    Args:
        cli_flag: CLI flag value (None when the flag was not given)
        env_var: Environment variable name
        default: Default value

    Returns:
        The resolved boolean value
    """
    if cli_flag is not None:
        return cli_flag

    return get_env_value(env_var, default, bool)
