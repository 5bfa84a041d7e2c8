"""Configuration module for flyfit-coordination.

Usage:
    from flyfit_coordination.config import Config
    from flyfit_coordination.config.base import EnvVars, get_config_value

All environment variables use the FLYFIT_ prefix.
"""

from .base import (
    ENV_PREFIX_FLYFIT,
    EnvVars,
    get_bool_config_value,
    get_config_value,
    get_env_value,
)
from .settings import Config

__all__ = [
    "Config",
    "EnvVars",
    "get_config_value",
    "get_env_value",
    "get_bool_config_value",
    "ENV_PREFIX_FLYFIT",
]
