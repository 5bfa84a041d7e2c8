"""Configuration with CLI args, environment variables, and defaults."""

from dataclasses import dataclass
from typing import Optional

from ..coordination.models import GuardMode
from .base import EnvVars, get_bool_config_value, get_config_value

LOG_FORMATS = ("json", "text")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # === Debouncer ===
    debounce_delay_seconds: float = 0.3

    # === Exclusion Guard ===
    guard_mode: str = "drop"  # drop|queue|latest

    # === Demo Runner ===
    demo_operations: int = 3
    demo_delay_seconds: float = 0.05

    # === Prometheus ===
    metrics_enabled: bool = True

    # === Logging ===
    log_level: str = "INFO"
    log_format: str = "json"  # json|text

    @classmethod
    def from_args_and_env(cls, cli_args: Optional[dict] = None) -> "Config":
        """
        Load configuration from CLI arguments, environment variables, and defaults.

        Priority: CLI args > Environment variables > Defaults

        Args:
            cli_args: Optional dictionary of CLI arguments

        Returns:
            Config instance

        Raises:
            ValueError: If a resolved value is invalid
        """
        cli_args = cli_args or {}
        config = cls()

        config.debounce_delay_seconds = get_config_value(
            cli_args.get("debounce_delay"),
            EnvVars.DEBOUNCE_DELAY_SECONDS,
            config.debounce_delay_seconds,
            float,
        )
        config.guard_mode = get_config_value(
            cli_args.get("guard_mode"), EnvVars.GUARD_MODE, config.guard_mode
        )
        config.demo_operations = get_config_value(
            cli_args.get("operations"), EnvVars.DEMO_OPERATIONS, config.demo_operations, int
        )
        config.demo_delay_seconds = get_config_value(
            cli_args.get("delay"), EnvVars.DEMO_DELAY_SECONDS, config.demo_delay_seconds, float
        )
        config.metrics_enabled = get_bool_config_value(
            cli_args.get("metrics"), EnvVars.METRICS_ENABLED, config.metrics_enabled
        )
        config.log_level = get_config_value(
            cli_args.get("log_level"), EnvVars.LOG_LEVEL, config.log_level
        )
        config.log_format = get_config_value(
            cli_args.get("log_format"), EnvVars.LOG_FORMAT, config.log_format
        )

        config.validate()
        return config

    def validate(self) -> None:
        """
        Check value ranges and choices.

        Raises:
            ValueError: If a value is invalid
        """
        GuardMode(self.guard_mode.lower())
        self.guard_mode = self.guard_mode.lower()

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")
        self.log_level = self.log_level.upper()

        if self.log_format.lower() not in LOG_FORMATS:
            raise ValueError(f"Invalid log format: {self.log_format}")
        if self.debounce_delay_seconds < 0:
            raise ValueError("debounce_delay_seconds must be >= 0")
        if self.demo_operations < 1:
            raise ValueError("demo_operations must be >= 1")
        if self.demo_delay_seconds < 0:
            raise ValueError("demo_delay_seconds must be >= 0")

    def display(self) -> str:
        """
        Display configuration in human-readable format.

        Returns:
            Formatted configuration string
        """
        lines = [
            "Configuration:",
            "  Debouncer:",
            f"    Delay: {self.debounce_delay_seconds}s",
            "  Exclusion Guard:",
            f"    Mode: {self.guard_mode}",
            "  Demo Runner:",
            f"    Operations: {self.demo_operations}",
            f"    Base Delay: {self.demo_delay_seconds}s",
            "  Metrics:",
            f"    Prometheus: {'Enabled' if self.metrics_enabled else 'Disabled'}",
            "  Logging:",
            f"    Level: {self.log_level}",
            f"    Format: {self.log_format}",
        ]
        return "\n".join(lines)
