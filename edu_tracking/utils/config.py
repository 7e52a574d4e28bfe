"""
Configuration management with environment variables.

This module provides centralized configuration management
with validation and type safety.
"""

import os
from pathlib import Path
from dotenv import load_dotenv


def _env_int(name: str, default: int) -> int:
    """
    Read an integer environment variable.

    Args:
        name: Variable name
        default: Value used when the variable is unset

    Raises:
        ValueError: If the variable is set but not an integer
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables and provides
    validated access to configuration values.

    Attributes:
        data_file: JSON file holding the student profiles
        default_base_salary: Per-session salary proposed for new students
        default_class_name: Class name used when none is given
        no_homework_threshold: Sessions without homework that trigger an alert
        hide_values: Whether currency amounts are masked in output
        output_dir: Output directory for logs and reports
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     print(f"Data file: {config.data_file}")
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        # Load .env file if it exists
        load_dotenv()

        # Storage
        self._data_file = Path(os.getenv("EDU_DATA_FILE", "data/edu_tracking_data.json"))

        # Student defaults
        self._default_base_salary = _env_int("EDU_DEFAULT_BASE_SALARY", 140000)
        self._default_class_name = os.getenv("EDU_DEFAULT_CLASS_NAME", "Lớp 1")

        # Statistics
        self._no_homework_threshold = _env_int("EDU_NO_HOMEWORK_THRESHOLD", 3)
        self._hide_values = os.getenv("EDU_HIDE_VALUES", "false").lower() == "true"

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def data_file(self) -> Path:
        """Get the student data file path."""
        return self._data_file

    @property
    def default_base_salary(self) -> int:
        """Get the default per-session salary."""
        return self._default_base_salary

    @property
    def default_class_name(self) -> str:
        return self._default_class_name

    @property
    def no_homework_threshold(self) -> int:
        """Get the monthly no-homework alert threshold."""
        return self._no_homework_threshold

    @property
    def hide_values(self) -> bool:
        return self._hide_values

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ValueError: If validation fails
        """
        errors = []

        if not str(self._data_file).strip():
            errors.append("EDU_DATA_FILE is required")

        if self._data_file.suffix.lower() != ".json":
            errors.append("EDU_DATA_FILE must be a .json file")

        # Validate numeric values
        if self._default_base_salary < 0:
            errors.append("EDU_DEFAULT_BASE_SALARY must not be negative")

        if self._no_homework_threshold <= 0:
            errors.append("EDU_NO_HOMEWORK_THRESHOLD must be positive")

        # Validate log level
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ValueError(error_msg)

        return True

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        directories = [
            self.output_dir / "logs",
            self.output_dir / "reports",
            self.data_file.parent,
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)


# Singleton instance
config = Config()
