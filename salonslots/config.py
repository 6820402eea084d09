"""
Configuration management using Pydantic models loaded from YAML.
"""

import os
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import BookingRules
from .domain.timeutils import normalize_day

SUPABASE_KEY_ENV = "SALONSLOTS_SUPABASE_KEY"


class DataSourceConfig(BaseModel):
    """Where schedules, bookings and plans are read from."""
    kind: Literal["json", "supabase"] = "json"
    path: Optional[Path] = None  # JSON snapshot; bundled sample when empty
    url: str = ""
    api_key: str = ""
    timeout_seconds: int = 30

    @model_validator(mode="after")
    def validate_supabase_settings(self) -> "DataSourceConfig":
        """Require a project URL and key for the hosted database."""
        if self.kind != "supabase":
            return self
        if not self.api_key:
            self.api_key = os.environ.get(SUPABASE_KEY_ENV, "")
        if not self.url:
            raise ValueError("data_source.url is required when kind is 'supabase'")
        if not self.api_key:
            raise ValueError(
                f"data_source.api_key is required when kind is 'supabase' "
                f"(or set {SUPABASE_KEY_ENV})"
            )
        return self


class BookingConfig(BaseModel):
    """Slot step and bookable date range."""
    step_minutes: int = 15
    max_days_ahead: int = 21
    closed_days: List[str] = Field(default_factory=lambda: ["Sun"])

    @field_validator("step_minutes")
    @classmethod
    def validate_step(cls, value: int) -> int:
        """Ensure the slot step is positive."""
        if value <= 0:
            raise ValueError("step_minutes must be greater than zero")
        return value

    @field_validator("max_days_ahead")
    @classmethod
    def validate_max_days(cls, value: int) -> int:
        if value < 0:
            raise ValueError("max_days_ahead must not be negative")
        return value

    @field_validator("closed_days", mode="before")
    @classmethod
    def validate_closed_days(cls, value: List) -> List[str]:
        """Normalize weekday names or numbers (0=Sunday) to 3-letter labels."""
        labels: List[str] = []
        invalid = []
        for day in value or []:
            label = normalize_day(day)
            if label is None:
                invalid.append(day)
            elif label not in labels:
                labels.append(label)
        if invalid:
            raise ValueError(f"closed_days contains unknown weekdays: {invalid}")
        return labels

    def to_rules(self) -> BookingRules:
        return BookingRules(
            max_days_ahead=self.max_days_ahead,
            closed_days=tuple(self.closed_days),
        )


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Asia/Manila"
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)
    booking: BookingConfig = Field(default_factory=BookingConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Relative snapshot paths are resolved against the config file
        path = config.data_source.path
        if path is not None and not path.is_absolute():
            config.data_source.path = config_path.parent / path

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
