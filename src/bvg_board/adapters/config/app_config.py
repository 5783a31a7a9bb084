"""12-factor configuration adapter using environment variables and TOML config."""

import re
import tomllib
from pathlib import Path
from typing import Any, Self

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_STATION_ID_PATTERN = re.compile(r"^[0-9A-Za-z:_-]+$")

# TOML table -> settings that may be overridden from it
_TOML_SECTIONS: dict[str, tuple[str, ...]] = {
    "station": ("station_id", "api_base_url", "duration_minutes"),
    "scheduler": (
        "refresh_interval_seconds",
        "rotation_interval_seconds",
        "display_cap",
        "fetch_timeout_seconds",
        "tick_interval_seconds",
    ),
    "filter": (
        "min_minutes",
        "max_minutes",
        "excluded_destination",
        "excluded_line_prefixes",
        "excluded_lines",
        "exclude_buses",
    ),
    "display": (
        "display_enabled",
        "display_width",
        "display_height",
        "display_hardware_mapping",
        "display_brightness",
        "display_font_path",
        "console_max_width",
    ),
}


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Station / API configuration
    station_id: str = Field(
        default="900120003",
        description="VBB station ID to query (default: S+U Warschauer Str.)",
    )
    api_base_url: str = Field(
        default="https://v6.bvg.transport.rest", description="Base URL of the VBB REST API"
    )
    duration_minutes: int = Field(
        default=15, description="Time window in minutes requested from the API"
    )

    # Scheduler configuration
    refresh_interval_seconds: float = Field(
        default=20, description="Interval between departure fetches in seconds"
    )
    rotation_interval_seconds: float = Field(
        default=10, description="Seconds to display each departure before rotating"
    )
    display_cap: int = Field(default=3, description="Maximum number of departures retained")
    fetch_timeout_seconds: float = Field(
        default=5, description="Maximum time to wait for one fetch in seconds"
    )
    tick_interval_seconds: float = Field(
        default=0.5, description="Interval of the scheduler loop in seconds"
    )

    # Departure filtering
    min_minutes: int = Field(default=1, description="Ignore departures leaving sooner than this")
    max_minutes: int = Field(default=15, description="Ignore departures leaving later than this")
    excluded_destination: str | None = Field(
        default="Warschauer",
        description="Skip departures whose direction contains this text (trips ending here)",
    )
    excluded_line_prefixes: list[str] = Field(
        default=["RE", "RB", "IC", "EC", "EN", "FEX", "ICE"],
        description="Skip lines starting with any of these prefixes",
    )
    excluded_lines: list[str] = Field(
        default=["S41", "S42"], description="Skip these line names (default: Ringbahn)"
    )
    exclude_buses: bool = Field(
        default=True, description="Skip buses (lines with purely numeric names)"
    )

    # Display configuration
    display_enabled: bool = Field(
        default=True,
        description="Use the LED matrix when available, otherwise print to the console",
    )
    display_width: int = Field(default=64, description="Matrix width in pixels")
    display_height: int = Field(default=32, description="Matrix height in pixels")
    display_hardware_mapping: str = Field(
        default="regular", description="rgbmatrix hardware mapping, e.g. 'adafruit-hat'"
    )
    display_brightness: int = Field(default=100, description="Matrix brightness in percent")
    display_font_path: str = Field(
        default="/usr/local/share/rgbmatrix/fonts/4x6.bdf",
        description="BDF font used on the matrix",
    )
    console_max_width: int = Field(
        default=0, description="Truncate console output to this width (0 for unlimited)"
    )

    # TOML config file path (optional)
    config_file: str | None = Field(
        default=None,
        description="Path to TOML configuration file overriding the settings above",
    )

    @field_validator("station_id")
    @classmethod
    def validate_station_id(cls, v: str) -> str:
        """Validate station id is a non-empty identifier."""
        v = v.strip()
        if not v or not _STATION_ID_PATTERN.match(v):
            raise ValueError(f"station_id must be a non-empty station identifier, got {v!r}")
        return v

    @field_validator(
        "refresh_interval_seconds",
        "rotation_interval_seconds",
        "fetch_timeout_seconds",
        "tick_interval_seconds",
    )
    @classmethod
    def validate_positive_interval(cls, v: float) -> float:
        """Validate intervals are positive."""
        if v <= 0:
            raise ValueError("intervals must be positive")
        return v

    @field_validator("display_cap")
    @classmethod
    def validate_display_cap(cls, v: int) -> int:
        """Validate at least one departure is retained."""
        if v < 1:
            raise ValueError("display_cap must be at least 1")
        return v

    @field_validator("display_brightness")
    @classmethod
    def validate_brightness(cls, v: int) -> int:
        """Validate brightness is a percentage."""
        if not 0 <= v <= 100:
            raise ValueError("display_brightness must be between 0 and 100")
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> Self:
        """Validate settings that depend on each other."""
        if self.min_minutes > self.max_minutes:
            raise ValueError("min_minutes must not be greater than max_minutes")
        if self.tick_interval_seconds >= min(
            self.refresh_interval_seconds, self.rotation_interval_seconds
        ):
            raise ValueError(
                "tick_interval_seconds must be smaller than both refresh and rotation intervals"
            )
        return self

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load TOML configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def apply_toml_overrides(self) -> Self:
        """Return a copy with values from the TOML file's tables applied.

        Recognized tables are [station], [scheduler], [filter] and [display];
        unknown keys are ignored.
        """
        toml_data = self._load_toml_data()

        overrides: dict[str, Any] = {}
        for section, keys in _TOML_SECTIONS.items():
            table = toml_data.get(section, {})
            if not isinstance(table, dict):
                raise ValueError(f"TOML config '{section}' must be a table")
            for key in keys:
                if key in table:
                    overrides[key] = table[key]

        merged = self.model_dump()
        merged.update(overrides)
        return type(self).model_validate(merged)

    @classmethod
    def load(cls, **kwargs: Any) -> Self:
        """Load configuration from environment, .env and the optional TOML file."""
        config = cls(**kwargs)
        if config.config_file:
            config = config.apply_toml_overrides()
        return config
