"""Configuration management for cubetimer."""

import tomllib
from pathlib import Path

import tomli_w
import typer
from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_INTERVAL_MS, DEFAULT_TIME_LIMIT_S

CONFIG_FILE = "config.toml"


class TimerConfig(BaseModel):
    """Options fixed for the lifetime of one attempt controller.

    Attributes:
        interval: Milliseconds between tick notifications
        no_inspect: Disable the inspection phase entirely
        time_limit: Seconds allowed for the solve phase
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    interval: PositiveInt = Field(
        default=DEFAULT_INTERVAL_MS, description="Tick interval in ms"
    )
    no_inspect: bool = Field(default=False, description="Skip the inspection phase")
    time_limit: PositiveInt = Field(
        default=DEFAULT_TIME_LIMIT_S, description="Solve time limit in seconds"
    )


class DisplayConfig(BaseModel):
    """Presentation settings for the CLI."""

    decimals: int = Field(default=2, ge=0, le=3, description="Decimal places for times")


class CubeTimerConfig(BaseModel):
    """Root configuration for cubetimer."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)


def default_config_path() -> Path:
    """Return the per-user config file location."""
    return Path(typer.get_app_dir("cubetimer")) / CONFIG_FILE


def load_config(config_path: Path) -> CubeTimerConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to config.toml

    Returns:
        Loaded configuration, or defaults if the file doesn't exist
    """
    if not config_path.exists():
        return CubeTimerConfig()
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return CubeTimerConfig.model_validate(data)


def write_config_template(config_path: Path) -> Path:
    """Write default config.toml template.

    Args:
        config_path: Destination file; parent directories are created

    Returns:
        Path to the written config file
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)
    template = {
        "timer": {
            "interval": DEFAULT_INTERVAL_MS,
            "no_inspect": False,
            "time_limit": DEFAULT_TIME_LIMIT_S,
        },
        "display": {"decimals": 2},
    }
    with open(config_path, "wb") as f:
        tomli_w.dump(template, f)
    return config_path
