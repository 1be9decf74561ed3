"""CLI command implementations."""

from .attempt import attempt
from .init import init, show_config

__all__ = ["attempt", "init", "show_config"]
