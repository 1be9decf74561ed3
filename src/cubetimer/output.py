"""Terminal and JSON output for the cubetimer CLI.

Every command writes through an OutputContext. In JSON mode only machine
readable documents reach stdout; prompts, live displays and notices are
dropped.
"""

import json
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.live import Live
from rich.text import Text

from .errors import ErrorReason


@dataclass
class OutputContext:
    """Where and how the CLI reports to the user."""

    console: Console
    json_mode: bool = False

    def print(self, message: str, style: str | None = None) -> None:
        """Print message unless in JSON mode."""
        if not self.json_mode:
            self.console.print(message, style=style)

    def print_json(self, data: dict[str, Any]) -> None:
        if self.json_mode:
            print(json.dumps(data, indent=2))

    def result(self, payload: BaseModel, message: str = "") -> None:
        """Report a model: its camelCase dump in JSON mode, ``message`` otherwise."""
        if self.json_mode:
            self.print_json(payload.model_dump(mode="json", by_alias=True))
        elif message:
            self.console.print(message)

    def error(self, message: str, reason: ErrorReason | None = None) -> None:
        if self.json_mode:
            data = {"error": message}
            if reason is not None:
                data["reason"] = reason.value
            self.print_json(data)
        else:
            self.console.print(f"[red]Error: {message}[/red]")

    def warning(self, message: str) -> None:
        self.print(f"[yellow]{message}[/yellow]")

    def success(self, message: str) -> None:
        self.print(f"[green]{message}[/green]")

    def live(self) -> Live | None:
        """Single-line live region for tick updates; None in JSON mode."""
        if self.json_mode:
            return None
        return Live(Text(""), console=self.console, auto_refresh=False, transient=True)


# Global output context (set by cli.py main callback)
_ctx: OutputContext | None = None


def get_output_context() -> OutputContext:
    """Get the current output context.

    Returns a default OutputContext if not yet initialized by the CLI.
    """
    if _ctx is None:
        return OutputContext(Console())
    return _ctx


def set_output_context(ctx: OutputContext | None) -> None:
    global _ctx
    _ctx = ctx
