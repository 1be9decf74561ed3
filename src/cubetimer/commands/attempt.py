"""Attempt command: time one inspection + solve from the terminal."""

import asyncio
import contextlib
import math
import sys
import tomllib
from collections.abc import AsyncIterator, Callable, Iterator
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.text import Text

from ..config import TimerConfig, default_config_path, load_config
from ..constants import INSPECTION_GRACE_MS
from ..core import AttemptController
from ..errors import CubeTimerError
from ..formatting import format_duration, format_result
from ..models import (
    AttemptResult,
    EventType,
    InspectionWarningEvent,
    PenaltyEvent,
    TickEvent,
    TimerStatus,
)
from ..output import OutputContext, get_output_context

ABORT_INPUTS = frozenset({"a", "abort", "q"})


async def stdin_lines() -> AsyncIterator[str]:
    """Yield lines typed on stdin without blocking the event loop."""
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader()
    transport, _ = await loop.connect_read_pipe(
        lambda: asyncio.StreamReaderProtocol(reader), sys.stdin
    )
    try:
        while line := await reader.readline():
            yield line.decode(errors="replace")
    finally:
        transport.close()


class AttemptDisplay:
    """Renders controller notifications on the terminal.

    Ticks drive a single live line; warnings and penalties are printed above
    it. Nothing is rendered in JSON mode.
    """

    def __init__(self, ctx: OutputContext, decimals: int = 2) -> None:
        self.ctx = ctx
        self.decimals = decimals
        self.live = ctx.live()

    @contextlib.contextmanager
    def attached(self, controller: AttemptController) -> Iterator[None]:
        if self.live is None:
            yield
            return
        unsubscribers = [
            controller.on(EventType.TICK, self.on_tick),
            controller.on(EventType.INSPECTION_WARNING, self.on_warning),
            controller.on(EventType.PENALTY, self.on_penalty),
        ]
        try:
            with self.live:
                yield
        finally:
            for unsubscribe in unsubscribers:
                unsubscribe()

    def render_tick(self, event: TickEvent) -> Text:
        if event.status is TimerStatus.INSPECTING:
            seconds_left = math.ceil((event.time - INSPECTION_GRACE_MS) / 1000)
            shown = str(seconds_left) if seconds_left > 0 else "+2"
            return Text(f"Inspection  {shown}", style="cyan")
        return Text(f"Solve  {format_duration(event.time, self.decimals)}", style="bold")

    def on_tick(self, event: TickEvent) -> None:
        if self.live is not None:
            self.live.update(self.render_tick(event), refresh=True)

    def on_warning(self, event: InspectionWarningEvent) -> None:
        seconds = max(0, math.ceil(event.time_remaining / 1000))
        self.ctx.warning(f"{seconds} seconds!")

    def on_penalty(self, event: PenaltyEvent) -> None:
        self.ctx.print("[red]+2 penalty[/red]")


def _steps(controller: AttemptController) -> list[tuple[str, Callable[[], object]]]:
    steps: list[tuple[str, Callable[[], object]]] = []
    if not controller.configuration.no_inspect:
        steps.append(("Press Enter to start inspection", controller.start_inspection))
    steps.append(("Press Enter to start solving", controller.start_solve))
    steps.append(("Press Enter to stop", controller.stop))
    return steps


async def _next_line(lines: AsyncIterator[str]) -> str | None:
    return await anext(lines, None)


async def run_attempt(
    controller: AttemptController,
    lines: AsyncIterator[str],
    ctx: OutputContext,
) -> AttemptResult | None:
    """Advance ``controller`` one step per input line until the attempt ends.

    Each line moves the attempt forward (inspection, solve, stop). An abort
    word, end of input, or cancellation aborts the attempt. If the
    controller finishes on its own (inspection overrun, time limit) the
    pending read is cancelled.

    Returns:
        The finalized attempt result, or None if input ended before the
        attempt was started
    """
    loop = asyncio.get_running_loop()
    finished: asyncio.Future[AttemptResult] = loop.create_future()

    def _resolve(result: AttemptResult) -> None:
        if not finished.done():
            finished.set_result(result)

    unsubscribe = controller.on(EventType.SOLVE_END, _resolve)
    next_line: asyncio.Future[str | None] | None = None
    try:
        for prompt, action in _steps(controller):
            ctx.print(prompt, style="bold")
            next_line = asyncio.ensure_future(_next_line(lines))
            await asyncio.wait({next_line, finished}, return_when=asyncio.FIRST_COMPLETED)
            if finished.done():
                break
            line = next_line.result()
            if line is None or line.strip().lower() in ABORT_INPUTS:
                if controller.status is TimerStatus.STOPPED:
                    return None
                controller.abort()
                break
            action()
        return await finished
    finally:
        if next_line is not None and not next_line.done():
            next_line.cancel()
        if controller.status is not TimerStatus.STOPPED:
            controller.abort()
        unsubscribe()


async def _attempt_main(
    timer_config: TimerConfig,
    ctx: OutputContext,
    decimals: int,
    lines: AsyncIterator[str],
) -> AttemptResult | None:
    controller = AttemptController(timer_config)
    display = AttemptDisplay(ctx, decimals)
    with display.attached(controller):
        return await run_attempt(controller, lines, ctx)


def _apply_overrides(
    timer: TimerConfig,
    inspect: bool | None,
    interval: int | None,
    time_limit: int | None,
) -> TimerConfig:
    """Layer command-line options over the configured timer settings."""
    data = timer.model_dump()
    if inspect is not None:
        data["no_inspect"] = not inspect
    if interval is not None:
        data["interval"] = interval
    if time_limit is not None:
        data["time_limit"] = time_limit
    return TimerConfig.model_validate(data)


def report_result(ctx: OutputContext, result: AttemptResult, decimals: int) -> None:
    """Print the finalized attempt in text or JSON form."""
    lines = [f"Result: [bold]{format_result(result, decimals)}[/bold]"]
    if result.inspection_time is not None:
        lines.append(f"Inspection: {format_duration(result.inspection_time, decimals)}")
    if result.solve_time is not None and (result.penalized or result.is_dnf):
        lines.append(f"Raw time: {format_duration(result.solve_time, decimals)}")
    ctx.result(result, "\n".join(lines))


def attempt(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (defaults to the per-user config.toml)",
    ),
    inspect: bool | None = typer.Option(
        None,
        "--inspect/--no-inspect",
        help="Enable or skip the 15 second inspection phase",
    ),
    interval: int | None = typer.Option(
        None,
        "--interval",
        min=1,
        help="Milliseconds between display updates",
    ),
    time_limit: int | None = typer.Option(
        None,
        "--time-limit",
        min=1,
        help="Solve time limit in seconds",
    ),
) -> None:
    """Time a single attempt. Enter advances, 'a' + Enter aborts."""
    ctx = get_output_context()

    try:
        settings = load_config(config or default_config_path())
        timer_config = _apply_overrides(settings.timer, inspect, interval, time_limit)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        ctx.error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from None

    decimals = settings.display.decimals
    try:
        result = asyncio.run(_attempt_main(timer_config, ctx, decimals, stdin_lines()))
    except CubeTimerError as e:
        ctx.error(str(e), e.reason)
        raise typer.Exit(1) from None
    except KeyboardInterrupt:
        ctx.error("Attempt interrupted")
        raise typer.Exit(130) from None

    if result is None:
        ctx.print("No attempt started")
        return
    report_result(ctx, result, decimals)
