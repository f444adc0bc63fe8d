"""
NutriPlanner - CLI Entry Point.

Usage:
    nutriplanner flows             List flows and the steps they collect
    nutriplanner run weekly_menu   Run one flow interactively
    nutriplanner health            Check configuration
    nutriplanner --help            Show help
"""

import asyncio
import json
import logging
from datetime import date
from typing import Any

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table

from nutriplanner.flows import (
    FLOW_STEPS,
    FlowController,
    FlowIdentifier,
    Interaction,
    ResultRouter,
    StepDescriptor,
    StepKind,
    UnsupportedFlowError,
)

app = typer.Typer(
    name="nutriplanner",
    help="NutriPlanner - AI meal planning flows for the whole family.",
    add_completion=False,
)
console = Console()


def _configure_logging() -> None:
    from nutriplanner.config import settings

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def parse_step_input(kind: StepKind, raw: str) -> Any:
    """
    Turn a console answer into the value a selection widget would submit.

    JSON objects and arrays are passed through as-is; otherwise a short
    free-text form is accepted per step kind (names separated by commas,
    "lat,lon[,address]" for a location...).

    Raises:
        ValueError: the answer can't be read for this kind of step
    """
    raw = raw.strip()
    if raw[:1] in ("{", "["):
        return json.loads(raw)

    today = date.today().isoformat()
    match kind:
        case StepKind.SELECT_MEMBER:
            return {"first_name": raw}
        case StepKind.SELECT_MEMBERS:
            return [{"first_name": name} for name in _split(raw)]
        case StepKind.SELECT_INGREDIENT:
            return {"name": raw}
        case StepKind.SELECT_INGREDIENTS:
            return [{"name": name} for name in _split(raw)]
        case StepKind.SELECT_BUDGET:
            return float(raw)
        case StepKind.SELECT_GUEST_COUNT:
            return int(raw)
        case StepKind.SELECT_DATE:
            return date.fromisoformat(raw).isoformat()
        case StepKind.SELECT_LOCATION:
            parts = _split(raw)
            if len(parts) < 2:
                raise ValueError("Location must be 'latitude,longitude[,address]'")
            address = ", ".join(parts[2:]) or None
            return {"latitude": float(parts[0]), "longitude": float(parts[1]), "address": address}
        case StepKind.SELECT_IMAGE:
            return {"url": raw}
        case StepKind.SELECT_MEAL:
            return {"recipe_name": raw, "date": today}
        case StepKind.SELECT_MENU:
            return {"title": raw, "date_start": today}
        case StepKind.SELECT_RECIPE:
            return {"name": raw}
        case StepKind.SELECT_PREFERENCES:
            return {"cuisines": _split(raw)}
        case _:
            # Month, occasion, diet, free-text questions
            return raw


def _show(interaction: Interaction, flow: FlowIdentifier) -> None:
    """Display surface for the CLI: the Interaction as JSON in a panel."""
    style = "red" if interaction.is_error else "green"
    console.print(
        Panel(
            interaction.model_dump_json(indent=2),
            title=f"{flow.value} · {interaction.type}",
            border_style=style,
        )
    )


async def _drive(controller: FlowController, flow: str) -> Interaction | None:
    step = controller.start(flow)

    while isinstance(step, StepDescriptor):
        hint = " [dim](last step)[/dim]" if step.is_terminal else ""
        raw = console.input(f"\n[bold blue]{step.title}[/bold blue]{hint}: ").strip()
        if not raw:
            controller.cancel()
            console.print("[dim]Flow cancelled.[/dim]")
            return None

        try:
            value = parse_step_input(step.kind, raw)
        except ValueError as e:
            console.print(f"[yellow]Couldn't read that: {e}[/yellow]")
            continue

        if step.is_terminal:
            with Live(Spinner("dots", text="Generating..."), console=console, transient=True):
                step = await controller.select(value)
        else:
            step = await controller.select(value)

    return step


@app.command()
def flows() -> None:
    """List every flow and the steps it collects."""
    from nutriplanner.generators import GENERATORS

    table = Table(title="NutriPlanner Flows")
    table.add_column("Flow", style="bold", no_wrap=True)
    table.add_column("Steps (* = last)")
    table.add_column("Result")

    for flow, steps in FLOW_STEPS.items():
        fields = " → ".join(f"{s.field}{'*' if s.terminal else ''}" for s in steps)
        content_kind = GENERATORS[flow][2] if flow in GENERATORS else "[red]unregistered[/red]"
        table.add_row(flow.value, fields, content_kind)

    console.print(table)


@app.command()
def run(
    flow: str = typer.Argument(..., help="Flow to run (see `nutriplanner flows`)"),
    log_prompts: bool = typer.Option(False, "--log-prompts", "-l", help="Log all LLM prompts to prompt_logs/"),
) -> None:
    """Run one flow, answering each step at the prompt. Empty answer cancels."""
    from nutriplanner.generators import build_dispatch_table
    from nutriplanner.llm.prompt_logger import current_log_dir, enable_prompt_logging

    _configure_logging()
    if log_prompts:
        enable_prompt_logging(True)

    controller = FlowController(build_dispatch_table(), ResultRouter(_show))

    try:
        interaction = asyncio.run(_drive(controller, flow))
    except UnsupportedFlowError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        controller.cancel()
        console.print("\n[dim]Flow cancelled.[/dim]")
        raise typer.Exit(130)

    if log_prompts:
        log_dir = current_log_dir()
        if log_dir:
            console.print(f"\n[dim]📝 Prompts logged to: {log_dir}[/dim]")

    if interaction is not None and interaction.is_error:
        raise typer.Exit(1)


@app.command()
def health() -> None:
    """Check configuration and the flow tables."""
    from nutriplanner.config import get_settings
    from nutriplanner.flows import steps_for
    from nutriplanner.generators import build_dispatch_table

    console.print("\n[bold]NutriPlanner Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("✅ Configuration loaded")
        console.print(f"   Environment: {settings.nutriplanner_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Generation timeout: {settings.generation_timeout_seconds:g}s")

        if settings.openai_api_key.startswith("sk-"):
            console.print("✅ OpenAI API key configured")
        else:
            console.print("⚠️  OpenAI API key missing or may be invalid")

        for flow in FlowIdentifier:
            steps_for(flow)
        console.print(f"✅ {len(FlowIdentifier)} flows have a terminal step")

        dispatch_table = build_dispatch_table()
        unregistered = [f.value for f in FlowIdentifier if f not in dispatch_table]
        if unregistered:
            console.print(f"❌ No generator for: {', '.join(unregistered)}")
            raise typer.Exit(1)
        console.print(f"✅ {len(dispatch_table)} generators registered")

        console.print("\n[green]All checks passed![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"\n[red]❌ Configuration error: {e}[/red]")
        console.print("[dim]Check your .env file.[/dim]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    from nutriplanner import __version__

    console.print(f"NutriPlanner version {__version__}")


if __name__ == "__main__":
    app()
