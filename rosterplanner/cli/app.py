"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..adapters.yaml_day_source import DATE_FORMAT, YamlDaySource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import RosterPlannerError
from ..domain.models import AvailabilityKind, ScheduleResult, ScheduleStatus
from ..domain.summary import summarize
from ..domain.time_windows import TimeWindow
from ..logging_config import setup_logging
from ..services.schedule_service import ScheduleService

app = typer.Typer(
    name="rosterplanner",
    help="Check whether the team can practice, and with whom",
    add_completion=False
)

console = Console()

STATUS_STYLES = {
    ScheduleStatus.FULL_ROSTER: "green",
    ScheduleStatus.WITH_SUBS: "yellow",
    ScheduleStatus.NOT_ENOUGH: "red",
    ScheduleStatus.OFF_DAY: "dim",
}

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
DaysFileOption = Annotated[
    Optional[Path],
    typer.Option("--days-file", help="YAML file with day rows. Defaults to days_file from the config"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Roster availability planner.
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def _load(config_file: Optional[Path], days_file: Optional[Path]) -> tuple[AppConfig, ScheduleService]:
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)

    source_path = days_file or config.days_file
    if source_path is None:
        raise ValueError("No day file given. Use --days-file or set days_file in the config.")

    source = YamlDaySource(path=source_path, timezone=config.timezone)
    return config, ScheduleService(source=source, config=config)


def _parse_date(value: Optional[str], tz: str) -> pendulum.Date:
    if value is None:
        return pendulum.today(tz).date()
    try:
        return pendulum.from_format(value, DATE_FORMAT, tz=tz).date()
    except ValueError:
        console.print(f"[red]Invalid date '{value}', expected DD.MM.YYYY.[/red]")
        raise typer.Exit(1)


def _describe_person(
    kind: AvailabilityKind,
    raw_value: str,
    window: Optional[TimeWindow],
) -> str:
    if kind is AvailabilityKind.AVAILABLE:
        return f"[green]{window}[/green]"
    if kind is AvailabilityKind.UNAVAILABLE:
        return "[red]not available[/red]"
    if kind is AvailabilityKind.ABSENT:
        return "[magenta]absent[/magenta]"
    if not raw_value.strip():
        return "[dim]no response[/dim]"
    return f"[yellow]unreadable: '{raw_value}'[/yellow]"


def _render_day(result: ScheduleResult) -> Panel:
    style = STATUS_STYLES[result.status]
    lines: List[str] = [f"[bold {style}]{result.status_message}[/bold {style}]"]

    if result.reason:
        lines.append(f"[bold]Reason:[/bold] {result.reason}")
    if result.focus:
        lines.append(f"[bold]Focus:[/bold] {result.focus}")

    if result.status is not ScheduleStatus.OFF_DAY:
        lines.append("")
        for person in result.people:
            marker = " [bold](subbing in)[/bold]" if person.name in result.required_subs else ""
            role = person.role.value.capitalize()
            lines.append(
                f"{role:<6} {person.name}: "
                f"{_describe_person(person.kind, person.raw_value, person.window)}{marker}"
            )

    for warning in result.warnings:
        lines.append(f"[yellow]⚠ {warning}[/yellow]")

    return Panel.fit(
        "\n".join(lines),
        title=f"{result.weekday}, {result.date_formatted}",
        border_style=style,
    )


@app.command()
def check(
    date: Annotated[Optional[str], typer.Argument(help="Date (DD.MM.YYYY). Defaults to today.")] = None,
    config_file: ConfigOption = None,
    days_file: DaysFileOption = None,
):
    """
    Resolve a single day and show who plays when.

    Examples:

        rosterplanner check 15.01.2026
        rosterplanner check --days-file days.yaml
    """
    try:
        config, service = _load(config_file, days_file)
        day = _parse_date(date, config.timezone)

        result = asyncio.run(service.resolve_date(day))

        if result is None:
            console.print(f"[yellow]No entry for {day.format(DATE_FORMAT)}.[/yellow]")
            raise typer.Exit(1)

        console.print(_render_day(result))

    except (FileNotFoundError, ValueError, RosterPlannerError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def week(
    start: Annotated[Optional[str], typer.Option("--start", help="First date (DD.MM.YYYY). Defaults to today.")] = None,
    days: Annotated[int, typer.Option("--days", "-n", help="Number of days to show.")] = 7,
    config_file: ConfigOption = None,
    days_file: DaysFileOption = None,
):
    """
    Show an overview table for a range of days.
    """
    try:
        if days < 1:
            raise ValueError("--days must be at least 1")

        config, service = _load(config_file, days_file)
        first = _parse_date(start, config.timezone)
        last = first.add(days=days - 1)

        results = asyncio.run(service.resolve_range(first, last))

        if not results:
            console.print(
                f"[yellow]No entries between {first.format(DATE_FORMAT)} "
                f"and {last.format(DATE_FORMAT)}.[/yellow]"
            )
            return

        table = Table(title="Practice overview", show_header=True, header_style="bold cyan")
        table.add_column("Date", style="bold")
        table.add_column("Status")
        table.add_column("Time")
        table.add_column("Subs")
        table.add_column("Label", style="dim")

        for result in results:
            style = STATUS_STYLES[result.status]
            table.add_row(
                f"{result.weekday[:3]} {result.date_formatted}",
                f"[{style}]{result.status.value}[/{style}]",
                str(result.common_time_range or "-"),
                ", ".join(result.required_subs) or "-",
                summarize(result).label,
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, RosterPlannerError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def roster(config_file: ConfigOption = None):
    """
    List the configured roster.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)

        table = Table(title="Roster", show_header=True, header_style="bold cyan")
        table.add_column("Name", style="bold yellow")
        table.add_column("Role")
        table.add_column("Aliases", style="dim")

        for member in config.roster.members():
            role = config.role_of(member.name)
            table.add_row(member.name, role.value, ", ".join(member.aliases))

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]rosterplanner[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
