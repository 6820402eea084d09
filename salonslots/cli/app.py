"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional, Tuple

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_store import JsonSalonStore
from ..adapters.supabase_client import SupabaseClient
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SalonSlotsError
from ..domain.slot_calculator import SlotCalculator
from ..services.availability import AvailabilityService, SalonDataSource

app = typer.Typer(
    name="salonslots",
    help="Find bookable appointment slots for salon stylists",
    add_completion=False
)

console = Console()

logger = logging.getLogger(__name__)

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
MockOption = Annotated[bool, typer.Option("--mock", help="Use the bundled sample salon data instead of the configured source.")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")]
DateOption = Annotated[Optional[str], typer.Option("--date", help="Date to book (YYYY-MM-DD). Defaults to today.")]
ServiceOption = Annotated[Optional[str], typer.Option("--service", help="Service id to book")]
PackageOption = Annotated[Optional[str], typer.Option("--package", help="Package id to book")]
NowOption = Annotated[Optional[str], typer.Option("--now", help="Pretend the current time is this ISO datetime.")]


def _setup_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the config file, or defaults when no file exists at the default path.

    An explicitly given path must exist.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)

    logger.debug("No config file at %s, using defaults", config_path)
    return AppConfig()


def _build_data_source(config: AppConfig, mock: bool) -> SalonDataSource:
    if mock:
        return JsonSalonStore()

    source = config.data_source
    if source.kind == "supabase":
        return SupabaseClient(
            url=source.url,
            api_key=source.api_key,
            timeout=source.timeout_seconds
        )
    return JsonSalonStore(source.path)


def _build_service(config_file: Optional[Path], mock: bool, verbose: bool) -> Tuple[AppConfig, AvailabilityService]:
    config = _load_config(config_file)
    _setup_logging(config.log_level, verbose)

    service = AvailabilityService(
        data_source=_build_data_source(config, mock),
        slot_calculator=SlotCalculator(step_minutes=config.booking.step_minutes),
        booking_rules=config.booking.to_rules(),
    )
    return config, service


def _resolve_now(config: AppConfig, now_option: Optional[str]) -> pendulum.DateTime:
    if now_option:
        return pendulum.parse(now_option, tz=config.timezone)
    return pendulum.now(config.timezone)


def _plan_selector(service_id: Optional[str], package_id: Optional[str]) -> Tuple[str, str]:
    if bool(service_id) == bool(package_id):
        raise ValueError("Give exactly one of --service or --package.")
    if service_id:
        return "service", service_id
    return "package", package_id


def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


@app.command()
def stylists(
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List all stylists.
    """
    try:
        _, service = _build_service(config_file, mock, verbose)
        stylist_list = service.list_stylists()
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if not stylist_list:
        console.print("[yellow]No stylists found.[/yellow]")
        return

    table = Table(title="Stylists", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold yellow")

    for stylist in stylist_list:
        table.add_row(stylist.stylist_id, stylist.name)

    console.print()
    console.print(table)
    console.print()


@app.command()
def plans(
    stylist_id: Annotated[str, typer.Argument(help="Stylist id")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    List the services and packages a stylist can be booked for.
    """
    try:
        _, service = _build_service(config_file, mock, verbose)
        options = service.plan_options_for_stylist(stylist_id)
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if not options:
        console.print(f"[yellow]No bookable plans for stylist {stylist_id}.[/yellow]")
        return

    table = Table(title=f"Plans for {stylist_id}", show_header=True, header_style="bold cyan")
    table.add_column("Kind")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold yellow")
    table.add_column("Duration", justify="right")

    for option in options:
        table.add_row(option.kind, option.plan_id, option.name, f"{option.duration} min")

    console.print()
    console.print(table)
    console.print()


@app.command()
def slots(
    stylist_id: Annotated[str, typer.Argument(help="Stylist id")],
    date: DateOption = None,
    service_id: ServiceOption = None,
    package_id: PackageOption = None,
    now_option: NowOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Show the bookable slots of a stylist for a service or package.

    Examples:

        salonslots slots sty-ana --service svc-cut --date 2026-10-20 --mock

        salonslots slots sty-marco --package pkg-bridal --now 2026-10-20T14:50
    """
    try:
        config, service = _build_service(config_file, mock, verbose)
        now = _resolve_now(config, now_option)
        target_date = date or now.to_date_string()
        kind, plan_id = _plan_selector(service_id, package_id)
        plan = service.resolve_plan(stylist_id, kind, plan_id)

        found = asyncio.run(service.find_slots(
            stylist_id=stylist_id,
            target_date=target_date,
            plan=plan,
            now=now,
        ))
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    console.print(f"\n[bold cyan]{plan.name}[/bold cyan] ({plan.duration} min) with {stylist_id} on {target_date}\n")

    if not found:
        console.print(
            "[yellow]No available time slots.[/yellow]\n"
            "Try another date or a different stylist."
        )
        console.print()
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start", style="bold green")
    table.add_column("End")

    for idx, slot in enumerate(found, 1):
        table.add_row(str(idx), slot.start_hhmm, slot.end_hhmm)

    console.print(table)
    console.print(f"[green]{len(found)} slot(s) available.[/green]\n")


@app.command()
def check(
    stylist_id: Annotated[str, typer.Argument(help="Stylist id")],
    start: Annotated[str, typer.Argument(help="Start time to check (HH:MM)")],
    date: DateOption = None,
    service_id: ServiceOption = None,
    package_id: PackageOption = None,
    now_option: NowOption = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
    verbose: VerboseOption = False,
):
    """
    Re-check that a start time is still bookable. Exits with 1 if it is not.
    """
    try:
        config, service = _build_service(config_file, mock, verbose)
        now = _resolve_now(config, now_option)
        target_date = date or now.to_date_string()
        kind, plan_id = _plan_selector(service_id, package_id)
        plan = service.resolve_plan(stylist_id, kind, plan_id)

        available = asyncio.run(service.is_slot_available(
            stylist_id=stylist_id,
            target_date=target_date,
            plan=plan,
            start=start,
            now=now,
        ))
    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        _fail(e)

    if available:
        console.print(f"[green]✓ {start} on {target_date} is available.[/green]")
        return

    console.print(f"[yellow]✗ {start} on {target_date} is no longer available.[/yellow]")
    raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
