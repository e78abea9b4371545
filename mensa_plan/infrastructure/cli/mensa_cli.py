"""
Mensa Plan Command-Line Interface.

Provides commands for:
- show: Print the weekly plan of one location
- all: Print the plans of every catalog location
- locations: List the known locations
- config: Show configuration
"""
import argparse
import asyncio
import logging
import sys
from typing import Dict, List, Optional

from rich.console import Console
from rich.table import Table

from mensa_plan.application.plan_service import PlanService
from mensa_plan.domain.entities import Day, Plan
from mensa_plan.domain.errors import MensaError
from mensa_plan.domain.locations import Location
from mensa_plan.domain.value_objects import Weekday
from mensa_plan.infrastructure.cli.config import MensaConfig
from mensa_plan.infrastructure.endpoints import GENERATIONS, EndpointGeneration, generation_by_name
from mensa_plan.infrastructure.logging.mensa_logger import MensaLogger, configure_logging, reset_logging
from mensa_plan.infrastructure.transport import HttpTransport

AVAILABLE_LOCATIONS = [location.value for location in Location]
AVAILABLE_WEEKDAYS = [weekday.abbreviation for weekday in Weekday]
CLI_LOGGER = "mensa_plan.cli"


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the Mensa CLI."""
    parser = argparse.ArgumentParser(
        prog="mensa-plan",
        description="SWFR Mensa meal plans as tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s show rempart --key ABC
  %(prog)s show 610 --day tue
  %(prog)s all --day fri
  %(prog)s locations
  %(prog)s config --show
        """,
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    parser.add_argument(
        "--key",
        type=str,
        help="API key (default: $MENSA_API_KEY)",
    )

    parser.add_argument(
        "--generation",
        type=str,
        choices=sorted(GENERATIONS),
        help="Endpoint generation (default: $MENSA_GENERATION or current)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    show_parser = subparsers.add_parser(
        "show",
        help="Show the weekly plan of one location",
    )
    show_parser.add_argument(
        "location",
        type=str,
        help=f"Location slug ({', '.join(AVAILABLE_LOCATIONS)}) or numeric identifier",
    )
    _add_day_argument(show_parser)

    all_parser = subparsers.add_parser(
        "all",
        help="Show the plans of every location",
    )
    _add_day_argument(all_parser)

    subparsers.add_parser(
        "locations",
        help="List known locations",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Show configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )

    return parser


def _add_day_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--day",
        type=str,
        choices=AVAILABLE_WEEKDAYS,
        help="Only show one weekday",
    )


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = create_parser()
    return parser.parse_args(args)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    config: Optional[MensaConfig] = None,
) -> logging.Logger:
    """Install the log handlers once for this run. Raises ValueError on a bad level."""
    config = config or MensaConfig()
    level = "DEBUG" if verbose else ("WARNING" if quiet else config.log_level)
    configure_logging(level, json_output=config.json_logs, log_dir=config.log_dir)
    return logging.getLogger(CLI_LOGGER)


def build_day_table(title: str, day: Day) -> Table:
    """One table per day: category, dish, note and the four price tiers."""
    table = Table(title=title)
    table.add_column("Art")
    table.add_column("Essen")
    table.add_column("Zusatz")
    table.add_column("Studierende", justify="right")
    table.add_column("Angestellte", justify="right")
    table.add_column("Gäste", justify="right")
    table.add_column("Schüler", justify="right")

    for menu in day.menues:
        table.add_row(
            menu.category,
            menu.name,
            menu.note or "",
            menu.price.price_students,
            menu.price.price_workers,
            menu.price.price_guests,
            menu.price.price_school,
        )
    return table


def render_plan(plan: Plan, console: Console, weekday: Optional[Weekday] = None) -> int:
    """Print a plan. Returns the number of day tables printed."""
    console.print(f"[bold]{plan.mensa_name}[/bold] ({plan.place.id})")

    days: Dict[Weekday, Day] = plan.days()
    if weekday is not None:
        days = {weekday: days[weekday]} if weekday in days else {}

    if not days:
        console.print("Kein Speiseplan verfügbar")
        return 0

    for day_weekday in sorted(days, key=lambda w: w.value):
        day = days[day_weekday]
        console.print(build_day_table(f"{day_weekday.abbreviation.capitalize()} {day.date}", day))
    return len(days)


def _generation(args: argparse.Namespace, config: MensaConfig) -> EndpointGeneration:
    return generation_by_name(args.generation or config.generation_name)


def _build_service(args: argparse.Namespace, config: MensaConfig) -> PlanService:
    return PlanService(
        generation=_generation(args, config),
        transport=HttpTransport(timeout=config.timeout),
        logger=MensaLogger("service"),
    )


def _weekday(args: argparse.Namespace) -> Optional[Weekday]:
    return Weekday.parse(args.day) if args.day else None


async def run_show(
    args: argparse.Namespace,
    config: MensaConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the show command."""
    key = args.key or config.api_key
    if not key:
        logger.error("No API key given (use --key or MENSA_API_KEY)")
        return 1

    location = Location.parse(args.location)
    service = _build_service(args, config)
    plan = await service.fetch_one(location, key)
    render_plan(plan, console, _weekday(args))
    return 0


async def run_all(
    args: argparse.Namespace,
    config: MensaConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the all command."""
    key = args.key or config.api_key
    if not key:
        logger.error("No API key given (use --key or MENSA_API_KEY)")
        return 1

    service = _build_service(args, config)
    plans = await service.fetch_all(key)
    for location in service.generation.catalog.locations():
        render_plan(plans[location], console, _weekday(args))
    return 0


async def run_locations(
    args: argparse.Namespace,
    config: MensaConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the locations command."""
    generation = _generation(args, config)

    table = Table(title=f"Locations ({generation.name})")
    table.add_column("Slug")
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for entry in generation.catalog:
        table.add_row(entry.location.value, entry.identifier, entry.name)
    console.print(table)
    return 0


async def run_config(
    args: argparse.Namespace,
    config: MensaConfig,
    logger: logging.Logger,
    console: Console,
) -> int:
    """Execute the config command."""
    if args.show:
        for key, value in config.to_dict().items():
            console.print(f"{key}: {value}")
    else:
        logger.info("Use --show to display the current configuration")
    return 0


async def main_async(args: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Async main entry point."""
    parsed_args = parse_args(args)

    if not parsed_args.command:
        create_parser().print_help()
        return 0

    try:
        config = MensaConfig.from_env()
        logger = setup_logging(verbose=parsed_args.verbose, quiet=parsed_args.quiet, config=config)
    except ValueError as e:
        logging.getLogger(CLI_LOGGER).error(f"Invalid configuration: {e}")
        return 1
    console = console or Console()

    command_handlers = {
        "show": run_show,
        "all": run_all,
        "locations": run_locations,
        "config": run_config,
    }

    handler = command_handlers.get(parsed_args.command)
    if not handler:
        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    try:
        return await handler(parsed_args, config, logger, console)
    except MensaError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1


def main(args: Optional[List[str]] = None) -> int:
    """Synchronous main entry point."""
    try:
        return asyncio.run(main_async(args))
    finally:
        reset_logging()


if __name__ == "__main__":
    sys.exit(main())
