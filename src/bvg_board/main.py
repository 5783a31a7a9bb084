"""Main entry point for the BVG departure board."""

import argparse
import asyncio
import logging
import sys

import aiohttp
from pydantic import ValidationError

from bvg_board.adapters.config import AppConfig
from bvg_board.adapters.display import ConsoleRenderSink, create_render_sink
from bvg_board.adapters.static_source import StaticDepartureRepository
from bvg_board.adapters.vbb_api import DepartureFilter, VbbDepartureParser, VbbDepartureRepository
from bvg_board.application.services import RefreshRotationScheduler
from bvg_board.domain.models import FetchError, bounded_departure_list
from bvg_board.domain.ports import DepartureRepository, RenderSink

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="BVG departure board - rotates upcoming departures on an LED matrix",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run on the Raspberry Pi with the LED matrix
  bvg-board

  # Print departures to the console instead
  bvg-board --console

  # Fetch once and exit
  bvg-board --once
        """,
    )
    parser.add_argument("--console", action="store_true", help="Print to the console")
    parser.add_argument(
        "--demo", action="store_true", help="Rotate static demo departures (no network)"
    )
    parser.add_argument(
        "--once", action="store_true", help="Fetch once, print the departures and exit"
    )
    parser.add_argument("--config", dest="config_file", help="Path to TOML configuration file")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    """Configure process-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_departure_filter(config: AppConfig) -> DepartureFilter:
    """Translate filter settings into a DepartureFilter."""
    return DepartureFilter(
        min_minutes=config.min_minutes,
        max_minutes=config.max_minutes,
        excluded_destination=config.excluded_destination,
        excluded_line_prefixes=tuple(config.excluded_line_prefixes),
        excluded_lines=frozenset(config.excluded_lines),
        exclude_buses=config.exclude_buses,
    )


def build_scheduler(
    config: AppConfig, source: DepartureRepository, sink: RenderSink
) -> RefreshRotationScheduler:
    """Wire a scheduler from configuration."""
    return RefreshRotationScheduler(
        source,
        sink,
        config.station_id,
        refresh_interval=config.refresh_interval_seconds,
        rotation_interval=config.rotation_interval_seconds,
        display_cap=config.display_cap,
        fetch_timeout=config.fetch_timeout_seconds,
        tick_interval=config.tick_interval_seconds,
    )


async def run_once(config: AppConfig, source: DepartureRepository) -> int:
    """Fetch departures once and print the retained ones.

    Returns:
        Process exit status: 0 on success, 1 when the fetch failed.
    """
    try:
        departures = await asyncio.wait_for(
            source.get_departures(config.station_id), timeout=config.fetch_timeout_seconds
        )
    except (FetchError, TimeoutError) as e:
        logger.error(f"API Error: {e}")
        return 1

    retained = bounded_departure_list(departures, config.display_cap)
    if not retained:
        logger.info("No departures found")
        return 0

    logger.info(f"Fetched {len(departures)} departures, showing {len(retained)}")
    sink = ConsoleRenderSink(max_width=config.console_max_width)
    for departure in retained:
        sink.render(departure)
    return 0


async def run_board(config: AppConfig, source: DepartureRepository, sink: RenderSink) -> None:
    """Run the scheduler until cancelled."""
    scheduler = build_scheduler(config, source, sink)
    await scheduler.start()
    try:
        await scheduler.wait()
    finally:
        await scheduler.stop()
        sink.close()


async def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        overrides = {"config_file": args.config_file} if args.config_file else {}
        config = AppConfig.load(**overrides)
    except (ValidationError, ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    if args.demo:
        logger.info("Demo mode: rotating static departures")
        source: DepartureRepository = StaticDepartureRepository()
        if args.once:
            return await run_once(config, source)
        sink = create_render_sink(config, force_console=args.console)
        await run_board(config, source, sink)
        return 0

    timeout = aiohttp.ClientTimeout(total=config.fetch_timeout_seconds)
    async with aiohttp.ClientSession(timeout=timeout) as session:
        parser = VbbDepartureParser(build_departure_filter(config))
        source = VbbDepartureRepository(
            session,
            parser,
            base_url=config.api_base_url,
            duration_minutes=config.duration_minutes,
        )
        if args.once:
            return await run_once(config, source)

        logger.info(f"BVG Live Display - station {config.station_id}")
        sink = create_render_sink(config, force_console=args.console)
        await run_board(config, source, sink)
    return 0


def cli_main() -> None:
    """CLI entry point for setuptools."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        sys.exit(0)


if __name__ == "__main__":
    cli_main()
