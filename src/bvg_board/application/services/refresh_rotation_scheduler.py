"""Refresh-rotation scheduler for the departure board."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from bvg_board.domain.contracts.scheduler import SchedulerProtocol
from bvg_board.domain.models.departure_list import bounded_departure_list
from bvg_board.domain.models.fetch_error import FetchError, FetchTimeoutError
from bvg_board.domain.models.scheduler_state import SchedulerState

if TYPE_CHECKING:
    from collections.abc import Callable

    from bvg_board.domain.models.departure import Departure
    from bvg_board.domain.ports import DepartureRepository, RenderSink

logger = logging.getLogger(__name__)


def _describe_fetch_error(error: Exception) -> str:
    """Describe a fetch failure for logging."""
    if isinstance(error, FetchError):
        return f"{error.reason} (status: {error.status_code})"
    return f"{type(error).__name__}: {error}"


class RefreshRotationScheduler(SchedulerProtocol):
    """Refreshes departures on a slow cadence and rotates the display on a fast one.

    Both cadences are serviced from one cooperative loop calling tick(). The
    fetch is awaited inline, bounded by fetch_timeout, so the departure list
    is only ever replaced by a single assignment between rotations.
    """

    def __init__(
        self,
        source: DepartureRepository,
        sink: RenderSink,
        station_id: str,
        *,
        refresh_interval: float = 20.0,
        rotation_interval: float = 10.0,
        display_cap: int = 3,
        fetch_timeout: float = 5.0,
        tick_interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the scheduler.

        Args:
            source: Where departures are fetched from.
            sink: Where the current departure is drawn.
            station_id: Station to query.
            refresh_interval: Seconds between fetches.
            rotation_interval: Seconds between display swaps.
            display_cap: Maximum number of departures retained.
            fetch_timeout: Maximum seconds to wait for one fetch.
            tick_interval: Seconds between ticks of the driving loop.
            clock: Monotonic clock used by the driving loop.
        """
        self.source = source
        self.sink = sink
        self.station_id = station_id
        self.refresh_interval = refresh_interval
        self.rotation_interval = rotation_interval
        self.display_cap = display_cap
        self.fetch_timeout = fetch_timeout
        self.tick_interval = tick_interval
        self.clock = clock
        self.state = SchedulerState()
        self._task: asyncio.Task | None = None

    async def tick(self, now: float) -> None:
        """Refresh and/or rotate if due at monotonic time now."""
        if self._refresh_due(now):
            await self._refresh(now)
        if self._rotation_due(now):
            self._rotate(now)

    def _refresh_due(self, now: float) -> bool:
        last = self.state.last_fetch_time
        return last is None or now - last >= self.refresh_interval

    def _rotation_due(self, now: float) -> bool:
        if not self.state.has_departures:
            return False
        last = self.state.last_rotation_time
        return last is None or now - last >= self.rotation_interval

    async def _fetch(self) -> list[Departure]:
        try:
            return await asyncio.wait_for(
                self.source.get_departures(self.station_id), timeout=self.fetch_timeout
            )
        except TimeoutError as e:
            raise FetchTimeoutError(
                f"No answer within {self.fetch_timeout}s for station {self.station_id}"
            ) from e

    async def _refresh(self, now: float) -> None:
        """Fetch departures and install them; failures keep the current list."""
        state = self.state
        try:
            departures = await self._fetch()
        except Exception as e:
            logger.warning(
                f"Fetching departures for station {self.station_id} failed: "
                f"{_describe_fetch_error(e)}; "
                f"keeping {len(state.current_list)} cached departure(s), "
                f"retrying in {self.refresh_interval}s"
            )
            state.last_fetch_time = now
            return

        new_list = bounded_departure_list(departures, self.display_cap)
        if new_list == state.current_list:
            logger.debug(f"Fetched {len(new_list)} departure(s), unchanged")
        else:
            state.current_list = new_list
            state.rotation_index = 0
            state.show_first_pending = True
            if new_list:
                logger.info(f"Fetched {len(new_list)} departure(s)")
                for departure in new_list:
                    logger.debug(f"  - {departure.format()}")
            else:
                logger.info("No departures available")
        state.last_fetch_time = now

    def _rotate(self, now: float) -> None:
        """Advance to the next departure and render it."""
        state = self.state
        if state.show_first_pending:
            state.show_first_pending = False
        else:
            state.rotation_index = (state.rotation_index + 1) % len(state.current_list)
        departure = state.current_departure
        logger.debug(f"Showing: {departure.format()}")
        self.sink.render(departure)
        state.last_rotation_time = now

    async def run(self) -> None:
        """Tick forever on a fixed short cadence."""
        while True:
            await self.tick(self.clock())
            await asyncio.sleep(self.tick_interval)

    async def start(self) -> None:
        """Start the scheduler loop as a background task."""
        if self._task is not None and not self._task.done():
            logger.warning("Scheduler already running")
            return

        logger.info(
            f"Starting scheduler for station {self.station_id}: "
            f"fetching every {self.refresh_interval}s, "
            f"cycling between top {self.display_cap} departures every {self.rotation_interval}s"
        )
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Stop the scheduler loop, abandoning any in-flight fetch."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Scheduler cancelled")
            logger.info("Stopped scheduler")

    async def wait(self) -> None:
        """Wait until the scheduler loop ends."""
        if self._task is not None:
            await self._task
