"""Departure repository port."""

from typing import Protocol

from bvg_board.domain.models.departure import Departure


class DepartureRepository(Protocol):
    """Port for retrieving upcoming departures.

    Implementations raise FetchError on any failure and do not retry.
    """

    async def get_departures(self, station_id: str) -> list[Departure]:
        """Get upcoming departures for a station, soonest first."""
        ...
