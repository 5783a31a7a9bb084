"""VBB (Berlin/Brandenburg) REST API departure repository adapter.

Uses v6.bvg.transport.rest API for real-time Berlin public transport data.
"""

import logging
from typing import TYPE_CHECKING

import aiohttp

from bvg_board.adapters.api_request_logger import log_api_request, log_api_response
from bvg_board.adapters.vbb_api.departure_parser import VbbDepartureParser
from bvg_board.domain.models.departure import Departure
from bvg_board.domain.models.fetch_error import (
    FetchNetworkError,
    FetchTimeoutError,
    MalformedResponseError,
    UnexpectedStatusError,
)
from bvg_board.domain.ports.departure_repository import DepartureRepository

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientSession

DEFAULT_BASE_URL = "https://v6.bvg.transport.rest"


class VbbDepartureRepository(DepartureRepository):
    """Adapter for VBB REST API departure repository."""

    def __init__(
        self,
        session: "ClientSession | None" = None,
        parser: VbbDepartureParser | None = None,
        base_url: str = DEFAULT_BASE_URL,
        duration_minutes: int = 15,
    ) -> None:
        """Initialize with optional aiohttp session and parser."""
        self._session = session
        self._parser = parser or VbbDepartureParser()
        self._base_url = base_url.rstrip("/")
        self._duration_minutes = duration_minutes

    async def get_departures(self, station_id: str) -> list[Departure]:
        """Get upcoming departures for a VBB station.

        Args:
            station_id: VBB station ID (e.g. "900120003" for S+U Warschauer Str.)

        Returns:
            Filtered departures sorted by minutes until departure.

        Raises:
            FetchError: On network failure, timeout, non-2xx status or malformed body.
        """
        if not self._session:
            raise RuntimeError("VBB API requires an aiohttp session")

        url = f"{self._base_url}/stops/{station_id}/departures"
        params: dict[str, int | str] = {"duration": self._duration_minutes}
        log_api_request("GET", url, params)

        try:
            async with self._session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    response_text = await response.text()
                    raise UnexpectedStatusError(response.status, response_text)

                try:
                    data = await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise MalformedResponseError(f"VBB response is not valid JSON: {e}") from e

                raw_count = len(data.get("departures") or []) if isinstance(data, dict) else None
                log_api_response(url, response.status, raw_count)
        except TimeoutError as e:
            logger.error(f"Timeout fetching departures from VBB API for station '{station_id}'")
            raise FetchTimeoutError(f"VBB API timed out for station '{station_id}'") from e
        except aiohttp.ClientError as e:
            logger.error(f"Error fetching departures from VBB API for station '{station_id}': {e}")
            raise FetchNetworkError(f"VBB API request failed: {e}") from e

        departures = self._parser.parse_response(data)
        logger.debug(f"Parsed {len(departures)} departures for station {station_id}")
        return departures
