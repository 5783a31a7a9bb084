"""Parser for VBB REST API departure responses (v6.bvg.transport.rest format)."""

import logging
from datetime import UTC, datetime
from typing import Any

from bvg_board.adapters.vbb_api.departure_filter import DepartureFilter, clean_destination
from bvg_board.domain.models.departure import Departure
from bvg_board.domain.models.fetch_error import MalformedResponseError

logger = logging.getLogger(__name__)


def _parse_time(value: str) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _minutes_until(when: datetime, now: datetime) -> int:
    """Whole minutes from now until when, truncated towards zero."""
    return int((when - now).total_seconds() / 60)


class VbbDepartureParser:
    """Parses VBB departure responses into Departure objects."""

    def __init__(self, departure_filter: DepartureFilter | None = None) -> None:
        """Initialize with the filter deciding which departures are kept."""
        self.departure_filter = departure_filter or DepartureFilter()

    def parse_response(self, data: Any, now: datetime | None = None) -> list[Departure]:
        """Parse a full response body.

        Args:
            data: Decoded JSON body, expected to be {"departures": [...]}.
            now: Reference time for minutes_until (defaults to current UTC time).

        Returns:
            Kept departures sorted by minutes_until.

        Raises:
            MalformedResponseError: If the body has no departures list.
        """
        if not isinstance(data, dict) or not isinstance(data.get("departures"), list):
            raise MalformedResponseError("VBB response has no 'departures' list")
        return self.parse_departures(data["departures"], now or datetime.now(UTC))

    def parse_departures(self, departures: list[Any], now: datetime) -> list[Departure]:
        """Parse, filter and sort raw departure entries."""
        result: list[Departure] = []
        for dep_data in departures:
            try:
                departure = self._parse_departure(dep_data, now)
            except Exception as e:
                logger.warning(f"Error processing VBB departure: {e}")
                continue
            if departure is not None:
                result.append(departure)

        result.sort(key=lambda d: d.minutes_until)
        return result

    def _parse_departure(self, dep_data: dict[str, Any], now: datetime) -> Departure | None:
        """Parse one entry, returning None when it is filtered out."""
        departure_filter = self.departure_filter

        direction = dep_data.get("direction")
        if not direction or not departure_filter.accepts_direction(direction):
            return None

        # Cancelled trips have no "when"
        when_str = dep_data.get("when")
        if not when_str:
            return None

        line_name = (dep_data.get("line") or {}).get("name", "")
        if not line_name or not departure_filter.accepts_line(line_name):
            return None

        minutes = _minutes_until(_parse_time(when_str), now)
        if not departure_filter.accepts_minutes(minutes):
            return None

        platform = dep_data.get("platform")
        return Departure(
            line=line_name,
            destination=clean_destination(direction),
            minutes_until=minutes,
            platform=str(platform) if platform is not None else None,
        )
