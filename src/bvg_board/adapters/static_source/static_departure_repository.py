"""Static departure repository for running without network access."""

from bvg_board.domain.models.departure import Departure
from bvg_board.domain.ports.departure_repository import DepartureRepository

DEMO_DEPARTURES: tuple[Departure, ...] = (
    Departure(line="U3", destination="Krumme Lanke", minutes_until=5),
    Departure(line="S7", destination="Potsdam Hbf", minutes_until=8),
    Departure(line="S5", destination="Strausberg Nord", minutes_until=2),
)


class StaticDepartureRepository(DepartureRepository):
    """Returns the same departures for every station."""

    def __init__(self, departures: tuple[Departure, ...] = DEMO_DEPARTURES) -> None:
        """Initialize with the departures to serve."""
        self.departures = departures

    async def get_departures(self, station_id: str) -> list[Departure]:  # noqa: ARG002
        """Return the configured departures."""
        return list(self.departures)
