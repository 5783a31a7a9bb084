"""Static departure source adapter."""

from bvg_board.adapters.static_source.static_departure_repository import (
    DEMO_DEPARTURES,
    StaticDepartureRepository,
)

__all__ = ["DEMO_DEPARTURES", "StaticDepartureRepository"]
