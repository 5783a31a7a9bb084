"""Domain models for BVG departures."""

from bvg_board.domain.models.departure import Departure
from bvg_board.domain.models.departure_list import DepartureList, bounded_departure_list
from bvg_board.domain.models.fetch_error import (
    FetchError,
    FetchNetworkError,
    FetchTimeoutError,
    MalformedResponseError,
    UnexpectedStatusError,
)
from bvg_board.domain.models.scheduler_state import SchedulerState

__all__ = [
    "Departure",
    "DepartureList",
    "FetchError",
    "FetchNetworkError",
    "FetchTimeoutError",
    "MalformedResponseError",
    "SchedulerState",
    "UnexpectedStatusError",
    "bounded_departure_list",
]
