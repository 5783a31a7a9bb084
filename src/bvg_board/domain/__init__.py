"""Domain layer - core business logic and models."""

from bvg_board.domain.models import (
    Departure,
    DepartureList,
    FetchError,
    SchedulerState,
)
from bvg_board.domain.ports import (
    DepartureRepository,
    RenderSink,
)

__all__ = [
    "Departure",
    "DepartureList",
    "DepartureRepository",
    "FetchError",
    "RenderSink",
    "SchedulerState",
]
