"""Scheduler state domain model."""

from dataclasses import dataclass

from bvg_board.domain.models.departure import Departure
from bvg_board.domain.models.departure_list import DepartureList


@dataclass
class SchedulerState:
    """Mutable state owned by the refresh-rotation scheduler.

    Timestamps are monotonic clock values; None means the action never ran,
    which makes it due on the next tick.
    """

    current_list: DepartureList = ()
    rotation_index: int = 0
    last_fetch_time: float | None = None
    last_rotation_time: float | None = None
    show_first_pending: bool = False

    @property
    def has_departures(self) -> bool:
        """Return True when there is something to rotate through."""
        return len(self.current_list) > 0

    @property
    def current_departure(self) -> Departure | None:
        """Departure at the rotation index, or None when the list is empty."""
        if not self.current_list:
            return None
        return self.current_list[self.rotation_index]
