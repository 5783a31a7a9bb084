"""Render sink port."""

from abc import ABC, abstractmethod

from bvg_board.domain.models.departure import Departure


class RenderSink(ABC):
    """Port for presenting a single departure to users.

    Implementations handle their own I/O errors; render never raises.
    """

    @abstractmethod
    def render(self, departure: Departure) -> None:
        """Draw one departure."""
        ...

    def close(self) -> None:  # noqa: B027
        """Release the display."""
