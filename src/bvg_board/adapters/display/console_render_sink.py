"""Console render sink used when no LED matrix is attached."""

import sys
from typing import TextIO

from bvg_board.domain.models.departure import Departure
from bvg_board.domain.ports.render_sink import RenderSink


class ConsoleRenderSink(RenderSink):
    """Prints each rendered departure as one line of text."""

    def __init__(self, max_width: int = 0, stream: TextIO | None = None) -> None:
        """Initialize the sink.

        Args:
            max_width: Truncate output to this many characters (0 for unlimited).
            stream: Where to print (defaults to stdout).
        """
        self.max_width = max_width
        self.stream = stream

    def format_departure(self, departure: Departure) -> str:
        """Format a departure for the console."""
        if self.max_width > 0:
            return departure.format_truncated(self.max_width)
        text = departure.format()
        if departure.platform:
            text += f" [Pl. {departure.platform}]"
        return text

    def render(self, departure: Departure) -> None:
        """Print the departure."""
        stream = self.stream or sys.stdout
        print(self.format_departure(departure), file=stream, flush=True)
