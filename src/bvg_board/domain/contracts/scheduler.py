"""Protocol for the departure scheduler."""

from typing import Protocol


class SchedulerProtocol(Protocol):
    """Protocol for driving refresh and rotation of departures."""

    async def tick(self, now: float) -> None:
        """Run one scheduling step at monotonic time now."""
        ...

    async def start(self) -> None:
        """Start the scheduler loop."""
        ...

    async def stop(self) -> None:
        """Stop the scheduler loop."""
        ...
