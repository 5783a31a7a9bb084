"""Filtering and cleaning rules for VBB departures."""

from dataclasses import dataclass, field

_DESTINATION_CUT_MARKERS = (" (Berlin)", " Bhf", " ⟲", " ⟳")


def clean_destination(destination: str) -> str:
    """Shorten a VBB direction for a small display.

    Drops a leading "S " or "U " and everything from the first
    " (Berlin)", " Bhf" or Ringbahn arrow onwards.
    """
    if destination.startswith(("S ", "U ")):
        destination = destination[2:]

    cut = len(destination)
    for marker in _DESTINATION_CUT_MARKERS:
        index = destination.find(marker)
        if index != -1:
            cut = min(cut, index)
    return destination[:cut]


@dataclass(frozen=True)
class DepartureFilter:
    """Which VBB departures are worth showing."""

    min_minutes: int = 1
    max_minutes: int = 15
    excluded_destination: str | None = "Warschauer"
    excluded_line_prefixes: tuple[str, ...] = ("RE", "RB", "IC", "EC", "EN", "FEX", "ICE")
    excluded_lines: frozenset[str] = field(default_factory=lambda: frozenset({"S41", "S42"}))
    exclude_buses: bool = True

    def accepts_line(self, line_name: str) -> bool:
        """Return False for regional/long-distance trains, Ringbahn and buses."""
        if line_name.startswith(self.excluded_line_prefixes):
            return False
        if line_name in self.excluded_lines:
            return False
        return not (self.exclude_buses and line_name.isdigit())

    def accepts_direction(self, direction: str) -> bool:
        """Return False for trips heading to the monitored station itself."""
        return not (self.excluded_destination and self.excluded_destination in direction)

    def accepts_minutes(self, minutes: int) -> bool:
        """Return True when the departure falls into the shown time window."""
        return self.min_minutes <= minutes <= self.max_minutes
