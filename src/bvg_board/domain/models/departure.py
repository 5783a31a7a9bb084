"""Departure domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Departure:
    """Represents a single upcoming departure from the monitored station."""

    line: str
    destination: str
    minutes_until: int
    platform: str | None = None

    def __post_init__(self) -> None:
        """Reject departures that already left."""
        if self.minutes_until < 0:
            raise ValueError(f"minutes_until must be non-negative, got {self.minutes_until}")

    def format(self) -> str:
        """Format as a single line, e.g. "S3 Erkner 5 min"."""
        return f"{self.line} {self.destination} {self.minutes_until} min"

    def format_truncated(self, max_chars: int) -> str:
        """Format and shorten the destination so the text fits within max_chars.

        Line and minutes are kept intact. If they alone do not fit, the
        formatted text is cut to max_chars.
        """
        formatted = self.format()
        if len(formatted) <= max_chars:
            return formatted

        line_text = f"{self.line} "
        minutes_text = f" {self.minutes_until} min"
        overhead = len(line_text) + len(minutes_text)
        if overhead >= max_chars:
            return formatted[:max_chars]

        destination = self.destination[: max_chars - overhead]
        return f"{line_text}{destination}{minutes_text}"
