"""BVG departure board: rotates upcoming departures of one station on an LED matrix."""

__version__ = "0.1.0"
