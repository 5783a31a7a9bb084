"""Ports (interfaces) for the ports-and-adapters architecture."""

from bvg_board.domain.ports.departure_repository import DepartureRepository
from bvg_board.domain.ports.render_sink import RenderSink

__all__ = [
    "DepartureRepository",
    "RenderSink",
]
