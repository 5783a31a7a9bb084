"""VBB REST API adapter."""

from bvg_board.adapters.vbb_api.departure_filter import DepartureFilter, clean_destination
from bvg_board.adapters.vbb_api.departure_parser import VbbDepartureParser
from bvg_board.adapters.vbb_api.vbb_departure_repository import VbbDepartureRepository

__all__ = [
    "DepartureFilter",
    "VbbDepartureParser",
    "VbbDepartureRepository",
    "clean_destination",
]
