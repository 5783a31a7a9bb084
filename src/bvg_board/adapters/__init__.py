"""Adapters layer - external system integrations."""

from bvg_board.adapters.config import AppConfig
from bvg_board.adapters.static_source import StaticDepartureRepository
from bvg_board.adapters.vbb_api import VbbDepartureRepository

__all__ = [
    "AppConfig",
    "StaticDepartureRepository",
    "VbbDepartureRepository",
]
