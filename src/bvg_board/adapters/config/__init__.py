"""Configuration adapters."""

from bvg_board.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
