"""Application services."""

from bvg_board.application.services.refresh_rotation_scheduler import RefreshRotationScheduler

__all__ = ["RefreshRotationScheduler"]
