"""Domain contracts (protocols) implemented outside the domain."""

from bvg_board.domain.contracts.scheduler import SchedulerProtocol

__all__ = ["SchedulerProtocol"]
