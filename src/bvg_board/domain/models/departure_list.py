"""Departure list type and helpers."""

from collections.abc import Iterable

from bvg_board.domain.models.departure import Departure

DepartureList = tuple[Departure, ...]


def bounded_departure_list(departures: Iterable[Departure], cap: int) -> DepartureList:
    """Build an immutable departure list keeping at most cap entries in source order."""
    if cap < 1:
        raise ValueError(f"cap must be at least 1, got {cap}")
    result: list[Departure] = []
    for departure in departures:
        if len(result) >= cap:
            break
        result.append(departure)
    return tuple(result)
