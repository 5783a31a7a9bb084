"""Tests for the VBB departure parser."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from bvg_board.adapters.vbb_api import DepartureFilter, VbbDepartureParser
from bvg_board.domain.models import Departure, MalformedResponseError

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


def vbb_departure(
    line: str = "S5",
    direction: str | None = "S Strausberg Nord Bhf",
    minutes: float | None = 5,
    platform: str | None = "2",
    **extra: Any,
) -> dict[str, Any]:
    """Build a departure entry shaped like the VBB API response."""
    when = (NOW + timedelta(minutes=minutes)).isoformat() if minutes is not None else None
    entry: dict[str, Any] = {
        "tripId": "1|12345|0|86|1052024",
        "when": when,
        "plannedWhen": when,
        "delay": 0,
        "platform": platform,
        "direction": direction,
        "line": {"name": line, "product": "suburban"},
    }
    entry.update(extra)
    return entry


@pytest.fixture
def parser() -> VbbDepartureParser:
    """Create a parser with the default filter."""
    return VbbDepartureParser(DepartureFilter())


def test_parses_departure_fields(parser: VbbDepartureParser) -> None:
    """Given a valid entry, when parsing, then line, cleaned destination, minutes and platform are set."""
    departures = parser.parse_departures([vbb_departure()], NOW)

    assert departures == [
        Departure(line="S5", destination="Strausberg Nord", minutes_until=5, platform="2")
    ]


def test_sorts_by_minutes(parser: VbbDepartureParser) -> None:
    """Given unsorted entries, when parsing, then departures are soonest first."""
    departures = parser.parse_departures(
        [
            vbb_departure(line="S3", direction="S Erkner Bhf", minutes=10),
            vbb_departure(line="U1", direction="U Uhlandstr. (Berlin)", minutes=2),
            vbb_departure(line="S5", minutes=5),
        ],
        NOW,
    )

    assert [d.minutes_until for d in departures] == [2, 5, 10]
    assert [d.line for d in departures] == ["U1", "S5", "S3"]


def test_minutes_are_truncated(parser: VbbDepartureParser) -> None:
    """Given a departure 5.9 minutes away, when parsing, then minutes_until is 5."""
    departures = parser.parse_departures([vbb_departure(minutes=5.9)], NOW)

    assert departures[0].minutes_until == 5


def test_skips_departures_outside_time_window(parser: VbbDepartureParser) -> None:
    """Given departures leaving now and in 16 minutes, when parsing, then both are skipped."""
    departures = parser.parse_departures(
        [vbb_departure(minutes=0.5), vbb_departure(minutes=16), vbb_departure(minutes=15)], NOW
    )

    assert [d.minutes_until for d in departures] == [15]


def test_skips_entries_without_direction_or_time(parser: VbbDepartureParser) -> None:
    """Given entries missing direction or when (cancelled), when parsing, then they are skipped."""
    departures = parser.parse_departures(
        [vbb_departure(direction=None), vbb_departure(minutes=None, cancelled=True)], NOW
    )

    assert departures == []


def test_skips_filtered_lines_and_directions(parser: VbbDepartureParser) -> None:
    """Given regional trains, Ringbahn, buses and trips to the station itself, when parsing, then only the rest is kept."""
    departures = parser.parse_departures(
        [
            vbb_departure(line="RE1"),
            vbb_departure(line="S41", direction="Ring S41 ⟳"),
            vbb_departure(line="347"),
            vbb_departure(line="U1", direction="U Warschauer Str. (Berlin)"),
            vbb_departure(line="M10", direction="Turmstr. (Berlin)", minutes=3),
        ],
        NOW,
    )

    assert departures == [
        Departure(line="M10", destination="Turmstr.", minutes_until=3, platform="2")
    ]


def test_missing_platform_is_none(parser: VbbDepartureParser) -> None:
    """Given an entry without platform, when parsing, then platform is None."""
    departures = parser.parse_departures([vbb_departure(platform=None)], NOW)

    assert departures[0].platform is None


def test_malformed_entry_is_skipped(parser: VbbDepartureParser) -> None:
    """Given an entry with an unparseable time, when parsing, then it is skipped and the rest kept."""
    broken = vbb_departure()
    broken["when"] = "not-a-date"

    departures = parser.parse_departures([broken, vbb_departure(line="S3", minutes=7)], NOW)

    assert [d.line for d in departures] == ["S3"]


def test_parse_response_reads_departures_list(parser: VbbDepartureParser) -> None:
    """Given a full response body, when parsing, then departures are extracted."""
    departures = parser.parse_response({"departures": [vbb_departure()]}, NOW)

    assert len(departures) == 1


@pytest.mark.parametrize("body", [[], {"departures": None}, {"foo": []}, "text"])
def test_parse_response_rejects_malformed_body(parser: VbbDepartureParser, body: Any) -> None:
    """Given a body without a departures list, when parsing, then MalformedResponseError is raised."""
    with pytest.raises(MalformedResponseError):
        parser.parse_response(body, NOW)


def test_handles_utc_z_suffix(parser: VbbDepartureParser) -> None:
    """Given a time with Z suffix, when parsing, then it is treated as UTC."""
    entry = vbb_departure()
    entry["when"] = "2024-05-01T12:04:00Z"

    departures = parser.parse_departures([entry], NOW)

    assert departures[0].minutes_until == 4


def test_handles_local_offset(parser: VbbDepartureParser) -> None:
    """Given a time with +02:00 offset, when parsing, then it is converted to UTC."""
    entry = vbb_departure()
    entry["when"] = "2024-05-01T14:08:00+02:00"

    departures = parser.parse_departures([entry], NOW)

    assert departures[0].minutes_until == 8
