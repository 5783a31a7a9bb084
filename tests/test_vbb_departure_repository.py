"""Tests for the VBB departure repository."""

from typing import Any

import aiohttp
import pytest

from bvg_board.adapters.vbb_api import DepartureFilter, VbbDepartureParser, VbbDepartureRepository
from bvg_board.domain.models import (
    FetchNetworkError,
    FetchTimeoutError,
    MalformedResponseError,
    UnexpectedStatusError,
)


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""

    def __init__(self, status: int = 200, body: Any = None, json_error: Exception | None = None):
        """Initialize with status, JSON body and an optional decoding error."""
        self.status = status
        self._body = body
        self._json_error = json_error

    async def json(self) -> Any:
        """Return the body or raise the configured decoding error."""
        if self._json_error is not None:
            raise self._json_error
        return self._body

    async def text(self) -> str:
        """Return the body as text."""
        return str(self._body)

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *args: object) -> None:
        return None


class FakeSession:
    """Records requests and returns a canned response or raises on entry."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None):
        """Initialize with the response to return or the error to raise."""
        self.response = response
        self.error = error
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, params: dict[str, Any] | None = None) -> FakeResponse:
        """Record the request."""
        self.requests.append((url, params or {}))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def make_repository(session: FakeSession) -> VbbDepartureRepository:
    """Create a repository keeping every departure regardless of line."""
    parser = VbbDepartureParser(DepartureFilter(exclude_buses=False, max_minutes=10**9))
    return VbbDepartureRepository(session, parser)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_requests_station_departures_with_duration() -> None:
    """Given a station id, when fetching, then the stop departures endpoint is queried."""
    session = FakeSession(FakeResponse(body={"departures": []}))
    repo = VbbDepartureRepository(session, duration_minutes=15)  # type: ignore[arg-type]

    await repo.get_departures("900120003")

    url, params = session.requests[0]
    assert url == "https://v6.bvg.transport.rest/stops/900120003/departures"
    assert params == {"duration": 15}


@pytest.mark.asyncio
async def test_returns_parsed_departures() -> None:
    """Given a valid response, when fetching, then departures are parsed."""
    body = {
        "departures": [
            {
                "when": "2099-01-01T12:00:00+01:00",
                "direction": "S Erkner Bhf",
                "line": {"name": "S3"},
                "platform": "3",
            }
        ]
    }
    repo = make_repository(FakeSession(FakeResponse(body=body)))

    departures = await repo.get_departures("900120003")

    assert len(departures) == 1
    assert departures[0].line == "S3"
    assert departures[0].destination == "Erkner"
    assert departures[0].platform == "3"


@pytest.mark.asyncio
async def test_server_error_status_carries_status_code() -> None:
    """Given a 503 response, when fetching, then UnexpectedStatusError carries the status."""
    repo = make_repository(FakeSession(FakeResponse(status=503, body="Service Unavailable")))

    with pytest.raises(UnexpectedStatusError) as exc_info:
        await repo.get_departures("900120003")

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [200, 203])
async def test_any_2xx_status_is_accepted(status: int) -> None:
    """Given a 2xx response other than 200, when fetching, then the body is parsed."""
    repo = make_repository(FakeSession(FakeResponse(status=status, body={"departures": []})))

    assert await repo.get_departures("900120003") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [199, 301, 404])
async def test_non_2xx_status_raises_unexpected_status(status: int) -> None:
    """Given a non-2xx response, when fetching, then UnexpectedStatusError is raised."""
    repo = make_repository(FakeSession(FakeResponse(status=status, body="nope")))

    with pytest.raises(UnexpectedStatusError):
        await repo.get_departures("900120003")

@pytest.mark.asyncio
async def test_invalid_json_raises_malformed_response() -> None:
    """Given a body that is not JSON, when fetching, then MalformedResponseError is raised."""
    repo = make_repository(FakeSession(FakeResponse(json_error=ValueError("Expecting value"))))

    with pytest.raises(MalformedResponseError):
        await repo.get_departures("900120003")


@pytest.mark.asyncio
async def test_body_without_departures_raises_malformed_response() -> None:
    """Given JSON without a departures list, when fetching, then MalformedResponseError is raised."""
    repo = make_repository(FakeSession(FakeResponse(body={"error": True})))

    with pytest.raises(MalformedResponseError):
        await repo.get_departures("900120003")


@pytest.mark.asyncio
async def test_connection_error_raises_network_error() -> None:
    """Given a connection failure, when fetching, then FetchNetworkError is raised."""
    repo = make_repository(FakeSession(error=aiohttp.ClientConnectionError("refused")))

    with pytest.raises(FetchNetworkError):
        await repo.get_departures("900120003")


@pytest.mark.asyncio
async def test_timeout_raises_fetch_timeout() -> None:
    """Given a session timeout, when fetching, then FetchTimeoutError is raised."""
    repo = make_repository(FakeSession(error=TimeoutError()))

    with pytest.raises(FetchTimeoutError):
        await repo.get_departures("900120003")


@pytest.mark.asyncio
async def test_missing_session_raises_runtime_error() -> None:
    """Given no session, when fetching, then RuntimeError is raised."""
    repo = VbbDepartureRepository()

    with pytest.raises(RuntimeError, match="aiohttp session"):
        await repo.get_departures("900120003")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_live_vbb_api_returns_departures() -> None:
    """Fetch live departures for S+U Warschauer Str."""
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=10)) as session:
        repo = VbbDepartureRepository(session)

        departures = await repo.get_departures("900120003")

    minutes = [d.minutes_until for d in departures]
    assert minutes == sorted(minutes)
    assert all(1 <= m <= 15 for m in minutes)
