"""Errors raised by departure sources."""


class FetchError(Exception):
    """A departure fetch failed. Always recoverable."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        """Initialize with a human readable reason and optional HTTP status code."""
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class FetchNetworkError(FetchError):
    """The API could not be reached."""


class FetchTimeoutError(FetchError):
    """The API did not answer within the fetch timeout."""


class MalformedResponseError(FetchError):
    """The API answered with a body that could not be parsed."""


class UnexpectedStatusError(FetchError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        """Initialize with the HTTP status code and a snippet of the response body."""
        reason = f"API returned status {status_code}"
        if body:
            reason = f"{reason}: {body[:200]}"
        super().__init__(reason, status_code=status_code)
