"""Exceptions raised while acquiring dashboard data.

Both acquisition paths convert anything that goes wrong into one of these so
the controller has a single recovery boundary. Failures inside a render
sink are deliberately not part of this hierarchy and propagate as-is.
"""


class DashboardError(Exception):
    """Base class for data acquisition failures."""


class NetworkError(DashboardError):
    """The HTTP request failed: connection error, timeout or non-2xx status."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeError(DashboardError):
    """The response body was not JSON or lacked an expected field."""
