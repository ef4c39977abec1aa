"""Error taxonomy shared by the client, controller and aligner."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for every failure the dashboard knows how to report."""


class ValidationError(DashboardError):
    """Rejected locally before any request is issued."""


class NetworkError(DashboardError):
    """The backend could not be reached."""


class ServerError(DashboardError):
    """The backend answered with a non-2xx status or an unreadable body."""

    def __init__(self, status_code: int | None, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail or f"Server responded with HTTP {status_code}")


class NotFoundError(ServerError):
    """The requested race does not exist."""


class ShapeMismatchError(DashboardError):
    """A series bundle broke the equal-length contract."""

    def __init__(self, message: str, expected: int | None = None, actual: int | None = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


def user_message(error: BaseException, fallback: str) -> str:
    if isinstance(error, ShapeMismatchError):
        return f"Data integrity error: {error}"
    if isinstance(error, ServerError) and error.detail:
        return error.detail
    if isinstance(error, ValidationError):
        return str(error)
    return fallback
