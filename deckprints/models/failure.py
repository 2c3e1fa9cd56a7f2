"""
Failure classification for the HTTP surface.

Errors the system can explain are raised as KnownError subclasses. The
app's KnownError handler turns them into a response with the error's
status code and a FailureDetail body under "detail".

Provider errors (NotFoundError, FetchError) are defined beside the
provider client and never reach the HTTP layer directly: the resolver
records them as a user-visible message instead.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    INVALID_INPUT = "invalid_input"
    RESOLUTION_IN_PROGRESS = "resolution_in_progress"
    SERVICE_UNAVAILABLE = "service_unavailable"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class InvalidInputError(KnownError):
    """Raised when a request is well-formed but cannot be acted on."""

    def __init__(self, message: str, suggestion: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            suggestion=suggestion,
            status_code=400,
        )


class ResolutionInProgressError(KnownError):
    """
    Raised when a resolution is requested while one is already running.

    Only one run may be in flight per session; a second run would reset
    shared state underneath the first.
    """

    def __init__(self, session_id: str | None = None):
        detail = f"session={session_id}" if session_id else None
        super().__init__(
            kind=FailureKind.RESOLUTION_IN_PROGRESS,
            message="Printings for this deck list are still loading.",
            detail=detail,
            suggestion="Wait for the current lookup to finish, then try again.",
            status_code=409,
        )


class ServiceUnavailableError(KnownError):
    """Raised when Scryfall data the request depends on could not be loaded."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message=message,
            detail=detail,
            suggestion="Scryfall may be unreachable. Try again in a few minutes.",
            status_code=503,
        )
