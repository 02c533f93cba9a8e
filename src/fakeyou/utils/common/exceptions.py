"""
Common exceptions for the FakeYou client.

This module provides the closed error taxonomy raised by the client. Every
error that reaches a caller is a subclass of FakeYouError.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Union

if TYPE_CHECKING:
    from fakeyou.api.models import JobState


class FakeYouError(Exception):
    """Base exception class for all FakeYou client errors."""

    pass


class ConfigurationError(FakeYouError):
    """Exception raised for configuration errors."""

    pass


def describe_error_body(response_data: Optional[Dict[str, Any]]) -> str:
    """
    Join the error fields of a response envelope into one line.

    Args:
        response_data: Decoded envelope, or None

    Returns:
        str: "type - message - reason" with absent fields left out
    """
    if not response_data:
        return ""
    details = [
        response_data.get(key) for key in ("error_type", "error_message", "error_reason")
    ]
    return " - ".join(str(d) for d in details if d)


class APIError(FakeYouError):
    """
    Base exception class for errors reported by the remote API.

    Attributes:
        status_code: HTTP status, when known.
        response_data: Decoded response body, when there was one.
        error_type: Server supplied error type, if any.
        error_message: Server supplied message, if any.
        error_reason: Server supplied reason, if any.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data
        body = response_data or {}
        self.error_type = body.get("error_type")
        self.error_message = body.get("error_message")
        self.error_reason = body.get("error_reason")


class AuthenticationError(APIError):
    """Exception raised when the server rejects the session credentials."""

    def __init__(
        self,
        message: str = "Failed to authenticate user, check your credentials",
        status_code: Optional[int] = 401,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code, response_data)


class RateLimited(APIError):
    """
    Exception raised on HTTP 429.

    The client never retries on its own; backing off is up to the caller.

    Attributes:
        retry_after: Seconds suggested by the server, if it sent any.
    """

    def __init__(
        self,
        message: str = "Too many requests",
        retry_after: Optional[Union[int, float]] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, 429, response_data)
        self.retry_after = retry_after


class JobFailed(APIError):
    """
    Exception raised when a job ends unsuccessfully.

    Raised both for an envelope with ``success: false`` and for the
    ``complete_failure`` and ``dead`` statuses.

    Attributes:
        token: Token of the job that failed.
        state: Last observed job state, when one was parsed.
    """

    def __init__(
        self,
        token: str,
        state: Optional["JobState"] = None,
        message: Optional[str] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        if response_data is None and state is not None:
            response_data = state.raw
        if message is None:
            message = f"Job '{token}' was unsuccessful"
            if state is not None:
                message += f" (status: {state.status.value})"
            details = describe_error_body(response_data)
            if details:
                message += f": {details}"
        super().__init__(message, response_data=response_data)
        self.token = token
        self.state = state


class InvalidResponseShape(APIError):
    """Exception raised when a response is well-formed HTTP but lacks expected fields."""

    pass


class RequestRejected(InvalidResponseShape):
    """
    Exception raised when a response envelope reports ``success: false``.

    The server's ``error_type``, ``error_message`` and ``error_reason`` are
    kept on the exception and appended to its message.

    Attributes:
        endpoint: Endpoint that answered.
    """

    action = "Request to"

    def __init__(
        self,
        endpoint: str,
        response_data: Optional[Dict[str, Any]] = None,
    ):
        message = f"{self.action} {endpoint} was rejected"
        details = describe_error_body(response_data)
        if details:
            message += f": {details}"
        super().__init__(message, response_data=response_data or {})
        self.endpoint = endpoint


class SubmissionRejected(RequestRejected):
    """Exception raised when a submission or upload envelope reports ``success: false``."""

    action = "Submission to"


class TransportError(APIError):
    """
    Exception raised for any other network or HTTP failure.

    The underlying ``requests`` exception is chained as ``__cause__``.
    """

    pass


class PollCancelled(FakeYouError):
    """Exception raised when the caller cancels a poll loop."""

    def __init__(self, token: str):
        super().__init__(f"Polling of job '{token}' was cancelled")
        self.token = token


class PollTimeout(FakeYouError):
    """Exception raised when a caller supplied poll timeout elapses."""

    def __init__(self, token: str, timeout: Union[int, float]):
        super().__init__(f"Job '{token}' did not finish within {timeout} seconds")
        self.token = token
        self.timeout = timeout
