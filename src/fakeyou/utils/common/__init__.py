"""
Common utility modules for the FakeYou client.

This package provides the exception taxonomy and logging helpers used
throughout the client.
"""

from fakeyou.utils.common.exceptions import (
    APIError,
    AuthenticationError,
    ConfigurationError,
    FakeYouError,
    InvalidResponseShape,
    JobFailed,
    PollCancelled,
    PollTimeout,
    RateLimited,
    RequestRejected,
    SubmissionRejected,
    TransportError,
)
from fakeyou.utils.common.logging_utils import (
    log_execution_time,
    setup_logger,
)

__all__ = [
    # Exceptions
    "FakeYouError",
    "ConfigurationError",
    "APIError",
    "AuthenticationError",
    "RateLimited",
    "JobFailed",
    "InvalidResponseShape",
    "RequestRejected",
    "SubmissionRejected",
    "TransportError",
    "PollCancelled",
    "PollTimeout",
    # Logging utilities
    "setup_logger",
    "log_execution_time",
]
