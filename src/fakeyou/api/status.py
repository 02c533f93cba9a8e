"""
Job status model for FakeYou inference jobs.

The server owns every status transition; the client only observes them. All
decisions about which statuses end a poll loop go through the predicates in
this module, so the attempt_failed policy is decided in one place.
"""

from enum import Enum

from fakeyou.config.config import AttemptFailedPolicy
from fakeyou.utils.common.exceptions import InvalidResponseShape


class JobStatus(Enum):
    """Status of a remote inference job, as spelled on the wire."""

    PENDING = "pending"
    STARTED = "started"
    ATTEMPT_FAILED = "attempt_failed"
    COMPLETE_SUCCESS = "complete_success"
    COMPLETE_FAILURE = "complete_failure"
    DEAD = "dead"

    @classmethod
    def parse(cls, value: object) -> "JobStatus":
        """
        Parse a wire status string.

        Raises:
            InvalidResponseShape: If the value is not a known status.
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidResponseShape(f"Unknown job status: {value!r}")


def is_success(status: JobStatus) -> bool:
    """Return True only for ``complete_success``."""
    return status is JobStatus.COMPLETE_SUCCESS


def is_failure(
    status: JobStatus, policy: AttemptFailedPolicy = AttemptFailedPolicy.RETRYABLE
) -> bool:
    """Return True if the status ends the job unsuccessfully under ``policy``."""
    if status is JobStatus.ATTEMPT_FAILED:
        return policy is AttemptFailedPolicy.TERMINAL
    return status in (JobStatus.COMPLETE_FAILURE, JobStatus.DEAD)


def is_terminal(
    status: JobStatus, policy: AttemptFailedPolicy = AttemptFailedPolicy.RETRYABLE
) -> bool:
    """Return True if no further polling is needed under ``policy``."""
    return is_success(status) or is_failure(status, policy)
