"""
FakeYou API client.

This package provides the session, job submission and polling protocol for
the FakeYou text-to-speech and face animation API.
"""

from fakeyou.api.status import (
    AttemptFailedPolicy,
    JobStatus,
    is_failure,
    is_success,
    is_terminal,
)
from fakeyou.api.models import (
    AnimationOptions,
    AnimationRequest,
    JobHandle,
    JobRequest,
    JobResult,
    JobState,
    JobType,
    TtsRequest,
    UploadResult,
    VoiceDescriptor,
)
from fakeyou.api.resolver import resolve_url
from fakeyou.api.session import Session
from fakeyou.api.poller import JobPoller
from fakeyou.api.clients import BaseAPIClient, FakeYouClient
from fakeyou.utils.common.exceptions import (
    APIError,
    AuthenticationError,
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

__all__ = [
    "AttemptFailedPolicy",
    "JobStatus",
    "is_failure",
    "is_success",
    "is_terminal",
    "AnimationOptions",
    "AnimationRequest",
    "JobHandle",
    "JobRequest",
    "JobResult",
    "JobState",
    "JobType",
    "TtsRequest",
    "UploadResult",
    "VoiceDescriptor",
    "resolve_url",
    "Session",
    "JobPoller",
    "BaseAPIClient",
    "FakeYouClient",
    "FakeYouError",
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
]
