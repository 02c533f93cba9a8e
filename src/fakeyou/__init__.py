"""
FakeYou client - text-to-speech and face animation jobs on api.fakeyou.com
"""

# Version information
__version__ = "0.1.0"

from fakeyou.api import (
    AnimationOptions,
    AnimationRequest,
    AttemptFailedPolicy,
    FakeYouClient,
    JobHandle,
    JobResult,
    JobStatus,
    Session,
    TtsRequest,
    VoiceDescriptor,
    resolve_url,
)
from fakeyou.config import ClientSettings, load_settings
from fakeyou.utils.common.exceptions import (
    AuthenticationError,
    FakeYouError,
    InvalidResponseShape,
    JobFailed,
    RateLimited,
    TransportError,
)

__all__ = [
    "FakeYouClient",
    "Session",
    "ClientSettings",
    "load_settings",
    "TtsRequest",
    "AnimationRequest",
    "AnimationOptions",
    "AttemptFailedPolicy",
    "JobHandle",
    "JobResult",
    "JobStatus",
    "VoiceDescriptor",
    "resolve_url",
    "FakeYouError",
    "AuthenticationError",
    "RateLimited",
    "JobFailed",
    "InvalidResponseShape",
    "TransportError",
]
