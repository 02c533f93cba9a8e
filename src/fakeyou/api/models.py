"""
Request and response models for the FakeYou API.

Requests are frozen dataclasses that serialize to the wire payloads. Response
models are parsed from decoded JSON with ``from_dict`` and raise
InvalidResponseShape when an expected field is missing or has the wrong type.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from fakeyou.api.status import JobStatus
from fakeyou.utils.common.exceptions import InvalidResponseShape


def new_idempotency_token() -> str:
    """Generate a fresh idempotency token."""
    return str(uuid.uuid4())


def _require(data: Dict[str, Any], key: str, kind: type = str, where: str = "response") -> Any:
    if key not in data or data[key] is None:
        raise InvalidResponseShape(f"Invalid {where}: missing '{key}' property")
    value = data[key]
    if not isinstance(value, kind):
        raise InvalidResponseShape(
            f"Invalid {where}: '{key}' should be {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional_str(data: Dict[str, Any], key: str, where: str = "response") -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidResponseShape(
            f"Invalid {where}: '{key}' should be str, got {type(value).__name__}"
        )
    return value


class JobType(Enum):
    """Kind of inference job, which selects the status endpoint."""

    TTS = "tts"
    FACE_ANIMATION = "face_animation"


@dataclass(frozen=True)
class JobHandle:
    """Opaque reference to a submitted job."""

    token: str
    job_type: JobType = JobType.TTS

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class TtsRequest:
    """Text-to-speech inference request."""

    tts_model_token: str
    inference_text: str
    uuid_idempotency_token: str = field(default_factory=new_idempotency_token)

    job_type = JobType.TTS
    endpoint = "/tts/inference"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "uuid_idempotency_token": self.uuid_idempotency_token,
            "tts_model_token": self.tts_model_token,
            "inference_text": self.inference_text,
        }


@dataclass(frozen=True)
class AnimationOptions:
    """
    Optional settings for a face animation.

    Attributes:
        dimensions: Output framing preset.
        disable_face_enhancement: Skip the face enhancement pass.
        make_still: Keep the head still and animate only the face.
        remove_watermark: Request output without the watermark.
    """

    dimensions: str = "twitter_square"
    disable_face_enhancement: bool = False
    make_still: bool = False
    remove_watermark: bool = False


@dataclass(frozen=True)
class AnimationRequest:
    """Face animation request driven by previously uploaded audio and image."""

    audio_source_token: str
    image_source_token: str
    options: AnimationOptions = field(default_factory=AnimationOptions)
    uuid_idempotency_token: str = field(default_factory=new_idempotency_token)

    job_type = JobType.FACE_ANIMATION
    endpoint = "/animation/face_animation/create"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "uuid_idempotency_token": self.uuid_idempotency_token,
            "audio_source": {"maybe_media_upload_token": self.audio_source_token},
            "image_source": {"maybe_media_upload_token": self.image_source_token},
            "dimensions": self.options.dimensions,
            "disable_face_enhancement": self.options.disable_face_enhancement,
            "make_still": self.options.make_still,
            "remove_watermark": self.options.remove_watermark,
        }


JobRequest = Union[TtsRequest, AnimationRequest]


@dataclass(frozen=True)
class JobState:
    """
    One observation of a job's status.

    Attributes:
        job_token: Token echoed back by the server.
        status: Current status.
        media_path: Relative storage path of the result, if any.
        attempt_count: Server side attempts so far, when reported.
        extra_description: Free-form status detail, when reported.
        raw: The ``state`` object as received.
    """

    job_token: str
    status: JobStatus
    media_path: Optional[str] = None
    attempt_count: Optional[int] = None
    extra_description: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_tts_state(cls, state: Dict[str, Any]) -> "JobState":
        """Parse the ``state`` object of ``GET /tts/job/{token}``."""
        return cls(
            job_token=_require(state, "job_token", where="job state"),
            status=JobStatus.parse(_require(state, "status", where="job state")),
            media_path=_optional_str(
                state, "maybe_public_bucket_wav_audio_path", where="job state"
            ),
            attempt_count=state.get("attempt_count"),
            extra_description=_optional_str(
                state, "maybe_extra_status_description", where="job state"
            ),
            raw=state,
        )

    @classmethod
    def from_inference_state(cls, state: Dict[str, Any]) -> "JobState":
        """Parse the ``state`` object of ``GET /model_inference/job_status/{token}``."""
        status = _require(state, "status", dict, where="job state")
        maybe_result = state.get("maybe_result")
        if maybe_result is not None and not isinstance(maybe_result, dict):
            raise InvalidResponseShape("Invalid job state: 'maybe_result' should be dict")
        media_path = None
        if maybe_result:
            media_path = _optional_str(
                maybe_result, "maybe_public_bucket_media_path", where="job result"
            )
        return cls(
            job_token=_require(state, "job_token", where="job state"),
            status=JobStatus.parse(_require(status, "status", where="job status")),
            media_path=media_path,
            attempt_count=status.get("attempt_count"),
            extra_description=_optional_str(
                status, "maybe_extra_status_description", where="job status"
            ),
            raw=state,
        )


@dataclass(frozen=True)
class JobResult:
    """
    Outcome of a job that reached ``complete_success``.

    ``media_path`` may be None, meaning the job produced no playable artifact.
    """

    handle: JobHandle
    state: JobState

    @property
    def status(self) -> JobStatus:
        return self.state.status

    @property
    def media_path(self) -> Optional[str]:
        return self.state.media_path


@dataclass(frozen=True)
class VoiceDescriptor:
    """Catalog entry for a TTS voice model."""

    model_token: str
    model_type: str
    title: str
    language_tag: str
    language_subtag: str

    @classmethod
    def from_dict(cls, data: Any) -> "VoiceDescriptor":
        if not isinstance(data, dict):
            raise InvalidResponseShape("Invalid voice entry: expected an object")
        return cls(
            model_token=_require(data, "model_token", where="voice entry"),
            model_type=_require(data, "tts_model_type", where="voice entry"),
            title=_require(data, "title", where="voice entry"),
            language_tag=_require(data, "ietf_language_tag", where="voice entry"),
            language_subtag=_require(data, "ietf_primary_language_subtag", where="voice entry"),
        )

    @classmethod
    def list_from_catalog(cls, body: Dict[str, Any]) -> List["VoiceDescriptor"]:
        """Parse the ``models`` field of ``GET /tts/list``."""
        if "models" not in body:
            raise InvalidResponseShape("Invalid response body: missing 'models' property")
        models = body["models"]
        if not isinstance(models, list):
            raise InvalidResponseShape("Invalid response body: 'models' should be a list")
        return [cls.from_dict(entry) for entry in models]


@dataclass(frozen=True)
class UploadResult:
    """Token of an uploaded media file, usable as an animation source."""

    upload_token: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploadResult":
        return cls(upload_token=_require(data, "upload_token", where="upload response"))
