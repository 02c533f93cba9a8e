"""
FakeYou API client.

This module provides a client for submitting text-to-speech and face
animation jobs to FakeYou, polling them to completion and resolving the
generated media to public URLs.
"""

import threading
from typing import List, Optional, Union

import requests

from fakeyou.api.clients.base import BaseAPIClient
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
    new_idempotency_token,
)
from fakeyou.api.poller import JobPoller
from fakeyou.api.resolver import resolve_url
from fakeyou.api.session import Session
from fakeyou.config import ClientSettings
from fakeyou.utils.api.retry import RetryConfig, with_retry
from fakeyou.utils.common.exceptions import InvalidResponseShape


class FakeYouClient(BaseAPIClient):
    """
    Client for interacting with the FakeYou API.

    A client wraps one authenticated Session; build it with
    ``FakeYouClient.from_login_credentials`` or pass a Session in.
    """

    def __init__(self, session: Session):
        """
        Initialize the FakeYou API client.

        Args:
            session: Authenticated session
        """
        super().__init__(session)
        self.poller = JobPoller(session)

    @classmethod
    def from_login_credentials(
        cls,
        username: str,
        password: str,
        settings: Optional[ClientSettings] = None,
        http: Optional[requests.Session] = None,
    ) -> "FakeYouClient":
        """
        Log in and return a client bound to the new session.

        Raises:
            AuthenticationError: If the credentials are rejected
        """
        return cls(Session.authenticate(username, password, settings=settings, http=http))

    # Submission

    def submit(self, request: JobRequest) -> JobHandle:
        """
        Submit an inference job.

        Args:
            request: TtsRequest or AnimationRequest

        Returns:
            JobHandle: Handle to poll

        Raises:
            SubmissionRejected: If the server answers ``success: false``
            InvalidResponseShape: If the job token is missing
        """
        self.logger.info(
            f"Submitting {request.job_type.value} job "
            f"(idempotency token {request.uuid_idempotency_token})"
        )
        body = self.post(request.endpoint, json=request.to_payload())

        token = body.get("inference_job_token")
        if not isinstance(token, str) or not token:
            raise InvalidResponseShape(
                "Invalid response body: missing 'inference_job_token' property",
                response_data=body,
            )

        self.logger.info(f"Submitted {request.job_type.value} job {token}")
        return JobHandle(token=token, job_type=request.job_type)

    def submit_with_retry(
        self, request: JobRequest, retry_config: Optional[RetryConfig] = None
    ) -> JobHandle:
        """
        Submit a job, resubmitting the same request on transient errors.

        Every attempt sends the request's own idempotency token, so the
        server creates at most one job.

        Args:
            request: Request to submit
            retry_config: Retry behaviour, defaults to RetryConfig()

        Returns:
            JobHandle: Handle to poll
        """
        return with_retry(retry_config)(self.submit)(request)

    def tts_inference(self, tts_model_token: str, inference_text: str) -> JobHandle:
        """Submit a text-to-speech job with a fresh idempotency token."""
        return self.submit(TtsRequest(tts_model_token, inference_text))

    def create_face_animation(
        self,
        audio_source_token: str,
        image_source_token: str,
        options: Optional[AnimationOptions] = None,
    ) -> JobHandle:
        """
        Submit a face animation job with a fresh idempotency token.

        Args:
            audio_source_token: Upload token of the driving audio
            image_source_token: Upload token of the face image
            options: Animation options, defaults to AnimationOptions()
        """
        return self.submit(
            AnimationRequest(
                audio_source_token,
                image_source_token,
                options=options or AnimationOptions(),
            )
        )

    # Media uploads

    def _upload(self, endpoint: str, file: bytes) -> UploadResult:
        body = self.post(
            endpoint,
            data={"uuid_idempotency_token": new_idempotency_token(), "source": "file"},
            files={"file": ("file", file)},
        )
        result = UploadResult.from_dict(body)
        self.logger.info(f"Uploaded {len(file)} bytes, upload token {result.upload_token}")
        return result

    def upload_audio(self, file: bytes) -> UploadResult:
        """Upload an audio file to drive a face animation."""
        return self._upload("/media_uploads/upload_audio", file)

    def upload_image(self, file: bytes) -> UploadResult:
        """Upload a face image to animate."""
        return self._upload("/media_uploads/upload_image", file)

    # Polling

    def get_job_state(self, handle: JobHandle) -> JobState:
        """Fetch the current state of a job once, without waiting."""
        return self.poller.get_job_state(handle)

    def poll_until_terminal(
        self,
        handle: JobHandle,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[Union[int, float]] = None,
    ) -> JobResult:
        """Poll a job until it succeeds or fails. See JobPoller.poll_until_terminal."""
        return self.poller.poll_until_terminal(handle, cancel_event=cancel_event, timeout=timeout)

    def poll_tts_job(
        self,
        inference_job_token: str,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[Union[int, float]] = None,
    ) -> JobResult:
        """Poll a TTS job by its token."""
        return self.poll_until_terminal(
            JobHandle(inference_job_token, JobType.TTS), cancel_event, timeout
        )

    def poll_face_animation_job(
        self,
        inference_job_token: str,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[Union[int, float]] = None,
    ) -> JobResult:
        """Poll a face animation job by its token."""
        return self.poll_until_terminal(
            JobHandle(inference_job_token, JobType.FACE_ANIMATION), cancel_event, timeout
        )

    def wait_for(
        self,
        request: JobRequest,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[Union[int, float]] = None,
    ) -> JobResult:
        """Submit a request and poll it to completion."""
        return self.poll_until_terminal(self.submit(request), cancel_event, timeout)

    # Catalog and media

    def list_voices(self) -> List[VoiceDescriptor]:
        """
        Fetch the TTS voice catalog.

        Returns:
            List[VoiceDescriptor]: Every voice listed by the server

        Raises:
            RequestRejected: If the server answers ``success: false``
            InvalidResponseShape: If the ``models`` field is missing or malformed
        """
        voices = VoiceDescriptor.list_from_catalog(self.get("/tts/list"))
        self.logger.debug(f"Fetched {len(voices)} voices")
        return voices

    def request_file_url(self, public_bucket_media_path: str) -> str:
        """Build the download URL of a media path."""
        return resolve_url(public_bucket_media_path, self.settings.storage_base_url)

    def result_url(self, result: JobResult) -> Optional[str]:
        """Download URL of a job result, or None if it produced no media."""
        if result.media_path is None:
            return None
        return self.request_file_url(result.media_path)
