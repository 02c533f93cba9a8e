"""
Polling loop for asynchronous FakeYou jobs.

A job is polled until it reaches a terminal status. There is no built-in
iteration limit or deadline: the loop runs until the server says the job is
done, an HTTP or transport error is raised, or the caller stops it through a
``threading.Event`` or an explicit timeout.

Cancellation and the timeout are checked between status requests. A request
already in flight is bounded by the session read timeout.
"""

import logging
import threading
import time
from typing import Any, Dict, Optional, Union

from fakeyou.api.classifier import envelope_succeeded, parse_envelope
from fakeyou.api.models import JobHandle, JobResult, JobState, JobType
from fakeyou.api.session import Session
from fakeyou.api.status import AttemptFailedPolicy, is_failure, is_success
from fakeyou.utils.common.exceptions import (
    InvalidResponseShape,
    JobFailed,
    PollCancelled,
    PollTimeout,
)
from fakeyou.utils.common.logging_utils import log_execution_time

STATUS_ENDPOINTS = {
    JobType.TTS: "/tts/job/{token}",
    JobType.FACE_ANIMATION: "/model_inference/job_status/{token}",
}


class JobPoller:
    """
    Polls job status through an authenticated session.

    Args:
        session: Session used for the status requests
        policy: How to treat ``attempt_failed``. Defaults to the session
            settings' ``attempt_failed_policy``.
    """

    def __init__(
        self,
        session: Session,
        policy: Optional[AttemptFailedPolicy] = None,
    ):
        self.session = session
        self.policy = policy or session.settings.attempt_failed_policy
        self.logger = logging.getLogger(__name__)

    def interval_for(self, job_type: JobType) -> float:
        """Fixed delay between two status requests for ``job_type``."""
        settings = self.session.settings
        if job_type is JobType.TTS:
            return settings.tts_poll_interval
        if job_type is JobType.FACE_ANIMATION:
            return settings.face_animation_poll_interval
        return settings.default_poll_interval

    def get_job_state(self, handle: JobHandle) -> JobState:
        """
        Fetch one status observation.

        Args:
            handle: Job to query

        Returns:
            JobState: Current state of the job

        Raises:
            JobFailed: If the envelope reports ``success: false``
            InvalidResponseShape: If the state cannot be parsed
        """
        endpoint = STATUS_ENDPOINTS[handle.job_type].format(token=handle.token)
        body = parse_envelope(self.session.request("GET", endpoint))

        if not envelope_succeeded(body):
            state = None
            try:
                state = self._parse_state(handle, body)
            except InvalidResponseShape:
                pass
            self.logger.error(f"Job {handle.token} reported an unsuccessful envelope")
            raise JobFailed(handle.token, state, response_data=body)

        return self._parse_state(handle, body)

    def _parse_state(self, handle: JobHandle, body: Dict[str, Any]) -> JobState:
        state = body.get("state")
        if not isinstance(state, dict):
            raise InvalidResponseShape("Invalid job response: missing 'state' property")
        if handle.job_type is JobType.FACE_ANIMATION:
            return JobState.from_inference_state(state)
        return JobState.from_tts_state(state)

    @log_execution_time()
    def poll_until_terminal(
        self,
        handle: JobHandle,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[Union[int, float]] = None,
        poll_interval: Optional[float] = None,
    ) -> JobResult:
        """
        Poll a job until it succeeds or fails.

        Args:
            handle: Job to poll
            cancel_event: Set it from another thread to stop polling
            timeout: Give up after this many seconds. None polls forever.
            poll_interval: Override the delay between requests

        Returns:
            JobResult: The successful result. Its media path may be None.

        Raises:
            JobFailed: On ``complete_failure``, ``dead``, an unsuccessful
                envelope, or ``attempt_failed`` under the terminal policy
            PollCancelled: If ``cancel_event`` is set
            PollTimeout: If ``timeout`` elapses
            AuthenticationError, RateLimited, TransportError: Propagated from
                the status request without retrying
        """
        interval = self.interval_for(handle.job_type) if poll_interval is None else poll_interval
        cancel_event = cancel_event or threading.Event()
        deadline = None if timeout is None else time.monotonic() + timeout
        attempts = 0

        self.logger.info(f"Waiting for {handle.job_type.value} job {handle.token} to complete")

        while True:
            if cancel_event.is_set():
                raise PollCancelled(handle.token)

            attempts += 1
            self.logger.debug(f"Polling attempt {attempts} for job {handle.token}")
            state = self.get_job_state(handle)

            if is_success(state.status):
                self.logger.info(f"Job {handle.token} completed successfully")
                return JobResult(handle=handle, state=state)

            if is_failure(state.status, self.policy):
                self.logger.error(f"Job {handle.token} failed with status {state.status.value}")
                raise JobFailed(handle.token, state)

            self.logger.debug(
                f"Job {handle.token} still in progress. Status: {state.status.value}"
            )

            wait = interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    self.logger.error(f"Job {handle.token} timed out after {timeout} seconds")
                    raise PollTimeout(handle.token, timeout)
                wait = min(wait, remaining)

            # Fixed delay between requests to stay under the rate limit
            if cancel_event.wait(wait):
                raise PollCancelled(handle.token)
            if deadline is not None and time.monotonic() >= deadline:
                self.logger.error(f"Job {handle.token} timed out after {timeout} seconds")
                raise PollTimeout(handle.token, timeout)
