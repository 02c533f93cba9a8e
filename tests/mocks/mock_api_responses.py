"""
Mock API responses for testing.

This module builds real ``requests.Response`` objects shaped like FakeYou
answers, and a mock ``requests.Session`` that replays them, so tests run
without network access or an account.
"""

import json
from typing import Any, Dict, List, Optional, Union
from unittest.mock import MagicMock

import requests

BASE_URL = "https://api.fakeyou.com"


def make_response(
    status_code: int = 200,
    json_data: Optional[Any] = None,
    headers: Optional[Dict[str, str]] = None,
    url: str = BASE_URL,
    text: Optional[str] = None,
) -> requests.Response:
    """
    Create a ``requests.Response`` with the given body.

    Args:
        status_code: Response status code
        json_data: Body to encode as JSON
        headers: Extra response headers
        url: URL the response claims to come from
        text: Raw body, used instead of json_data

    Returns:
        requests.Response: Response object
    """
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    if text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/html"
    else:
        response._content = json.dumps(json_data if json_data is not None else {}).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    for key, value in (headers or {}).items():
        response.headers[key] = value
    return response


def mock_http(*responses: Union[requests.Response, Exception]) -> MagicMock:
    """
    Create a mock ``requests.Session`` replaying ``responses`` in order.

    Exceptions in the sequence are raised from ``request`` instead.
    """
    http = MagicMock(spec=requests.Session)
    http.headers = {}
    http.request.side_effect = list(responses)
    return http


def requested_urls(http: MagicMock) -> List[str]:
    """URLs passed to ``http.request`` so far."""
    return [c.args[1] for c in http.request.call_args_list]


class MockResponses:
    """Class for generating mock FakeYou API bodies."""

    @staticmethod
    def login(success: bool = True) -> Dict[str, Any]:
        return {"success": success}

    @staticmethod
    def tts_inference(job_token: str = "JTINF:mock-tts-job") -> Dict[str, Any]:
        return {
            "success": True,
            "inference_job_token": job_token,
            "inference_job_token_type": "generic",
        }

    @staticmethod
    def rejected(
        error_type: str = "BadInput",
        error_message: str = "invalid model token",
        error_reason: Optional[str] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": False,
            "error_type": error_type,
            "error_message": error_message,
        }
        if error_reason is not None:
            body["error_reason"] = error_reason
        return body

    @staticmethod
    def tts_job(
        job_token: str = "JTINF:mock-tts-job",
        status: str = "complete_success",
        success: bool = True,
        media_path: Optional[str] = "/tts_inference_output/mock/result.wav",
    ) -> Dict[str, Any]:
        """Body of ``GET /tts/job/{token}``."""
        return {
            "success": success,
            "state": {
                "job_token": job_token,
                "status": status,
                "maybe_extra_status_description": None,
                "attempt_count": 0,
                "maybe_result_token": None,
                "maybe_public_bucket_wav_audio_path": (
                    media_path if status == "complete_success" else None
                ),
                "model_token": "TM:mock-voice",
                "tts_model_type": "tacotron2",
                "title": "Mock Voice",
                "raw_inference_text": "hello",
                "created_at": "2023-05-01T00:00:00Z",
                "updated_at": "2023-05-01T00:00:08Z",
            },
        }

    @staticmethod
    def inference_job(
        job_token: str = "JTINF:mock-face-job",
        status: str = "complete_success",
        success: bool = True,
        media_path: Optional[str] = "/media/mock/face.mp4",
    ) -> Dict[str, Any]:
        """Body of ``GET /model_inference/job_status/{token}``."""
        maybe_result = None
        if status == "complete_success" and media_path is not None:
            maybe_result = {
                "entity_type": "media_file",
                "entity_token": "m_mock",
                "maybe_public_bucket_media_path": media_path,
                "maybe_successfully_completed_at": "2023-05-01T00:01:00Z",
            }
        return {
            "success": success,
            "state": {
                "job_token": job_token,
                "request": {
                    "inference_category": "lipsync_animation",
                    "maybe_model_type": "sad_talker",
                    "maybe_model_token": None,
                    "maybe_model_title": "Face Animator",
                    "maybe_raw_inference_text": None,
                },
                "status": {
                    "status": status,
                    "maybe_extra_status_description": None,
                    "maybe_assigned_worker": "worker-1",
                    "maybe_assigned_cluster": "cluster-1",
                    "maybe_first_started_at": "2023-05-01T00:00:05Z",
                    "attempt_count": 1,
                    "require_keepalive": False,
                    "maybe_failure_category": None,
                },
                "maybe_result": maybe_result,
                "created_at": "2023-05-01T00:00:00Z",
                "updated_at": "2023-05-01T00:01:00Z",
            },
        }

    @staticmethod
    def voices(count: int = 2) -> Dict[str, Any]:
        return {
            "success": True,
            "models": [
                {
                    "model_token": f"TM:voice-{i}",
                    "tts_model_type": "tacotron2",
                    "creator_user_token": "U:mock",
                    "title": f"Voice {i}",
                    "ietf_language_tag": "en-US",
                    "ietf_primary_language_subtag": "en",
                    "is_front_page_featured": False,
                }
                for i in range(count)
            ],
        }

    @staticmethod
    def upload(upload_token: str = "MU:mock-upload") -> Dict[str, Any]:
        return {"success": True, "upload_token": upload_token}
