"""
Tests for the FakeYou client: catalog, media URLs and end-to-end job flow.
"""

import pytest

from fakeyou.api import FakeYouClient, JobHandle, JobStatus, JobType, Session, TtsRequest, resolve_url
from fakeyou.config import ClientSettings
from fakeyou.utils.api.retry import RetryConfig
from fakeyou.utils.common.exceptions import InvalidResponseShape, RateLimited, RequestRejected
from tests.mocks.mock_api_responses import MockResponses, make_response, mock_http, requested_urls

NO_WAIT = ClientSettings(tts_poll_interval=0, face_animation_poll_interval=0)


def make_client(*responses, settings=NO_WAIT):
    http = mock_http(*responses)
    return FakeYouClient(Session(settings=settings, http=http)), http


class TestVoiceCatalog:
    def test_lists_voices(self):
        client, http = make_client(make_response(200, MockResponses.voices(3)))

        voices = client.list_voices()

        assert requested_urls(http) == ["https://api.fakeyou.com/tts/list"]
        assert [v.model_token for v in voices] == ["TM:voice-0", "TM:voice-1", "TM:voice-2"]
        assert voices[0].model_type == "tacotron2"
        assert voices[0].title == "Voice 0"
        assert voices[0].language_tag == "en-US"
        assert voices[0].language_subtag == "en"

    def test_empty_catalog_is_valid(self):
        client, _ = make_client(make_response(200, MockResponses.voices(0)))

        assert client.list_voices() == []

    def test_missing_models_field_is_invalid_shape(self):
        client, _ = make_client(make_response(200, {"success": True}))

        with pytest.raises(InvalidResponseShape, match="models"):
            client.list_voices()

    def test_rejected_catalog_keeps_server_error(self):
        body = MockResponses.rejected(error_type="ServerError", error_message="catalog unavailable")
        client, _ = make_client(make_response(200, body))

        with pytest.raises(RequestRejected) as exc_info:
            client.list_voices()

        error = exc_info.value
        assert isinstance(error, InvalidResponseShape)
        assert error.endpoint == "/tts/list"
        assert error.error_type == "ServerError"
        assert error.error_message == "catalog unavailable"
        assert "catalog unavailable" in str(error)
        assert "models" not in str(error)

    def test_models_not_a_list_is_invalid_shape(self):
        client, _ = make_client(make_response(200, {"success": True, "models": {}}))

        with pytest.raises(InvalidResponseShape):
            client.list_voices()

    def test_malformed_entry_is_invalid_shape(self):
        body = MockResponses.voices(1)
        del body["models"][0]["title"]
        client, _ = make_client(make_response(200, body))

        with pytest.raises(InvalidResponseShape, match="title"):
            client.list_voices()

    def test_catalog_is_fetched_fresh_every_call(self):
        client, http = make_client(
            make_response(200, MockResponses.voices(1)),
            make_response(200, MockResponses.voices(2)),
        )

        assert len(client.list_voices()) == 1
        assert len(client.list_voices()) == 2
        assert http.request.call_count == 2


class TestMediaUrls:
    def test_resolve_url_concatenates_exactly(self):
        assert (
            resolve_url("/foo/bar.wav", "https://storage.googleapis.com/vocodes-public")
            == "https://storage.googleapis.com/vocodes-public/foo/bar.wav"
        )

    def test_resolve_url_does_not_normalize(self):
        assert resolve_url("foo//bar.wav") == "https://storage.googleapis.com/vocodes-publicfoo//bar.wav"

    def test_client_uses_configured_storage_base(self):
        settings = ClientSettings(storage_base_url="https://cdn.example.com/bucket")
        client, _ = make_client(settings=settings)

        assert client.request_file_url("/a.wav") == "https://cdn.example.com/bucket/a.wav"

    def test_result_url_for_result_without_media(self):
        client, _ = make_client(
            make_response(200, MockResponses.inference_job("JTINF:f", media_path=None))
        )

        result = client.poll_face_animation_job("JTINF:f")

        assert client.result_url(result) is None


class TestJobFlow:
    def test_tts_end_to_end(self):
        client, http = make_client(
            make_response(200, MockResponses.tts_inference("JTINF:tts")),
            make_response(200, MockResponses.tts_job("JTINF:tts", "pending")),
            make_response(
                200,
                MockResponses.tts_job(
                    "JTINF:tts", "complete_success", media_path="/tts/out/result.wav"
                ),
            ),
        )

        result = client.wait_for(TtsRequest("TM:voice", "hello"))

        assert result.status is JobStatus.COMPLETE_SUCCESS
        assert client.result_url(result) == (
            "https://storage.googleapis.com/vocodes-public/tts/out/result.wav"
        )
        assert requested_urls(http) == [
            "https://api.fakeyou.com/tts/inference",
            "https://api.fakeyou.com/tts/job/JTINF:tts",
            "https://api.fakeyou.com/tts/job/JTINF:tts",
        ]

    def test_face_animation_end_to_end(self):
        client, http = make_client(
            make_response(200, MockResponses.upload("MU:audio")),
            make_response(200, MockResponses.upload("MU:image")),
            make_response(200, {"success": True, "inference_job_token": "JTINF:face"}),
            make_response(200, MockResponses.inference_job("JTINF:face", "started")),
            make_response(200, MockResponses.inference_job("JTINF:face", "complete_success")),
        )

        audio = client.upload_audio(b"RIFF....WAVE")
        image = client.upload_image(b"\x89PNG")
        handle = client.create_face_animation(audio.upload_token, image.upload_token)
        result = client.poll_until_terminal(handle)

        assert result.handle == JobHandle("JTINF:face", JobType.FACE_ANIMATION)
        assert client.result_url(result) == (
            "https://storage.googleapis.com/vocodes-public/media/mock/face.mp4"
        )
        assert http.request.call_count == 5

    def test_get_job_state_makes_one_request(self):
        client, http = make_client(
            make_response(200, MockResponses.tts_job("JTINF:tts", "started")),
        )

        state = client.get_job_state(JobHandle("JTINF:tts"))

        assert state.status is JobStatus.STARTED
        assert state.media_path is None
        assert http.request.call_count == 1

    def test_submit_with_retry_reuses_idempotency_token(self, monkeypatch):
        monkeypatch.setattr("fakeyou.utils.api.retry.time.sleep", lambda seconds: None)
        client, http = make_client(
            make_response(429, headers={"Retry-After": "1"}),
            make_response(503),
            make_response(200, MockResponses.tts_inference("JTINF:retried")),
        )
        request = TtsRequest("TM:voice", "hello")

        handle = client.submit_with_retry(request, RetryConfig(max_retries=3))

        assert handle.token == "JTINF:retried"
        tokens = {c.kwargs["json"]["uuid_idempotency_token"] for c in http.request.call_args_list}
        assert tokens == {request.uuid_idempotency_token}
        assert http.request.call_count == 3

    def test_plain_submit_does_not_retry(self):
        client, http = make_client(
            make_response(429),
            make_response(200, MockResponses.tts_inference()),
        )

        with pytest.raises(RateLimited):
            client.tts_inference("TM:voice", "hello")

        assert http.request.call_count == 1
