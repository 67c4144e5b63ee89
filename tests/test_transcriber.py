"""
Tests for the audio transcriber module.
"""

import httpx
import groq
import pytest
from unittest.mock import patch, MagicMock

from yt_transcribe.core.transcriber import AudioTranscriber, map_status_error
from yt_transcribe.exceptions import (
    InvalidResponseError,
    PayloadRejectedError,
    RateLimitedError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from yt_transcribe.models.schemas import Transcript, TranscriptionConfig, TranscriptionRequest

ENDPOINT = "https://api.groq.com/openai/v1/audio/transcriptions"


def status_error(status_code: int) -> groq.APIStatusError:
    request = httpx.Request("POST", ENDPOINT)
    response = httpx.Response(status_code, request=request, json={"error": {"message": "failed"}})
    return groq.APIStatusError("request failed", response=response, body=None)


@pytest.fixture
def mock_groq():
    """Fixture to mock the Groq client class."""
    with patch('yt_transcribe.core.transcriber.Groq') as mock_groq_class:
        mock_client = mock_groq_class.return_value
        mock_client.audio.transcriptions.create.return_value = MagicMock(text=" hello world ")
        yield mock_groq_class


@pytest.fixture
def request_(make_payload):
    return TranscriptionRequest(payload=make_payload(1024), api_key="test_api_key")


def create_mock(mock_groq):
    return mock_groq.return_value.audio.transcriptions.create


def test_transcribe(mock_groq, request_):
    """Test transcribing a payload."""
    transcriber = AudioTranscriber(TranscriptionConfig(timeout=30, max_retries=0))
    transcript = transcriber.transcribe(request_)

    assert transcript == Transcript(text="hello world", video_id="test123", title="Test Video")
    mock_groq.assert_called_once_with(api_key="test_api_key", timeout=30, max_retries=0)

    kwargs = create_mock(mock_groq).call_args.kwargs
    assert kwargs["file"] == ("test123.m4a", request_.payload.data)
    assert kwargs["language"] == "en"
    assert kwargs["model"] == "whisper-large-v3-turbo"
    assert kwargs["temperature"] == 0.0
    assert "prompt" not in kwargs


def test_transcribe_with_prompt(mock_groq, request_):
    transcriber = AudioTranscriber(TranscriptionConfig(prompt="Nuclear fusion lecture"))
    transcriber.transcribe(request_)

    assert create_mock(mock_groq).call_args.kwargs["prompt"] == "Nuclear fusion lecture"


def test_retries_are_configurable(mock_groq, request_):
    """Retry with backoff is opt-in through max_retries."""
    AudioTranscriber(TranscriptionConfig(max_retries=3)).transcribe(request_)

    assert mock_groq.call_args.kwargs["max_retries"] == 3


def test_transcribe_plain_text_response(mock_groq, request_):
    create_mock(mock_groq).return_value = "hello world\n"

    transcript = AudioTranscriber().transcribe(request_)

    assert transcript.text == "hello world"


@pytest.mark.parametrize("response", [MagicMock(text=None), MagicMock(text=42), {"segments": []}])
def test_transcribe_malformed_response(mock_groq, request_, response):
    create_mock(mock_groq).return_value = response

    with pytest.raises(InvalidResponseError):
        AudioTranscriber().transcribe(request_)


@pytest.mark.parametrize("status_code, expected", [
    (401, UnauthorizedError),
    (403, UnauthorizedError),
    (413, PayloadRejectedError),
    (429, RateLimitedError),
    (500, ServiceUnavailableError),
    (503, ServiceUnavailableError),
    (400, InvalidResponseError),
])
def test_transcribe_http_errors(mock_groq, request_, status_code, expected):
    """HTTP failures map to typed transcription errors."""
    create_mock(mock_groq).side_effect = status_error(status_code)

    with pytest.raises(expected) as exc_info:
        AudioTranscriber().transcribe(request_)

    assert exc_info.value.status_code == status_code
    assert isinstance(exc_info.value.cause, groq.APIStatusError)


@pytest.mark.parametrize("error_class", [groq.APIConnectionError, groq.APITimeoutError])
def test_transcribe_transport_errors(mock_groq, request_, error_class):
    create_mock(mock_groq).side_effect = error_class(request=httpx.Request("POST", ENDPOINT))

    with pytest.raises(ServiceUnavailableError) as exc_info:
        AudioTranscriber().transcribe(request_)

    assert exc_info.value.status_code is None


def test_map_status_error():
    assert isinstance(map_status_error(401), UnauthorizedError)
    assert isinstance(map_status_error(413), PayloadRejectedError)
    assert isinstance(map_status_error(429), RateLimitedError)
    assert isinstance(map_status_error(502), ServiceUnavailableError)
    assert isinstance(map_status_error(404), InvalidResponseError)


def test_api_key_not_logged(mock_groq, request_, caplog):
    with caplog.at_level("DEBUG", logger="yt_transcriber"):
        AudioTranscriber().transcribe(request_)

    assert "test_api_key" not in caplog.text
