"""
Module for transcribing audio payloads using Groq's Whisper API.
"""

from typing import Any, Dict, Optional

import groq
from groq import Groq

from yt_transcribe.core.interfaces import TranscriptionClient
from yt_transcribe.exceptions import (
    InvalidResponseError,
    PayloadRejectedError,
    RateLimitedError,
    ServiceUnavailableError,
    TranscriptionError,
    UnauthorizedError,
)
from yt_transcribe.models.schemas import Transcript, TranscriptionConfig, TranscriptionRequest
from yt_transcribe.utils.logger import logging


def map_status_error(status_code: int, cause: Optional[Exception] = None) -> TranscriptionError:
    """
    Translate an HTTP status returned by the service into a TranscriptionError.

    Args:
        status_code: HTTP status of the failed response
        cause: Original SDK exception

    Returns:
        The matching TranscriptionError subclass instance
    """
    if status_code in (401, 403):
        return UnauthorizedError(status_code, cause)
    if status_code == 413:
        return PayloadRejectedError(status_code, cause)
    if status_code == 429:
        return RateLimitedError(status_code, cause)
    if status_code >= 500:
        return ServiceUnavailableError(status_code, cause)
    return InvalidResponseError(f"HTTP {status_code}", status_code, cause)


class AudioTranscriber(TranscriptionClient):
    """Class to handle audio transcription operations."""

    def __init__(self, transcribe_config: Optional[TranscriptionConfig] = None):
        """
        Initialize the transcriber.

        Args:
            transcribe_config: Model, timeout and retry settings. The API key
                travels with each TranscriptionRequest instead.
        """
        self.transcribe_config = transcribe_config or TranscriptionConfig()

    def _client(self, api_key: str) -> Groq:
        # max_retries=0 keeps the default fail-fast; raising it enables the
        # SDK's exponential backoff on 429 and 5xx responses
        return Groq(
            api_key=api_key,
            timeout=self.transcribe_config.timeout,
            max_retries=self.transcribe_config.max_retries,
        )

    def _request_params(self, request: TranscriptionRequest) -> Dict[str, Any]:
        payload = request.payload
        params = {
            "file": (payload.filename, payload.data),
            "model": self.transcribe_config.model,
            "language": self.transcribe_config.language,
            "response_format": self.transcribe_config.response_format,
            "temperature": self.transcribe_config.temperature,
        }
        if self.transcribe_config.prompt:
            params["prompt"] = self.transcribe_config.prompt
        return params

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Pull the transcript text out of a service response."""
        if isinstance(response, str):
            return response
        text = getattr(response, "text", None)
        if text is None and isinstance(response, dict):
            text = response.get("text")
        if not isinstance(text, str):
            raise InvalidResponseError(f"missing transcript text in {type(response).__name__}")
        return text

    def transcribe(self, request: TranscriptionRequest) -> Transcript:
        """
        Transcribe an audio payload.

        Args:
            request: Audio payload and the API key to authenticate with

        Returns:
            Transcript carrying the text and the video's metadata
        """
        payload = request.payload
        client = self._client(request.api_key.get_secret_value())

        logging.info(
            f"Transcribing {payload.filename} ({payload.size_bytes} bytes) "
            f"with {self.transcribe_config.model}"
        )
        try:
            response = client.audio.transcriptions.create(**self._request_params(request))
        except groq.APIStatusError as e:
            logging.debug(f"Transcription request failed with HTTP {e.status_code}")
            raise map_status_error(e.status_code, e) from e
        except groq.APIConnectionError as e:
            # Also covers APITimeoutError
            logging.debug(f"Transcription service unreachable: {str(e)}")
            raise ServiceUnavailableError(cause=e) from e
        except groq.APIResponseValidationError as e:
            logging.debug(f"Malformed transcription response: {str(e)}")
            raise InvalidResponseError(str(e), e.status_code, e) from e

        text = self._extract_text(response).strip()
        logging.info("Transcription complete.")
        logging.debug(f"Transcript length: {len(text)} characters")

        return Transcript(text=text, video_id=payload.video_id, title=payload.title)
