"""
Pipeline sequencing fetch, size check and transcription for one video.
"""

from enum import Enum
from typing import Callable, Optional

from pydantic import ValidationError

from yt_transcribe.core.interfaces import MediaFetcher, TranscriptionClient
from yt_transcribe.core.size_guard import AudioSizeGuard
from yt_transcribe.exceptions import (
    FetchError,
    PipelineError,
    PipelineStage,
    SizeError,
    TranscriberError,
    TranscriptionDeclinedError,
    TranscriptionError,
    UnsupportedSourceError,
)
from yt_transcribe.models.schemas import AudioPayload, Transcript, TranscriptionRequest, VideoSource
from yt_transcribe.utils.logger import logging


class PipelineState(str, Enum):
    """Progress of a single pipeline run."""
    START = "start"
    FETCHING = "fetching"
    SIZE_CHECKING = "size_checking"
    TRANSCRIBING = "transcribing"
    DONE = "done"
    FAILED = "failed"


class TranscriptionPipeline:
    """Turns a YouTube URL into a transcript: fetch, size check, transcribe."""

    def __init__(
        self,
        fetcher: MediaFetcher,
        transcriber: TranscriptionClient,
        size_guard: Optional[AudioSizeGuard] = None,
        confirm: Optional[Callable[[AudioPayload], bool]] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            fetcher: Source of the audio payload
            transcriber: Speech-to-text client
            size_guard: Upload limit check, defaults to the service limit
            confirm: Called with the checked payload before uploading;
                returning False stops the run
        """
        self.fetcher = fetcher
        self.transcriber = transcriber
        self.size_guard = size_guard or AudioSizeGuard()
        self.confirm = confirm
        self.state = PipelineState.START
        self.failed_stage: Optional[PipelineStage] = None

    def _fail(self, stage: PipelineStage, cause: TranscriberError) -> PipelineError:
        self.state = PipelineState.FAILED
        self.failed_stage = stage
        logging.info(f"Pipeline failed during {stage.value}: {cause}")
        return PipelineError(stage, cause)

    def _fetch(self, url: str) -> AudioPayload:
        self.state = PipelineState.FETCHING
        try:
            source = VideoSource(url=url)
        except ValidationError as e:
            raise self._fail(PipelineStage.FETCH, UnsupportedSourceError(url, e)) from e

        logging.info(f"Fetching audio from: {source.url}")
        try:
            return self.fetcher.fetch(source)
        except FetchError as e:
            raise self._fail(PipelineStage.FETCH, e) from e
        except SizeError as e:
            # Declared size rejected before download
            raise self._fail(PipelineStage.SIZE_LIMIT, e) from e

    def _check_size(self, payload: AudioPayload) -> None:
        self.state = PipelineState.SIZE_CHECKING
        try:
            self.size_guard.check(payload)
        except SizeError as e:
            raise self._fail(PipelineStage.SIZE_LIMIT, e) from e
        logging.info(f"Audio size {payload.size_bytes} bytes is within the {self.size_guard.limit_bytes} byte limit")

    def _transcribe(self, payload: AudioPayload, api_key: str) -> Transcript:
        if self.confirm is not None and not self.confirm(payload):
            declined = TranscriptionDeclinedError(payload.title)
            raise self._fail(PipelineStage.CONFIRMATION, declined)

        self.state = PipelineState.TRANSCRIBING
        request = TranscriptionRequest(payload=payload, api_key=api_key)
        try:
            return self.transcriber.transcribe(request)
        except TranscriptionError as e:
            raise self._fail(PipelineStage.TRANSCRIPTION, e) from e

    def run(self, url: str, api_key: str) -> Transcript:
        """
        Transcribe the audio of a YouTube video.

        Args:
            url: YouTube video URL
            api_key: Credential for the transcription service

        Returns:
            Transcript of the video's audio

        Raises:
            PipelineError: naming the stage that failed and its cause
        """
        self.state = PipelineState.START
        self.failed_stage = None

        payload = self._fetch(url)
        self._check_size(payload)
        transcript = self._transcribe(payload, api_key)

        self.state = PipelineState.DONE
        logging.info("Pipeline finished.")
        return transcript
