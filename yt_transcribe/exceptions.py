"""
Custom exceptions for the YouTube transcriber.

Every failure carries a process exit code and a user-facing category so the
command line can report where a run failed and whether retrying may help.
"""

from enum import Enum
from typing import Optional


class ErrorCategory(str, Enum):
    """User-visible classes of failure."""
    VIDEO_UNAVAILABLE = "video unavailable"
    AUDIO_TOO_LARGE = "audio too large"
    SERVICE_ERROR = "transcription service error"
    CANCELLED = "cancelled"


class PipelineStage(str, Enum):
    """Pipeline stage in which a failure occurred."""
    FETCH = "fetch"
    SIZE_LIMIT = "size_limit"
    CONFIRMATION = "confirmation"
    TRANSCRIPTION = "transcription"


def _megabytes(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.2f} MB"


class TranscriberError(Exception):
    """Base class for every error raised by a pipeline stage."""

    exit_code = 1
    category = ErrorCategory.SERVICE_ERROR
    transient = False

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


# Fetch errors

class FetchError(TranscriberError):
    """Raised when the audio track of a video cannot be retrieved."""

    category = ErrorCategory.VIDEO_UNAVAILABLE


class VideoNotFoundError(FetchError):
    """Raised when the URL does not resolve to a playable video."""

    exit_code = 10

    def __init__(self, url: str, cause: Optional[Exception] = None):
        self.url = url
        super().__init__(f"No playable video found at '{url}'", cause)


class NoAudioTrackError(FetchError):
    """Raised when the video has no audio stream."""

    exit_code = 11

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Video at '{url}' has no audio track")


class FetchNetworkError(FetchError):
    """Raised on transport failure while talking to YouTube."""

    exit_code = 12
    transient = True

    def __init__(self, url: str, cause: Optional[Exception] = None):
        self.url = url
        super().__init__(f"Network error while fetching '{url}': {cause}", cause)


class UnsupportedSourceError(FetchError):
    """Raised when the URL is not a YouTube video URL."""

    exit_code = 13

    def __init__(self, url: str, cause: Optional[Exception] = None):
        self.url = url
        super().__init__(f"Unsupported source '{url}': only YouTube URLs are accepted", cause)


# Size errors

class SizeError(TranscriberError):
    """Raised when the audio payload violates the upload size limit."""

    category = ErrorCategory.AUDIO_TOO_LARGE


class AudioTooLargeError(SizeError):
    """Raised when the audio exceeds the transcription service's upload limit."""

    exit_code = 20

    def __init__(self, actual_bytes: int, limit_bytes: int):
        self.actual_bytes = actual_bytes
        self.limit_bytes = limit_bytes
        super().__init__(
            f"Audio is {actual_bytes} bytes ({_megabytes(actual_bytes)}), "
            f"limit is {limit_bytes} bytes ({_megabytes(limit_bytes)})"
        )


# Transcription errors

class TranscriptionError(TranscriberError):
    """Raised when the transcription service fails to transcribe the audio."""

    category = ErrorCategory.SERVICE_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None, cause: Optional[Exception] = None):
        self.status_code = status_code
        super().__init__(message, cause)


class UnauthorizedError(TranscriptionError):
    """Raised when the service rejects the API key (401/403)."""

    exit_code = 30

    def __init__(self, status_code: Optional[int] = None, cause: Optional[Exception] = None):
        super().__init__(f"API key was rejected (HTTP {status_code})", status_code, cause)


class PayloadRejectedError(TranscriptionError):
    """Raised when the service refuses the upload as too large (413)."""

    exit_code = 31

    def __init__(self, status_code: Optional[int] = 413, cause: Optional[Exception] = None):
        super().__init__(f"Service rejected the audio upload (HTTP {status_code})", status_code, cause)


class RateLimitedError(TranscriptionError):
    """Raised when the service rate limits the request (429)."""

    exit_code = 32
    transient = True

    def __init__(self, status_code: Optional[int] = 429, cause: Optional[Exception] = None):
        super().__init__(f"Rate limited by the service (HTTP {status_code})", status_code, cause)


class ServiceUnavailableError(TranscriptionError):
    """Raised on 5xx responses, timeouts and connection failures."""

    exit_code = 33
    transient = True

    def __init__(self, status_code: Optional[int] = None, cause: Optional[Exception] = None):
        if status_code is None:
            message = f"Transcription service unreachable: {cause}"
        else:
            message = f"Transcription service unavailable (HTTP {status_code})"
        super().__init__(message, status_code, cause)


class InvalidResponseError(TranscriptionError):
    """Raised when the service response cannot be parsed into a transcript."""

    exit_code = 34

    def __init__(self, detail: str, status_code: Optional[int] = None, cause: Optional[Exception] = None):
        self.detail = detail
        super().__init__(f"Unexpected response from transcription service: {detail}", status_code, cause)


# Pipeline errors

class PipelineAbort(TranscriberError):
    """Raised when a run is stopped on purpose rather than by a failure."""

    category = ErrorCategory.CANCELLED


class TranscriptionDeclinedError(PipelineAbort):
    """Raised when the confirmation hook declines to transcribe."""

    def __init__(self, title: Optional[str] = None):
        self.title = title
        super().__init__(f"Transcription of '{title or 'video'}' was declined")


class PipelineError(Exception):
    """Wraps a stage failure with the stage it happened in."""

    def __init__(self, stage: PipelineStage, cause: TranscriberError):
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage.value} failed: {cause}")

    @property
    def exit_code(self) -> int:
        return self.cause.exit_code

    @property
    def category(self) -> ErrorCategory:
        return self.cause.category

    @property
    def transient(self) -> bool:
        return self.cause.transient

    def user_message(self) -> str:
        """One-line message for the operator."""
        if self.transient:
            hint = "this looks temporary, retry later"
        elif self.category is ErrorCategory.AUDIO_TOO_LARGE:
            hint = "use a shorter video"
        elif self.category is ErrorCategory.CANCELLED:
            hint = "nothing was sent"
        else:
            hint = "check the input and credentials"
        return f"Error ({self.category.value}): {self.cause} [{hint}]"
