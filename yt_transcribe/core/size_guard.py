"""
Pre-flight check of audio payloads against the upload size limit.
"""

from yt_transcribe.exceptions import AudioTooLargeError
from yt_transcribe.models.schemas import AudioPayload

# Upload ceiling of the transcription service
MAX_AUDIO_SIZE_BYTES = 25 * 1024 * 1024


class AudioSizeGuard:
    """Rejects audio payloads the transcription service would refuse."""

    def __init__(self, limit_bytes: int = MAX_AUDIO_SIZE_BYTES):
        """
        Initialize the guard.

        Args:
            limit_bytes: Largest accepted payload, at most MAX_AUDIO_SIZE_BYTES
        """
        if limit_bytes <= 0 or limit_bytes > MAX_AUDIO_SIZE_BYTES:
            raise ValueError(
                f"limit_bytes must be between 1 and {MAX_AUDIO_SIZE_BYTES}, got {limit_bytes}"
            )
        self.limit_bytes = limit_bytes

    def check_size(self, size_bytes: int) -> None:
        """Raise AudioTooLargeError if size_bytes exceeds the limit."""
        if size_bytes > self.limit_bytes:
            raise AudioTooLargeError(actual_bytes=size_bytes, limit_bytes=self.limit_bytes)

    def check(self, payload: AudioPayload) -> None:
        """
        Check a fetched payload against the limit.

        Args:
            payload: Downloaded audio

        Raises:
            AudioTooLargeError: If the payload is larger than the limit
        """
        self.check_size(payload.size_bytes)
