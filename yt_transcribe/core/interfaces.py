"""Abstract interfaces for the network-facing pipeline stages."""

from abc import ABC, abstractmethod

from yt_transcribe.models.schemas import AudioPayload, Transcript, TranscriptionRequest, VideoSource


class MediaFetcher(ABC):
    """Abstract base class for audio track sources."""

    @abstractmethod
    def fetch(self, source: VideoSource) -> AudioPayload:
        """
        Retrieves the audio track of a video.

        Args:
            source: Validated video URL.

        Returns:
            Audio payload holding the downloaded bytes.

        Raises:
            FetchError: If the audio cannot be retrieved.
        """
        pass


class TranscriptionClient(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(self, request: TranscriptionRequest) -> Transcript:
        """
        Transcribes an audio payload.

        Args:
            request: Audio payload and the credential to upload it with.

        Returns:
            Transcript of the audio.

        Raises:
            TranscriptionError: If transcription fails.
        """
        pass
