"""
YouTube audio fetcher module.
"""

import socket
import tempfile
from http.client import HTTPException
from pathlib import Path
from typing import Optional
from urllib.error import URLError

from pytubefix import YouTube
from pytubefix.cli import on_progress
from pytubefix.exceptions import MaxRetriesExceeded, PytubeFixError
from pytubefix.streams import Stream

from yt_transcribe.core.interfaces import MediaFetcher
from yt_transcribe.core.size_guard import AudioSizeGuard
from yt_transcribe.exceptions import FetchNetworkError, NoAudioTrackError, VideoNotFoundError
from yt_transcribe.models.schemas import AudioPayload, VideoSource
from yt_transcribe.utils.logger import logging

NETWORK_ERRORS = (URLError, HTTPException, socket.timeout, ConnectionError)


class YouTubeAudioFetcher(MediaFetcher):
    """Class to handle downloading the audio track of YouTube videos."""

    def __init__(self, size_guard: Optional[AudioSizeGuard] = None, show_progress: bool = False):
        """
        Initialize the fetcher.

        Args:
            size_guard: If set, the declared stream size is checked before
                downloading so oversized tracks are never fetched
            show_progress: Print a progress bar while downloading
        """
        self.size_guard = size_guard
        self.show_progress = show_progress

    def _open(self, source: VideoSource) -> YouTube:
        callback = on_progress if self.show_progress else None
        try:
            return YouTube(source.url, on_progress_callback=callback)
        except PytubeFixError as e:
            raise VideoNotFoundError(source.url, e) from e

    @staticmethod
    def _select_audio_stream(yt: YouTube) -> Optional[Stream]:
        """
        Pick the smallest audio-only stream, preferring m4a.

        Args:
            yt: Resolved YouTube video

        Returns:
            Selected stream, or None if the video has no audio-only stream
        """
        stream = yt.streams.filter(only_audio=True, subtype="mp4").order_by('abr').first()
        if stream is None:
            stream = yt.streams.filter(only_audio=True).order_by('abr').first()
        return stream

    @staticmethod
    def _upload_filename(video_id: str, stream: Stream) -> str:
        extension = "m4a" if stream.subtype == "mp4" else stream.subtype
        return f"{video_id}.{extension}"

    def fetch(self, source: VideoSource) -> AudioPayload:
        """
        Download the audio track of a video into memory.

        Args:
            source: Validated YouTube URL

        Returns:
            AudioPayload with the downloaded bytes and video metadata
        """
        yt = self._open(source)

        try:
            stream = self._select_audio_stream(yt)
            if stream is None:
                raise NoAudioTrackError(source.url)

            video_id = yt.video_id
            title = yt.title
            declared_size = stream.filesize
            logging.info(
                f"Selected audio stream itag={stream.itag} ({stream.mime_type}, {stream.abr}) "
                f"for '{title}', declared size {declared_size} bytes"
            )

            if self.size_guard is not None and declared_size:
                self.size_guard.check_size(declared_size)

            # Removed together with its contents on every exit path
            with tempfile.TemporaryDirectory(prefix="yt_transcribe_") as tmpdir:
                logging.info(f"Downloading audio: {title}")
                downloaded = stream.download(
                    output_path=tmpdir,
                    filename=self._upload_filename(video_id, stream),
                )
                data = Path(downloaded).read_bytes()

        except (MaxRetriesExceeded,) + NETWORK_ERRORS as e:
            logging.debug(f"Error downloading audio: {str(e)}")
            raise FetchNetworkError(source.url, e) from e
        except PytubeFixError as e:
            logging.debug(f"Video could not be resolved: {str(e)}")
            raise VideoNotFoundError(source.url, e) from e

        if not data:
            raise NoAudioTrackError(source.url)

        logging.info(f"Downloaded {len(data)} bytes of audio")
        return AudioPayload(
            data=data,
            mime_type=stream.mime_type,
            filename=self._upload_filename(video_id, stream),
            declared_size=declared_size,
            video_id=video_id,
            title=title,
        )
