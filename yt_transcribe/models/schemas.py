"""
Data models for the YouTube transcriber application.
"""
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, SecretStr, field_validator

from yt_transcribe.config import config


YOUTUBE_HOSTS = {
    "youtube.com",
    "www.youtube.com",
    "m.youtube.com",
    "music.youtube.com",
    "youtube-nocookie.com",
    "www.youtube-nocookie.com",
    "youtu.be",
}


class VideoSource(BaseModel, frozen=True):
    """A remote YouTube video identified by its URL."""
    url: str

    @field_validator('url')
    def validate_youtube_url(cls, v):
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https"):
            raise ValueError('URL must use http or https')
        if (parsed.hostname or "").lower() not in YOUTUBE_HOSTS:
            raise ValueError('URL must be a valid YouTube URL')
        return v


class AudioPayload(BaseModel, frozen=True):
    """Audio track bytes extracted from a video, ready for upload."""
    data: bytes = Field(repr=False)
    mime_type: str = "audio/mp4"
    filename: str = "audio.m4a"
    declared_size: Optional[int] = None
    video_id: Optional[str] = None
    title: Optional[str] = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class TranscriptionRequest(BaseModel, frozen=True):
    """An audio payload paired with the credential used to upload it."""
    payload: AudioPayload
    api_key: SecretStr


class Transcript(BaseModel, frozen=True):
    """Plain-text transcript of a video's audio."""
    text: str
    video_id: Optional[str] = None
    title: Optional[str] = None


class TranscriptionConfig(BaseModel):
    """Configuration for transcription operations."""
    model: str = config.DEFAULT_TRANSCRIPTION_MODEL
    language: str = config.TRANSCRIPTION_LANGUAGE
    prompt: Optional[str] = None
    response_format: str = "json"
    temperature: float = 0.0
    timeout: float = Field(default=config.REQUEST_TIMEOUT_SECONDS, gt=0)
    max_retries: int = Field(default=config.MAX_RETRIES, ge=0)

    @field_validator('language')
    def validate_language(cls, v):
        if v != "en":
            raise ValueError('Only English transcription is supported')
        return v
