"""
YouTube Audio Transcriber.

This application downloads the audio track of a YouTube video, checks it
against the transcription service's upload limit, and transcribes the
English-language audio through a hosted Whisper endpoint.
"""

from yt_transcribe.config import config

__version__ = config.APP_VERSION
