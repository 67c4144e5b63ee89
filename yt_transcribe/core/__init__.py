"""
Core functionality for the YouTube transcriber application.

This package contains the audio fetcher, the upload size guard, the
transcription client and the pipeline that sequences them.
"""
