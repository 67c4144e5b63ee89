"""
Main entry point for the YouTube Audio Transcriber.
"""

import os
import sys
import argparse
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from dotenv import load_dotenv
from pydantic import ValidationError

from yt_transcribe.config import config
from yt_transcribe.core.pipeline import TranscriptionPipeline
from yt_transcribe.core.size_guard import AudioSizeGuard
from yt_transcribe.core.transcriber import AudioTranscriber
from yt_transcribe.core.youtube_downloader import YouTubeAudioFetcher
from yt_transcribe.exceptions import PipelineError
from yt_transcribe.models.schemas import AudioPayload, Transcript, TranscriptionConfig
from yt_transcribe.utils.logger import logging


# Exit code when the output file cannot be created or written
OUTPUT_ERROR_EXIT_CODE = 3


def prepare_output(output_file: str) -> Tuple[Path, bool]:
    """
    Make sure the transcript can be written before anything is downloaded.

    Returns:
        The resolved path and whether this call created the file
    """
    output_path = Path(output_file).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    created = not output_path.exists()
    # Append mode creates the file and checks it is writable without truncating
    with open(output_path, "a", encoding="utf-8"):
        pass
    return output_path, created


def save_transcript(transcript: Transcript, output_file: str) -> Path:
    """Write the transcript as UTF-8 text."""
    output_path = Path(output_file).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(transcript.text, encoding="utf-8")
    logging.info(f"Transcript saved to: {output_path}")
    return output_path


def confirm_on_terminal(payload: AudioPayload) -> bool:
    """Ask the user whether to upload the video's audio."""
    title = payload.title or payload.video_id or "this video"
    # stdout carries only the transcript
    sys.stderr.write(f"Transcribe '{title}'? [y/N] ")
    sys.stderr.flush()
    try:
        answer = sys.stdin.readline()
    except EOFError:
        answer = ""
    # An empty read means stdin is closed, which counts as "no"
    return answer.strip().lower() == "y"


def transcribe_youtube_video(
    url: str,
    api_key: str,
    transcription_config: Optional[TranscriptionConfig] = None,
    confirm: Optional[Callable[[AudioPayload], bool]] = None,
) -> Transcript:
    """
    Process a YouTube video: download audio, check its size, transcribe.

    Args:
        url: YouTube video URL
        api_key: Groq API key
        transcription_config: Model, timeout and retry settings
        confirm: Optional hook asked before uploading the audio

    Returns:
        Transcript object
    """
    size_guard = AudioSizeGuard()
    pipeline = TranscriptionPipeline(
        fetcher=YouTubeAudioFetcher(size_guard=size_guard, show_progress=sys.stdout.isatty()),
        transcriber=AudioTranscriber(transcription_config),
        size_guard=size_guard,
        confirm=confirm,
    )
    return pipeline.run(url, api_key)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yt-transcribe",
        description="Transcribe the English audio of a YouTube video",
    )
    parser.add_argument("url", metavar="URL", help="YouTube video URL")
    parser.add_argument("-k", "--api-key", help="Groq API key (default: GROQ_API_KEY)")
    parser.add_argument("-o", "--output", help="Output file path for the transcript")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Transcribe without asking for confirmation")
    parser.add_argument("--model", default=config.DEFAULT_TRANSCRIPTION_MODEL,
                        help="Whisper model used for transcription")
    parser.add_argument("--prompt", help="Context or spelling hints for the transcription model")
    parser.add_argument("--timeout", type=float, default=config.REQUEST_TIMEOUT_SECONDS,
                        help="Transcription request timeout in seconds")
    parser.add_argument("--max-retries", type=int, default=config.MAX_RETRIES,
                        help="Retries on rate limiting or server errors (default: 0)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {config.APP_VERSION}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the application from command line."""
    # Load environment variables
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    api_key = args.api_key or os.getenv("GROQ_API_KEY")
    if not api_key:
        parser.error("an API key is required: pass --api-key or set GROQ_API_KEY")

    try:
        transcription_config = TranscriptionConfig(
            model=args.model,
            prompt=args.prompt,
            timeout=args.timeout,
            max_retries=args.max_retries,
        )
    except ValidationError as e:
        parser.error(f"invalid transcription settings: {e.errors()[0]['msg']}")

    output_path, created = None, False
    if args.output:
        try:
            output_path, created = prepare_output(args.output)
        except OSError as e:
            print(f"Error (output): cannot write {args.output}: {e.strerror or e}", file=sys.stderr)
            return OUTPUT_ERROR_EXIT_CODE

    try:
        transcript = transcribe_youtube_video(
            args.url,
            api_key,
            transcription_config,
            confirm=None if args.yes else confirm_on_terminal,
        )
    except PipelineError as e:
        if created:
            output_path.unlink(missing_ok=True)
        print(e.user_message(), file=sys.stderr)
        return e.exit_code

    print(transcript.text)

    if output_path is not None:
        try:
            save_transcript(transcript, str(output_path))
        except OSError as e:
            print(f"Error (output): cannot write {output_path}: {e.strerror or e}", file=sys.stderr)
            return OUTPUT_ERROR_EXIT_CODE
    return 0


if __name__ == "__main__":
    sys.exit(main())
