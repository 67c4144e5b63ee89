"""
Configuration for pytest tests.
"""

import os
import shutil
import pytest
from pathlib import Path

# Must be set before yt_transcribe.config is imported
os.environ.setdefault("LOGS_DIR", str(Path("test_data") / "logs"))

from yt_transcribe.models.schemas import AudioPayload  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Setup test environment variables and directories."""
    test_data_dir = Path("test_data")
    test_data_dir.mkdir(exist_ok=True)

    os.environ["GROQ_API_KEY"] = os.environ.get("GROQ_API_KEY", "test_api_key")
    os.environ["ENVIRONMENT"] = "development"

    yield

    shutil.rmtree(test_data_dir, ignore_errors=True)


@pytest.fixture(scope="session")
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://youtu.be/V3TUEeB0kW0?si=-InVol0JhtWji-6R"


@pytest.fixture
def make_payload():
    """Factory for audio payloads of a given size."""
    def _make(size_bytes: int, title: str = "Test Video") -> AudioPayload:
        return AudioPayload(
            data=b"\x00" * size_bytes,
            mime_type="audio/mp4",
            filename="test123.m4a",
            declared_size=size_bytes,
            video_id="test123",
            title=title,
        )
    return _make
