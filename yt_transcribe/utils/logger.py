import sys
import logging

from yt_transcribe.config import config

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
logging_dir = config.LOGS_DIR
loging_path = logging_dir / "yt_transcriber.log"
logging_dir.mkdir(parents=True, exist_ok=True)

# stdout is reserved for the transcript; failures reach the terminal as the
# CLI's one-line message, so the console only shows warnings and above
console_handler = logging.StreamHandler(sys.stderr)
console_handler.setLevel(logging.WARNING)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format=logging_str,
    handlers=[
        logging.FileHandler(loging_path, encoding="utf-8"),
        console_handler
    ]
)

logging = logging.getLogger('yt_transcriber')
