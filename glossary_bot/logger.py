import logging
import os
import sys


def resolve_log_level(name: str | None) -> int:
    """Map a level name like 'info' to its value; unknown names fall back to DEBUG."""
    level = logging.getLevelName((name or "DEBUG").strip().upper())
    return level if isinstance(level, int) else logging.DEBUG


# Configure logging to write to stderr (unbuffered, better for containers)
logging.basicConfig(
    level=resolve_log_level(os.getenv("LOG_LEVEL")),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

# Suppress verbose DEBUG logs from pymongo (topology, connection pool) and the Slack SDK
for noisy_logger in ("pymongo", "pymongo.topology", "pymongo.connection", "slack_bolt", "slack_sdk"):
    logging.getLogger(noisy_logger).setLevel(logging.INFO)

logger = logging.getLogger("glossarybot")
