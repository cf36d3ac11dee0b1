"""
Logging setup for the storefront.

Configures the root logger once, on first import of this module, so that
uvicorn/Vercel output, cart engine warnings (corrupted snapshots, storage
failures) and guard decisions share one format.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.warning("Corrupted cart snapshot, starting empty")
    logger.info(f"Redirecting {sanitize_string_for_logging(path)}")

Environment:
    LOG_LEVEL  - root level name (default INFO)
    VERCEL     - "1" switches to the compact format without timestamps
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Client libraries under the Supabase and Upstash SDKs; their per-request
# INFO lines would drown out cart and guard messages.
QUIET_LOGGERS = ("httpx", "httpcore", "hpack", "gotrue", "supabase", "upstash_redis")


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Attach a stdout handler unless the host (uvicorn, pytest) already did."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _get_log_level()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    compact = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if compact else LOG_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """Logger for a storefront module (pass ``__name__``)."""
    return logging.getLogger(name)


def _escape_control_chars(value: str) -> str:
    """Neutralize newlines and NULs so a request path cannot forge log lines (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_string_for_logging(value: object, max_length: int = 50) -> str:
    """
    Make a client-supplied value safe to log.

    Used for request paths in the navigation guard and for product ids and
    size labels arriving from catalog payloads.

    Args:
        value: Path, product id or label (None and "" log as "N/A")
        max_length: Characters kept before truncating with "..."
    """
    if value is None or value == "":
        return "N/A"
    safe_value = _escape_control_chars(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "QUIET_LOGGERS",
    "get_logger",
    "sanitize_string_for_logging",
]
