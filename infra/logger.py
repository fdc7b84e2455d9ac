"""
Centralized Logging Configuration

Provides structured logging for the union decoder with:
- Component-specific loggers
- Consistent formatting
- Registry and dispatch event helpers
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from app.config import LOG_LEVEL, get_log_file


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGER CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO", log_file: Optional[str | Path] = None):
    """
    Configure the decoder loggers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path to write logs to
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatters
    console_formatter = logging.Formatter(
        fmt="%(asctime)s | %(name)-16s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_formatter = logging.Formatter(
        fmt="%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)

    # Package logger (not root: this is a library)
    package_logger = logging.getLogger("union")

    # Prevent duplicate logs if setup_logging() is called again
    if package_logger.handlers:
        package_logger.handlers.clear()

    package_logger.setLevel(log_level)
    package_logger.addHandler(console_handler)

    # File handler (optional)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(file_formatter)
        package_logger.addHandler(file_handler)


# ═══════════════════════════════════════════════════════════════════════════════
# COMPONENT LOGGERS
# ═══════════════════════════════════════════════════════════════════════════════

setup_logging(level=LOG_LEVEL, log_file=get_log_file())

logger_registry = logging.getLogger("union.registry")
logger_dispatcher = logging.getLogger("union.dispatcher")
logger_classifier = logging.getLogger("union.classifier")


# ═══════════════════════════════════════════════════════════════════════════════
# STRUCTURED LOGGING HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

class LogContext:
    """Helper for consistent structured logging"""

    @staticmethod
    def format_dict(data: dict) -> str:
        """Format dictionary for logging"""
        return " | ".join(f"{k}={v}" for k, v in data.items())

    @staticmethod
    def format_tags(tags: Sequence[str], limit: int = 10) -> str:
        """Format a tag list, truncated for long registries"""
        shown = ",".join(tags[:limit])
        if len(tags) > limit:
            shown += f",...(+{len(tags) - limit})"
        return f"[{shown}]"


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGING UTILITIES
# ═══════════════════════════════════════════════════════════════════════════════

def log_registry_built(tags: Sequence[str], has_fallback: bool):
    """Log successful registry construction"""
    context = {
        "cases": len(tags),
        "tags": LogContext.format_tags(tags),
        "fallback": has_fallback,
    }
    logger_registry.info(f"REGISTRY_BUILT | {LogContext.format_dict(context)}")


def log_registry_rejected(category: str, message: str):
    """Log registry construction failure"""
    logger_registry.error(f"REGISTRY_REJECTED | category={category} | message={message}")


def log_decode_tagged(tag: str, index: int):
    """Log a successful tagged decode"""
    logger_dispatcher.debug(f"DECODE_TAGGED | tag={tag} | index={index}")


def log_decode_fallback(reason: str, tag: Optional[object] = None):
    """Log a decode routed to the fallback case"""
    context = {"reason": reason}
    if tag is not None:
        context["tag"] = repr(tag)[:60]
    logger_dispatcher.debug(f"DECODE_FALLBACK | {LogContext.format_dict(context)}")


def log_decode_failed(category: str, message: str, tag: Optional[object] = None):
    """Log a failed decode"""
    context = {"category": category, "message": message[:200]}
    if tag is not None:
        context["tag"] = repr(tag)[:60]
    logger_dispatcher.warning(f"DECODE_FAILED | {LogContext.format_dict(context)}")
