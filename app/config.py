"""
Decoder Configuration

Centralized configuration for the tagged-union decoder.
Environment overrides are loaded separately (see infra/env.py).
"""

from typing import Literal

from infra.env import get_env, get_env_bool


# ═══════════════════════════════════════════════════════════════════════════════
# DISPATCH POLICY
# ═══════════════════════════════════════════════════════════════════════════════

# What to do when the tag field is present but is not a string:
# - "fallback": treat it like an unknown tag (fallback if registered)
# - "error":    always raise TagNotAStringError
NonStringTagPolicy = Literal["fallback", "error"]

NON_STRING_TAG_POLICIES = ("fallback", "error")

NON_STRING_TAG_POLICY: NonStringTagPolicy = get_env(
    "UNION_DECODER_NON_STRING_TAG", "fallback"
).lower()  # type: ignore[assignment]

# Default field names for TaggedUnion when none are given
DEFAULT_TAG_FIELD: str = "type"
DEFAULT_CONTENT_FIELD: str = "content"


# ═══════════════════════════════════════════════════════════════════════════════
# PAYLOAD DECODING
# ═══════════════════════════════════════════════════════════════════════════════

# Strict mode for schema decoders (no "2000" -> 2000 coercion)
STRICT_PAYLOAD_DECODING: bool = get_env_bool("UNION_DECODER_STRICT", True)


# ═══════════════════════════════════════════════════════════════════════════════
# ERROR REPORTING
# ═══════════════════════════════════════════════════════════════════════════════

# Maximum number of known tags listed in an UnknownVariantError message.
# The error object itself always carries the full list.
MAX_TAGS_IN_MESSAGE: int = 20


# ═══════════════════════════════════════════════════════════════════════════════
# LOGGING CONFIGURATION
# ═══════════════════════════════════════════════════════════════════════════════

# Log level for the decoder loggers
LOG_LEVEL: str = get_env("UNION_DECODER_LOG_LEVEL", "WARNING")  # DEBUG, INFO, WARNING, ERROR, CRITICAL

# Enable file logging
ENABLE_FILE_LOGGING: bool = get_env_bool("UNION_DECODER_FILE_LOGGING", False)

# Log file path
LOG_FILE_PATH: str = get_env("UNION_DECODER_LOG_FILE", "runtime/logs/decoder.log")


# ═══════════════════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def get_log_file() -> str | None:
    """Log file path, or None when file logging is disabled"""
    return LOG_FILE_PATH if ENABLE_FILE_LOGGING else None


def validate_config():
    """Validate configuration on startup"""
    assert NON_STRING_TAG_POLICY in NON_STRING_TAG_POLICIES, (
        f"Invalid NON_STRING_TAG_POLICY: {NON_STRING_TAG_POLICY}"
    )
    assert DEFAULT_TAG_FIELD and DEFAULT_CONTENT_FIELD, "Default field names must be non-empty"
    assert MAX_TAGS_IN_MESSAGE > 0, "MAX_TAGS_IN_MESSAGE must be positive"
    assert LOG_LEVEL.upper() in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}, (
        f"Invalid LOG_LEVEL: {LOG_LEVEL}"
    )


# Validate on import
validate_config()
