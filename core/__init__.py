"""
Tagged-Union Decoding Core

Exposes registry construction, dispatch and the TaggedUnion facade.
"""

from .errors import (
    ConfigError,
    ContentInvalidError,
    DecodeError,
    DuplicateTagError,
    FallbackFailedError,
    MissingTagFieldError,
    MultipleFallbacksError,
    NotAMappingError,
    PayloadError,
    TagNotAStringError,
    UnknownVariantError,
)
from .results import DecodeOutcome, Fallback, Tagged
from .registry import FallbackCase, TaggedCase, VariantRegistry, build_registry
from .failure_classifier import TagPolicy
from .dispatcher import decode, decode_json, decode_outcome
from .union import TaggedUnion

__all__ = [
    "ConfigError",
    "ContentInvalidError",
    "DecodeError",
    "DecodeOutcome",
    "DuplicateTagError",
    "Fallback",
    "FallbackCase",
    "FallbackFailedError",
    "MissingTagFieldError",
    "MultipleFallbacksError",
    "NotAMappingError",
    "PayloadError",
    "Tagged",
    "TaggedCase",
    "TaggedUnion",
    "TagNotAStringError",
    "TagPolicy",
    "UnknownVariantError",
    "VariantRegistry",
    "build_registry",
    "decode",
    "decode_json",
    "decode_outcome",
]
