"""
Decoder Error Taxonomy

Two families:
1. ConfigError - registry/union construction problems, fatal at startup
2. DecodeError - per-call decode failures

DecodeError subclasses ValueError so that pydantic validators wrap it
into a regular ValidationError when a union is used as a field type.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from app.config import MAX_TAGS_IN_MESSAGE


class UnionDecoderError(Exception):
    """Base class for every error raised by this package"""

    category = "UNION_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category, "message": self.message}


# =========================
# Configuration errors
# =========================

class ConfigError(UnionDecoderError):
    category = "CONFIG_ERROR"


class DuplicateTagError(ConfigError):
    category = "DUPLICATE_TAG"

    def __init__(self, tag: str):
        super().__init__(f"Duplicate tag '{tag}' in variant registry")
        self.tag = tag

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "tag": self.tag}


class MultipleFallbacksError(ConfigError):
    category = "MULTIPLE_FALLBACKS"

    def __init__(self, count: int):
        super().__init__(f"At most one fallback case is allowed, got {count}")
        self.count = count


class InvalidCaseError(ConfigError):
    category = "INVALID_CASE"


class InvalidFieldNameError(ConfigError):
    category = "INVALID_FIELD_NAME"


# =========================
# Decode errors
# =========================

class DecodeError(UnionDecoderError, ValueError):
    category = "DECODE_ERROR"


class NotAMappingError(DecodeError):
    category = "NOT_A_MAPPING"

    def __init__(self, received: Any):
        self.received_type = type(received).__name__
        super().__init__(f"Expected a mapping, got {self.received_type}")


class MissingTagFieldError(DecodeError):
    category = "MISSING_TAG_FIELD"

    def __init__(self, tag_field: str):
        super().__init__(f"missing field `{tag_field}`")
        self.tag_field = tag_field


class TagNotAStringError(DecodeError):
    category = "TAG_NOT_A_STRING"

    def __init__(self, tag_field: str, value: Any):
        super().__init__(
            f"`{tag_field}` is not of type `string` (got {type(value).__name__})"
        )
        self.tag_field = tag_field
        self.value = value


class UnknownVariantError(DecodeError):
    category = "UNKNOWN_VARIANT"

    def __init__(self, value: str, known_tags: Sequence[str]):
        self.value = value
        self.known_tags: Tuple[str, ...] = tuple(known_tags)

        shown = ", ".join(f"`{t}`" for t in self.known_tags[:MAX_TAGS_IN_MESSAGE])
        if len(self.known_tags) > MAX_TAGS_IN_MESSAGE:
            shown += f", ... ({len(self.known_tags) - MAX_TAGS_IN_MESSAGE} more)"
        if not self.known_tags:
            shown = "none"
        super().__init__(f"unknown variant `{value}`, expected one of {shown}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "value": self.value,
            "known_tags": list(self.known_tags),
        }


def _error_details(inner: BaseException) -> List[Dict[str, Any]]:
    """Structured details of a payload error, pydantic's own list when available"""
    if isinstance(inner, ValidationError):
        return [
            {"loc": tuple(e["loc"]), "type": e["type"], "msg": e["msg"]}
            for e in inner.errors()
        ]
    if isinstance(inner, PayloadError):
        return [inner.to_detail()]
    return [{"loc": (), "type": type(inner).__name__, "msg": str(inner)}]


class ContentInvalidError(DecodeError):
    """
    The tag matched a registered case but its content failed to decode.

    Never converted into a fallback result. The payload decoder's error is
    kept verbatim as `inner` (also chained as __cause__).
    """

    category = "CONTENT_INVALID"

    def __init__(self, variant_index: int, tag: str, inner: BaseException):
        self.variant_index = variant_index
        self.tag = tag
        self.inner = inner
        self.details = _error_details(inner)
        super().__init__(f"invalid content for variant `{tag}`: {inner}")

    @property
    def missing_fields(self) -> List[str]:
        """Dotted paths of fields the payload decoder reported as missing"""
        return [
            ".".join(str(p) for p in d["loc"])
            for d in self.details
            if d["type"] == "missing"
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            **super().to_dict(),
            "variant_index": self.variant_index,
            "tag": self.tag,
            "details": self.details,
        }


class FallbackFailedError(DecodeError):
    category = "FALLBACK_FAILED"

    def __init__(self, reason: str, inner: BaseException):
        self.reason = reason
        self.inner = inner
        self.details = _error_details(inner)
        super().__init__(f"fallback decode failed ({reason}): {inner}")

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), "reason": self.reason, "details": self.details}


class MalformedInputError(DecodeError):
    category = "MALFORMED_INPUT"


# =========================
# Payload decoder errors
# =========================

class PayloadError(ValueError):
    """
    Raised by hand-written payload decoders.

    Schema decoders raise pydantic's ValidationError instead; both are
    treated as content failures by the dispatcher.
    """

    def __init__(self, message: str, *, field: Optional[str] = None, kind: str = "value_error"):
        super().__init__(message)
        self.field = field
        self.kind = kind

    def to_detail(self) -> Dict[str, Any]:
        loc = (self.field,) if self.field else ()
        return {"loc": loc, "type": self.kind, "msg": str(self)}
