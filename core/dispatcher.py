"""
Tagged-Union Dispatcher

Decodes one generic tree (dicts, lists, scalars) into a Tagged or Fallback
result using a VariantRegistry.

Flow:
1. Inspect the selector (mapping? tag present? tag a string?)
2. Look up the tag in the registry
3. Matched → decode the content field with that case; errors are final
4. Not matched → classifier decides: fallback on the whole input, or fail
"""

import json
from typing import Any, Optional, Union

from app.config import NON_STRING_TAG_POLICY
from core.errors import (
    ContentInvalidError,
    DecodeError,
    FallbackFailedError,
    MalformedInputError,
    MissingTagFieldError,
    NotAMappingError,
    TagNotAStringError,
    UnknownVariantError,
)
from core.failure_classifier import (
    Resolution,
    SelectorFailure,
    TagPolicy,
    inspect_selector,
    resolve,
)
from core.registry import FallbackCase, TaggedCase, VariantRegistry
from core.results import DecodedUnion, DecodeOutcome, Fallback, Tagged
from infra.logger import log_decode_failed, log_decode_fallback, log_decode_tagged


# Errors a payload decoder may raise to reject its input.
# pydantic.ValidationError and PayloadError are both ValueErrors.
PAYLOAD_ERRORS = (ValueError, TypeError)


# =========================
# Public Entry
# =========================

def decode(
    raw: Any,
    tag_field: str,
    content_field: str,
    registry: VariantRegistry,
    *,
    non_string_tag: Optional[Union[TagPolicy, str]] = None
) -> DecodedUnion:
    """
    Decode a generic tree into one case of the union.

    Args:
        raw: Already-parsed input (e.g. the result of json.loads)
        tag_field: Key holding the tag string
        content_field: Key holding the payload for tagged cases
        registry: Cases to dispatch over
        non_string_tag: Policy for a present, non-string tag
            (defaults to NON_STRING_TAG_POLICY)

    Returns:
        Tagged when a case matched and its content decoded,
        Fallback when no case was selected and a fallback is registered

    Raises:
        ContentInvalidError: Case matched but its content failed to decode
        NotAMappingError, MissingTagFieldError, TagNotAStringError,
        UnknownVariantError: Selector failed and no fallback applies
        FallbackFailedError: The fallback decoder rejected the input
    """
    policy = TagPolicy.parse(non_string_tag if non_string_tag is not None else NON_STRING_TAG_POLICY)

    failure, tag = inspect_selector(raw, tag_field)

    if failure is None:
        match = registry.find(tag)
        if match is not None:
            index, case = match
            return _decode_content(raw, content_field, index, case)
        failure = SelectorFailure.UNKNOWN_TAG

    resolution = resolve(failure, has_fallback=registry.has_fallback, tag_policy=policy)

    if resolution is Resolution.FALLBACK:
        return _decode_fallback(raw, registry.fallback, failure, tag)

    error = _selector_error(failure, raw, tag_field, tag, registry)
    log_decode_failed(error.category, error.message, tag)
    raise error


def decode_outcome(
    raw: Any,
    tag_field: str,
    content_field: str,
    registry: VariantRegistry,
    *,
    non_string_tag: Optional[Union[TagPolicy, str]] = None
) -> DecodeOutcome:
    """Same as decode(), but returns the error instead of raising it"""
    try:
        value = decode(raw, tag_field, content_field, registry, non_string_tag=non_string_tag)
    except DecodeError as e:
        return DecodeOutcome(error=e)
    return DecodeOutcome(value=value)


def decode_json(
    text: Union[str, bytes, bytearray],
    tag_field: str,
    content_field: str,
    registry: VariantRegistry,
    *,
    non_string_tag: Optional[Union[TagPolicy, str]] = None
) -> DecodedUnion:
    """
    Parse JSON text once into a generic tree and dispatch it.

    The same tree feeds both the tag lookup and, when needed, the fallback
    decoder; the text is never parsed twice.
    """
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        error = MalformedInputError(f"Input is not valid JSON: {e}")
        log_decode_failed(error.category, error.message)
        raise error from e

    return decode(raw, tag_field, content_field, registry, non_string_tag=non_string_tag)


# =========================
# Tagged path
# =========================

def _decode_content(raw: Any, content_field: str, index: int, case: TaggedCase) -> Tagged:
    # Absent content is handed over as None; the payload decoder decides.
    content = raw.get(content_field)

    try:
        payload = case.decode(content)
    except PAYLOAD_ERRORS as e:
        error = ContentInvalidError(index, case.tag, e)
        log_decode_failed(error.category, error.message, case.tag)
        raise error from e

    log_decode_tagged(case.tag, index)
    return Tagged(index=index, tag=case.tag, name=case.name, payload=payload)


# =========================
# Fallback path
# =========================

def _decode_fallback(
    raw: Any,
    fallback: FallbackCase,
    failure: SelectorFailure,
    tag: Any
) -> Fallback:
    log_decode_fallback(failure.value, tag)

    try:
        value = fallback.decode(raw)
    except PAYLOAD_ERRORS as e:
        error = FallbackFailedError(failure.value, e)
        log_decode_failed(error.category, error.message, tag)
        raise error from e

    return Fallback(name=fallback.name, value=value)


def _selector_error(
    failure: SelectorFailure,
    raw: Any,
    tag_field: str,
    tag: Any,
    registry: VariantRegistry
) -> DecodeError:
    if failure is SelectorFailure.NOT_A_MAPPING:
        return NotAMappingError(raw)
    if failure is SelectorFailure.MISSING_TAG:
        return MissingTagFieldError(tag_field)
    if failure is SelectorFailure.TAG_NOT_A_STRING:
        return TagNotAStringError(tag_field, tag)
    return UnknownVariantError(tag, registry.tags)
