"""
Selector Failure Classification

Decides what happens when the dispatcher cannot resolve which case applies:
route the entire input to the fallback case, or fail.

Only selector-resolution failures pass through here. Once a tag has matched
a case, a content failure is final and is never resolved into a fallback.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from infra.logger import logger_classifier


# ═══════════════════════════════════════════════════════════════════════════════
# FAILURE TYPES
# ═══════════════════════════════════════════════════════════════════════════════

class SelectorFailure(Enum):
    """
    Ways the selector can fail to identify a case.

    NOT_A_MAPPING: Input is not a mapping at all
    MISSING_TAG: Mapping without the tag field
    TAG_NOT_A_STRING: Tag field present but not a string
    UNKNOWN_TAG: Tag is a string that no case registers
    """
    NOT_A_MAPPING = "not_a_mapping"
    MISSING_TAG = "missing_tag"
    TAG_NOT_A_STRING = "tag_not_a_string"
    UNKNOWN_TAG = "unknown_tag"


class Resolution(Enum):
    FALLBACK = "fallback"   # decode the whole input with the fallback case
    ERROR = "error"         # raise the matching DecodeError


class TagPolicy(Enum):
    """
    Handling of a present, non-string tag.

    FALLBACK: Selector mismatch, same as an unknown tag
    ERROR: Always a TagNotAStringError, even with a fallback registered
    """
    FALLBACK = "fallback"
    ERROR = "error"

    @classmethod
    def parse(cls, value: "TagPolicy | str") -> "TagPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid non-string tag policy '{value}', expected one of: {allowed}")


# ═══════════════════════════════════════════════════════════════════════════════
# CLASSIFICATION
# ═══════════════════════════════════════════════════════════════════════════════

_MISSING = object()


def inspect_selector(raw: Any, tag_field: str) -> Tuple[Optional[SelectorFailure], Any]:
    """
    Check the structural preconditions for tag lookup.

    Returns:
        (failure, tag_value). failure is None when the input is a mapping
        whose tag field holds a string; tag_value is None when absent.
    """
    if not isinstance(raw, Mapping):
        return SelectorFailure.NOT_A_MAPPING, None

    tag = raw.get(tag_field, _MISSING)
    if tag is _MISSING:
        return SelectorFailure.MISSING_TAG, None

    if not isinstance(tag, str):
        return SelectorFailure.TAG_NOT_A_STRING, tag

    return None, tag


def resolve(
    failure: SelectorFailure,
    *,
    has_fallback: bool,
    tag_policy: TagPolicy = TagPolicy.FALLBACK
) -> Resolution:
    """
    Map a selector failure to an action.

    | Situation          | Action                                    |
    |--------------------|-------------------------------------------|
    | NOT_A_MAPPING      | fallback if present, else error           |
    | MISSING_TAG        | fallback if present, else error           |
    | TAG_NOT_A_STRING   | as above under FALLBACK policy, else error|
    | UNKNOWN_TAG        | fallback if present, else error           |

    Examples:
        >>> resolve(SelectorFailure.UNKNOWN_TAG, has_fallback=True)
        <Resolution.FALLBACK: 'fallback'>

        >>> resolve(SelectorFailure.MISSING_TAG, has_fallback=False)
        <Resolution.ERROR: 'error'>
    """
    if failure is SelectorFailure.TAG_NOT_A_STRING and tag_policy is TagPolicy.ERROR:
        logger_classifier.debug("RESOLVE | TAG_NOT_A_STRING | policy=error → ERROR")
        return Resolution.ERROR

    resolution = Resolution.FALLBACK if has_fallback else Resolution.ERROR
    logger_classifier.debug(
        f"RESOLVE | {failure.name} | has_fallback={has_fallback} → {resolution.name}"
    )
    return resolution
