"""
Variant Registry

Immutable description of a tagged union:
- N tagged cases (tag string -> payload decoder)
- at most one fallback case (decoder for the entire, un-split input)

Built once with build_registry() and then shared read-only by every
decode call.
"""

from typing import Any, Callable, Iterable, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from core.errors import (
    ConfigError,
    DuplicateTagError,
    InvalidCaseError,
    MultipleFallbacksError,
)
from infra.logger import log_registry_built, log_registry_rejected


PayloadDecoder = Callable[[Any], Any]


# ═══════════════════════════════════════════════════════════════════════════════
# CASES
# ═══════════════════════════════════════════════════════════════════════════════

class TaggedCase(BaseModel):
    """
    One known shape of the union.

    Attributes:
        tag: Exact tag string that selects this case
        decode: Payload decoder applied to the content field
        name: Variant name, defaults to the tag (differs for renamed tags)
    """
    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., min_length=1)
    decode: PayloadDecoder
    name: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("name") is None:
            data = {**data, "name": data.get("tag")}
        return data


class FallbackCase(BaseModel):
    """Catch-all case, decoded from the entire input"""
    model_config = ConfigDict(frozen=True)

    decode: PayloadDecoder
    name: str = Field(default="Fallback", min_length=1)


CaseSpec = Union[TaggedCase, FallbackCase, Tuple[str, PayloadDecoder], Tuple[str, PayloadDecoder, str]]


# ═══════════════════════════════════════════════════════════════════════════════
# REGISTRY
# ═══════════════════════════════════════════════════════════════════════════════

class VariantRegistry(BaseModel):
    """
    Frozen set of cases for one union type.

    Lookup is a linear scan: registries are small and tags are unique,
    so order never changes which case matches.
    """
    model_config = ConfigDict(frozen=True)

    cases: Tuple[TaggedCase, ...] = ()
    fallback: Optional[FallbackCase] = None

    @model_validator(mode="after")
    def _check_unique_tags(self) -> "VariantRegistry":
        seen = set()
        for case in self.cases:
            if case.tag in seen:
                raise DuplicateTagError(case.tag)
            seen.add(case.tag)
        return self

    @property
    def tags(self) -> Tuple[str, ...]:
        return tuple(case.tag for case in self.cases)

    @property
    def has_fallback(self) -> bool:
        return self.fallback is not None

    def find(self, tag: str) -> Optional[Tuple[int, TaggedCase]]:
        """Return (index, case) for an exact tag match, or None"""
        for index, case in enumerate(self.cases):
            if case.tag == tag:
                return index, case
        return None

    def index_of(self, tag: str) -> Optional[int]:
        match = self.find(tag)
        return match[0] if match else None

    def case_for(self, tag: str) -> Optional[TaggedCase]:
        match = self.find(tag)
        return match[1] if match else None

    def __len__(self) -> int:
        return len(self.cases)


# ═══════════════════════════════════════════════════════════════════════════════
# CONSTRUCTION
# ═══════════════════════════════════════════════════════════════════════════════

def _coerce_case(entry: Any) -> Union[TaggedCase, FallbackCase]:
    if isinstance(entry, (TaggedCase, FallbackCase)):
        return entry

    if isinstance(entry, tuple) and len(entry) in (2, 3):
        tag, decode = entry[0], entry[1]
        name = entry[2] if len(entry) == 3 else None
        try:
            return TaggedCase(tag=tag, decode=decode, name=name)
        except ValidationError as e:
            raise InvalidCaseError(f"Invalid case {entry!r}: {e}") from e

    raise InvalidCaseError(
        f"Unsupported case entry {entry!r}; "
        "expected TaggedCase, FallbackCase or (tag, decoder[, name])"
    )


def _coerce_fallback(fallback: Any) -> FallbackCase:
    if isinstance(fallback, FallbackCase):
        return fallback
    try:
        return FallbackCase(decode=fallback)
    except ValidationError as e:
        raise InvalidCaseError(f"Invalid fallback decoder {fallback!r}: {e}") from e


def build_registry(
    cases: Iterable[CaseSpec] = (),
    fallback: Optional[Union[FallbackCase, PayloadDecoder]] = None,
) -> VariantRegistry:
    """
    Validate cases and build an immutable registry.

    Args:
        cases: TaggedCase / FallbackCase objects or (tag, decoder[, name]) tuples
        fallback: Optional fallback decoder or FallbackCase

    Returns:
        VariantRegistry ready to be shared across decode calls

    Raises:
        DuplicateTagError: Two cases share a tag
        MultipleFallbacksError: More than one fallback was supplied
        InvalidCaseError: A case entry is malformed

    Example:
        >>> registry = build_registry(
        ...     [("Number", int), ("String", str)],
        ...     fallback=lambda raw: raw,
        ... )
        >>> registry.tags
        ('Number', 'String')
    """
    try:
        tagged = []
        fallbacks = []

        for entry in cases:
            case = _coerce_case(entry)
            if isinstance(case, FallbackCase):
                fallbacks.append(case)
            else:
                tagged.append(case)

        if fallback is not None:
            fallbacks.append(_coerce_fallback(fallback))

        if len(fallbacks) > 1:
            raise MultipleFallbacksError(len(fallbacks))

        registry = VariantRegistry(
            cases=tuple(tagged),
            fallback=fallbacks[0] if fallbacks else None,
        )
    except ConfigError as e:
        log_registry_rejected(e.category, e.message)
        raise

    log_registry_built(registry.tags, registry.has_fallback)
    return registry
