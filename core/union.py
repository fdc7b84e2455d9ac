"""
TaggedUnion

Bundles a registry with its tag/content field names so callers decode with
one argument, and exposes the union as a pydantic field type.

Example:
    >>> shapes = TaggedUnion(
    ...     "Shape",
    ...     tag="kind",
    ...     content="data",
    ...     cases=[("Circle", schema_decoder(Circle))],
    ...     fallback=any_value,
    ... )
    >>> shapes.decode({"kind": "Circle", "data": {"r": 1.0}})
    Tagged(kind='tagged', index=0, tag='Circle', name='Circle', payload=Circle(r=1.0))
"""

from typing import Annotated, Any, Iterable, Optional, Union

from pydantic import PlainValidator

from app.config import DEFAULT_CONTENT_FIELD, DEFAULT_TAG_FIELD, NON_STRING_TAG_POLICY
from core import dispatcher
from core.errors import ConfigError, InvalidFieldNameError
from core.failure_classifier import TagPolicy
from core.registry import CaseSpec, FallbackCase, PayloadDecoder, build_registry
from core.results import DecodedUnion, DecodeOutcome


class TaggedUnion:
    """
    A named, adjacently tagged union with an optional fallback case.

    Attributes:
        name: Union name, used in repr and logs
        tag_field: Key holding the tag string
        content_field: Key holding the payload
        registry: Frozen VariantRegistry shared by every decode call
        tag_policy: Handling of a present, non-string tag
    """

    def __init__(
        self,
        name: str,
        *,
        tag: str = DEFAULT_TAG_FIELD,
        content: str = DEFAULT_CONTENT_FIELD,
        cases: Iterable[CaseSpec] = (),
        fallback: Optional[Union[FallbackCase, PayloadDecoder]] = None,
        non_string_tag: Optional[Union[TagPolicy, str]] = None
    ):
        for label, value in (("tag", tag), ("content", content)):
            if not isinstance(value, str) or not value:
                raise InvalidFieldNameError(
                    f"{name}: {label} field name must be a non-empty string, got {value!r}"
                )

        try:
            self.tag_policy = TagPolicy.parse(
                non_string_tag if non_string_tag is not None else NON_STRING_TAG_POLICY
            )
        except ValueError as e:
            raise ConfigError(f"{name}: {e}") from e

        self.name = name
        self.tag_field = tag
        self.content_field = content
        self.registry = build_registry(cases, fallback=fallback)

    def decode(self, raw: Any) -> DecodedUnion:
        return dispatcher.decode(
            raw,
            self.tag_field,
            self.content_field,
            self.registry,
            non_string_tag=self.tag_policy,
        )

    def decode_outcome(self, raw: Any) -> DecodeOutcome:
        return dispatcher.decode_outcome(
            raw,
            self.tag_field,
            self.content_field,
            self.registry,
            non_string_tag=self.tag_policy,
        )

    def decode_json(self, text: Union[str, bytes, bytearray]) -> DecodedUnion:
        return dispatcher.decode_json(
            text,
            self.tag_field,
            self.content_field,
            self.registry,
            non_string_tag=self.tag_policy,
        )

    def annotated(self) -> Any:
        """
        Field type for pydantic models.

        DecodeErrors are ValueErrors, so pydantic reports them as regular
        validation errors at the field's location.
        """
        return Annotated[Any, PlainValidator(self.decode)]

    def __repr__(self) -> str:
        return (
            f"TaggedUnion({self.name!r}, tag={self.tag_field!r}, content={self.content_field!r}, "
            f"tags={list(self.registry.tags)!r}, fallback={self.registry.has_fallback})"
        )
