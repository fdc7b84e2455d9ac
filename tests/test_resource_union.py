"""
Test suite for the resource union (resourceType / resource)
"""

import sys
from pathlib import Path
from typing import Any, Dict, Literal, Union

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.errors import ContentInvalidError
from core.registry import FallbackCase, TaggedCase
from core.results import Fallback, Tagged
from core.union import TaggedUnion
from payloads.decoders import any_value, schema_decoder
from payloads.registry import RESOURCE_UNION, build_cases
from payloads.schemas import Complex


MISSING_FIELD_B = {
    "resourceType": "Complex",
    "resource": {
        "a": 2000
    }
}


def test_registry_layout():
    registry = RESOURCE_UNION.registry

    assert registry.tags == ("Number", "String", "Complex")
    assert registry.fallback.name == "Unknown"
    assert RESOURCE_UNION.tag_field == "resourceType"
    assert RESOURCE_UNION.content_field == "resource"


def test_missing_field_is_an_error():
    """Complex without `b` is rejected instead of becoming Unknown."""
    with pytest.raises(ContentInvalidError) as exc_info:
        RESOURCE_UNION.decode(MISSING_FIELD_B)

    error = exc_info.value
    assert error.variant_index == RESOURCE_UNION.registry.index_of("Complex")
    assert error.missing_fields == ["b"]
    assert "invalid content for variant `Complex`" in str(error)


def test_plain_pydantic_union_masks_the_error():
    """
    The behaviour this package replaces: an ordinary union with an open
    dict member silently accepts the broken Complex as the catch-all.
    """

    class ComplexResource(BaseModel):
        resourceType: Literal["Complex"]
        resource: Complex

    naive = TypeAdapter(Union[ComplexResource, Dict[str, Any]])
    raw = {"unrelated": 1234, **MISSING_FIELD_B}

    assert isinstance(naive.validate_python(raw), dict)

    with pytest.raises(ContentInvalidError):
        RESOURCE_UNION.decode(raw)


def test_successful_deserialization():
    result = RESOURCE_UNION.decode({"resourceType": "String", "resource": "text"})
    assert result == Tagged(index=1, tag="String", name="String", payload="text")

    result = RESOURCE_UNION.decode({"unrelated": 1234, "resourceType": "Number", "resource": 2000})
    assert result.name == "Number" and result.payload == 2000

    result = RESOURCE_UNION.decode({"resourceType": "Complex", "resource": {"a": 2000, "b": 5}})
    assert result == Tagged(index=2, tag="Complex", name="Complex", payload=Complex(a=2000, b=5))

    unknown_but_matching_name = {"unrelated": 1234, "resourceType": "Unknown", "resource": {"c": 4000}}
    assert RESOURCE_UNION.decode(unknown_but_matching_name) == Fallback(
        name="Unknown", value=unknown_but_matching_name
    )

    new_type = {"unrelated": 1234, "resourceType": "NEWRANDOMTYPE", "resource": {"d": 5000}}
    assert RESOURCE_UNION.decode(new_type) == Fallback(name="Unknown", value=new_type)


def test_something_else_falls_back_to_entire_input():
    raw = {"resourceType": "SomethingElse", "resource": {"a": 2000}}

    result = RESOURCE_UNION.decode(raw)

    assert isinstance(result, Fallback)
    assert result.value == raw


def test_number_is_unsigned_64_bit():
    assert RESOURCE_UNION.decode({"resourceType": "Number", "resource": 2 ** 64 - 1}).payload == 2 ** 64 - 1

    for bad in (-1, 2 ** 64, "12", 1.5, True):
        with pytest.raises(ContentInvalidError):
            RESOURCE_UNION.decode({"resourceType": "Number", "resource": bad})


def test_renamed_tag():
    union = TaggedUnion(
        "ResourceStructWithRename",
        tag="resourceType",
        content="resource",
        cases=[TaggedCase(tag="string", decode=schema_decoder(str), name="String")],
        fallback=FallbackCase(name="Unknown", decode=any_value),
    )

    result = union.decode({"resourceType": "string", "resource": "text"})
    assert isinstance(result, Tagged)
    assert result.name == "String"
    assert result.tag == "string"

    # The variant name itself is not a tag
    assert isinstance(union.decode({"resourceType": "String", "resource": "text"}), Fallback)


def test_custom_payload_decoder():
    def always_returns_five(_value):
        return 5

    union = TaggedUnion(
        "ResourceStructWithDeserializeWith",
        tag="resourceType",
        content="resource",
        cases=build_cases({"Number": {"schema": int, "tag": None, "decoder": always_returns_five}}),
        fallback=FallbackCase(name="Unknown", decode=any_value),
    )

    assert union.decode({"resourceType": "Number", "resource": 1}).payload == 5


def test_json_text_input():
    text = '{"resourceType": "Complex", "resource": {"a": 2000, "b": 3000}}'
    assert RESOURCE_UNION.decode_json(text).payload == Complex(a=2000, b=3000)

    with pytest.raises(ContentInvalidError):
        RESOURCE_UNION.decode_json('{"resourceType": "Complex", "resource": {"a": 2000}}')


def test_union_as_pydantic_field():
    class Envelope(BaseModel):
        id: int
        item: RESOURCE_UNION.annotated()

    envelope = Envelope(id=1, item={"resourceType": "Number", "resource": 42})
    assert envelope.item == Tagged(index=0, tag="Number", name="Number", payload=42)

    fallback = Envelope(id=2, item={"resourceType": "Later", "resource": None})
    assert isinstance(fallback.item, Fallback)

    with pytest.raises(ValidationError) as exc_info:
        Envelope(id=3, item=MISSING_FIELD_B)

    detail = exc_info.value.errors()[0]
    assert detail["loc"] == ("item",)
    assert detail["type"] == "value_error"
    assert isinstance(detail["ctx"]["error"], ContentInvalidError)


def run_all_tests():
    """Run all test functions."""
    print("\n" + "="*60)
    print("Running Resource Union Tests")
    print("="*60 + "\n")

    test_registry_layout()
    test_missing_field_is_an_error()
    test_plain_pydantic_union_masks_the_error()
    test_successful_deserialization()
    test_something_else_falls_back_to_entire_input()
    test_number_is_unsigned_64_bit()
    test_renamed_tag()
    test_custom_payload_decoder()
    test_json_text_input()
    test_union_as_pydantic_field()

    print("\n✅ ALL TESTS PASSED!\n")


if __name__ == "__main__":
    run_all_tests()
