"""
Test suite for variant registry construction
"""

import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from core.errors import DuplicateTagError, InvalidCaseError, MultipleFallbacksError
from core.registry import FallbackCase, TaggedCase, VariantRegistry, build_registry
from payloads.decoders import any_value, schema_decoder


def _number_cases():
    return [
        ("Number", schema_decoder(int)),
        ("String", schema_decoder(str)),
        ("Complex", schema_decoder(dict)),
    ]


def test_build_with_tuples_and_fallback():
    """Tuples become tagged cases in declaration order."""
    registry = build_registry(_number_cases(), fallback=any_value)

    assert registry.tags == ("Number", "String", "Complex")
    assert len(registry) == 3
    assert registry.has_fallback
    assert registry.fallback.name == "Fallback"


def test_lookup_helpers():
    registry = build_registry(_number_cases())

    assert registry.index_of("Complex") == 2
    assert registry.index_of("complex") is None  # exact match only
    assert registry.case_for("String").tag == "String"
    assert registry.find("Missing") is None

    index, case = registry.find("Number")
    assert index == 0 and case.name == "Number"


def test_case_name_defaults_to_tag():
    case = TaggedCase(tag="Number", decode=int)
    assert case.name == "Number"

    renamed = TaggedCase(tag="string", decode=str, name="String")
    assert renamed.tag == "string"
    assert renamed.name == "String"


def test_duplicate_tag_rejected():
    """Two cases sharing a tag fail at construction time."""
    with pytest.raises(DuplicateTagError) as exc_info:
        build_registry([("Number", int), ("String", str), ("Number", float)])

    assert exc_info.value.tag == "Number"
    assert exc_info.value.to_dict()["category"] == "DUPLICATE_TAG"


def test_duplicate_tag_rejected_on_direct_construction():
    with pytest.raises(DuplicateTagError):
        VariantRegistry(cases=(TaggedCase(tag="A", decode=int), TaggedCase(tag="A", decode=str)))


def test_multiple_fallbacks_rejected():
    with pytest.raises(MultipleFallbacksError) as exc_info:
        build_registry([
            ("Number", int),
            FallbackCase(name="Unknown", decode=any_value),
            FallbackCase(name="Other", decode=any_value),
        ])
    assert exc_info.value.count == 2

    # One in the case list plus one through the keyword
    with pytest.raises(MultipleFallbacksError):
        build_registry([FallbackCase(decode=any_value)], fallback=any_value)


def test_fallback_case_in_case_list():
    registry = build_registry([("Number", int), FallbackCase(name="Unknown", decode=any_value)])

    assert registry.tags == ("Number",)
    assert registry.fallback.name == "Unknown"


def test_degenerate_registries_are_legal():
    empty = build_registry()
    assert empty.tags == ()
    assert not empty.has_fallback

    only_fallback = build_registry(fallback=any_value)
    assert only_fallback.tags == ()
    assert only_fallback.has_fallback


def test_invalid_case_entries():
    with pytest.raises(InvalidCaseError):
        build_registry([("", int)])

    with pytest.raises(InvalidCaseError):
        build_registry([("Number", 5)])

    with pytest.raises(InvalidCaseError):
        build_registry(["Number"])

    with pytest.raises(InvalidCaseError):
        build_registry(fallback="not callable")


def test_registry_is_immutable():
    registry = build_registry(_number_cases(), fallback=any_value)

    with pytest.raises(ValidationError):
        registry.cases = ()

    with pytest.raises(ValidationError):
        registry.fallback = None

    assert isinstance(registry.cases, tuple)


def test_explicit_empty_name_rejected():
    """Only a missing name defaults to the tag; an empty one is invalid."""
    with pytest.raises(ValidationError):
        TaggedCase(tag="Number", decode=int, name="")

    with pytest.raises(InvalidCaseError):
        build_registry([("Number", int, "")])

    assert TaggedCase(tag="Number", decode=int, name=None).name == "Number"
    assert build_registry([("Number", int, None)]).cases[0].name == "Number"


def run_all_tests():
    """Run all test functions."""
    print("\n" + "="*60)
    print("Running Variant Registry Tests")
    print("="*60 + "\n")

    test_build_with_tuples_and_fallback()
    test_lookup_helpers()
    test_case_name_defaults_to_tag()
    test_duplicate_tag_rejected()
    test_duplicate_tag_rejected_on_direct_construction()
    test_multiple_fallbacks_rejected()
    test_fallback_case_in_case_list()
    test_degenerate_registries_are_legal()
    test_invalid_case_entries()
    test_registry_is_immutable()
    test_explicit_empty_name_rejected()

    print("\n✅ ALL TESTS PASSED!\n")


if __name__ == "__main__":
    run_all_tests()
