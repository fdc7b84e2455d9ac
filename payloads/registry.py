from core.registry import FallbackCase, TaggedCase
from core.union import TaggedUnion
from payloads.decoders import any_value, schema_decoder
from payloads.schemas import Complex, ResourceEntry, U64


RESOURCE_TAG_FIELD = "resourceType"
RESOURCE_CONTENT_FIELD = "resource"


RESOURCE_REGISTRY: dict[str, ResourceEntry] = {

    # ---------- SCALARS ----------

    "Number": {
        "schema": U64,
        "tag": None,
        "decoder": None,
    },

    "String": {
        "schema": str,
        "tag": None,
        "decoder": None,
    },

    # ---------- STRUCTURED ----------

    "Complex": {
        "schema": Complex,
        "tag": None,
        "decoder": None,
    },
}


def build_cases(entries: dict[str, ResourceEntry]) -> list[TaggedCase]:
    """Turn registry entries into tagged cases, in declaration order"""
    cases = []
    for name, entry in entries.items():
        decode = entry.get("decoder") or schema_decoder(entry["schema"])
        cases.append(TaggedCase(tag=entry.get("tag") or name, decode=decode, name=name))
    return cases


RESOURCE_UNION = TaggedUnion(
    "ResourceStruct",
    tag=RESOURCE_TAG_FIELD,
    content=RESOURCE_CONTENT_FIELD,
    cases=build_cases(RESOURCE_REGISTRY),
    fallback=FallbackCase(name="Unknown", decode=any_value),
)
