"""
Resource Schemas and Type Definitions

Defines the payload shapes of the resource union and the registry entry type.
Each shape is a pydantic type validated against the `resource` content field.
"""

from typing import Annotated, Callable, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field


# ═══════════════════════════════════════════════════════════════════════════════
# REGISTRY ENTRY TYPE
# ═══════════════════════════════════════════════════════════════════════════════

class ResourceEntry(TypedDict):
    """
    Registry entry for one resource variant.

    Attributes:
        schema: pydantic-validatable type for the content field
        tag: Tag string on the wire (None: same as the variant name)
        decoder: Custom payload decoder replacing the schema decoder
    """
    schema: object
    tag: Optional[str]
    decoder: Optional[Callable]


# ═══════════════════════════════════════════════════════════════════════════════
# SCALAR SHAPES
# ═══════════════════════════════════════════════════════════════════════════════

U64_MAX = 2 ** 64 - 1

# Unsigned 64-bit integer
U64 = Annotated[int, Field(ge=0, le=U64_MAX)]


# ═══════════════════════════════════════════════════════════════════════════════
# STRUCTURED SHAPES
# ═══════════════════════════════════════════════════════════════════════════════

class Complex(BaseModel):
    """
    Two-component resource.

    Both components are required; extra keys are ignored.
    """
    model_config = ConfigDict(frozen=True)

    a: U64 = Field(..., description="First component")
    b: U64 = Field(..., description="Second component")
