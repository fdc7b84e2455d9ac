"""
Decode Result Types

A decode produces exactly one of:
- Tagged:   a registered case matched and its content decoded
- Fallback: no case was selected, the whole input went to the fallback case

DecodeOutcome is the non-raising wrapper returned by decode_outcome().
"""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.errors import DecodeError


class Tagged(BaseModel):
    """
    Result of a matched tag.

    Attributes:
        index: Position of the case in the registry
        tag: Tag string that selected the case
        name: Variant name (differs from tag for renamed cases)
        payload: Value returned by the case's payload decoder
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["tagged"] = "tagged"
    index: int = Field(..., ge=0)
    tag: str
    name: str
    payload: Any


class Fallback(BaseModel):
    """
    Result of the fallback case.

    Attributes:
        name: Fallback variant name
        value: Value returned by the fallback decoder for the entire input
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["fallback"] = "fallback"
    name: str
    value: Any


DecodedUnion = Union[Tagged, Fallback]


class DecodeOutcome(BaseModel):
    """Either a decoded value or the error that prevented it, never both"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: Optional[DecodedUnion] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> DecodedUnion:
        """Return the value or raise the stored error"""
        if self.error is not None:
            raise self.error
        return self.value
