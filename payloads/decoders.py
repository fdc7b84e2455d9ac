"""
Payload Decoders

Adapters turning pydantic schemas into the plain callables the registry
expects. A payload decoder takes the content value and returns the decoded
payload, or raises (ValidationError / PayloadError) to reject it.
"""

import copy
from typing import Any, Callable, Optional

from pydantic import JsonValue, TypeAdapter

from app.config import STRICT_PAYLOAD_DECODING


def schema_decoder(schema: Any, *, strict: Optional[bool] = None) -> Callable[[Any], Any]:
    """
    Build a payload decoder from any type pydantic can validate.

    Args:
        schema: BaseModel subclass, builtin type, or Annotated type
        strict: Override STRICT_PAYLOAD_DECODING for this decoder

    Returns:
        Callable raising pydantic.ValidationError on invalid content

    Example:
        >>> decode_number = schema_decoder(int)
        >>> decode_number(2000)
        2000
    """
    adapter = TypeAdapter(schema)
    use_strict = STRICT_PAYLOAD_DECODING if strict is None else strict

    def decode(value: Any) -> Any:
        return adapter.validate_python(value, strict=use_strict)

    decode.__name__ = f"decode_{getattr(schema, '__name__', 'payload')}"
    decode.schema = schema
    return decode


_json_value = TypeAdapter(JsonValue)


def any_value(value: Any) -> Any:
    """
    Universally accepting fallback decoder.

    Accepts any JSON-compatible tree and returns an independent copy of it,
    unaltered. Non-JSON objects are rejected with a ValidationError.
    """
    _json_value.validate_python(value)
    return copy.deepcopy(value)
