"""
Payload Layer

Schema-backed payload decoders and the ready-made resource union.
"""

from .decoders import any_value, schema_decoder
from .registry import RESOURCE_UNION

__all__ = ["any_value", "schema_decoder", "RESOURCE_UNION"]
