"""
serializer.py
Provides utility functions for serializing and deserializing match events and round records to/from JSON.
Used by recorders and the tournament script to save payloads as text.
"""

import json
from types import MappingProxyType
from typing import Any


def _default(o: Any):
    if isinstance(o, MappingProxyType):
        return dict(o)
    if hasattr(o, '__dataclass_fields__'):
        return {name: getattr(o, name) for name in o.__dataclass_fields__}
    return getattr(o, '__dict__', str(o))


def dumps(obj: Any) -> str:
    """
    Serialize a Python object (including dataclasses) to a JSON string.
    Args:
        obj: Object to serialize.
    Returns:
        str: JSON string.
    """
    return json.dumps(obj, default=_default)


def loads(s: str):
    """
    Deserialize a JSON string to a Python object (dict/list).
    Args:
        s (str): JSON string.
    Returns:
        object: Deserialized Python object.
    """
    return json.loads(s)
