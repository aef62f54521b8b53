"""Serialization implementations for tagjson.

This module provides the serializer abstraction, the hook-aware encoder, the
reference-counted encode session, and the built-in type conversions.

Example:
    >>> from tagjson.serializers import JsonSerializer
    >>>
    >>> serializer = JsonSerializer()
    >>> serializer.register(Money, "Money", lambda m: [str(m.amount), m.currency])
    >>> serializer.stringify({"price": Money(Decimal("9.99"), "EUR")})
    '{"price": {"type": "Money", "data": ["9.99", "EUR"]}}'
"""

from .base_serializer import BaseSerializer
from .encoder import encode, resolve
from .json_serializer import JsonSerializer
from .msgpack_serializer import MsgpackSerializer
from .session import EncodeSession
from .type_hooks import (
    TYPE_HOOKS,
    register_type_hooks,
    serialize_buffer,
    serialize_date,
    serialize_error,
)

__all__ = [
    # Core
    "BaseSerializer",
    "EncodeSession",
    "JsonSerializer",
    "MsgpackSerializer",
    "encode",
    "resolve",
    # Built-in Type Hooks
    "TYPE_HOOKS",
    "register_type_hooks",
    "serialize_buffer",
    "serialize_date",
    "serialize_error",
]
