"""Built-in conversions for common non-JSON types.

Tags follow the names decoders on the other side expect:

- ``Buffer``: bytes, bytearray, memoryview as base64 text
- ``Date``: datetime and date as ISO-8601 text
- ``Error``: exceptions as ``{"name", "message", "stack"}``
- ``TypeError``: same shape as Error, own tag

Built-in classes refuse new attributes, so these need the "lookup" strategy;
under "patch" they are reported and left untagged.
"""

from __future__ import annotations

import base64
from datetime import date, datetime
import traceback
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tagjson.hooks.registry import HookRegistry


def serialize_buffer(obj: bytes | bytearray | memoryview) -> str:
    return base64.b64encode(bytes(obj)).decode("ascii")


def serialize_date(obj: date) -> str:
    return obj.isoformat()


def serialize_error(obj: BaseException) -> dict[str, Any]:
    """Name, message and formatted traceback (None if never raised)."""
    stack = None
    if obj.__traceback__ is not None:
        stack = "".join(traceback.format_exception(type(obj), obj, obj.__traceback__))
    return {
        "name": type(obj).__name__,
        "message": str(obj),
        "stack": stack,
    }


# (class, tag, conversion) in registration order
TYPE_HOOKS: tuple[tuple[type, str, Any], ...] = (
    (bytes, "Buffer", serialize_buffer),
    (bytearray, "Buffer", serialize_buffer),
    (memoryview, "Buffer", serialize_buffer),
    (datetime, "Date", serialize_date),
    (date, "Date", serialize_date),
    (Exception, "Error", serialize_error),
    (TypeError, "TypeError", serialize_error),
)


def register_type_hooks(registry: HookRegistry) -> None:
    """Register the built-in conversions with a registry."""
    for object_type, tag, serialize in TYPE_HOOKS:
        registry.register(object_type, tag, serialize)
