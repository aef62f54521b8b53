"""Type hook registry.

Bindings pair a class with a tag and a conversion function. During an encode
session they are activated so the encoder produces ``{"type": tag, "data": ...}``
envelopes for instances of the class, and deactivated afterwards.
"""

from .binding import DEFAULT_HOOK_NAME, ConversionFunction, TypeHookBinding
from .descriptor import MISSING, HookDescriptor, capture, find_owner, restore
from .registry import HookRegistry, TypeReplacer, create_default_registry, find_binding

__all__ = [
    "DEFAULT_HOOK_NAME",
    "MISSING",
    "ConversionFunction",
    "HookDescriptor",
    "HookRegistry",
    "TypeHookBinding",
    "TypeReplacer",
    "capture",
    "create_default_registry",
    "find_binding",
    "find_owner",
    "restore",
]
