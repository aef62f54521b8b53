from typing import Any

from tagjson.config import Config, get_global_config
from tagjson.hooks.binding import ConversionFunction, TypeHookBinding
from tagjson.hooks.registry import HookRegistry, TypeReplacer

from .base_serializer import BaseSerializer
from .encoder import Replacer
from .session import EncodeSession


class JsonSerializer(BaseSerializer):
    """JSON serializer tagging registered types as ``{"type", "data"}`` envelopes.

    Features:
    - Per-type conversion functions kept in a HookRegistry
    - Hooks active only while an encode is in flight, nested calls included
    - Previous hook slots restored exactly after each session ("patch" strategy)
    - Optional per-key replacer and indentation like json.dumps

    Example:
        >>> serializer = JsonSerializer()
        >>> serializer.register(Point, "Point", lambda p: {"x": p.x, "y": p.y})
        >>> serializer.stringify({"at": Point(1, 2)})
        '{"at": {"type": "Point", "data": {"x": 1, "y": 2}}}'
    """

    def __init__(self, registry: HookRegistry | None = None, config: Config | None = None) -> None:
        """Initialize serializer with its registry and encode session."""
        self.config = config or get_global_config()
        self.registry = registry if registry is not None else HookRegistry(self.config.hook_name)
        self.session = EncodeSession(self.registry, self.config)

    def register(
        self, object_type: type, tag: str, serialize: ConversionFunction | None
    ) -> TypeHookBinding | None:
        """Register (or with a falsy ``serialize``, remove) a conversion for ``object_type``."""
        return self.registry.register(object_type, tag, serialize)

    def add(self, replacer: TypeReplacer) -> TypeHookBinding | None:
        return self.registry.add(replacer)

    def stringify(
        self,
        value: Any,
        replacer: Replacer | None = None,
        indent: int | str | None = None,
    ) -> str:
        """Encode ``value`` to JSON text."""
        return self.session.stringify(value, replacer, indent)

    def serialize(self, obj: Any) -> bytes:
        """Encode ``obj`` to UTF-8 JSON bytes."""
        return self.stringify(obj).encode("utf-8")
