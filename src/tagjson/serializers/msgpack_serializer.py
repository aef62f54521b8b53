from typing import Any, cast

from msgpack import packb

from tagjson.config import Config, get_global_config
from tagjson.hooks.binding import ConversionFunction, TypeHookBinding
from tagjson.hooks.registry import HookRegistry

from .base_serializer import BaseSerializer
from .encoder import resolve
from .session import EncodeSession


class MsgpackSerializer(BaseSerializer):
    """Msgpack variant of the tagged encoding.

    Registered types become the same ``{"type", "data"}`` envelopes as in JSON
    output; the resulting tree is packed with msgpack. Unregistered bytes are
    packed natively (use_bin_type=True).
    """

    def __init__(self, registry: HookRegistry | None = None, config: Config | None = None) -> None:
        self.config = config or get_global_config()
        self.registry = registry if registry is not None else HookRegistry(self.config.hook_name)
        self.session = EncodeSession(self.registry, self.config)

    def register(
        self, object_type: type, tag: str, serialize: ConversionFunction | None
    ) -> TypeHookBinding | None:
        return self.registry.register(object_type, tag, serialize)

    def serialize(self, obj: Any) -> bytes:
        """Serialize ``obj`` to msgpack bytes.

        Raises:
            TypeError: If a value has no msgpack representation
            ValueError: On circular references
        """
        with self.session.active():
            tree = resolve(
                obj,
                lookup=self.session.encoder_lookup(),
                hook_name=self.registry.hook_name,
            )
            return cast(bytes, packb(tree, use_bin_type=True))
