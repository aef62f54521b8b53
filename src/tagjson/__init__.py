"""Tagged JSON encoding for types the json module does not understand."""

from .config import Config, get_global_config, set_global_config
from .hooks import HookRegistry, TypeHookBinding, TypeReplacer, create_default_registry
from .serializers import EncodeSession, JsonSerializer, MsgpackSerializer

__all__ = [
    "Config",
    "EncodeSession",
    "HookRegistry",
    "JsonSerializer",
    "MsgpackSerializer",
    "TypeHookBinding",
    "TypeReplacer",
    "create_default_registry",
    "get_global_config",
    "set_global_config",
]
