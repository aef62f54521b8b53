"""Hook-aware JSON encoding.

The encoder honours one contract: if a value exposes a zero-argument
serialization method (``__json__`` by default, own or inherited), the method is
called and its return value is encoded instead. An optional ``lookup`` maps a
class to a conversion; walking the MRO, whichever of a registered conversion
or the method is found first is used, the conversion winning on the same
class. An optional ``replacer(key, value)`` transforms every value after hooks ran.

Text production is delegated to :func:`json.dumps`.
"""

from __future__ import annotations

from collections.abc import Callable
import json
from typing import Any

from tagjson.hooks.binding import DEFAULT_HOOK_NAME

Replacer = Callable[[Any, Any], Any]
# Maps one class (not its ancestors) to its conversion
Lookup = Callable[[type], Callable[[Any], Any] | None]

_SCALARS = (str, int, float, bool, type(None))


def _call_hook(value: Any, hook_name: str, lookup: Lookup | None) -> Any:
    if isinstance(value, type) or type(value) in _SCALARS:
        return value

    if lookup is not None and hook_name not in getattr(value, "__dict__", {}):
        # Nearest level wins; on the same class the conversion shadows the method
        for klass in type(value).__mro__:
            convert = lookup(klass)
            if convert is not None:
                return convert(value)
            if hook_name in vars(klass):
                break

    hook = getattr(value, hook_name, None)
    if callable(hook):
        return hook()

    return value


def resolve(
    value: Any,
    replacer: Replacer | None = None,
    *,
    lookup: Lookup | None = None,
    hook_name: str = DEFAULT_HOOK_NAME,
) -> Any:
    """Apply hooks and the replacer throughout ``value``.

    Returns a tree of dicts, lists and leaf values ready for a structural encoder.

    Raises:
        ValueError: If a container contains itself
    """
    in_progress: set[int] = set()

    def walk(key: Any, item: Any) -> Any:
        item = _call_hook(item, hook_name, lookup)
        if replacer is not None:
            item = replacer(key, item)

        if isinstance(item, dict):
            marker = id(item)
            if marker in in_progress:
                raise ValueError("Circular reference detected")
            in_progress.add(marker)
            try:
                return {k: walk(k, v) for k, v in item.items()}
            finally:
                in_progress.discard(marker)

        if isinstance(item, (list, tuple)):
            marker = id(item)
            if marker in in_progress:
                raise ValueError("Circular reference detected")
            in_progress.add(marker)
            try:
                return [walk(str(index), v) for index, v in enumerate(item)]
            finally:
                in_progress.discard(marker)

        return item

    return walk("", value)


def encode(
    value: Any,
    replacer: Replacer | None = None,
    indent: int | str | None = None,
    *,
    lookup: Lookup | None = None,
    hook_name: str = DEFAULT_HOOK_NAME,
    **dumps_kwargs: Any,
) -> str:
    """Encode ``value`` to JSON text.

    Args:
        value: Object graph to encode
        replacer: Optional ``(key, value) -> value`` transform; the root key is ""
        indent: Indentation passed to json.dumps
        lookup: Optional exact class -> conversion mapping, checked along the MRO
        hook_name: Name of the serialization method looked up on values
        **dumps_kwargs: Extra json.dumps options (sort_keys, ensure_ascii...)

    Raises:
        TypeError: If a leaf value is not JSON serializable
        ValueError: On circular references
    """
    tree = resolve(value, replacer, lookup=lookup, hook_name=hook_name)
    return json.dumps(tree, indent=indent, **dumps_kwargs)
