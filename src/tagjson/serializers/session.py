"""Reference-counted encode scope around a HookRegistry."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
import logging
from typing import Any

from tagjson.config import Config, get_global_config
from tagjson.hooks.binding import TypeHookBinding
from tagjson.hooks.registry import HookRegistry

from .encoder import Replacer, encode

logger = logging.getLogger(__name__)


class EncodeSession:
    """Activates registered hooks while at least one encode is in flight.

    The nesting count and the active snapshot live on the registry, so every
    session sharing it cooperates: the first entry (depth 0 -> 1) snapshots the
    registry and activates every binding of the snapshot; the last exit
    (depth -> 0) deactivates the same snapshot, on success and on error alike.
    Nested entries, e.g. a conversion function calling :meth:`stringify` again
    or another serializer on the same registry, only move the counter.

    Activation depends on ``config.strategy``:

    - ``"lookup"``: the snapshot is handed to the encoder as a class lookup and
      no class is modified.
    - ``"patch"``: each binding installs its hook method on its class and
      restores the previous slot when the session ends. Classes refusing the
      hook (built-in types) are logged and left without one for the session.
    """

    def __init__(self, registry: HookRegistry, config: Config | None = None) -> None:
        self.registry = registry
        self.config = config or get_global_config()
        self.last_install_failures: list[TypeHookBinding] = []

    @property
    def depth(self) -> int:
        """Number of nested encodes currently in flight through the registry."""
        return self.registry.depth

    @property
    def active_bindings(self) -> tuple[TypeHookBinding, ...]:
        return self.registry.active_bindings

    def _enter(self) -> None:
        failures = self.registry.acquire(install=self.config.strategy == "patch")
        if failures is None:
            return

        self.last_install_failures = failures
        if failures:
            logger.warning(
                f"{len(failures)} type hook(s) inactive for this session",
                extra={"tags": [binding.tag for binding in failures]},
            )
        logger.debug(
            "Type hooks installed",
            extra={"strategy": self.config.strategy, "bindings": len(self.active_bindings)},
        )

    def lookup(self, cls: type) -> Callable[[Any], Any] | None:
        """Conversion registered for exactly ``cls`` among the active bindings."""
        binding = self.registry.active_binding(cls)
        return binding.envelope if binding is not None else None

    def encoder_lookup(self) -> Callable[[type], Callable[[Any], Any] | None] | None:
        """Lookup to pass to the encoder, None when hooks are installed on classes."""
        return self.lookup if self.config.strategy == "lookup" else None

    @contextmanager
    def active(self) -> Iterator[EncodeSession]:
        """Scope in which the registered hooks are active.

        Example:
            >>> with session.active():
            ...     tree = resolve(value, lookup=session.encoder_lookup())
        """
        self._enter()
        try:
            yield self
        finally:
            self.registry.release()

    def stringify(
        self,
        value: Any,
        replacer: Replacer | None = None,
        indent: int | str | None = None,
    ) -> str:
        """Encode ``value`` to JSON text with registered types tagged.

        Args:
            value: Object graph to encode
            replacer: Optional ``(key, value) -> value`` transform
            indent: Indentation, defaults to ``config.indent``

        Raises:
            Whatever the encoder or a conversion function raised, after cleanup
        """
        with self.active():
            return encode(
                value,
                replacer,
                self.config.indent if indent is None else indent,
                lookup=self.encoder_lookup(),
                hook_name=self.registry.hook_name,
                **self.config.dumps_kwargs(),
            )
