"""Registry of type hook bindings."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
import logging
import threading

from .binding import DEFAULT_HOOK_NAME, ConversionFunction, TypeHookBinding

logger = logging.getLogger(__name__)


@dataclass
class TypeReplacer:
    """Registration record for one serializable kind.

    A falsy ``serialize`` removes any existing registration for the constructor.
    """

    object_type: str
    object_constructor: type
    serialize: ConversionFunction | None = None


class HookRegistry:
    """Maps classes to their TypeHookBinding.

    Registration only updates the mapping, it never touches the classes.
    Changes made while an encode is in flight apply to the next session.

    The registry also owns the activation state: every serializer encoding
    through it shares one nesting count and one snapshot, so hooks stay active
    until the last encode using them has returned.

    Example:
        >>> registry = HookRegistry()
        >>> registry.register(Point, "Point", lambda p: [p.x, p.y])
        >>> registry.register(Point, "Point", None)  # removes it again
    """

    def __init__(self, hook_name: str = DEFAULT_HOOK_NAME) -> None:
        self.hook_name = hook_name
        self._bindings: dict[type, TypeHookBinding] = {}

        # Activation state shared by every session encoding through this registry
        self._depth = 0
        self._active: dict[type, TypeHookBinding] = {}
        self._patched = False
        self._lock = threading.Lock()

    def register(
        self, object_type: type, tag: str, serialize: ConversionFunction | None
    ) -> TypeHookBinding | None:
        """Create or replace the binding for ``object_type``, or remove it if ``serialize`` is falsy.

        Returns:
            The new binding, or None when the type was deregistered
        """
        if not isinstance(object_type, type):
            raise TypeError(f"object_type must be a class, got {object_type!r}")

        if not serialize:
            self.unregister(object_type)
            return None

        binding = TypeHookBinding(object_type, tag, serialize, hook_name=self.hook_name)
        replaced = object_type in self._bindings
        self._bindings[object_type] = binding
        logger.debug(
            f"{'Replaced' if replaced else 'Registered'} type hook for {object_type.__qualname__}",
            extra={"tag": tag},
        )
        return binding

    def add(self, replacer: TypeReplacer) -> TypeHookBinding | None:
        """Register from a TypeReplacer record."""
        return self.register(replacer.object_constructor, replacer.object_type, replacer.serialize)

    def unregister(self, object_type: type) -> bool:
        """Remove the binding for ``object_type``. Returns True if one existed."""
        binding = self._bindings.pop(object_type, None)
        if binding is None:
            return False
        logger.debug(
            f"Removed type hook for {object_type.__qualname__}", extra={"tag": binding.tag}
        )
        return True

    def get(self, object_type: type) -> TypeHookBinding | None:
        """Binding registered for exactly ``object_type``."""
        return self._bindings.get(object_type)

    def lookup(self, cls: type) -> TypeHookBinding | None:
        """Nearest binding for ``cls`` along its MRO."""
        return find_binding(self._bindings, cls)

    def snapshot(self) -> tuple[TypeHookBinding, ...]:
        """Current bindings in registration order."""
        return tuple(self._bindings.values())

    def clear(self) -> None:
        self._bindings.clear()

    @property
    def depth(self) -> int:
        """Number of encodes currently in flight through this registry."""
        return self._depth

    @property
    def active_bindings(self) -> tuple[TypeHookBinding, ...]:
        """Bindings snapshotted by the outermost encode in flight."""
        return tuple(self._active.values())

    def active_binding(self, cls: type) -> TypeHookBinding | None:
        """Active binding registered for exactly ``cls``."""
        return self._active.get(cls)

    def acquire(self, install: bool = False) -> list[TypeHookBinding] | None:
        """Enter an encode.

        The first entry snapshots the bindings. With ``install``, the snapshot's
        hooks are installed on their classes unless an earlier entry already did.
        If entering fails, the count and any installed hooks are rolled back.

        Returns:
            Bindings whose install was refused, or None if this call installed nothing
        """
        with self._lock:
            self._depth += 1
            try:
                if self._depth == 1:
                    self._active = {binding.object_type: binding for binding in self.snapshot()}
                if install and not self._patched:
                    return self._install_active()
                return None
            except BaseException:
                self._depth -= 1
                if self._depth == 0:
                    self._uninstall_active()
                    self._active = {}
                raise

    def release(self) -> None:
        """Leave an encode; the last exit restores every installed hook."""
        with self._lock:
            if self._depth == 0:
                raise RuntimeError("release() called without a matching acquire()")
            self._depth -= 1
            if self._depth == 0:
                self._uninstall_active()
                self._active = {}

    def _install_active(self) -> list[TypeHookBinding]:
        self._patched = True
        failures = []
        for binding in self._active.values():
            try:
                installed = binding.install()
            except Exception:
                logger.exception(f"Unexpected error installing hook for {binding!r}")
                installed = False
            if not installed:
                failures.append(binding)
        return failures

    def _uninstall_active(self) -> None:
        if not self._patched:
            return
        self._patched = False
        for binding in self._active.values():
            try:
                binding.uninstall()
            except Exception:
                logger.debug(f"Ignoring error uninstalling hook for {binding!r}", exc_info=True)

    def __contains__(self, object_type: object) -> bool:
        return object_type in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __iter__(self) -> Iterator[TypeHookBinding]:
        return iter(self.snapshot())


def find_binding(bindings: dict[type, TypeHookBinding], cls: type) -> TypeHookBinding | None:
    """Return the binding of the first class in ``cls.__mro__`` present in ``bindings``."""
    for klass in cls.__mro__:
        binding = bindings.get(klass)
        if binding is not None:
            return binding
    return None


def create_default_registry(hook_name: str = DEFAULT_HOOK_NAME) -> HookRegistry:
    """Create a registry with the built-in Buffer, Date, Error and TypeError hooks."""
    from tagjson.serializers.type_hooks import register_type_hooks

    registry = HookRegistry(hook_name=hook_name)
    register_type_hooks(registry)
    return registry
