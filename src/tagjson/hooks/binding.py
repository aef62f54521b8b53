"""Per-type hook binding: owns a conversion function and its install/uninstall state."""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any

from .descriptor import HookDescriptor, capture, restore

logger = logging.getLogger(__name__)

DEFAULT_HOOK_NAME = "__json__"

ConversionFunction = Callable[[Any], Any]


class TypeHookBinding:
    """Binds a class to the tag and conversion used for its envelope.

    While installed, the class carries a synthesized hook method returning
    ``{"type": tag, "data": serialize(instance)}``. Uninstalling writes back
    exactly what the class held before.

    A binding without ``serialize`` is a placeholder: install and uninstall do nothing.
    """

    def __init__(
        self,
        object_type: type,
        tag: str,
        serialize: ConversionFunction | None,
        hook_name: str = DEFAULT_HOOK_NAME,
    ) -> None:
        self.object_type = object_type
        self.tag = tag
        self.serialize = serialize
        self.hook_name = hook_name
        self._captured: HookDescriptor | None = None
        self._hook = self._build_hook() if serialize else None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.object_type.__qualname__!r}, "
            f"tag={self.tag!r}, installed={self.installed})"
        )

    @property
    def installed(self) -> bool:
        return self._captured is not None

    @property
    def captured(self) -> HookDescriptor | None:
        """Descriptor captured by the current install, if any."""
        return self._captured

    def envelope(self, instance: Any) -> dict[str, Any]:
        """Wrap the converted instance in the tagged envelope."""
        if self.serialize is None:
            raise ValueError(f"No conversion function registered for {self.object_type!r}")
        return {"type": self.tag, "data": self.serialize(instance)}

    def _build_hook(self) -> Callable[[Any], dict[str, Any]]:
        binding = self

        # Bound to the instance being encoded when called through the class
        def hook(instance: Any) -> dict[str, Any]:
            return binding.envelope(instance)

        hook.__name__ = self.hook_name
        hook.__qualname__ = f"{self.object_type.__qualname__}.{self.hook_name}"
        return hook

    def install(self) -> bool:
        """Install the synthesized hook on the bound class.

        Returns:
            True if the hook is active, False for placeholders or refused installs
        """
        if self.serialize is None:
            return False
        if self._captured is not None:
            return True

        descriptor = capture(self.object_type, self.hook_name)
        try:
            setattr(self.object_type, self.hook_name, self._hook)
        except (TypeError, AttributeError) as e:
            logger.error(
                f"Cannot install {self.hook_name} hook on {self.object_type.__qualname__}: {e}",
                extra={"tag": self.tag, "hook_name": self.hook_name},
            )
            return False

        self._captured = descriptor
        logger.debug(
            f"Installed {self.hook_name} hook on {self.object_type.__qualname__}",
            extra={
                "tag": self.tag,
                "had_own_hook": descriptor.present,
                "inherited_from": getattr(descriptor.inherited_from, "__qualname__", None),
            },
        )
        return True

    def uninstall(self) -> None:
        """Restore the hook slot captured by the last successful install."""
        if self.serialize is None or self._captured is None:
            return

        descriptor, self._captured = self._captured, None
        try:
            restore(descriptor)
        except (TypeError, AttributeError) as e:
            logger.debug(
                f"Ignoring failed restore of {self.hook_name} on {self.object_type.__qualname__}: {e}",
                extra={"tag": self.tag},
            )
