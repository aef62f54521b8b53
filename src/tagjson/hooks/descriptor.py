"""Capture and restore of a named hook slot on a class.

A hook slot is looked up the way attribute access resolves it: on the class
itself first, then on its ancestors in method resolution order. Only the class
itself is ever written, so a capture records what its own ``__dict__`` held
and, when nothing was there, where the inherited implementation lives.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Marks a slot with no own entry on the captured class
MISSING: Any = object()


@dataclass(frozen=True)
class HookDescriptor:
    """Restorable snapshot of one hook slot.

    ``value`` is the raw class ``__dict__`` entry (function, staticmethod,
    classmethod, property...), so restoring it preserves both identity and kind.
    """

    target: type
    name: str
    present: bool
    value: Any = MISSING
    inherited_from: type | None = None
    inherited_value: Any = MISSING

    @property
    def absent(self) -> bool:
        """True if the slot resolved to nothing anywhere in the MRO."""
        return not self.present and self.inherited_from is None


def find_owner(cls: type, name: str) -> tuple[type, Any] | None:
    """Return the first class in ``cls.__mro__`` owning ``name`` and its raw entry."""
    for klass in cls.__mro__:
        namespace = vars(klass)
        if name in namespace:
            return klass, namespace[name]
    return None


def capture(cls: type, name: str) -> HookDescriptor:
    """Snapshot the current state of hook slot ``name`` on ``cls``."""
    owner = find_owner(cls, name)
    if owner is None:
        return HookDescriptor(target=cls, name=name, present=False)

    klass, value = owner
    if klass is cls:
        return HookDescriptor(target=cls, name=name, present=True, value=value)

    # Inherited: anchored at cls so restore reinstates absence at this level
    return HookDescriptor(
        target=cls,
        name=name,
        present=False,
        inherited_from=klass,
        inherited_value=value,
    )


def restore(descriptor: HookDescriptor) -> None:
    """Write the captured state back onto ``descriptor.target``.

    Safe to call twice with the same descriptor.

    Raises:
        TypeError, AttributeError: If the class refuses the redefinition
    """
    target, name = descriptor.target, descriptor.name
    if descriptor.present:
        setattr(target, name, descriptor.value)
    elif name in vars(target):
        delattr(target, name)
