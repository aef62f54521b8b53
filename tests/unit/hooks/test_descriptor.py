"""Unit tests for hook slot capture and restore.

Testing Strategy:
- pytest with class-grouped tests
- AAA pattern (Arrange, Act, Assert)
- Classes are created per test so mutations never leak between tests
"""

from pytest import fixture, mark, raises

from tagjson.hooks.descriptor import MISSING, HookDescriptor, capture, find_owner, restore

HOOK = "__json__"


@fixture
def hierarchy() -> tuple[type, type, type]:
    """Provide (Base, Child, Plain): Base owns a hook, Child inherits it, Plain has none."""

    class Base:
        def __json__(self):
            return "base"

    class Child(Base):
        pass

    class Plain:
        pass

    return Base, Child, Plain


@mark.unit
class TestFindOwner:
    """Test MRO lookup of the owning class."""

    def test_own_definition(self, hierarchy) -> None:
        Base, _, _ = hierarchy
        assert find_owner(Base, HOOK) == (Base, vars(Base)[HOOK])

    def test_inherited_definition(self, hierarchy) -> None:
        Base, Child, _ = hierarchy
        assert find_owner(Child, HOOK) == (Base, vars(Base)[HOOK])

    def test_absent_everywhere(self, hierarchy) -> None:
        _, _, Plain = hierarchy
        assert find_owner(Plain, HOOK) is None

    def test_follows_mro_order(self) -> None:
        """Test that the first base in MRO order wins for multiple inheritance."""

        class Left:
            def __json__(self):
                return "left"

        class Right:
            def __json__(self):
                return "right"

        class Both(Left, Right):
            pass

        owner, _ = find_owner(Both, HOOK)
        assert owner is Left


@mark.unit
class TestCapture:
    """Test capture()."""

    def test_capture_own_hook(self, hierarchy) -> None:
        Base, _, _ = hierarchy

        descriptor = capture(Base, HOOK)

        assert descriptor.target is Base
        assert descriptor.present is True
        assert descriptor.value is vars(Base)[HOOK]
        assert descriptor.inherited_from is None
        assert descriptor.absent is False

    def test_capture_inherited_hook_is_anchored_at_target(self, hierarchy) -> None:
        Base, Child, _ = hierarchy

        descriptor = capture(Child, HOOK)

        assert descriptor.target is Child
        assert descriptor.present is False
        assert descriptor.value is MISSING
        assert descriptor.inherited_from is Base
        assert descriptor.inherited_value is vars(Base)[HOOK]
        assert descriptor.absent is False

    def test_capture_absent_hook(self, hierarchy) -> None:
        _, _, Plain = hierarchy

        descriptor = capture(Plain, HOOK)

        assert descriptor.target is Plain
        assert descriptor.present is False
        assert descriptor.inherited_from is None
        assert descriptor.absent is True

    def test_capture_keeps_raw_staticmethod(self) -> None:
        class WithStatic:
            @staticmethod
            def __json__():
                return "static"

        descriptor = capture(WithStatic, HOOK)

        assert isinstance(descriptor.value, staticmethod)


@mark.unit
class TestRestore:
    """Test restore()."""

    def test_restore_absent_removes_installed_hook(self, hierarchy) -> None:
        # Arrange
        _, _, Plain = hierarchy
        descriptor = capture(Plain, HOOK)
        setattr(Plain, HOOK, lambda self: "patched")

        # Act
        restore(descriptor)

        # Assert
        assert HOOK not in vars(Plain)
        assert not hasattr(Plain, HOOK)

    def test_restore_inherited_reexposes_ancestor(self, hierarchy) -> None:
        # Arrange
        Base, Child, _ = hierarchy
        original = vars(Base)[HOOK]
        descriptor = capture(Child, HOOK)
        setattr(Child, HOOK, lambda self: "patched")

        # Act
        restore(descriptor)

        # Assert
        assert HOOK not in vars(Child)
        assert vars(Base)[HOOK] is original
        assert Child().__json__() == "base"

    def test_restore_own_hook_preserves_identity(self, hierarchy) -> None:
        # Arrange
        Base, _, _ = hierarchy
        original = vars(Base)[HOOK]
        descriptor = capture(Base, HOOK)
        setattr(Base, HOOK, lambda self: "patched")

        # Act
        restore(descriptor)

        # Assert
        assert vars(Base)[HOOK] is original
        assert Base().__json__() == "base"

    def test_restore_preserves_descriptor_kind(self) -> None:
        class WithStatic:
            @staticmethod
            def __json__():
                return "static"

        original = vars(WithStatic)[HOOK]
        descriptor = capture(WithStatic, HOOK)
        setattr(WithStatic, HOOK, lambda self: "patched")

        restore(descriptor)

        assert vars(WithStatic)[HOOK] is original
        assert WithStatic().__json__() == "static"

    def test_restore_is_idempotent(self, hierarchy) -> None:
        Base, _, Plain = hierarchy
        own = capture(Base, HOOK)
        absent = capture(Plain, HOOK)
        setattr(Base, HOOK, lambda self: "patched")
        setattr(Plain, HOOK, lambda self: "patched")

        restore(own)
        restore(own)
        restore(absent)
        restore(absent)

        assert Base().__json__() == "base"
        assert HOOK not in vars(Plain)

    def test_restore_absent_on_builtin_is_noop(self) -> None:
        descriptor = capture(int, HOOK)

        restore(descriptor)

        assert HOOK not in vars(int)

    def test_restore_refused_by_builtin_raises(self) -> None:
        descriptor = HookDescriptor(target=int, name=HOOK, present=True, value=lambda self: 1)

        with raises(TypeError):
            restore(descriptor)
