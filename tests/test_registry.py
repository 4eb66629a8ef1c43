"""Tests for ManifestRegistry."""

import gc
import unittest
import weakref
from types import MappingProxyType

from depinject.descriptors import DescriptorKind, value
from depinject.exceptions import (
    MissingTriggerError,
    RedeclarationError,
    RegistrationError,
    ResolutionError,
)
from depinject.registry import ManifestRegistry
from depinject.use_case import UseCase


class MockLogger:
    def log(self, message: str) -> str:
        return f"Logged: {message}"


class NeedsArgument:
    def __init__(self, url: str) -> None:
        self.url = url


class TestRegistrySingleton(unittest.TestCase):
    def setUp(self) -> None:
        ManifestRegistry.reset()

    def tearDown(self) -> None:
        ManifestRegistry.reset()

    def test_same_instance_returned(self) -> None:
        self.assertIs(ManifestRegistry(), ManifestRegistry())

    def test_reset_forgets_declarations(self) -> None:
        class Ping(UseCase):
            def execute(self) -> str:
                return "pong"

        ManifestRegistry().declare(Ping, {})
        ManifestRegistry.reset()
        self.assertFalse(ManifestRegistry().is_declared(Ping))

    def test_unreferenced_classes_are_released(self) -> None:
        class Temporary(UseCase):
            def execute(self) -> None: ...

        ManifestRegistry().declare(Temporary, {"logger": MockLogger})
        ref = weakref.ref(Temporary)
        del Temporary
        gc.collect()
        self.assertIsNone(ref())


class TestDeclare(unittest.TestCase):
    def setUp(self) -> None:
        ManifestRegistry.reset()
        self.registry = ManifestRegistry()

    def tearDown(self) -> None:
        ManifestRegistry.reset()

    def test_manifest_is_classified_and_read_only(self) -> None:
        class Log(UseCase):
            def execute(self) -> None: ...

        self.registry.declare(Log, {"logger": MockLogger, "level": "info"})
        manifest = self.registry.manifest_for(Log)
        self.assertIsInstance(manifest, MappingProxyType)
        self.assertEqual(list(manifest), ["logger", "level"])
        self.assertIs(manifest["logger"].kind, DescriptorKind.INSTANTIABLE)
        self.assertIs(manifest["level"].kind, DescriptorKind.VALUE)
        with self.assertRaises(TypeError):
            manifest["extra"] = value(1)  # type: ignore[index]

    def test_redeclaration_raises(self) -> None:
        class Once(UseCase):
            def execute(self) -> None: ...

        self.registry.declare(Once, {})
        with self.assertRaises(RedeclarationError) as ctx:
            self.registry.declare(Once, {"logger": MockLogger})
        self.assertIn("Once", str(ctx.exception))
        self.assertEqual(dict(self.registry.manifest_for(Once)), {})

    def test_non_use_case_rejected(self) -> None:
        class Plain:
            def execute(self) -> None: ...

        with self.assertRaises(RegistrationError):
            self.registry.declare(Plain, {})

    def test_invalid_names_rejected(self) -> None:
        class Named(UseCase):
            def execute(self) -> None: ...

        for name in ("1st", "class", "_private", "has space"):
            with self.subTest(name=name):
                with self.assertRaises(RegistrationError):
                    self.registry.declare(Named, {name: MockLogger})
        self.assertFalse(self.registry.is_declared(Named))

    def test_declaration_does_not_enforce_contract(self) -> None:
        class NoTrigger(UseCase):
            pass

        self.registry.declare(NoTrigger, {})
        self.assertFalse(self.registry.contract_for(NoTrigger).is_satisfied)

    def test_undeclared_lookup_raises(self) -> None:
        class Undeclared(UseCase):
            def execute(self) -> None: ...

        with self.assertRaises(RegistrationError) as ctx:
            self.registry.manifest_for(Undeclared)
        self.assertIn("@provide", str(ctx.exception))


class TestBuild(unittest.TestCase):
    def setUp(self) -> None:
        ManifestRegistry.reset()
        self.registry = ManifestRegistry()

    def tearDown(self) -> None:
        ManifestRegistry.reset()

    def test_build_resolves_and_binds(self) -> None:
        class Log(UseCase):
            def execute(self, message: str) -> str:
                return self._logger.log(message)

        self.registry.declare(Log, {"logger": MockLogger})
        self.assertEqual(self.registry.build(Log).execute("hi"), "Logged: hi")

    def test_build_undeclared_raises(self) -> None:
        class Undeclared(UseCase):
            def execute(self) -> None: ...

        with self.assertRaises(RegistrationError):
            self.registry.build(Undeclared)

    def test_contract_failure_propagates(self) -> None:
        class NoTrigger(UseCase):
            pass

        self.registry.declare(NoTrigger, {"logger": MockLogger})
        with self.assertRaises(MissingTriggerError):
            self.registry.build(NoTrigger)

    def test_resolution_failure_carries_chain(self) -> None:
        class Connect(UseCase):
            def execute(self) -> None: ...

        self.registry.declare(Connect, {"client": NeedsArgument})
        with self.assertRaises(ResolutionError) as ctx:
            self.registry.build(Connect)
        self.assertEqual(ctx.exception.chain, ["Connect", "client"])
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_nested_resolution_failure_keeps_outer_chain(self) -> None:
        class Inner(UseCase):
            def execute(self) -> None: ...

        class Outer(UseCase):
            def execute(self) -> None: ...

        self.registry.declare(Inner, {"client": NeedsArgument})
        self.registry.declare(Outer, {"inner": Inner})
        with self.assertRaises(ResolutionError) as ctx:
            self.registry.build(Outer)
        self.assertEqual(ctx.exception.chain, ["Outer", "inner", "Inner", "client"])

    def test_nested_contract_error_propagates_unchanged(self) -> None:
        class BrokenInner(UseCase):
            def helper(self) -> None: ...

        class Outer(UseCase):
            def execute(self) -> None: ...

        self.registry.declare(BrokenInner, {})
        self.registry.declare(Outer, {"inner": BrokenInner})
        with self.assertRaises(MissingTriggerError) as ctx:
            self.registry.build(Outer)
        self.assertEqual(ctx.exception.class_name, "BrokenInner")


if __name__ == "__main__":
    unittest.main()
