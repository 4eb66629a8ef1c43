"""Process-wide registry of dependency manifests and the instance factory."""

import inspect
import keyword
import logging
import threading
import weakref
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, TypeVar

from depinject.contract import TriggerContract
from depinject.descriptors import Descriptor, DescriptorKind, as_descriptor
from depinject.exceptions import (
    DepInjectError,
    RedeclarationError,
    RegistrationError,
    ResolutionError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Manifest = Mapping[str, Descriptor]

_RegistryEntry = Tuple[Manifest, TriggerContract]


def _check_name(owner: type, name: Any) -> None:
    if (
        not isinstance(name, str)
        or not name.isidentifier()
        or keyword.iskeyword(name)
        or name.startswith("_")
    ):
        raise RegistrationError(
            f"Invalid dependency name {name!r} in manifest of {owner.__name__}: "
            f"expected a public Python identifier"
        )


class ManifestRegistry:
    """Holds one dependency manifest per declaring class and builds instances.

    This registry is a singleton: only one instance exists per process.
    Manifests are declared with ``declare`` (usually through the ``provide``
    decorator) and instances are produced with ``build``. Declared classes are
    held weakly, so a class that is no longer referenced drops out.

    Examples:
        >>> from depinject import UseCase
        >>> class Ping(UseCase):
        ...     def execute(self) -> str:
        ...         return "pong"
        >>> registry = ManifestRegistry()
        >>> registry.declare(Ping, {})
        >>> registry.build(Ping).execute()
        'pong'
    """

    _instance: "Optional[ManifestRegistry]" = None
    _lock: threading.Lock = threading.Lock()

    def __new__(cls) -> "ManifestRegistry":
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._registry: "weakref.WeakKeyDictionary[type, _RegistryEntry]" = (
                    weakref.WeakKeyDictionary()
                )
                cls._instance = instance
            return cls._instance

    def declare(self, target: type, manifest: Mapping[str, Any]) -> None:
        """Declare the dependency manifest of *target*.

        Every entry is classified into a :class:`Descriptor` and the class's
        trigger contract is recorded. Nothing is resolved or enforced here.

        Args:
            target: A ``UseCase`` subclass.
            manifest: Dependency name to descriptor (or raw value to classify).

        Raises:
            RegistrationError: If *target* is not a ``UseCase`` subclass or a
                dependency name is not a public identifier.
            RedeclarationError: If *target* already has a manifest.
        """
        from depinject.use_case import UseCase

        if not inspect.isclass(target) or not issubclass(target, UseCase):
            raise RegistrationError(
                f"Only UseCase subclasses can declare dependencies, got {target!r}"
            )

        descriptors: Dict[str, Descriptor] = {}
        for name, entry in manifest.items():
            _check_name(target, name)
            descriptors[name] = as_descriptor(entry)
        contract = TriggerContract.of(target)

        with self._lock:
            if target in self._registry:
                raise RedeclarationError(
                    f"Dependencies of {target.__name__} are already declared"
                )
            self._registry[target] = (MappingProxyType(descriptors), contract)

        logger.info(
            "Declared %s with dependencies: %s",
            target.__name__,
            ", ".join(descriptors) or "(none)",
        )

    def is_declared(self, target: type) -> bool:
        return target in self._registry

    def manifest_for(self, target: type) -> Manifest:
        """Return the read-only manifest declared by *target*.

        Raises:
            RegistrationError: If *target* never declared its dependencies.
        """
        return self._entry(target)[0]

    def contract_for(self, target: type) -> TriggerContract:
        """Return the trigger contract recorded for *target*."""
        return self._entry(target)[1]

    def build(self, target: Type[T], _chain: Optional[List[str]] = None) -> T:
        """Resolve the manifest of *target* and construct a wired instance.

        Each descriptor is resolved fresh, in manifest order, then the class
        is constructed with the resolved values; the constructor binds them
        and enforces the trigger contract.

        Raises:
            RegistrationError: If *target* never declared its dependencies.
            ResolutionError: If a descriptor fails to resolve.
            ContractError: If *target* breaks the trigger contract.
        """
        manifest = self.manifest_for(target)
        chain = (_chain or []) + [target.__name__]

        logger.debug("Building %s (resolution chain: %s)", target.__name__, " -> ".join(chain))
        resolved = {
            name: self._resolve(name, descriptor, chain)
            for name, descriptor in manifest.items()
        }
        return target(**resolved)

    def _entry(self, target: type) -> _RegistryEntry:
        entry = self._registry.get(target)
        if entry is None:
            label = getattr(target, "__name__", repr(target))
            raise RegistrationError(
                f"{label} has no dependency manifest; decorate it with @provide"
            )
        return entry

    def _resolve(self, name: str, descriptor: Descriptor, chain: List[str]) -> Any:
        """Resolve one manifest entry, nesting declared use cases through ``build``."""
        new_chain = chain + [name]
        if (
            descriptor.kind is DescriptorKind.BUILDABLE
            and inspect.isclass(descriptor.target)
            and self.is_declared(descriptor.target)
        ):
            return self.build(descriptor.target, _chain=new_chain)

        try:
            return descriptor.resolve()
        except DepInjectError:
            raise
        except Exception as exc:
            raise ResolutionError(
                f"Cannot resolve dependency '{name}' from {descriptor!r}: {exc}",
                chain=new_chain,
            ) from exc

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton, clearing all manifests.

        Intended for use in tests to ensure a clean state between test cases.
        """
        with cls._lock:
            if cls._instance is not None:
                cls._instance._registry.clear()
            cls._instance = None
