"""Dependency descriptors: what a manifest entry resolves from."""

import inspect
from enum import Enum
from typing import Any

from depinject.exceptions import RegistrationError


class DescriptorKind(Enum):
    """Defines how a manifest entry is turned into a collaborator.

    Attributes:
        BUILDABLE: The target exposes a class-level ``build()``; it is called.
        INSTANTIABLE: The target is a class; its no-argument constructor is called.
        VALUE: The target is already the collaborator; it is used as-is.

    Examples:
        >>> DescriptorKind.BUILDABLE
        <DescriptorKind.BUILDABLE: 'buildable'>
        >>> DescriptorKind.VALUE
        <DescriptorKind.VALUE: 'value'>
    """

    BUILDABLE = "buildable"
    INSTANTIABLE = "instantiable"
    VALUE = "value"


class Descriptor:
    """An unresolved reference to a collaborator source.

    Use :func:`buildable`, :func:`instantiable` or :func:`value` to build one
    explicitly, or :func:`as_descriptor` to classify a raw manifest entry.

    Args:
        kind: How the target is resolved.
        target: The object resolution starts from.

    Examples:
        >>> value(42)
        Descriptor(value, 42)
        >>> value(42).resolve()
        42
    """

    __slots__ = ("kind", "target")

    def __init__(self, kind: DescriptorKind, target: Any) -> None:
        self.kind = kind
        self.target = target

    def resolve(self) -> Any:
        """Produce a fresh collaborator (or the shared value for ``VALUE``)."""
        if self.kind is DescriptorKind.BUILDABLE:
            return self.target.build()
        if self.kind is DescriptorKind.INSTANTIABLE:
            return self.target()
        return self.target

    def __repr__(self) -> str:
        target = getattr(self.target, "__qualname__", None) or repr(self.target)
        return f"Descriptor({self.kind.value}, {target})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Descriptor)
            and self.kind is other.kind
            and (self.target is other.target or self.target == other.target)
        )

    __hash__ = None  # type: ignore[assignment]


def _has_build(target: Any) -> bool:
    if inspect.isclass(target):
        # an instance method named build does not make the class buildable
        attr = inspect.getattr_static(target, "build", None)
        return isinstance(attr, (classmethod, staticmethod))
    return callable(getattr(target, "build", None))


def buildable(target: Any) -> Descriptor:
    """Describe a collaborator produced by ``target.build()``.

    Raises:
        RegistrationError: If *target* has no callable ``build`` (a class
            needs a class-level one: a ``classmethod`` or ``staticmethod``).
    """
    if not _has_build(target):
        raise RegistrationError(
            f"buildable target must expose a callable 'build', got {target!r}"
        )
    return Descriptor(DescriptorKind.BUILDABLE, target)


def instantiable(target: type) -> Descriptor:
    """Describe a collaborator produced by calling the class ``target()``.

    Raises:
        RegistrationError: If *target* is not a class.
    """
    if not inspect.isclass(target):
        raise RegistrationError(
            f"instantiable target must be a class, got {type(target).__name__}"
        )
    return Descriptor(DescriptorKind.INSTANTIABLE, target)


def value(target: Any) -> Descriptor:
    """Describe a collaborator that is used exactly as given.

    Also the way to inject a class object itself rather than an instance of it.
    """
    return Descriptor(DescriptorKind.VALUE, target)


def as_descriptor(entry: Any) -> Descriptor:
    """Classify a raw manifest entry.

    Probes, in order: an existing :class:`Descriptor` (returned unchanged),
    a callable ``build`` attribute, a class, and finally any other value.

    Examples:
        >>> as_descriptor(list)
        Descriptor(instantiable, list)
        >>> as_descriptor("localhost")
        Descriptor(value, 'localhost')
    """
    if isinstance(entry, Descriptor):
        return entry
    if _has_build(entry):
        return Descriptor(DescriptorKind.BUILDABLE, entry)
    if inspect.isclass(entry):
        return Descriptor(DescriptorKind.INSTANTIABLE, entry)
    return Descriptor(DescriptorKind.VALUE, entry)
