"""The ``provide`` decorator: declares a use case's dependency manifest."""

import inspect
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar, Union, overload

from depinject.registry import ManifestRegistry

C = TypeVar("C", bound=type)


@overload
def provide(target: C, /) -> C: ...


@overload
def provide(
    manifest: Optional[Mapping[str, Any]] = ..., /, **dependencies: Any
) -> Callable[[C], C]: ...


def provide(
    manifest: "Union[Mapping[str, Any], type, None]" = None,
    /,
    **dependencies: Any,
) -> Any:
    """Declare the dependencies of a ``UseCase`` subclass.

    Can be used bare (``@provide``) for a use case without dependencies, or
    with a mapping and/or keyword arguments naming each dependency.
    Keyword arguments win over mapping entries with the same name.

    Each value is a descriptor: a ``Descriptor`` built with ``buildable``,
    ``instantiable`` or ``value``, or a raw object that is classified once,
    here: anything with a callable ``build`` is built, a class is
    instantiated with no arguments, any other object is injected as-is.

    Args:
        manifest: Optional mapping of dependency name to descriptor (the
            decorated class when used bare).
        **dependencies: Dependency name to descriptor.

    Returns:
        The class, unmodified (but now registered with the manifest registry).

    Raises:
        RegistrationError: If the class is not a ``UseCase`` subclass or a
            dependency name is invalid.
        RedeclarationError: If the class already declared its dependencies.

    Examples:
        >>> from depinject import UseCase
        >>> class Clock:
        ...     def now(self) -> str:
        ...         return "noon"
        >>> @provide(clock=Clock, greeting="Good")
        ... class Announce(UseCase):
        ...     def call(self) -> str:
        ...         return f"{self._greeting} {self._clock.now()}"
        >>> Announce.build().call()
        'Good noon'
    """
    def decorator(inner: C) -> C:
        entries: Dict[str, Any] = {}
        if manifest is not None and not inspect.isclass(manifest):
            entries.update(manifest)
        entries.update(dependencies)
        ManifestRegistry().declare(inner, entries)
        return inner

    if inspect.isclass(manifest):
        return decorator(manifest)
    return decorator
