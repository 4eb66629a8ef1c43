"""Base class for single-responsibility use cases."""

from typing import Any, Type, TypeVar

from depinject.registry import ManifestRegistry

U = TypeVar("U", bound="UseCase")


class UseCase:
    """A command object with declared dependencies and one execution trigger.

    Subclasses declare their collaborators with ``@provide`` and expose
    exactly one public method, ``execute`` or ``call``. Collaborators are
    bound to private attributes named after the manifest entries, so a
    ``logger`` dependency is available as ``self._logger``.

    Examples:
        >>> from depinject import provide
        >>> class Logger:
        ...     def log(self, message: str) -> str:
        ...         return f"Logged: {message}"
        >>> @provide(logger=Logger)
        ... class Greet(UseCase):
        ...     def execute(self, name: str) -> str:
        ...         return self._logger.log(f"Hello {name}")
        >>> Greet.build().execute("Ada")
        'Logged: Hello Ada'

        Constructing directly injects explicit collaborators, still under
        the trigger contract:

        >>> Greet(logger=Logger()).execute("Bob")
        'Logged: Hello Bob'
    """

    @classmethod
    def build(cls: Type[U]) -> U:
        """Resolve this class's manifest and return a validated instance."""
        return ManifestRegistry().build(cls)

    def __init__(self, **injected: Any) -> None:
        registry = ManifestRegistry()
        cls = type(self)
        manifest = registry.manifest_for(cls)

        missing = [name for name in manifest if name not in injected]
        unexpected = [name for name in injected if name not in manifest]
        if missing or unexpected:
            problems = []
            if missing:
                problems.append(f"missing dependencies: {', '.join(missing)}")
            if unexpected:
                problems.append(f"unexpected dependencies: {', '.join(unexpected)}")
            raise TypeError(f"{cls.__name__}() {'; '.join(problems)}")

        for name, dependency in injected.items():
            setattr(self, f"_{name}", dependency)

        registry.contract_for(cls).enforce()
