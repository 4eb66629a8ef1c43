"""Custom exceptions for the depinject framework."""

from typing import Iterable, List, Optional, Tuple


class DepInjectError(Exception):
    """Base class for every error raised by depinject."""


class RegistrationError(DepInjectError):
    """Raised when a dependency manifest cannot be declared or looked up.

    Examples:
        >>> raise RegistrationError("Invalid dependency name '1st'")
        Traceback (most recent call last):
            ...
        depinject.exceptions.RegistrationError: Invalid dependency name '1st'
    """


class RedeclarationError(RegistrationError):
    """Raised when a class declares its dependency manifest a second time."""


class ResolutionError(DepInjectError):
    """Raised when a dependency descriptor cannot be resolved.

    Includes the resolution chain, from the outermost class being built down
    to the dependency that failed.

    Args:
        message: Description of the resolution failure.
        chain: The resolution chain that led to the failure.

    Examples:
        >>> raise ResolutionError("Cannot resolve", chain=["CreateTask", "logger"])
        Traceback (most recent call last):
            ...
        depinject.exceptions.ResolutionError: Cannot resolve (resolution chain: CreateTask -> logger)
    """

    def __init__(self, message: str, chain: Optional[List[str]] = None) -> None:
        if chain:
            chain_str = " -> ".join(chain)
            message = f"{message} (resolution chain: {chain_str})"
        super().__init__(message)
        self.chain = chain or []


class ContractError(DepInjectError):
    """Raised when a class breaks the single execution trigger contract."""

    def __init__(self, message: str, class_name: str) -> None:
        super().__init__(message)
        self.class_name = class_name


class MissingTriggerError(ContractError, NotImplementedError):
    """The class declares neither ``execute`` nor ``call``."""

    def __init__(self, class_name: str) -> None:
        super().__init__(
            f"Class {class_name} must define an `execution` method",
            class_name,
        )


class DuplicateTriggerError(ContractError):
    """The class declares both ``execute`` and ``call``."""

    def __init__(self, class_name: str) -> None:
        super().__init__(
            f"Class {class_name} should only define one `execution` trigger",
            class_name,
        )


class ExtraPublicSurfaceError(ContractError):
    """The class declares public methods besides its execution trigger.

    Attributes:
        methods: The offending method names, in declaration order.
    """

    def __init__(self, class_name: str, methods: Iterable[str]) -> None:
        self.methods: Tuple[str, ...] = tuple(methods)
        super().__init__(
            f"Class {class_name} should only define `execution` trigger as a "
            f"public method. Additional public methods: {', '.join(self.methods)}",
            class_name,
        )
