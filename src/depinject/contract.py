"""The single execution trigger contract.

A use case class must locally declare exactly one of the trigger methods in
:data:`TRIGGER_NAMES` and no other public method. The class surface is read
once, when the class is declared, and kept as a :class:`TriggerContract`;
every construction then enforces that stored verdict.
"""

import inspect
import logging
from functools import partialmethod
from typing import Any, Optional, Tuple

from depinject.exceptions import (
    DuplicateTriggerError,
    ExtraPublicSurfaceError,
    MissingTriggerError,
)

logger = logging.getLogger(__name__)

TRIGGER_NAMES: Tuple[str, ...] = ("execute", "call")


def _is_instance_surface(attr: Any) -> bool:
    if isinstance(attr, (staticmethod, property, partialmethod)):
        return True
    if isinstance(attr, classmethod) or inspect.isclass(attr):
        return False
    return callable(attr)


def local_public_methods(cls: type) -> Tuple[str, ...]:
    """Return the public instance methods *cls* declares itself.

    Inherited methods and ``classmethod``s are not part of the surface.
    Names come back in declaration order.

    Examples:
        >>> class Greeter:
        ...     def execute(self): ...
        ...     def _helper(self): ...
        ...     @classmethod
        ...     def make(cls): ...
        >>> local_public_methods(Greeter)
        ('execute',)
    """
    return tuple(
        name
        for name, attr in vars(cls).items()
        if not name.startswith("_") and _is_instance_surface(attr)
    )


class TriggerContract:
    """The verdict of the trigger checks for one class.

    Args:
        class_name: Name used in error messages.
        triggers: The trigger names the class declares.
        extras: Every other local public method, in declaration order.
    """

    def __init__(
        self,
        class_name: str,
        triggers: Tuple[str, ...],
        extras: Tuple[str, ...],
    ) -> None:
        self.class_name = class_name
        self.triggers = triggers
        self.extras = extras

    @classmethod
    def of(cls, target: type) -> "TriggerContract":
        """Inspect *target* and record its trigger and extra methods."""
        methods = local_public_methods(target)
        triggers = tuple(name for name in TRIGGER_NAMES if name in methods)
        extras = tuple(name for name in methods if name not in TRIGGER_NAMES)
        return cls(target.__name__, triggers, extras)

    @property
    def trigger(self) -> Optional[str]:
        """The single trigger name, or ``None`` when the contract is broken."""
        if self.is_satisfied:
            return self.triggers[0]
        return None

    @property
    def is_satisfied(self) -> bool:
        return len(self.triggers) == 1 and not self.extras

    def enforce(self) -> None:
        """Raise the first failing check, if any.

        Raises:
            MissingTriggerError: No trigger is declared.
            DuplicateTriggerError: Both triggers are declared.
            ExtraPublicSurfaceError: Other public methods are declared.
        """
        error: Optional[Exception] = None
        if not self.triggers:
            error = MissingTriggerError(self.class_name)
        elif len(self.triggers) > 1:
            error = DuplicateTriggerError(self.class_name)
        elif self.extras:
            error = ExtraPublicSurfaceError(self.class_name, self.extras)

        if error is not None:
            logger.debug("Contract violation: %s", error)
            raise error

    def __repr__(self) -> str:
        return (
            f"TriggerContract({self.class_name!r}, triggers={self.triggers!r}, "
            f"extras={self.extras!r})"
        )
