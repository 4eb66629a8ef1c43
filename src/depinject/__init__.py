"""depinject — Declarative dependency injection for single-trigger use cases."""

from depinject.contract import TRIGGER_NAMES, TriggerContract
from depinject.decorators import provide
from depinject.descriptors import (
    Descriptor,
    DescriptorKind,
    as_descriptor,
    buildable,
    instantiable,
    value,
)
from depinject.exceptions import (
    ContractError,
    DepInjectError,
    DuplicateTriggerError,
    ExtraPublicSurfaceError,
    MissingTriggerError,
    RedeclarationError,
    RegistrationError,
    ResolutionError,
)
from depinject.registry import ManifestRegistry
from depinject.use_case import UseCase

__version__ = "0.1.0"

__all__ = [
    "UseCase",
    "provide",
    "ManifestRegistry",
    "Descriptor",
    "DescriptorKind",
    "as_descriptor",
    "buildable",
    "instantiable",
    "value",
    "TriggerContract",
    "TRIGGER_NAMES",
    "DepInjectError",
    "RegistrationError",
    "RedeclarationError",
    "ResolutionError",
    "ContractError",
    "MissingTriggerError",
    "DuplicateTriggerError",
    "ExtraPublicSurfaceError",
]
