"""
glue-di: Minimal inversion-of-control container with constructor auto-wiring.

Public API exports for the glue-di package.
"""

# Application exports
from glue_di.application.container import DIContainer

# Domain exports
from glue_di.domain.enums import BindingKind, SingletonState
from glue_di.domain.exceptions import (
    AmbiguousConstructorError,
    CyclicDependencyError,
    DIException,
    NotRegisteredError,
    ScopeError,
    UnannotatedParameterError,
)
from glue_di.domain.interfaces import IContainer, IContainerRegistration

__version__ = "0.1.0"

__all__ = [
    # Container
    "DIContainer",
    # Interfaces
    "IContainer",
    "IContainerRegistration",
    # Enums
    "BindingKind",
    "SingletonState",
    # Exceptions
    "DIException",
    "NotRegisteredError",
    "AmbiguousConstructorError",
    "UnannotatedParameterError",
    "CyclicDependencyError",
    "ScopeError",
]
