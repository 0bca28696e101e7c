"""
Domain layer - Core models, errors and contracts.

This layer contains the fundamental rules and models for dependency injection.
It has no dependencies on other layers.
"""

from .enums import BindingKind, SingletonState
from .exceptions import (
    AmbiguousConstructorError,
    CyclicDependencyError,
    DIException,
    NotRegisteredError,
    ScopeError,
    UnannotatedParameterError,
)
from .interfaces import IContainer, IContainerRegistration, IResolver
from .models import ConstructorPlan, Factory, ParameterPlan, Registration

__all__ = [
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
    # Interfaces
    "IContainer",
    "IContainerRegistration",
    "IResolver",
    # Models
    "Factory",
    "Registration",
    "ParameterPlan",
    "ConstructorPlan",
]
