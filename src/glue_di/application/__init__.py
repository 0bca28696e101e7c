"""
Application layer - Registration and resolution.

This layer contains the registry, the resolution engine and the container
that orchestrates them. It depends only on the Domain layer.
"""

from .circular_detector import CircularDependencyDetector
from .container import DIContainer
from .registry import Registry
from .resolver import DependencyResolver, is_constructible, is_protocol
from .singleton_cell import SingletonCell

__all__ = [
    "DIContainer",
    "DependencyResolver",
    "Registry",
    "SingletonCell",
    "CircularDependencyDetector",
    "is_constructible",
    "is_protocol",
]
