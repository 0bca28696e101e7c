from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Type, TypeVar

from glue_di.domain.models import ConstructorPlan, Registration

T = TypeVar("T")


class IContainer(ABC):
    """Abstract interface for resolving dependencies from a container."""

    @abstractmethod
    def resolve(self, dependency_type: Type[T]) -> T:
        """Resolve and return an instance of the requested type.

        Args:
            dependency_type: The type to resolve.
        """

    @abstractmethod
    def create_scope(self) -> "IContainer":
        """Create and return a child container sharing this container's bindings."""

    @abstractmethod
    def clear(self) -> None:
        """Clear all registrations from the container."""

    @abstractmethod
    def get_registry_copy(self) -> Dict[Any, Registration]:
        """Get a copy of the current registry of bindings."""


class IContainerRegistration(ABC):
    """Abstract interface for binding abstract types to implementations."""

    @abstractmethod
    def register(self, abstract_type: Any, concrete_type: type, *, singleton: bool = False) -> None:
        """Bind a concrete implementation to an abstract type.

        Args:
            abstract_type: The token callers resolve.
            concrete_type: The class constructed for it.
            singleton: Construct once and cache instead of constructing per resolution.
        """

    @abstractmethod
    def register_instance(self, abstract_type: Any, instance: Any) -> None:
        """Bind a pre-built instance to an abstract type.

        Args:
            abstract_type: The token callers resolve.
            instance: The instance returned for every resolution.
        """

    @abstractmethod
    def register_function(self, abstract_type: Any, function: Callable[[Any], Any]) -> None:
        """Bind an arbitrary resolution function to an abstract type.

        Args:
            abstract_type: The token callers resolve.
            function: Called with the requested token; its result is returned.
        """


class IResolver(ABC):
    """Abstract interface for constructing concrete types."""

    @abstractmethod
    def plan(self, dependency_type: type) -> ConstructorPlan:
        """Inspect the single public constructor of a concrete type.

        Raises:
            AmbiguousConstructorError: If the type does not have exactly one constructor.
            UnannotatedParameterError: If a required parameter lacks a type annotation.
        """

    @abstractmethod
    def construct(self, dependency_type: type, container: IContainer) -> Any:
        """Resolve all constructor parameters and create an instance.

        Args:
            dependency_type: The concrete type to instantiate.
            container: The container used to resolve each parameter.

        Returns:
            Instance with all dependencies injected.
        """
