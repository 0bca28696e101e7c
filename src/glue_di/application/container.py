import inspect
import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar, cast

from glue_di.application.circular_detector import CircularDependencyDetector
from glue_di.application.registry import Registry
from glue_di.application.resolver import DependencyResolver, is_constructible, is_protocol
from glue_di.application.singleton_cell import SingletonCell
from glue_di.domain import (
    BindingKind,
    Factory,
    IContainer,
    IContainerRegistration,
    IResolver,
    Registration,
)
from glue_di.domain.utils import describe_token

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DIContainer(IContainer, IContainerRegistration):
    """Main dependency injection container.

    Abstract types (protocols, ABCs with abstract methods and non-class tokens)
    are resolved through their registered factory. Concrete types are always
    constructed by auto-wiring their single public constructor.

    Attributes:
        _registry: Bindings of abstract tokens to factories.
        _resolver: Component constructing concrete types.
        _circular_detector: Component tracking the per-thread resolution stack.
    """

    def __init__(
        self,
        detect_cycles: bool = True,
        circular_detector: Optional[CircularDependencyDetector] = None,
    ) -> None:
        """Initialize the DI container with an empty registry.

        Args:
            detect_cycles: Raise CyclicDependencyError when a type transitively
                depends on itself instead of recursing or deadlocking.
            circular_detector: Resolution stack shared with a parent container.
                When given, detect_cycles is taken from it.
        """
        self._registry = Registry()
        self._resolver: IResolver = DependencyResolver()
        if circular_detector is None:
            circular_detector = CircularDependencyDetector(enabled=detect_cycles)
        self._circular_detector = circular_detector

    @property
    def detect_cycles(self) -> bool:
        return self._circular_detector.enabled

    def register_factory(
        self,
        abstract_type: Any,
        factory: Factory,
        kind: BindingKind = BindingKind.FUNCTION,
        implementation: Optional[type] = None,
    ) -> None:
        """Insert or replace the factory bound to an abstract type.

        Registrations for concrete types are stored but never consulted, since
        concrete types are always constructed directly.

        Raises:
            TypeError: If factory is not callable.
        """
        if not callable(factory):
            raise TypeError(f"Factory for {describe_token(abstract_type)} must be callable, got {factory!r}")

        if is_constructible(abstract_type):
            logger.warning(
                "Registration for concrete type %s will not be used; concrete types are always constructed",
                describe_token(abstract_type),
            )
        self._registry.register_factory(abstract_type, factory, kind, implementation)

    def register_singleton(self, abstract_type: Any, concrete_type: type) -> None:
        """Bind a concrete type constructed once and shared by every resolution.

        Args:
            abstract_type: The token callers resolve.
            concrete_type: The class constructed on first resolution.

        Raises:
            TypeError: If concrete_type is not a class implementing abstract_type.

        Example:
            >>> container.register_singleton(ILogger, ConsoleLogger)
            >>> assert container.resolve(ILogger) is container.resolve(ILogger)
        """
        self._validate_implementation(abstract_type, concrete_type)
        logger.debug(
            "Register singleton implementation %s for %s",
            describe_token(concrete_type),
            describe_token(abstract_type),
        )
        self._bind_singleton(abstract_type, concrete_type, SingletonCell())

    def register_transient(self, abstract_type: Any, concrete_type: type) -> None:
        """Bind a concrete type constructed afresh on every resolution.

        Args:
            abstract_type: The token callers resolve.
            concrete_type: The class constructed on each resolution.

        Raises:
            TypeError: If concrete_type is not a class implementing abstract_type.
        """
        self._validate_implementation(abstract_type, concrete_type)
        logger.debug(
            "Register implementation %s for %s",
            describe_token(concrete_type),
            describe_token(abstract_type),
        )
        self._bind_transient(abstract_type, concrete_type)

    def register(self, abstract_type: Any, concrete_type: type, *, singleton: bool = False) -> None:
        """Bind a concrete implementation to an abstract type, transient by default.

        Example:
            >>> container.register(ILogger, ConsoleLogger, singleton=True)
            >>> container.register(IService, ServiceImpl)
        """
        if singleton:
            self.register_singleton(abstract_type, concrete_type)
        else:
            self.register_transient(abstract_type, concrete_type)

    def register_singletons(self, dependencies: Dict[Any, type]) -> None:
        """Register multiple singleton implementations at once.

        Args:
            dependencies: Dictionary mapping abstract types to concrete types.

        Example:
            >>> container.register_singletons({
            ...     ILogger: ConsoleLogger,
            ...     IClock: SystemClock,
            ... })
        """
        for abstract_type, concrete_type in dependencies.items():
            self.register_singleton(abstract_type, concrete_type)

    def register_transients(self, dependencies: Dict[Any, type]) -> None:
        """Register multiple transient implementations at once.

        Args:
            dependencies: Dictionary mapping abstract types to concrete types.
        """
        for abstract_type, concrete_type in dependencies.items():
            self.register_transient(abstract_type, concrete_type)

    def register_instance(self, abstract_type: Any, instance: Any) -> None:
        """Bind a pre-built instance returned for every resolution.

        Example:
            >>> container.register_instance(IClock, FixedClock(datetime(2024, 1, 1)))
        """
        logger.debug(
            "Register singleton instance %s for %s",
            type(instance).__name__,
            describe_token(abstract_type),
        )
        self.register_factory(abstract_type, lambda requested: instance, BindingKind.INSTANCE)

    def register_function(self, abstract_type: Any, function: Callable[[Any], Any]) -> None:
        """Bind a function called with the requested token on every resolution.

        Example:
            >>> container.register_function(IStorage, lambda t: S3Storage() if cloud else DiskStorage())
        """
        logger.debug("Register function %r for %s", function, describe_token(abstract_type))
        self.register_factory(abstract_type, function, BindingKind.FUNCTION)

    def resolve(self, dependency_type: Type[T]) -> T:
        """Resolve and return an instance of the specified type.

        Abstract types are looked up in the registry and produced by their
        factory. Concrete types are constructed, resolving each constructor
        parameter recursively. Errors propagate unchanged.

        Args:
            dependency_type: The type to resolve.

        Returns:
            Instance of the requested type with all dependencies injected.

        Raises:
            NotRegisteredError: If an abstract type has no registration.
            AmbiguousConstructorError: If a concrete type has zero or several constructors.
            UnannotatedParameterError: If a constructor parameter lacks a type annotation.
            CyclicDependencyError: If the type transitively depends on itself.

        Example:
            >>> service = container.resolve(IService)
        """
        logger.debug("Resolve type %s", describe_token(dependency_type))
        self._circular_detector.push(dependency_type)

        try:
            if is_constructible(dependency_type):
                instance = self._construct(dependency_type)
                logger.debug("Type %s constructed", describe_token(dependency_type))
            else:
                registration = self._registry.lookup(dependency_type)
                instance = registration.factory(dependency_type)
                logger.debug(
                    "Type %s resolved to %s",
                    describe_token(dependency_type),
                    type(instance).__name__,
                )
        except Exception:
            if self._circular_detector.depth == 1:
                logger.error("Error while resolving type %s", describe_token(dependency_type), exc_info=True)
            raise
        finally:
            self._circular_detector.pop()

        return cast(T, instance)

    def is_registered(self, dependency_type: Any) -> bool:
        return dependency_type in self._registry

    def get_registry_copy(self) -> Dict[Any, Registration]:
        """Get a copy of the registry for scope inheritance.

        Returns:
            Copy of the current bindings. Registrations are shared, not duplicated.
        """
        return self._registry.copy()

    def create_scope(self) -> "DIContainer":
        """Create a child container inheriting this container's bindings.

        Singleton bindings keep their cells, so the scope shares the parent's
        singleton instances. Transient bindings are rebound to the scope, so
        their constructor parameters see registrations made on the scope.
        Registrations made on the scope never reach the parent. The scope
        shares the parent's resolution stack, since shared singletons are
        constructed through the parent.

        Example:
            >>> scoped = container.create_scope()
            >>> scoped.register_instance(IRequestContext, RequestContext("abc"))
            >>> handler = scoped.resolve(IRequestHandler)
        """
        scoped_container = DIContainer(circular_detector=self._circular_detector)
        scoped_container.adopt(self.get_registry_copy(), share_singletons=True)
        return scoped_container

    def adopt(self, registrations: Dict[Any, Registration], share_singletons: bool = True) -> None:
        """Take over bindings from another container.

        Args:
            registrations: Bindings to copy, usually from get_registry_copy().
            share_singletons: Keep existing singleton cells; otherwise each
                singleton binding gets a fresh, empty cell owned by this container.
        """
        for abstract_type, registration in registrations.items():
            if registration.kind == BindingKind.TRANSIENT and registration.implementation is not None:
                self._bind_transient(abstract_type, registration.implementation)
            elif (
                registration.kind == BindingKind.SINGLETON
                and registration.implementation is not None
                and not share_singletons
            ):
                self._bind_singleton(abstract_type, registration.implementation, SingletonCell())
            else:
                self._registry.add(registration)

    def clear(self) -> None:
        """Clear all registrations and the current resolution stack.

        Useful for testing or resetting the container state.
        """
        self._registry.clear()
        self._circular_detector.clear()

    def _construct(self, concrete_type: type) -> Any:
        return self._resolver.construct(concrete_type, self)

    def _bind_singleton(self, abstract_type: Any, concrete_type: type, cell: SingletonCell) -> None:
        def singleton_factory(requested: Any) -> Any:
            return cell.get_or_create(lambda: self._construct(concrete_type))

        self.register_factory(abstract_type, singleton_factory, BindingKind.SINGLETON, concrete_type)

    def _bind_transient(self, abstract_type: Any, concrete_type: type) -> None:
        def transient_factory(requested: Any) -> Any:
            return self._construct(concrete_type)

        self.register_factory(abstract_type, transient_factory, BindingKind.TRANSIENT, concrete_type)

    @staticmethod
    def _validate_implementation(abstract_type: Any, concrete_type: type) -> None:
        """Require concrete_type to be a class and, for nominal abstract types, a subclass."""
        if not inspect.isclass(concrete_type):
            raise TypeError(f"Implementation for {describe_token(abstract_type)} must be a class, got {concrete_type!r}")

        if inspect.isclass(abstract_type) and not is_protocol(abstract_type):
            if not issubclass(concrete_type, abstract_type):
                raise TypeError(
                    f"Implementation {concrete_type.__name__} must be a subclass of {abstract_type.__name__}"
                )
