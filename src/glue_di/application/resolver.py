import inspect
import logging
import typing
from typing import Any, Callable, Dict, List, Optional, Tuple, get_type_hints

from glue_di.domain import (
    AmbiguousConstructorError,
    ConstructorPlan,
    IContainer,
    IResolver,
    ParameterPlan,
    UnannotatedParameterError,
)
from glue_di.domain.utils import describe_token

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def is_protocol(dependency_type: Any) -> bool:
    """Detect whether a class is a ``typing.Protocol`` definition."""
    if not inspect.isclass(dependency_type):
        return False
    if hasattr(typing, "is_protocol"):
        return typing.is_protocol(dependency_type)
    return bool(getattr(dependency_type, "_is_protocol", False))


def is_constructible(dependency_type: Any) -> bool:
    """Whether a token can be instantiated directly.

    Classes are constructible unless they are protocols or ABCs with unimplemented
    abstract methods. Non-class tokens are never constructible and always need a
    registration.
    """
    if not inspect.isclass(dependency_type):
        return False
    if inspect.isabstract(dependency_type):
        return False
    return not is_protocol(dependency_type)


class DependencyResolver(IResolver):
    """Constructs concrete types by resolving their constructor parameters.

    Uses Python's inspect module to find the single public constructor of a
    type and resolves each parameter by its type hint through the container.
    """

    def plan(self, dependency_type: type) -> ConstructorPlan:
        """Describe how a concrete type is constructed.

        Args:
            dependency_type: The concrete type to inspect.

        Returns:
            The constructor signature and the ordered parameters to resolve.

        Raises:
            AmbiguousConstructorError: If the type has zero or several public constructors.
            UnannotatedParameterError: If a required parameter lacks a type annotation.
        """
        constructors = self._public_constructors(dependency_type)
        logger.debug("Type %s has %d constructors", describe_token(dependency_type), len(constructors))

        if len(constructors) != 1:
            raise AmbiguousConstructorError(dependency_type, len(constructors))

        signature, hints_source = constructors[0]
        hints = self._get_type_hints(dependency_type, hints_source)

        parameters: List[ParameterPlan] = []
        for name, parameter in signature.parameters.items():
            if parameter.kind in _SKIPPED_KINDS:
                continue

            # Defaults are left to the constructor
            if parameter.default is not inspect.Parameter.empty:
                continue

            annotation = hints.get(name, parameter.annotation)
            if annotation is inspect.Parameter.empty:
                raise UnannotatedParameterError(dependency_type, name)

            parameters.append(
                ParameterPlan(
                    name=name,
                    dependency_type=annotation,
                    keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
                )
            )

        return ConstructorPlan(dependency_type=dependency_type, signature=signature, parameters=parameters)

    def construct(self, dependency_type: type, container: IContainer) -> Any:
        """Resolve all constructor parameters and create an instance.

        Parameters are resolved in declaration order. Positional parameters are
        passed positionally, keyword-only parameters by keyword. Whatever the
        constructor raises propagates unchanged.

        Args:
            dependency_type: The concrete type to instantiate.
            container: The container used to resolve each parameter.

        Returns:
            Instance with all dependencies injected.

        Example:
            >>> class UserService:
            ...     def __init__(self, repository: IUserRepository, logger: ILogger):
            ...         self.repository = repository
            ...         self.logger = logger
            >>>
            >>> resolver = DependencyResolver()
            >>> instance = resolver.construct(UserService, container)
        """
        logger.debug("Constructing type %s", describe_token(dependency_type))
        plan = self.plan(dependency_type)

        args: List[Any] = []
        kwargs: Dict[str, Any] = {}
        for parameter in plan.parameters:
            value = container.resolve(parameter.dependency_type)
            if parameter.keyword_only:
                kwargs[parameter.name] = value
            else:
                args.append(value)

        return dependency_type(*args, **kwargs)

    def _public_constructors(self, dependency_type: type) -> List[Tuple[inspect.Signature, Optional[Callable]]]:
        """List the constructor signatures of a type with the function carrying their hints.

        Overloaded ``__init__`` declarations are separate constructors. A type whose
        signature cannot be introspected has none.
        """
        init = getattr(dependency_type, "__init__", None)

        if inspect.isfunction(init):
            overloads = typing.get_overloads(init)
            if overloads:
                return [(self._drop_self(inspect.signature(overload)), overload) for overload in overloads]

        try:
            signature = inspect.signature(dependency_type)
        except (ValueError, TypeError):
            return []

        return [(signature, init if inspect.isfunction(init) else None)]

    @staticmethod
    def _drop_self(signature: inspect.Signature) -> inspect.Signature:
        parameters = list(signature.parameters.values())
        return signature.replace(parameters=parameters[1:])

    @staticmethod
    def _get_type_hints(dependency_type: type, hints_source: Optional[Callable]) -> Dict[str, Any]:
        if hints_source is None:
            return {}
        try:
            hints = get_type_hints(hints_source)
        except TypeError:
            hints = {}
        except NameError as exc:
            logger.warning(
                "'%s' name error retrieving %s type hints, falling back to raw annotations",
                exc.name,
                describe_token(dependency_type),
            )
            hints = {}
        return hints
