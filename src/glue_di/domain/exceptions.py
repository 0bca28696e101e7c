from typing import Any, List

from glue_di.domain.utils import describe_token


class DIException(Exception):
    """Base exception for DI-related errors."""


class NotRegisteredError(DIException):
    """Raised when an abstract type is resolved without a registration.

    Attributes:
        dependency_type: The token that has no binding.
    """

    def __init__(self, dependency_type: Any) -> None:
        self.dependency_type = dependency_type
        super().__init__(f"No registration found for abstract type: {describe_token(dependency_type)}")


class AmbiguousConstructorError(DIException):
    """Raised when a concrete type does not have exactly one public constructor.

    Both zero and multiple constructors are errors. Overloaded ``__init__``
    declarations count as multiple constructors; a signature that cannot be
    introspected counts as none.

    Attributes:
        dependency_type: The type that could not be constructed.
        constructor_count: Number of public constructors found.
    """

    def __init__(self, dependency_type: Any, constructor_count: int) -> None:
        self.dependency_type = dependency_type
        self.constructor_count = constructor_count
        super().__init__(
            f"Can't construct type {describe_token(dependency_type)} "
            f"because it has {constructor_count} constructors"
        )


class UnannotatedParameterError(DIException):
    """Raised when a required constructor parameter has no type annotation.

    Attributes:
        dependency_type: The type being constructed.
        parameter_name: The parameter lacking an annotation.
    """

    def __init__(self, dependency_type: Any, parameter_name: str) -> None:
        self.dependency_type = dependency_type
        self.parameter_name = parameter_name
        super().__init__(
            f"Cannot construct {describe_token(dependency_type)}: parameter '{parameter_name}' "
            "lacks a type annotation and has no default value"
        )


class CyclicDependencyError(DIException):
    """Raised when a type transitively depends on itself during resolution.

    Attributes:
        dependency_chain: Tokens involved in the cycle, first and last being the same.
    """

    def __init__(self, dependency_chain: List[Any]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Cyclic dependency detected: {' -> '.join(describe_token(t) for t in dependency_chain)}"
        super().__init__(message)


class ScopeError(DIException):
    """Raised for invalid scope operations.

    This occurs when a scoped dependency is requested but no scoped
    container is available (e.g. the request middleware is missing).
    """
