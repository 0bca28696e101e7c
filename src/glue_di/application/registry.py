"""Application layer - Abstract type to factory bindings."""

from typing import Any, Dict, Iterator, Optional

from glue_di.domain import BindingKind, Factory, NotRegisteredError, Registration


class Registry:
    """Holds at most one registration per dependency token.

    Registering a token again replaces the previous binding. The registry is
    expected to be populated before concurrent resolution begins.

    Attributes:
        _registrations: Mapping of dependency tokens to their registrations.
    """

    def __init__(self, registrations: Optional[Dict[Any, Registration]] = None) -> None:
        self._registrations: Dict[Any, Registration] = dict(registrations or {})

    def register_factory(
        self,
        dependency_type: Any,
        factory: Factory,
        kind: BindingKind = BindingKind.FUNCTION,
        implementation: Optional[type] = None,
    ) -> Registration:
        """Insert or replace the binding for a token.

        Args:
            dependency_type: The token to bind.
            factory: Function called with the requested token.
            kind: How the factory produces its instance.
            implementation: Concrete type for singleton/transient bindings.

        Returns:
            The stored registration.
        """
        registration = Registration(
            dependency_type=dependency_type,
            factory=factory,
            kind=kind,
            implementation=implementation,
        )
        self.add(registration)
        return registration

    def add(self, registration: Registration) -> None:
        """Store an existing registration, replacing any previous binding."""
        self._registrations[registration.dependency_type] = registration

    def lookup(self, dependency_type: Any) -> Registration:
        """Return the registration for a token.

        Raises:
            NotRegisteredError: If the token has no binding.
        """
        try:
            return self._registrations[dependency_type]
        except KeyError:
            raise NotRegisteredError(dependency_type) from None

    def contains(self, dependency_type: Any) -> bool:
        return dependency_type in self._registrations

    def copy(self) -> Dict[Any, Registration]:
        """Shallow copy of the bindings; registrations themselves are shared."""
        return self._registrations.copy()

    def clear(self) -> None:
        self._registrations.clear()

    def __contains__(self, dependency_type: Any) -> bool:
        return self.contains(dependency_type)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)
