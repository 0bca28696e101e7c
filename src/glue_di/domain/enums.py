from enum import Enum


class BindingKind(str, Enum):
    """Describes how a registration produces its instance.

    Attributes:
        SINGLETON: Concrete type constructed once and cached.
        TRANSIENT: Concrete type constructed on each resolution.
        INSTANCE: Pre-built instance returned as is.
        FUNCTION: Caller supplied factory function.
    """

    SINGLETON = "singleton"
    TRANSIENT = "transient"
    INSTANCE = "instance"
    FUNCTION = "function"

    def __str__(self) -> str:
        return self.value


class SingletonState(str, Enum):
    """States of a singleton cell. POPULATED is terminal."""

    EMPTY = "empty"
    INITIALIZING = "initializing"
    POPULATED = "populated"

    def __str__(self) -> str:
        return self.value
