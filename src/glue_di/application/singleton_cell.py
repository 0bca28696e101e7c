"""Application layer - Lazily populated singleton holder."""

import threading
from typing import Any, Callable, Optional

from glue_di.domain import SingletonState


class SingletonCell:
    """Holds the instance of one singleton registration.

    The cell moves from EMPTY to INITIALIZING to POPULATED. Only the thread
    holding the lock may leave EMPTY; every other caller waits on the lock and
    then reads the cached instance. A failed construction returns the cell to
    EMPTY. POPULATED is terminal.

    Attributes:
        _lock: Guards the EMPTY to INITIALIZING transition.
        _instance: The cached instance once populated.
        _state: Current state of the cell.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._instance: Optional[Any] = None
        self._state = SingletonState.EMPTY

    @property
    def state(self) -> SingletonState:
        return self._state

    @property
    def is_populated(self) -> bool:
        return self._state is SingletonState.POPULATED

    def get_or_create(self, factory: Callable[[], Any]) -> Any:
        """Return the cached instance, constructing it on first use.

        Args:
            factory: Called at most once successfully to build the instance.

        Returns:
            The same instance on every call.

        Example:
            >>> cell = SingletonCell()
            >>> first = cell.get_or_create(ConsoleLogger)
            >>> assert cell.get_or_create(ConsoleLogger) is first
        """
        if self._state is SingletonState.POPULATED:
            return self._instance

        with self._lock:
            if self._state is SingletonState.EMPTY:
                self._state = SingletonState.INITIALIZING
                try:
                    instance = factory()
                except BaseException:
                    self._state = SingletonState.EMPTY
                    raise
                self._instance = instance
                self._state = SingletonState.POPULATED
            return self._instance
