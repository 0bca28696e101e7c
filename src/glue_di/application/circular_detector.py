"""Application layer - Cyclic dependency detection."""

import threading
from typing import Any, List

from glue_di.domain import CyclicDependencyError


class CircularDependencyDetector:
    """Tracks the tokens currently being resolved on each thread.

    When a token appears twice in the stack, a cyclic dependency is reported.
    With detection disabled the stack is still tracked, so the resolution
    depth stays available for diagnostics.

    Attributes:
        _local: Thread-local storage for resolution stacks.
        enabled: Whether a repeated token raises.
    """

    def __init__(self, enabled: bool = True) -> None:
        self._local = threading.local()
        self.enabled = enabled

    def _get_stack(self) -> List[Any]:
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    @property
    def depth(self) -> int:
        """Number of resolutions in progress on the current thread."""
        return len(self._get_stack())

    def push(self, dependency_type: Any) -> None:
        """Add a token to the resolution stack.

        Args:
            dependency_type: The token being resolved.

        Raises:
            CyclicDependencyError: If detection is enabled and the token is already in the stack.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(ServiceA)
            >>> detector.push(ServiceB)
            >>> detector.push(ServiceA)  # Raises CyclicDependencyError
        """
        stack = self._get_stack()

        if self.enabled and dependency_type in stack:
            cycle_start_index = stack.index(dependency_type)
            cycle = stack[cycle_start_index:] + [dependency_type]
            raise CyclicDependencyError(cycle)

        stack.append(dependency_type)

    def pop(self) -> None:
        """Remove the most recent token from the resolution stack."""
        stack = self._get_stack()
        if stack:
            stack.pop()

    def clear(self) -> None:
        """Clear the current thread's resolution stack."""
        if hasattr(self._local, "stack"):
            self._local.stack.clear()
