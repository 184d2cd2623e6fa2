"""Application layer - Circular resolution detection."""

import threading
from typing import List, Tuple

from stratum_di.domain import CircularDependencyError, Token


class CircularDependencyDetector:
    """Detects producers that re-enter resolution of their own token.

    Uses thread-local storage to track the current production stack. An entry
    is a ``(scope id, token)`` pair, so the same token produced for two
    different scopes is not a cycle.

    Attributes:
        _local: Thread-local storage for production stacks.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    def _get_stack(self) -> List[Tuple[int, Token]]:
        if not hasattr(self._local, "stack"):
            self._local.stack = []
        return self._local.stack

    def push(self, scope_id: int, token: Token) -> None:
        """Add a production to the stack.

        Args:
            scope_id: ``id()`` of the scope the value is produced for.
            token: The token being produced.

        Raises:
            CircularDependencyError: If the same entry is already on the stack.

        Example:
            >>> detector = CircularDependencyDetector()
            >>> detector.push(id(scope), SERVICE_A)
            >>> detector.push(id(scope), SERVICE_B)
            >>> detector.push(id(scope), SERVICE_A)  # Raises CircularDependencyError
        """
        stack = self._get_stack()
        entry = (scope_id, token)

        if entry in stack:
            cycle_start_index = stack.index(entry)
            cycle = [t for _, t in stack[cycle_start_index:]] + [token]
            raise CircularDependencyError(cycle)

        stack.append(entry)

    def pop(self) -> None:
        """Remove the most recent production from the stack."""
        stack = self._get_stack()
        if stack:
            stack.pop()

    def clear(self) -> None:
        if hasattr(self._local, "stack"):
            self._local.stack.clear()

    @property
    def depth(self) -> int:
        return len(self._get_stack())
