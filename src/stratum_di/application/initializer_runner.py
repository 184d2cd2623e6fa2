import logging
from typing import Any, Callable

from stratum_di.domain import (
    Binding,
    IInitializerRunner,
    InitializationError,
    IScope,
    Multiplicity,
    create_token,
)

logger = logging.getLogger(__name__)

SCOPE_INITIALIZER = create_token("SCOPE_INITIALIZER", Multiplicity.MULTI)
"""Reserved multi-valued token holding zero-argument scope initializers."""


def initializer(callback: Callable[[IScope], Any]) -> Binding:
    """Build an initializer binding from a callback taking the scope.

    The bound value is a zero-argument callable closed over the scope being
    initialized, so the callback can resolve anything from that scope.

    Args:
        callback: Called once with the scope when it becomes ready.

    Example:
        >>> def attach_audit(scope):
        ...     scope.resolve(EVENT_BUS).subscribe("audit", scope.resolve(AUDIT_SINK))
        >>>
        >>> bundle = Bundle.of(initializer(attach_audit))
    """
    return Binding.factory(SCOPE_INITIALIZER, lambda scope: lambda: callback(scope))


class InitializerRunner(IInitializerRunner):
    """Runs the initializers registered in a scope, in registration order.

    Only the scope's own initializers run. Ancestors ran theirs when they
    became ready.
    """

    def run(self, scope: IScope) -> int:
        """Invoke every initializer of ``scope``.

        Args:
            scope: The scope becoming ready.

        Returns:
            The number of initializers invoked.

        Raises:
            InitializationError: If resolving or invoking an initializer fails.
        """
        try:
            initializers = scope.resolve_all(SCOPE_INITIALIZER, optional=True, self_only=True)
        except Exception as e:
            raise InitializationError(scope.name, f"Cannot resolve initializers: {e}") from e

        for index, callback in enumerate(initializers):
            logger.debug("Running initializer %d of scope %s", index, scope.name)
            try:
                callback()
            except Exception as e:
                raise InitializationError(scope.name, f"Initializer #{index} failed: {e}") from e

        return len(initializers)
