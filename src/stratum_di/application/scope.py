import logging
from typing import Any, List, Optional

from stratum_di.application.binding_table import BindingTable
from stratum_di.application.initializer_runner import InitializerRunner
from stratum_di.application.instance_cache import InstanceCache
from stratum_di.application.resolver import Resolver
from stratum_di.domain import (
    Bundle,
    IInitializerRunner,
    InitializationError,
    IResolver,
    IScope,
    LifecycleError,
    ScopeState,
    Token,
)

logger = logging.getLogger(__name__)


class Scope(IScope):
    """A node in a tree of environments.

    A scope owns its binding table and instance cache and keeps a reference to
    its parent. Parents never track their children; lookups only travel
    upward. Bindings of a scope shadow same-token bindings of its ancestors.

    Lifecycle: a scope starts BUILDING and accepts bundles. :meth:`mark_ready`
    (or the first resolution) runs its initializers and makes it READY. An
    initializer failure leaves it FAILED: its bindings are dropped and no
    child scope can be created under it. :meth:`destroy` makes it DESTROYED.

    Attributes:
        _parent: The enclosing scope, or None for a root.
        _name: Name used in logs and error messages.
        _table: Bindings registered in this scope.
        _cache: Values produced for this scope.
        _resolver: Resolution strategy, shared with child scopes by default.
        _initializer_runner: Runs initializers when the scope becomes ready.

    Example:
        >>> root = Scope(name="root")
        >>> root.apply_bundle(provide_logger({"level": LogLevel.DEBUG}))
        >>> root.mark_ready()
        >>>
        >>> with Scope(root, name="admin") as admin:
        ...     admin.apply_bundle(provide_logger({"name": "admin", "chaining": True}))
        ...     admin.resolve(LOGGER).info("started")
    """

    def __init__(
        self,
        parent: Optional["Scope"] = None,
        name: Optional[str] = None,
        resolver: Optional[IResolver] = None,
        initializer_runner: Optional[IInitializerRunner] = None,
    ) -> None:
        if parent is not None and not parent.is_usable:
            raise LifecycleError(f"Cannot create a child of scope '{parent.name}' in state {parent.state.value}")

        self._parent = parent
        self._name = name or ("root" if parent is None else parent._next_child_name())
        self._child_count = 0
        self._table = BindingTable()
        self._cache = InstanceCache()
        self._resolver: IResolver = resolver or (parent._resolver if parent is not None else Resolver())
        self._initializer_runner: IInitializerRunner = initializer_runner or (
            parent._initializer_runner if parent is not None else InitializerRunner()
        )
        self._state = ScopeState.BUILDING
        logger.debug("Created scope %s", self._name)

    @property
    def parent(self) -> Optional["Scope"]:
        return self._parent

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> ScopeState:
        return self._state

    @property
    def table(self) -> BindingTable:
        return self._table

    @property
    def cache(self) -> InstanceCache:
        return self._cache

    @property
    def depth(self) -> int:
        """Number of ancestors above this scope."""
        depth = 0
        current = self._parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    @property
    def is_ready(self) -> bool:
        return self._state == ScopeState.READY

    @property
    def is_destroyed(self) -> bool:
        return self._state == ScopeState.DESTROYED

    @property
    def is_usable(self) -> bool:
        """False once the scope is destroyed or failed to initialize."""
        return self._state not in (ScopeState.DESTROYED, ScopeState.FAILED)

    def _next_child_name(self) -> str:
        self._child_count += 1
        return f"{self._name}.{self._child_count}"

    def live_parent(self) -> Optional["Scope"]:
        """Nearest ancestor that is neither destroyed nor failed."""
        current = self._parent
        while current is not None and not current.is_usable:
            current = current.parent
        return current

    def apply_bundle(self, bundle: Bundle) -> None:
        """Append a bundle's bindings to this scope, in the bundle's order.

        Applying the same bundle twice registers its bindings twice.

        Args:
            bundle: The bundle to apply.

        Raises:
            LifecycleError: If the scope is not building anymore.
        """
        if self._state != ScopeState.BUILDING:
            raise LifecycleError(f"Cannot apply a bundle to scope '{self._name}' in state {self._state.value}")

        bundle.apply_to(self._table)
        logger.debug("Applied %d bindings to scope %s", len(bundle), self._name)

    def mark_ready(self) -> None:
        """Run the scope's initializers and make it ready.

        Calling it again on a ready scope does nothing.

        Raises:
            LifecycleError: If the scope is destroyed or failed.
            InitializationError: If an initializer fails.
        """
        if self._state in (ScopeState.READY, ScopeState.INITIALIZING):
            return
        if self._state in (ScopeState.DESTROYED, ScopeState.FAILED):
            raise LifecycleError(f"Scope '{self._name}' cannot become ready in state {self._state.value}")

        self._state = ScopeState.INITIALIZING
        try:
            count = self._initializer_runner.run(self)
        except InitializationError:
            self._state = ScopeState.FAILED
            self._table.clear()
            self._cache.clear()
            logger.debug("Scope %s failed to initialize", self._name)
            raise
        self._state = ScopeState.READY
        logger.debug("Scope %s is ready after %d initializers", self._name, count)

    def ensure_resolvable(self) -> None:
        """Make sure the scope may serve resolutions.

        A building scope is made ready first, so initializers always run
        before any other resolution.

        Raises:
            LifecycleError: If the scope is destroyed or failed.
        """
        if self._state == ScopeState.DESTROYED:
            raise LifecycleError(f"Scope '{self._name}' has been destroyed")
        if self._state == ScopeState.FAILED:
            raise LifecycleError(f"Scope '{self._name}' failed to initialize")
        if self._state == ScopeState.BUILDING:
            self.mark_ready()

    def resolve(self, token: Token, optional: bool = False, skip_self: bool = False, self_only: bool = False) -> Any:
        return self._resolver.resolve(self, token, optional=optional, skip_self=skip_self, self_only=self_only)

    def resolve_all(
        self, token: Token, optional: bool = False, skip_self: bool = False, self_only: bool = False
    ) -> List[Any]:
        return self._resolver.resolve_all(self, token, optional=optional, skip_self=skip_self, self_only=self_only)

    def has_binding(self, token: Token, self_only: bool = False) -> bool:
        """Whether ``token`` is bound here or, unless ``self_only``, in an ancestor."""
        if self._table.has(token):
            return True
        if self_only or self._parent is None:
            return False
        return self._parent.has_binding(token)

    def destroy(self) -> None:
        """Discard this scope's bindings and instances.

        Ancestors and descendants are left untouched. Destroying twice is
        allowed.
        """
        if self._state == ScopeState.DESTROYED:
            return
        self._table.clear()
        self._cache.clear()
        self._state = ScopeState.DESTROYED
        logger.debug("Destroyed scope %s", self._name)

    def __enter__(self) -> "Scope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.destroy()
        return False

    def __repr__(self) -> str:
        return f"Scope(name={self._name!r}, state={self._state.value})"


def create_scope(parent: Optional[Scope] = None, *bundles: Bundle, name: Optional[str] = None) -> Scope:
    """Create a scope, apply bundles in order and make it ready.

    Args:
        parent: The enclosing scope, or None for a root.
        *bundles: Bundles applied in argument order.
        name: Optional scope name.

    Returns:
        The ready scope.

    Raises:
        InitializationError: If an initializer fails.

    Example:
        >>> root = create_scope(None, provide_logger(), name="root")
        >>> child = create_scope(root, provide_logger({"chaining": True}))
    """
    scope = Scope(parent, name=name)
    for bundle in bundles:
        scope.apply_bundle(bundle)
    scope.mark_ready()
    return scope
