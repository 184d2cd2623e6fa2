import logging
from typing import TYPE_CHECKING, Any, Iterator, List, Optional

from stratum_di.application.circular_detector import CircularDependencyDetector
from stratum_di.application.injector import ConstructorInjector
from stratum_di.application.instance_cache import is_missing
from stratum_di.domain import (
    Binding,
    IResolver,
    MissingBindingError,
    Multiplicity,
    MultiplicityMismatchError,
    ProducerKind,
    Token,
)

if TYPE_CHECKING:
    from stratum_di.application.scope import Scope

logger = logging.getLogger(__name__)


class Resolver(IResolver):
    """Resolves tokens along the parent chain of a scope.

    Single-valued tokens take the nearest scope's last binding. Multi-valued
    tokens collect the bindings of every scope on the walk, root first.
    Values are produced for, and cached in, the requesting scope.

    Attributes:
        _injector: Instantiates constructor producers.
        _circular_detector: Detects re-entrant production.
    """

    def __init__(
        self,
        injector: Optional[ConstructorInjector] = None,
        circular_detector: Optional[CircularDependencyDetector] = None,
    ) -> None:
        self._injector = injector or ConstructorInjector()
        self._circular_detector = circular_detector or CircularDependencyDetector()

    def resolve(
        self,
        scope: "Scope",
        token: Token,
        optional: bool = False,
        skip_self: bool = False,
        self_only: bool = False,
    ) -> Any:
        """Resolve a single-valued token.

        Args:
            scope: The requesting scope.
            token: A single-valued token.
            optional: Return None when nothing is bound.
            skip_self: Return the nearest ancestor's own resolution of the token.
            self_only: Only consider bindings of ``scope`` itself.

        Returns:
            The resolved value, or None for an optional miss.

        Raises:
            MultiplicityMismatchError: If the token is multi-valued.
            MissingBindingError: If nothing is bound and ``optional`` is False.
            LifecycleError: If the scope is destroyed or failed.

        Example:
            >>> config = resolver.resolve(scope, CONFIG)
            >>> parent_logger = resolver.resolve(scope, LOGGER, optional=True, skip_self=True)
        """
        _check_flags(skip_self, self_only)
        if token.multiplicity != Multiplicity.SINGLE:
            raise MultiplicityMismatchError(token, Multiplicity.SINGLE)
        scope.ensure_resolvable()

        key = (token, skip_self, self_only)
        cached = scope.cache.lookup(key)
        if not is_missing(cached):
            return cached

        if skip_self:
            ancestor = scope.live_parent()
            if ancestor is None:
                return self._missing(scope, token, optional, None)
            value = ancestor.resolve(token, optional=optional)
            if value is not None:
                scope.cache.remember(key, value)
            return value

        binding = self._find_winner(scope, token, self_only)
        if binding is None:
            return self._missing(scope, token, optional, None)

        value = self._produce(scope, binding)
        scope.cache.remember(key, value)
        return value

    def resolve_all(
        self,
        scope: "Scope",
        token: Token,
        optional: bool = False,
        skip_self: bool = False,
        self_only: bool = False,
    ) -> List[Any]:
        """Resolve a multi-valued token.

        Bindings are grouped per scope and concatenated root first, keeping
        registration order inside each scope.

        Returns:
            A new list of values, or an empty list for an optional miss.

        Raises:
            MultiplicityMismatchError: If the token is single-valued.
            MissingBindingError: If nothing is bound and ``optional`` is False.
            LifecycleError: If the scope is destroyed or failed.
        """
        _check_flags(skip_self, self_only)
        if token.multiplicity != Multiplicity.MULTI:
            raise MultiplicityMismatchError(token, Multiplicity.MULTI)
        scope.ensure_resolvable()

        key = (token, skip_self, self_only)
        cached = scope.cache.lookup(key)
        if not is_missing(cached):
            return list(cached)

        if skip_self:
            ancestor = scope.live_parent()
            if ancestor is None:
                return self._missing(scope, token, optional, [])
            values = ancestor.resolve_all(token, optional=optional)
        else:
            walked = [scope] if self_only else list(_walk(scope))
            groups = [candidate.table.bindings_for(token) for candidate in walked]
            bindings = [binding for group in reversed(groups) for binding in group]
            if not bindings:
                return self._missing(scope, token, optional, [])
            values = [self._produce(scope, binding) for binding in bindings]

        scope.cache.remember(key, tuple(values))
        return list(values)

    def _find_winner(self, scope: "Scope", token: Token, self_only: bool) -> Optional[Binding]:
        candidates = [scope] if self_only else _walk(scope)
        for candidate in candidates:
            bindings = candidate.table.bindings_for(token)
            if bindings:
                return bindings[-1]
        return None

    def _produce(self, scope: "Scope", binding: Binding) -> Any:
        producer = binding.producer

        def factory() -> Any:
            if producer.kind == ProducerKind.VALUE:
                return producer.target
            self._circular_detector.push(id(scope), binding.token)
            try:
                logger.debug("Producing %r for scope %s", binding.token, scope.name)
                if producer.kind == ProducerKind.FACTORY:
                    return producer.target(scope)
                return self._injector.instantiate(producer.target, scope)
            finally:
                self._circular_detector.pop()

        return scope.cache.get_or_create(binding, factory)

    def _missing(self, scope: "Scope", token: Token, optional: bool, empty: Any) -> Any:
        if optional:
            return empty
        raise MissingBindingError(token, scope.name)


def _walk(scope: "Scope") -> Iterator["Scope"]:
    """Yield ``scope`` and its ancestors, nearest first."""
    current: Optional["Scope"] = scope
    while current is not None:
        yield current
        current = current.parent


def _check_flags(skip_self: bool, self_only: bool) -> None:
    if skip_self and self_only:
        raise ValueError("skip_self and self_only cannot be combined")
