from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, List, Optional

from stratum_di.domain.enums import ScopeState
from stratum_di.domain.models import Binding, Token

if TYPE_CHECKING:
    from stratum_di.domain.bundle import Bundle


class IBindingTable(ABC):
    """Abstract interface for a scope's ordered binding storage."""

    @abstractmethod
    def add_binding(self, binding: Binding) -> None:
        """Append a binding after every binding already stored for its token.

        Args:
            binding: The binding to store.
        """

    @abstractmethod
    def bindings_for(self, token: Token) -> List[Binding]:
        """Return the bindings stored for a token, in registration order."""

    @abstractmethod
    def clear(self) -> None:
        """Discard all bindings."""


class IScope(ABC):
    """Abstract interface for a node in the scope tree."""

    @property
    @abstractmethod
    def parent(self) -> Optional["IScope"]:
        """The enclosing scope, or None for a root scope."""

    @property
    @abstractmethod
    def name(self) -> Optional[str]:
        """Human-readable name used in logs and errors."""

    @property
    @abstractmethod
    def state(self) -> ScopeState:
        """Current lifecycle state."""

    @abstractmethod
    def apply_bundle(self, bundle: "Bundle") -> None:
        """Append a bundle's bindings to this scope.

        Raises:
            LifecycleError: If the scope is no longer building.
        """

    @abstractmethod
    def mark_ready(self) -> None:
        """Finish construction and run this scope's initializers."""

    @abstractmethod
    def resolve(self, token: Token, optional: bool = False, skip_self: bool = False, self_only: bool = False) -> Any:
        """Resolve a single-valued token.

        Args:
            token: The token to resolve.
            optional: Return None instead of failing when nothing is bound.
            skip_self: Start the lookup at the parent scope.
            self_only: Do not look beyond the starting scope.
        """

    @abstractmethod
    def resolve_all(
        self, token: Token, optional: bool = False, skip_self: bool = False, self_only: bool = False
    ) -> List[Any]:
        """Resolve a multi-valued token into an ordered list."""

    @abstractmethod
    def has_binding(self, token: Token, self_only: bool = False) -> bool:
        """Whether ``token`` is bound in this scope or, unless ``self_only``, an ancestor."""

    @abstractmethod
    def destroy(self) -> None:
        """Discard bindings and cached instances and refuse further use."""


class IResolver(ABC):
    """Abstract interface for token resolution along a scope chain."""

    @abstractmethod
    def resolve(
        self,
        scope: IScope,
        token: Token,
        optional: bool = False,
        skip_self: bool = False,
        self_only: bool = False,
    ) -> Any:
        """Resolve a single-valued token starting at ``scope``.

        Raises:
            MissingBindingError: If nothing is bound and ``optional`` is False.
            MultiplicityMismatchError: If the token is multi-valued.
        """

    @abstractmethod
    def resolve_all(
        self,
        scope: IScope,
        token: Token,
        optional: bool = False,
        skip_self: bool = False,
        self_only: bool = False,
    ) -> List[Any]:
        """Resolve a multi-valued token starting at ``scope``.

        Raises:
            MissingBindingError: If nothing is bound and ``optional`` is False.
            MultiplicityMismatchError: If the token is single-valued.
        """


class IInitializerRunner(ABC):
    """Abstract interface for running scope initializers."""

    @abstractmethod
    def run(self, scope: IScope) -> int:
        """Invoke every initializer registered in ``scope``.

        Returns:
            The number of initializers invoked.

        Raises:
            InitializationError: If any initializer fails.
        """
