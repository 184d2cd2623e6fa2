from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence

if TYPE_CHECKING:
    from stratum_di.domain.enums import Multiplicity
    from stratum_di.domain.models import Token


class StratumError(Exception):
    """Base exception for composition and resolution errors."""


class MissingBindingError(StratumError):
    """Raised when a required token has no binding in the resolved chain.

    Attributes:
        token: The token that could not be found.
        scope_name: Name of the scope the lookup started from.
    """

    def __init__(self, token: "Token", scope_name: Optional[str] = None) -> None:
        self.token = token
        self.scope_name = scope_name
        message = f"No binding for token '{token.description}'"
        if scope_name:
            message += f" reachable from scope '{scope_name}'"
        super().__init__(message)


class MultiplicityMismatchError(StratumError):
    """Raised when a token is used with the wrong multiplicity.

    This occurs when:
    - A multi-valued token is resolved as single-valued, or vice versa.
    - A binding is declared with a multiplicity different from its token's.

    Attributes:
        token: The offending token.
        expected: The multiplicity the caller asked for.
    """

    def __init__(self, token: "Token", expected: "Multiplicity") -> None:
        self.token = token
        self.expected = expected
        super().__init__(
            f"Token '{token.description}' is {token.multiplicity.value}-valued, "
            f"but was used as {expected.value}-valued"
        )


class LifecycleError(StratumError):
    """Raised for operations against a scope in the wrong lifecycle state.

    This occurs when:
    - Resolving from or applying to a destroyed scope.
    - Resolving from a scope whose initialization failed.
    - Applying a bundle to a scope that is already ready.
    """


class InitializationError(StratumError):
    """Raised when a scope initializer fails.

    The owning scope is left in the failed state.

    Attributes:
        scope_name: Name of the scope being initialized.
        reason: Description of the underlying failure.
    """

    def __init__(self, scope_name: Optional[str], reason: str) -> None:
        self.scope_name = scope_name
        self.reason = reason
        super().__init__(f"Initialization of scope '{scope_name or '<anonymous>'}' failed: {reason}")


class FeatureError(StratumError):
    """Base class for feature validation failures."""


class FeatureCardinalityError(FeatureError):
    """Raised when more features of one kind are given than the factory allows.

    Attributes:
        kind: The feature kind.
        count: How many features of that kind were given.
        limit: The declared maximum.
    """

    def __init__(self, kind: str, count: int, limit: int) -> None:
        self.kind = kind
        self.count = count
        self.limit = limit
        super().__init__(f"Feature '{kind}' given {count} times, at most {limit} allowed")


class FeatureConflictError(FeatureError):
    """Raised when mutually exclusive feature kinds are combined.

    Attributes:
        kinds: The conflicting kinds, in the order they were given.
    """

    def __init__(self, kinds: Sequence[str]) -> None:
        self.kinds = list(kinds)
        super().__init__(f"Features {', '.join(repr(k) for k in self.kinds)} cannot be combined")


class UnknownFeatureError(FeatureError):
    """Raised when a provider factory receives a feature it did not issue."""


class ConfigurationError(StratumError):
    """Raised for unknown or invalid provider factory options.

    Attributes:
        options: The option names at fault, if known.
    """

    def __init__(self, message: str, options: Optional[Iterable[str]] = None) -> None:
        self.options = sorted(options) if options else []
        super().__init__(message)


class CircularDependencyError(StratumError):
    """Raised when a producer re-enters resolution of its own token.

    Attributes:
        dependency_chain: Tokens involved in the cycle.
    """

    def __init__(self, dependency_chain: List["Token"]) -> None:
        self.dependency_chain = dependency_chain
        message = f"Circular dependency detected: {' -> '.join(t.description for t in dependency_chain)}"
        super().__init__(message)


class ProductionError(StratumError):
    """Raised when a producer fails while building a value.

    Attributes:
        token: The token being produced.
        reason: Optional reason for the failure.
    """

    def __init__(self, token: "Token", reason: Optional[str] = None) -> None:
        self.token = token
        self.reason = reason
        message = f"Cannot produce value for token '{token.description}'"
        if reason:
            message += f". Reason: {reason}"
        super().__init__(message)
