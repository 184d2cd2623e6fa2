"""
stratum-di: Hierarchical, scope-aware service composition engine.

Public API exports for the stratum-di package.
"""

# Application exports
from stratum_di.application import (
    SCOPE_INITIALIZER,
    ProviderFactory,
    Resolver,
    Scope,
    create_scope,
    initializer,
)

# Domain exports
from stratum_di.domain import (
    Binding,
    Bundle,
    Capability,
    CircularDependencyError,
    ConfigurationError,
    Feature,
    FeatureCardinalityError,
    FeatureConflictError,
    FeatureError,
    InitializationError,
    Inject,
    LifecycleError,
    MissingBindingError,
    Multiplicity,
    MultiplicityMismatchError,
    ProductionError,
    ScopeState,
    StratumError,
    Token,
    UnknownFeatureError,
    create_token,
)

__version__ = "0.1.0"

__all__ = [
    # Scopes
    "Scope",
    "create_scope",
    "Resolver",
    # Composition
    "Token",
    "create_token",
    "Multiplicity",
    "Binding",
    "Inject",
    "Capability",
    "Bundle",
    "Feature",
    "ProviderFactory",
    "SCOPE_INITIALIZER",
    "initializer",
    "ScopeState",
    # Exceptions
    "StratumError",
    "MissingBindingError",
    "MultiplicityMismatchError",
    "LifecycleError",
    "InitializationError",
    "FeatureError",
    "FeatureCardinalityError",
    "FeatureConflictError",
    "UnknownFeatureError",
    "ConfigurationError",
    "CircularDependencyError",
    "ProductionError",
]
